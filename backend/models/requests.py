from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TextScoreRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resume_text: str = Field(..., min_length=1, max_length=50000, description="Plain text resume content")
    job_description: str = Field("", max_length=10000, description="Job description text")
