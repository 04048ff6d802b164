from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MatchResult(ApiModel):
    matched: list[str] = []
    missing: list[str] = []
    match_percentage: float = 0.0


class SkillsBreakdown(ApiModel):
    score: int = 0
    matched: list[str] = []
    missing: list[str] = []
    feedback: str = ""


class ExperienceBreakdown(ApiModel):
    score: int = 0
    feedback: str = ""


class FormattingBreakdown(ApiModel):
    score: int = 0
    issues: list[str] = []
    feedback: str = ""


class SectionCompletenessBreakdown(ApiModel):
    score: int = 0
    sections: dict[str, bool] = {}
    feedback: str = ""


class ScoreBreakdown(ApiModel):
    skills: SkillsBreakdown = SkillsBreakdown()
    experience: ExperienceBreakdown = ExperienceBreakdown()
    formatting: FormattingBreakdown = FormattingBreakdown()
    section_completeness: SectionCompletenessBreakdown = SectionCompletenessBreakdown()


class ScoreReport(ApiModel):
    overall_score: int = 0
    keyword_match_score: float = 0.0
    formatting_score: float = 0.0
    section_completeness_score: float = 0.0
    breakdown: ScoreBreakdown = ScoreBreakdown()


class AtsScoreResponse(ApiModel):
    success: bool = True
    overall_score: int = 0
    keyword_match_score: float = 0.0
    formatting_score: float = 0.0
    section_completeness_score: float = 0.0
    section_breakdown: ScoreBreakdown = ScoreBreakdown()
    error: str | None = None


class EnhanceResponse(ApiModel):
    success: bool = True
    ats_score: int = 0
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    suggestions: list[str] = []
    section_analysis: ScoreBreakdown = ScoreBreakdown()


class CoverLetterResult(ApiModel):
    cover_letter_text: str = ""
    candidate_name: str = ""
    target_role: str = ""
    company_name: str = ""


class CoverLetterResponse(ApiModel):
    success: bool = True
    data: CoverLetterResult = CoverLetterResult()
    error: str | None = None


class ErrorDetail(ApiModel):
    code: str
    message: str


class ErrorResponse(ApiModel):
    success: bool = False
    error: ErrorDetail


class HealthResponse(ApiModel):
    status: str = "UP"
    message: str = ""
    timestamp: str = ""
