import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.router import router
from config import settings
from services.content_library import get_content_library
from services.keyword_catalog import get_catalog

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Catalog and content library load once at startup; a broken resource file is fatal
get_catalog()
get_content_library()

app = FastAPI(
    title="ATS Resume Studio API",
    description="Resume ATS scoring, rewriting and cover letter generation",
    version="1.0.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_error_handlers(app)
app.include_router(router)
