"""Shared dependencies for API routes."""

from dataclasses import dataclass

from fastapi import File, UploadFile

from api.errors import FILE_TOO_LARGE, ApiError
from config import settings
from services.text_extractor import extract_text


@dataclass
class UploadedResume:
    filename: str
    text: str


async def uploaded_resume(resume: UploadFile = File(...)) -> UploadedResume:
    """Read the ``resume`` part, enforce the size cap, and extract its text."""
    content = await resume.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise ApiError(
            400,
            FILE_TOO_LARGE,
            f"File size exceeds the maximum allowed limit of {settings.max_upload_size_mb}MB.",
        )
    filename = resume.filename or ""
    return UploadedResume(filename=filename, text=extract_text(content, filename))
