"""Error envelope: every 4xx/5xx body is {"success": false, "error": {code, message}}."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from models.responses import ErrorDetail, ErrorResponse
from services.text_extractor import ExtractionError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

MISSING_PARAMETER = "MISSING_PARAMETER"
INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
FILE_TOO_LARGE = "FILE_TOO_LARGE"
PROCESSING_ERROR = "PROCESSING_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(message)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _missing_field(exc: RequestValidationError) -> str | None:
    for err in exc.errors():
        loc = err.get("loc") or ()
        if err.get("type") == "missing" and loc:
            return str(loc[-1])
    return None


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field = _missing_field(exc)
    if field == "resume":
        message = "Required parameter 'resume' is missing. Please upload a resume file."
    elif field:
        message = f"Required parameter '{field}' is missing."
    else:
        message = "Invalid request parameters."
    return error_response(400, MISSING_PARAMETER, message)


async def unsupported_file_handler(request: Request, exc: UnsupportedFileTypeError) -> JSONResponse:
    return error_response(400, INVALID_FILE_TYPE, str(exc))


async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    return error_response(500, PROCESSING_ERROR, str(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, INTERNAL_ERROR, "An unexpected error occurred. Please try again.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(UnsupportedFileTypeError, unsupported_file_handler)
    app.add_exception_handler(ExtractionError, extraction_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
