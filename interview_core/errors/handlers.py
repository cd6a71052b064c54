from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.status import HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR
from sqlalchemy.exc import IntegrityError
from interview_core.errors.exceptions import InterviewCoreError


def interview_core_exception_handler(request: Request, exc: InterviewCoreError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.detail, "retryable": exc.retryable},
    )

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "InternalError", "detail": "An unexpected error occurred.", "retryable": False},
    )

def database_integrity_handler(request: Request, exc: IntegrityError):
    """
    Handle SQLAlchemy integrity constraint violations that escaped the services.

    Duplicate question positions and duplicate feedback reports are the only
    unique constraints in the schema, so both are reported as conflicts.

    Args:
        request: FastAPI request instance
        exc: IntegrityError from SQLAlchemy

    Returns:
        JSONResponse with 409 status and a user-friendly error message
    """
    error_msg = str(exc.orig).lower()
    logger.warning(f"Integrity error on {request.url.path}: {error_msg}")

    detail = "Data constraint violation"
    if "feedback_reports" in error_msg:
        detail = "A feedback report already exists for this session"
    elif "interview_questions" in error_msg:
        detail = "Question positions must be unique within a session"

    return JSONResponse(
        status_code=HTTP_409_CONFLICT,
        content={
            "error": "Conflict",
            "detail": detail,
            "retryable": False,
        }
    )
