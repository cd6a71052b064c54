"""
Description:
Error kinds raised by the interview assessment core. Each error is an HTTPException
so FastAPI can render it directly, and carries a stable `kind` plus a `retryable`
flag that callers can rely on instead of the status code.

Dependencies:
- fastapi: For the HTTPException base class.
- starlette.status: For HTTP status constants.
"""
from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class InterviewCoreError(HTTPException):
    kind = "InternalError"
    retryable = False

    def __init__(self, status_code: int = HTTP_500_INTERNAL_SERVER_ERROR, detail: str = "Internal server error"):
        super().__init__(status_code=status_code, detail=detail)


class Unauthorized(InterviewCoreError):
    kind = "Unauthorized"

    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(InterviewCoreError):
    kind = "Forbidden"

    def __init__(self, detail: str = "You do not have access to this resource"):
        super().__init__(status_code=HTTP_403_FORBIDDEN, detail=detail)


class NotFound(InterviewCoreError):
    kind = "NotFound"

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)


class InvalidInput(InterviewCoreError):
    kind = "InvalidInput"

    def __init__(self, detail: str = "Missing or invalid fields"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)


class InvalidState(InterviewCoreError):
    kind = "InvalidState"

    def __init__(self, detail: str = "Operation not allowed in the current session state"):
        super().__init__(status_code=HTTP_409_CONFLICT, detail=detail)


class AlreadyCompleted(InvalidState):
    kind = "AlreadyCompleted"

    def __init__(self, identifier: str = None):
        detail = f"Interview session '{identifier}' is already completed." if identifier else "Interview session is already completed."
        super().__init__(detail=detail)


class NoAnswers(InterviewCoreError):
    kind = "NoAnswers"

    def __init__(self, identifier: str = None):
        detail = f"Interview session '{identifier}' has no answered questions." if identifier else "Interview session has no answered questions."
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)


class SessionNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Interview session '{identifier}' not found." if identifier else "Interview session not found."
        super().__init__(detail=detail)


class QuestionNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Question '{identifier}' not found." if identifier else "Question not found."
        super().__init__(detail=detail)


class JobNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Job description '{identifier}' not found." if identifier else "Job description not found."
        super().__init__(detail=detail)


class FeedbackNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Feedback for session '{identifier}' not found." if identifier else "Feedback not found."
        super().__init__(detail=detail)


class ReportNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Feedback report '{identifier}' not found." if identifier else "Feedback report not found."
        super().__init__(detail=detail)


class EvaluationUnavailable(InterviewCoreError):
    kind = "EvaluationUnavailable"
    retryable = True

    def __init__(self, detail: str = "Answer evaluation is temporarily unavailable. Please retry."):
        super().__init__(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class FeedbackGenerationFailed(InterviewCoreError):
    kind = "FeedbackGenerationFailed"
    retryable = True

    def __init__(self, detail: str = "Feedback report could not be generated. Please retry."):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class InternalServerError(InterviewCoreError):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
