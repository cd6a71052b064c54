"""
Session Access Utility Module

Requester and ownership checks shared by the session state machine and the
proctoring monitor. Every core operation receives the requester id explicitly.

Dependencies:
- sqlalchemy: For session lookups.
- interview_core.errors.exceptions: For the error kinds.
"""

import uuid
from typing import Optional, Union
from sqlalchemy import select
from sqlalchemy.orm import Session
from interview_core.errors.exceptions import Forbidden, InvalidInput, SessionNotFound, Unauthorized
from interview_core.models.interview_models import InterviewSession


def require_requester(requester_id: Optional[str]) -> str:
    """
    Raises:
        Unauthorized: If no requester id was supplied
    """
    if requester_id is None or not str(requester_id).strip():
        raise Unauthorized("Missing requester identity")
    return str(requester_id)


def parse_uuid(value: Union[str, uuid.UUID, None], field: str) -> uuid.UUID:
    """
    Raises:
        InvalidInput: If the value is missing or not a UUID
    """
    if value is None or value == "":
        raise InvalidInput(f"{field} is required")
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as e:
        raise InvalidInput(f"{field} is not a valid identifier") from e


def get_owned_session(
    db: Session,
    session_id: uuid.UUID,
    requester_id: str,
    for_update: bool = False,
) -> InterviewSession:
    """
    Load a session and verify the requester owns it.

    Args:
        db: Active database session
        session_id: Interview session id
        requester_id: Authenticated requester id
        for_update: Take a row lock for a read-modify-write sequence

    Raises:
        SessionNotFound: If the session does not exist
        Forbidden: If the session belongs to someone else
    """
    statement = select(InterviewSession).where(InterviewSession.id == session_id)
    if for_update:
        statement = statement.with_for_update()
    interview_session = db.execute(statement).scalar_one_or_none()

    if interview_session is None:
        raise SessionNotFound(str(session_id))
    if interview_session.candidate_id != requester_id:
        raise Forbidden(f"Interview session '{session_id}' belongs to another candidate.")
    return interview_session
