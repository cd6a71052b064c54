"""
Proctoring Monitor

Records proctoring events for interview sessions and summarizes them. The log is
append-only: events are never updated, merged or dropped. Whether an event is
suspicious is derived from its type alone, so a client that mislabels severity
cannot hide suspicious activity.

Dependencies:
- sqlalchemy: For event storage and snapshot reads.
- loguru: For logging operations.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Union
import uuid
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker
from interview_core.constants.proctoring_events import SESSION_START_EVENT, is_suspicious
from interview_core.errors.exceptions import InvalidInput
from interview_core.models.interview_models import ProctoringEvent, Severity, utc_now
from interview_core.schemas.proctoring_schemas import (
    ProctoringConfig,
    ProctoringEventResponse,
    ProctoringLogsResponse,
    ProctoringPermissions,
    ProctoringSummary,
    RecordEventResponse,
    StartProctoringResponse,
)
from interview_core.services.session_access import get_owned_session, parse_uuid, require_requester


def summarize_events(events: Iterable[ProctoringEvent]) -> ProctoringSummary:
    """Fold events into severity counts and a per-type frequency table."""
    severities = Counter()
    event_types = Counter()
    total = 0
    for event in events:
        total += 1
        severities[Severity(event.severity)] += 1
        event_types[event.event_type] += 1

    return ProctoringSummary(
        total=total,
        high=severities[Severity.HIGH],
        medium=severities[Severity.MEDIUM],
        low=severities[Severity.LOW],
        event_types=dict(event_types),
    )


def parse_severity(severity: Union[Severity, str, None]) -> Severity:
    if severity is None:
        return Severity.LOW
    try:
        return Severity(severity)
    except ValueError as e:
        raise InvalidInput(f"Unknown severity '{severity}'. Expected one of: low, medium, high") from e


class ProctoringMonitor:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _load_events(self, db: Session, session_id: uuid.UUID) -> List[ProctoringEvent]:
        # One SELECT, so summaries never mix rows from before and after a concurrent insert
        statement = (
            select(ProctoringEvent)
            .where(ProctoringEvent.session_id == session_id)
            .order_by(ProctoringEvent.timestamp.desc(), ProctoringEvent.id.desc())
        )
        return list(db.execute(statement).scalars().all())

    def record(
        self,
        session_id,
        event_type: str,
        requester_id: str,
        payload: Optional[Dict[str, Any]] = None,
        severity: Union[Severity, str] = Severity.LOW,
        user_agent: Optional[str] = None,
    ) -> RecordEventResponse:
        """
        Append a proctoring event to a session's log.

        Args:
            session_id: Interview session the event belongs to
            event_type: Event tag, e.g. "tab_switch"
            requester_id: Authenticated requester, must own the session
            payload: Arbitrary structured event data
            severity: Severity reported by the client
            user_agent: Client user agent, stored with the payload

        Returns:
            RecordEventResponse: logged flag and the derived suspicious flag

        Raises:
            Unauthorized, InvalidInput, SessionNotFound, Forbidden
        """
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        if not event_type or not str(event_type).strip():
            raise InvalidInput("event_type is required")
        event_type = str(event_type).strip()
        if payload is not None and not isinstance(payload, dict):
            raise InvalidInput("Event data must be an object")
        level = parse_severity(severity)

        with self.session_factory() as db:
            get_owned_session(db, session_uuid, requester)

            recorded_at = utc_now()
            data = dict(payload or {})
            data.update({
                "recorded_at": recorded_at.isoformat(),
                "user_agent": user_agent or "unknown",
            })
            db.add(ProctoringEvent(
                session_id=session_uuid,
                event_type=event_type,
                severity=level,
                data=data,
                timestamp=recorded_at,
            ))
            db.commit()

        suspicious = is_suspicious(event_type)
        if suspicious:
            logger.warning(f"Suspicious proctoring event '{event_type}' ({level.value}) on session {session_uuid}")
        else:
            logger.info(f"Proctoring event '{event_type}' ({level.value}) logged on session {session_uuid}")

        return RecordEventResponse(
            suspicious=suspicious,
            message="Suspicious activity detected and logged" if suspicious else "Event logged successfully",
        )

    def start(
        self,
        session_id,
        requester_id: str,
        device_info: Optional[Dict[str, Any]] = None,
        permissions: Optional[ProctoringPermissions] = None,
        user_agent: Optional[str] = None,
    ) -> StartProctoringResponse:
        """Log the start of proctoring and return the monitoring configuration."""
        permissions = permissions or ProctoringPermissions()
        self.record(
            session_id,
            SESSION_START_EVENT,
            requester_id,
            payload={"device_info": device_info or {}, "permissions": permissions.model_dump()},
            severity=Severity.LOW,
            user_agent=user_agent,
        )
        return StartProctoringResponse(
            config=ProctoringConfig(
                video_enabled=permissions.camera,
                audio_enabled=permissions.microphone,
                screen_recording=permissions.screen,
            )
        )

    def summarize(self, session_id, requester_id: str) -> ProctoringSummary:
        """Severity and event-type counts over a consistent snapshot of the session's log."""
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        with self.session_factory() as db:
            get_owned_session(db, session_uuid, requester)
            return summarize_events(self._load_events(db, session_uuid))

    def list_events(self, session_id, requester_id: str) -> ProctoringLogsResponse:
        """All events of a session, most recent first, with the summary of the same snapshot."""
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        with self.session_factory() as db:
            get_owned_session(db, session_uuid, requester)
            events = self._load_events(db, session_uuid)
            return ProctoringLogsResponse(
                logs=[ProctoringEventResponse.model_validate(event) for event in events],
                summary=summarize_events(events),
            )
