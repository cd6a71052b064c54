"""
Proctoring Routes

Description:
Start proctoring for a session, ingest proctoring events, and read the event log
and its summary. Event ingestion is rate limited per client.

Dependencies:
- fastapi: For creating routes.
- interview_core.core.route_limiters: For rate limiting functionality.
"""
import uuid
from fastapi import APIRouter, Depends, Request
from interview_core.core.identity import get_requester_id
from interview_core.core.route_limiters import limiter
from interview_core.schemas.proctoring_schemas import (
    ProctoringLogsResponse,
    ProctoringSummary,
    RecordEventRequest,
    RecordEventResponse,
    StartProctoringRequest,
    StartProctoringResponse,
)
from interview_core.services.dependencies import get_proctoring_monitor
from interview_core.services.proctoring_monitor import ProctoringMonitor

router = APIRouter(
    prefix="/api/proctoring",
    tags=["proctoring"],
    responses={404: {"description": "Not found"}}
)


@router.post("/start-session", response_model=StartProctoringResponse)
async def start_session(
    request: Request,
    body: StartProctoringRequest,
    requester_id: str = Depends(get_requester_id),
    monitor: ProctoringMonitor = Depends(get_proctoring_monitor),
):
    return monitor.start(
        body.session_id,
        requester_id,
        device_info=body.device_info,
        permissions=body.permissions,
        user_agent=request.headers.get("user-agent"),
    )


@router.post("/events", response_model=RecordEventResponse)
@limiter.limit("120/minute")
async def record_event(
    request: Request,
    body: RecordEventRequest,
    requester_id: str = Depends(get_requester_id),
    monitor: ProctoringMonitor = Depends(get_proctoring_monitor),
):
    """
    Request parameter is required for rate limiting.
    """
    return monitor.record(
        body.session_id,
        body.event_type,
        requester_id,
        payload=body.data,
        severity=body.severity,
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/events", response_model=ProctoringLogsResponse)
async def list_events(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    monitor: ProctoringMonitor = Depends(get_proctoring_monitor),
):
    return monitor.list_events(session_id, requester_id)


@router.get("/summary", response_model=ProctoringSummary)
async def summary(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    monitor: ProctoringMonitor = Depends(get_proctoring_monitor),
):
    return monitor.summarize(session_id, requester_id)
