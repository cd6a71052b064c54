"""
Feedback Report Route

Description:
Fetch a feedback report by its own id. Only the candidate who owns the report's
session may read it.

Dependencies:
- fastapi: For creating routes.
"""
import uuid
from fastapi import APIRouter, Depends
from interview_core.core.identity import get_requester_id
from interview_core.schemas.interview_schemas import FeedbackReportResponse
from interview_core.services.dependencies import get_state_machine
from interview_core.services.session_state_machine import SessionStateMachine

router = APIRouter(
    prefix="/api/feedback",
    tags=["feedback"],
    responses={404: {"description": "Not found"}}
)


@router.get("/{report_id}", response_model=FeedbackReportResponse)
async def get_feedback_report(
    report_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    return state_machine.get_feedback_report(report_id, requester_id)
