"""
Interview Session Routes

Description:
HTTP surface of the session state machine: create a session, fetch it, deliver the
next question, submit answers, complete the session and fetch its feedback report.

Every route takes the requester id from the identity dependency and passes it
explicitly to the state machine. Error kinds raised by the core are rendered by
the central exception handlers.

Dependencies:
- fastapi: For creating routes.
- loguru: For logging.
"""
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends
from loguru import logger
from interview_core.core.identity import get_requester_id
from interview_core.errors.exceptions import InternalServerError, InterviewCoreError
from interview_core.schemas.interview_schemas import (
    CompleteSessionResponse,
    CreateSessionRequest,
    FeedbackReportResponse,
    QuestionResponse,
    SessionDetailResponse,
    SessionResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    TranscriptRequest,
)
from interview_core.services.dependencies import get_state_machine
from interview_core.services.session_state_machine import SessionStateMachine

router = APIRouter(
    prefix="/api/interviews",
    tags=["interviews"],
    responses={404: {"description": "Not found"}}
)


@router.post("", response_model=SessionDetailResponse, status_code=201)
async def create_session(
    request: CreateSessionRequest,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    try:
        return await state_machine.create(
            candidate_id=requester_id,
            job_id=request.job_id,
            questions=request.questions,
            candidate_skills=request.candidate_skills,
            resume_text=request.resume_text,
            difficulty=request.difficulty,
            question_count=request.question_count,
            duration=request.duration,
        )
    except InterviewCoreError:
        raise
    except Exception as e:
        logger.error(f"Error creating interview session: {e}")
        raise InternalServerError("Failed to create interview session.") from e


@router.get("", response_model=List[SessionResponse])
async def list_sessions(
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    return state_machine.list_sessions(requester_id)


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    return state_machine.get_session(session_id, requester_id)


@router.post("/{session_id}/next-question", response_model=Optional[QuestionResponse])
async def next_question(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    """
    Returns null once every question has been answered.
    """
    return await state_machine.next_question(session_id, requester_id)


@router.post("/{session_id}/answer", response_model=SubmitAnswerResponse)
async def submit_answer(
    session_id: uuid.UUID,
    request: SubmitAnswerRequest,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    try:
        evaluation = await state_machine.submit_answer(session_id, request.question_id, request.answer, requester_id)
        return SubmitAnswerResponse(evaluation=evaluation)
    except InterviewCoreError:
        raise
    except Exception as e:
        logger.error(f"Error submitting answer: {e}")
        raise InternalServerError("Failed to submit answer.") from e


@router.post("/{session_id}/complete", response_model=CompleteSessionResponse)
async def complete_session(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    try:
        report = await state_machine.complete(session_id, requester_id)
        return CompleteSessionResponse(feedback_report=FeedbackReportResponse.model_validate(report))
    except InterviewCoreError:
        raise
    except Exception as e:
        logger.error(f"Error completing interview: {e}")
        raise InternalServerError("Failed to complete interview.") from e


@router.get("/{session_id}/feedback", response_model=FeedbackReportResponse)
async def get_feedback(
    session_id: uuid.UUID,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    return state_machine.get_feedback(session_id, requester_id)


@router.put("/{session_id}/transcript", response_model=SessionResponse)
async def save_transcript(
    session_id: uuid.UUID,
    request: TranscriptRequest,
    requester_id: str = Depends(get_requester_id),
    state_machine: SessionStateMachine = Depends(get_state_machine),
):
    return await state_machine.save_transcript(session_id, request.transcript, requester_id)
