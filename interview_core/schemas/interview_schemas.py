"""
Description:
Request and response schemas for jobs, interview sessions, answers and feedback reports.

Dependencies:
- pydantic: For data validation and settings management.
"""
import uuid
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from interview_core.models.interview_models import SessionStatus
from interview_core.schemas.oracle_schemas import AnswerEvaluation


class JobCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(default="", max_length=255)
    description: str = Field(default="")
    required_skills: List[str] = Field(default_factory=list)


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    company: str
    description: str
    required_skills: List[str]


class QuestionInput(BaseModel):
    question_text: str = Field(..., min_length=1)
    question_type: str = Field(default="behavioral", max_length=50)
    skill_tag: str = Field(default="general", max_length=100)
    difficulty: str = Field(default="intermediate", max_length=50)
    time_limit: Optional[int] = Field(default=None, ge=0, description="Time limit in seconds")


class CreateSessionRequest(BaseModel):
    job_id: uuid.UUID
    questions: Optional[List[QuestionInput]] = Field(default=None, description="Questions in delivery order; generated when omitted")
    candidate_skills: Optional[List[str]] = None
    resume_text: Optional[str] = None
    difficulty: str = Field(default="intermediate", max_length=50)
    question_count: int = Field(default=5, ge=1, le=20)
    duration: Optional[int] = Field(default=None, ge=1, description="Planned duration in minutes")


class QuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    position: int
    question_text: str
    question_type: str
    skill_tag: str
    difficulty: str
    time_limit: Optional[int] = None
    answer_text: Optional[str] = None
    score: Optional[int] = None


class SessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    candidate_id: str
    job_id: uuid.UUID
    status: SessionStatus
    total_score: Optional[int] = None
    skill_gaps: Optional[List[str]] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None


class SessionDetailResponse(SessionResponse):
    transcript: Optional[str] = None
    questions: List[QuestionResponse] = Field(default_factory=list)


class SubmitAnswerRequest(BaseModel):
    question_id: uuid.UUID
    answer: str = Field(..., min_length=1)


class SubmitAnswerResponse(BaseModel):
    success: bool = True
    evaluation: AnswerEvaluation


class FeedbackReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    session_id: uuid.UUID
    overall_score: int
    summary: str
    strengths: List[str]
    weaknesses: List[str]
    rated_skills: Dict[str, int]
    recommendations: List[str]
    created_at: Optional[datetime] = None


class CompleteSessionResponse(BaseModel):
    success: bool = True
    feedback_report: FeedbackReportResponse


class TranscriptRequest(BaseModel):
    transcript: str = Field(..., min_length=1)
