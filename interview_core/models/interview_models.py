"""Interview Models Module

This module defines SQLAlchemy models for the interview assessment core: job
descriptions, interview sessions, their ordered questions, the one-per-session
feedback report, and the append-only proctoring event log.

Dependencies:
- sqlalchemy: For ORM functionality and database modeling.
- uuid: For UUID generation for primary keys.
- datetime: For timestamp handling.
- enum: For session status and severity enumerations.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import ForeignKey, String, Text, DateTime, Enum, JSON, UniqueConstraint, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class SessionStatus(str, enum.Enum):
    """Lifecycle of an interview session. Transitions only move forward one step."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JobDescription(Base):
    """Job an interview is conducted for.

    Attributes:
        id (UUID): Primary key
        title (str): Job title handed to the oracles as context
        company (str): Hiring company
        description (str): Free-text job description
        required_skills (List[str]): Skills the job asks for
        created_by (str): Requester id of the creator
    """
    __tablename__ = "job_descriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255))
    company: Mapped[str] = mapped_column(String(255), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    required_skills: Mapped[List[str]] = mapped_column(JSON, default=list)
    created_by: Mapped[str] = mapped_column(String(255))
    sessions: Mapped[List["InterviewSession"]] = relationship("InterviewSession", back_populates="job")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"JobDescription(id={self.id}, title={self.title})"


class InterviewSession(Base):
    """One candidate's attempt at an interview for one job.

    Only the candidate who created the session may read or mutate it. Status is
    changed exclusively by the session state machine.

    Attributes:
        id (UUID): Primary key
        candidate_id (str): Owning requester id
        job_id (UUID): Foreign key to JobDescription
        status (SessionStatus): scheduled, in_progress or completed
        total_score (int, optional): Aggregate score, set on completion
        transcript (str, optional): Free-text transcript
        skill_gaps (List[str], optional): Job skills the candidate lacked at creation
        duration (int, optional): Planned duration in minutes
        questions (List[InterviewQuestion]): Questions ordered by position
        feedback_report (FeedbackReport, optional): Report, present iff completed
    """
    __tablename__ = "interview_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    candidate_id: Mapped[str] = mapped_column(String(255), index=True)
    job_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("job_descriptions.id"))
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, name="interview_status", values_callable=lambda e: [m.value for m in e]),
        default=SessionStatus.SCHEDULED,
    )
    total_score: Mapped[Optional[int]] = mapped_column(nullable=True)
    transcript: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    skill_gaps: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    duration: Mapped[Optional[int]] = mapped_column(nullable=True)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    questions: Mapped[List["InterviewQuestion"]] = relationship(
        "InterviewQuestion", back_populates="session", cascade="all", order_by="InterviewQuestion.position"
    )
    feedback_report: Mapped[Optional["FeedbackReport"]] = relationship(
        "FeedbackReport", back_populates="session", uselist=False
    )
    job: Mapped["JobDescription"] = relationship("JobDescription", back_populates="sessions")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"InterviewSession(id={self.id}, status={self.status.value})"


class InterviewQuestion(Base):
    """Question instance within a specific interview session.

    The position defines the only valid delivery order and is unique per session.
    Answer, score and evaluation fields stay null until the candidate answers.
    """
    __tablename__ = "interview_questions"
    __table_args__ = (UniqueConstraint("session_id", "position", name="uq_interview_questions_session_position"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("interview_sessions.id"), index=True)
    position: Mapped[int] = mapped_column()
    question_text: Mapped[str] = mapped_column(Text)
    question_type: Mapped[str] = mapped_column(String(50), default="behavioral")
    skill_tag: Mapped[str] = mapped_column(String(100), default="general")
    difficulty: Mapped[str] = mapped_column(String(50), default="intermediate")
    time_limit: Mapped[Optional[int]] = mapped_column(nullable=True)
    answer_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    score: Mapped[Optional[int]] = mapped_column(nullable=True)
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    strengths: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    weaknesses: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    suggestions: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    answered_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)

    session: Mapped["InterviewSession"] = relationship("InterviewSession", back_populates="questions")

    def __repr__(self):
        return f"InterviewQuestion(id={self.id}, position={self.position})"


class FeedbackReport(Base):
    """Aggregated feedback for a completed session. Written once, never updated."""
    __tablename__ = "feedback_reports"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("interview_sessions.id"), unique=True)
    overall_score: Mapped[int] = mapped_column()
    summary: Mapped[str] = mapped_column(Text)
    strengths: Mapped[List[str]] = mapped_column(JSON, default=list)
    weaknesses: Mapped[List[str]] = mapped_column(JSON, default=list)
    rated_skills: Mapped[Dict[str, int]] = mapped_column(JSON, default=dict)
    recommendations: Mapped[List[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)

    session: Mapped["InterviewSession"] = relationship("InterviewSession", back_populates="feedback_report")

    def __repr__(self):
        return f"FeedbackReport(session_id={self.session_id}, overall_score={self.overall_score})"


class ProctoringEvent(Base):
    """Append-only proctoring log entry.

    The integer id breaks ties between events sharing a timestamp, so
    most-recent-first listings are stable.
    """
    __tablename__ = "proctoring_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("interview_sessions.id"), index=True)
    event_type: Mapped[str] = mapped_column(String(50))
    severity: Mapped[Severity] = mapped_column(
        Enum(Severity, name="proctoring_severity", values_callable=lambda e: [m.value for m in e]),
        default=Severity.LOW,
    )
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    def __repr__(self):
        return f"ProctoringEvent(session_id={self.session_id}, type={self.event_type}, severity={self.severity.value})"
