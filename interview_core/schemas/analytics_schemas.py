"""
Description:
Response shapes for a candidate's performance analytics across their sessions.

Dependencies:
- pydantic: For data validation.
"""
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from interview_core.models.interview_models import SessionStatus


class SkillPerformance(BaseModel):
    skill: str
    question_count: int = Field(..., ge=1, description="Scored questions tagged with this skill")
    average_score: int = Field(..., ge=0, le=100)
    improvement: int = Field(default=0, ge=-100, le=100, description="Latest score minus earliest score")


class RecentSession(BaseModel):
    id: uuid.UUID
    status: SessionStatus
    job_id: uuid.UUID
    created_at: Optional[datetime] = None


class TrendPoint(BaseModel):
    session_number: int = Field(..., ge=1)
    score: int = Field(..., ge=0, le=100)
    date: Optional[datetime] = None


class CandidateAnalytics(BaseModel):
    total_interviews: int = 0
    completed_interviews: int = 0
    average_score: int = Field(default=0, ge=0, le=100, description="Mean overall score of the feedback reports")
    skill_performance: List[SkillPerformance] = Field(default_factory=list)
    recent_sessions: List[RecentSession] = Field(default_factory=list)
    performance_trend: List[TrendPoint] = Field(default_factory=list)
    top_strengths: List[str] = Field(default_factory=list)
    common_weaknesses: List[str] = Field(default_factory=list)
