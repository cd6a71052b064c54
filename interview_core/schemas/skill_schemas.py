from typing import List, Optional
from pydantic import BaseModel, Field


class SkillMatchRequest(BaseModel):
    # Optional so a missing list is reported as InvalidInput rather than a schema error
    candidate_skills: Optional[List[str]] = None
    job_skills: Optional[List[str]] = None


class SkillMatchResult(BaseModel):
    skill_gaps: List[str] = Field(default_factory=list)
    matching_skills: List[str] = Field(default_factory=list)
    gap_percentage: int = Field(default=0, ge=0, le=100)
    match_percentage: int = Field(default=0, ge=0, le=100)
