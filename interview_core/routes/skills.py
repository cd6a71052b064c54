"""
Skill Match Route

Description:
Compare a candidate's skills with a job's required skills.

Dependencies:
- fastapi: For creating routes.
- interview_core.services.skill_matcher: For the matching rule.
"""
from fastapi import APIRouter, Depends
from interview_core.core.identity import get_requester_id
from interview_core.schemas.skill_schemas import SkillMatchRequest, SkillMatchResult
from interview_core.services.skill_matcher import match_skills

router = APIRouter(
    prefix="/api/skills",
    tags=["skills"],
)


@router.post("/match", response_model=SkillMatchResult)
async def match(request: SkillMatchRequest, requester_id: str = Depends(get_requester_id)):
    return match_skills(request.candidate_skills, request.job_skills)
