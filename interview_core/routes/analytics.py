"""
Candidate Analytics Route

Description:
Performance analytics for the requesting candidate across all of their sessions.

Dependencies:
- fastapi: For creating routes.
- interview_core.services.candidate_analytics: For the aggregation.
"""
from fastapi import APIRouter, Depends
from interview_core.core.identity import get_requester_id
from interview_core.schemas.analytics_schemas import CandidateAnalytics
from interview_core.services.candidate_analytics import CandidateAnalyticsService
from interview_core.services.dependencies import get_candidate_analytics

router = APIRouter(
    prefix="/api/analytics",
    tags=["analytics"],
)


@router.get("/candidate", response_model=CandidateAnalytics)
async def candidate_analytics(
    requester_id: str = Depends(get_requester_id),
    analytics: CandidateAnalyticsService = Depends(get_candidate_analytics),
):
    return analytics.candidate_analytics(requester_id)
