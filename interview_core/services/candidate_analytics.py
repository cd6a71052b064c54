"""
Candidate Analytics

Aggregates a candidate's history: interview counts, the mean overall score of
their feedback reports, per-skill performance over scored questions, recent
sessions, the score trend of their latest reports and the strengths and
weaknesses those reports name most recently.

`summarize_candidate` is a pure fold over already loaded sessions; the service
only loads the requester's own sessions and hands them over.

Dependencies:
- sqlalchemy: For loading sessions with their questions and reports.
- loguru: For logging operations.
"""

import math
from typing import Dict, Iterable, List
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import selectinload, sessionmaker
from interview_core.models.interview_models import InterviewSession, SessionStatus
from interview_core.schemas.analytics_schemas import (
    CandidateAnalytics,
    RecentSession,
    SkillPerformance,
    TrendPoint,
)
from interview_core.services.session_access import require_requester

RECENT_SESSION_LIMIT = 5
TREND_LIMIT = 10
HIGHLIGHT_LIMIT = 5


def _mean(values: List[int]) -> int:
    if not values:
        return 0
    # Half-up rounding of the mean
    return int(math.floor(sum(values) / len(values) + 0.5))


def _distinct(items: Iterable[str], limit: int) -> List[str]:
    seen = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
            if len(seen) == limit:
                break
    return seen


def summarize_candidate(sessions: Iterable[InterviewSession]) -> CandidateAnalytics:
    """Fold a candidate's sessions, with questions and reports loaded, into analytics."""
    newest_first = sorted(sessions, key=lambda s: (s.created_at, str(s.id)), reverse=True)
    reports = sorted(
        (s.feedback_report for s in newest_first if s.feedback_report is not None),
        key=lambda r: (r.created_at, str(r.id)),
        reverse=True,
    )

    # Skills in the order they were first scored, oldest session first
    skill_scores: Dict[str, List[int]] = {}
    for interview_session in reversed(newest_first):
        for question in sorted(interview_session.questions, key=lambda q: q.position):
            if question.skill_tag and question.score is not None:
                skill_scores.setdefault(question.skill_tag, []).append(question.score)

    trend = list(reversed(reports[:TREND_LIMIT]))

    return CandidateAnalytics(
        total_interviews=len(newest_first),
        completed_interviews=sum(1 for s in newest_first if s.status == SessionStatus.COMPLETED),
        average_score=_mean([report.overall_score for report in reports]),
        skill_performance=[
            SkillPerformance(
                skill=skill,
                question_count=len(scores),
                average_score=_mean(scores),
                improvement=scores[-1] - scores[0],
            )
            for skill, scores in skill_scores.items()
        ],
        recent_sessions=[
            RecentSession(id=s.id, status=s.status, job_id=s.job_id, created_at=s.created_at)
            for s in newest_first[:RECENT_SESSION_LIMIT]
        ],
        performance_trend=[
            TrendPoint(session_number=number, score=report.overall_score, date=report.created_at)
            for number, report in enumerate(trend, start=1)
        ],
        top_strengths=_distinct((s for r in reports for s in (r.strengths or [])), HIGHLIGHT_LIMIT),
        common_weaknesses=_distinct((w for r in reports for w in (r.weaknesses or [])), HIGHLIGHT_LIMIT),
    )


class CandidateAnalyticsService:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def candidate_analytics(self, requester_id: str) -> CandidateAnalytics:
        """
        Analytics over every session the requester owns.

        Raises:
            Unauthorized: If no requester id was supplied
        """
        requester = require_requester(requester_id)
        with self.session_factory() as db:
            statement = (
                select(InterviewSession)
                .options(
                    selectinload(InterviewSession.questions),
                    selectinload(InterviewSession.feedback_report),
                )
                .where(InterviewSession.candidate_id == requester)
            )
            sessions = list(db.execute(statement).scalars().all())
            analytics = summarize_candidate(sessions)

        logger.debug(
            f"Computed analytics for candidate {requester}: "
            f"{analytics.total_interviews} sessions, {analytics.completed_interviews} completed"
        )
        return analytics
