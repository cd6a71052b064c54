"""
Service Wiring

FastAPI dependencies handing out the process-wide service instances. Tests
replace them through `app.dependency_overrides`.
"""

from functools import lru_cache
from interview_core.database import SessionLocal
from interview_core.services.answer_evaluator import AnswerEvaluator
from interview_core.services.candidate_analytics import CandidateAnalyticsService
from interview_core.services.feedback_aggregator import FeedbackAggregator
from interview_core.services.oracles import (
    OpenAIQuestionGenerationOracle,
    OpenAIScoringOracle,
    OpenAISummarizationOracle,
)
from interview_core.services.proctoring_monitor import ProctoringMonitor
from interview_core.services.session_state_machine import SessionStateMachine


@lru_cache(maxsize=1)
def get_state_machine() -> SessionStateMachine:
    return SessionStateMachine(
        session_factory=SessionLocal,
        evaluator=AnswerEvaluator(OpenAIScoringOracle()),
        aggregator=FeedbackAggregator(OpenAISummarizationOracle()),
        question_oracle=OpenAIQuestionGenerationOracle(),
    )


@lru_cache(maxsize=1)
def get_proctoring_monitor() -> ProctoringMonitor:
    return ProctoringMonitor(session_factory=SessionLocal)


@lru_cache(maxsize=1)
def get_candidate_analytics() -> CandidateAnalyticsService:
    return CandidateAnalyticsService(session_factory=SessionLocal)
