"""
Shared fixtures for the interview core tests.

Every test gets its own in-memory SQLite database, its own lock registry and
fake oracles whose replies, failures and latency are set per test.

Dependencies:
- pytest: For fixtures
- sqlalchemy: For the per-test database
- fastapi.testclient: For exercising the HTTP layer
"""

import asyncio
import os

# The database module builds its engine at import time
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from interview_core.core.identity import REQUESTER_HEADER
from interview_core.core.session_locks import SessionLockRegistry
from interview_core.database import build_engine, create_tables, drop_tables, get_db_session
from interview_core.main import app
from interview_core.models.interview_models import JobDescription
from interview_core.services.answer_evaluator import AnswerEvaluator
from interview_core.services.candidate_analytics import CandidateAnalyticsService
from interview_core.services.dependencies import get_candidate_analytics, get_proctoring_monitor, get_state_machine
from interview_core.services.feedback_aggregator import FeedbackAggregator
from interview_core.services.proctoring_monitor import ProctoringMonitor
from interview_core.services.session_state_machine import SessionStateMachine

CANDIDATE = "candidate-1"
OTHER_CANDIDATE = "candidate-2"


class FakeOracle:
    """Oracle double: returns `result`, raises `error`, or sleeps `delay` seconds first."""

    def __init__(self, result=None, error=None, delay=0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    async def _reply(self, *args):
        self.calls.append(args)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class FakeScoringOracle(FakeOracle):
    async def score(self, question_text, answer_text, skill_tag):
        return await self._reply(question_text, answer_text, skill_tag)


class FakeSummarizationOracle(FakeOracle):
    async def summarize(self, answers, job_title, job_description):
        return await self._reply(answers, job_title, job_description)


class FakeQuestionOracle(FakeOracle):
    async def generate(self, job_title, job_description, skills, difficulty, count, resume_text=None):
        return await self._reply(job_title, job_description, skills, difficulty, count, resume_text)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    yield engine
    drop_tables(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def scoring_oracle():
    return FakeScoringOracle(result={
        "score": 80,
        "feedback": "Clear and structured answer.",
        "strengths": ["Structure"],
        "weaknesses": ["Depth"],
        "suggestions": ["Add a concrete example"],
    })


@pytest.fixture
def summarization_oracle():
    return FakeSummarizationOracle(result={
        "overallScore": 78,
        "summary": "Solid interview with room to grow.",
        "strengths": ["Communication"],
        "weaknesses": ["System design"],
        "ratedSkills": {"python": 82, "communication": 75},
        "recommendations": ["Practice design questions"],
    })


@pytest.fixture
def question_oracle():
    return FakeQuestionOracle(result=[
        {"questionText": "Explain Python generators.", "type": "technical", "skillTag": "python", "timeLimit": 180},
        {"questionText": "Describe a conflict you resolved.", "type": "behavioral", "skillTag": "communication"},
    ])


@pytest.fixture
def state_machine(session_factory, scoring_oracle, summarization_oracle, question_oracle):
    return SessionStateMachine(
        session_factory=session_factory,
        evaluator=AnswerEvaluator(scoring_oracle, timeout=1),
        aggregator=FeedbackAggregator(summarization_oracle, timeout=1),
        question_oracle=question_oracle,
        locks=SessionLockRegistry(),
        timeout=1,
    )


@pytest.fixture
def proctoring_monitor(session_factory):
    return ProctoringMonitor(session_factory)


@pytest.fixture
def candidate_analytics(session_factory):
    return CandidateAnalyticsService(session_factory)


@pytest.fixture
def job(session_factory):
    with session_factory() as db:
        job = JobDescription(
            title="Backend Engineer",
            company="Acme",
            description="Build and run Python services.",
            required_skills=["Python", "PostgreSQL", "Docker"],
            created_by="recruiter-1",
        )
        db.add(job)
        db.commit()
        return job


@pytest.fixture
def three_questions():
    return [
        {"question_text": "Question one?", "skill_tag": "python"},
        {"question_text": "Question two?", "skill_tag": "sql"},
        {"question_text": "Question three?", "skill_tag": "communication"},
    ]


@pytest.fixture
def client(state_machine, proctoring_monitor, candidate_analytics, session_factory):
    def override_db_session():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_state_machine] = lambda: state_machine
    app.dependency_overrides[get_proctoring_monitor] = lambda: proctoring_monitor
    app.dependency_overrides[get_candidate_analytics] = lambda: candidate_analytics
    app.dependency_overrides[get_db_session] = override_db_session
    test_client = TestClient(app, headers={REQUESTER_HEADER: CANDIDATE})
    yield test_client
    app.dependency_overrides.clear()
