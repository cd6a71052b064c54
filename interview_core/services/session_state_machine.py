"""
Session State Machine

Owns the lifecycle of an interview session:

    scheduled -> in_progress -> completed

A session is created in `scheduled`, moves to `in_progress` when its first
question is delivered or answered, and to `completed` when the feedback report
is written. Transitions never skip a state or move backwards.

Answer submission and completion are read-modify-write sequences; both run
under the per-session lock and read the session row FOR UPDATE, so two tabs
answering the same question, or a double-clicked "complete", are serialized.

Dependencies:
- sqlalchemy: For persistence and row locks.
- loguru: For logging operations.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union
from loguru import logger
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload, sessionmaker
from interview_core.core import config
from interview_core.core.session_locks import SessionLockRegistry, session_locks
from interview_core.errors.exceptions import (
    AlreadyCompleted,
    EvaluationUnavailable,
    FeedbackGenerationFailed,
    FeedbackNotFound,
    Forbidden,
    InvalidInput,
    InvalidState,
    JobNotFound,
    NoAnswers,
    QuestionNotFound,
    ReportNotFound,
)
from interview_core.models.interview_models import (
    FeedbackReport,
    InterviewQuestion,
    InterviewSession,
    JobDescription,
    SessionStatus,
    utc_now,
)
from interview_core.schemas.interview_schemas import QuestionInput
from interview_core.schemas.oracle_schemas import AnswerEvaluation, GeneratedQuestion
from interview_core.services.answer_evaluator import AnswerEvaluator
from interview_core.services.feedback_aggregator import FeedbackAggregator
from interview_core.services.oracles.ports import QuestionGenerationOracle
from interview_core.services.session_access import get_owned_session, parse_uuid, require_requester
from interview_core.services.skill_matcher import match_skills

ALLOWED_TRANSITIONS = {
    SessionStatus.SCHEDULED: {SessionStatus.IN_PROGRESS},
    SessionStatus.IN_PROGRESS: {SessionStatus.COMPLETED},
    SessionStatus.COMPLETED: set(),
}


def transition(interview_session: InterviewSession, target: SessionStatus) -> None:
    """
    Move a session to `target`.

    Raises:
        InvalidState: If the move is not a single forward step
    """
    current = SessionStatus(interview_session.status)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidState(f"Cannot move interview session from '{current.value}' to '{target.value}'.")
    interview_session.status = target
    logger.info(f"Interview session {interview_session.id}: {current.value} -> {target.value}")


def default_questions(job_title: str, difficulty: str) -> List[QuestionInput]:
    """Fallback question set used when the generation oracle is unavailable."""
    return [
        QuestionInput(
            question_text=f"Tell me about yourself and your experience relevant to the {job_title or 'position'}.",
            question_type="behavioral", difficulty="beginner", time_limit=120,
        ),
        QuestionInput(
            question_text="What are your greatest strengths and how do they align with this role?",
            question_type="behavioral", difficulty="beginner", time_limit=120,
        ),
        QuestionInput(
            question_text="Describe a challenging technical problem you solved recently.",
            question_type="technical", skill_tag="problem solving", difficulty=difficulty, time_limit=180,
        ),
        QuestionInput(
            question_text="How do you stay updated with the latest technology trends?",
            question_type="behavioral", difficulty="beginner", time_limit=120,
        ),
        QuestionInput(
            question_text="Where do you see yourself in 5 years?",
            question_type="behavioral", difficulty="beginner", time_limit=120,
        ),
    ]


class SessionStateMachine:
    """
    Entry point for every interview session operation. All operations take the
    requester id explicitly; only the candidate who created a session may act on it.

    The session factory must use expire_on_commit=False: returned rows are read
    after their database session has closed.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        evaluator: AnswerEvaluator,
        aggregator: FeedbackAggregator,
        question_oracle: Optional[QuestionGenerationOracle] = None,
        locks: Optional[SessionLockRegistry] = None,
        timeout: Optional[float] = None,
    ):
        self.session_factory = session_factory
        self.evaluator = evaluator
        self.aggregator = aggregator
        self.question_oracle = question_oracle
        self.locks = locks or session_locks
        self.timeout = timeout if timeout is not None else config.ORACLE_TIMEOUT_SECONDS

    async def _generate_questions(
        self,
        job: JobDescription,
        skills: Sequence[str],
        difficulty: str,
        count: int,
        resume_text: Optional[str],
    ) -> List[QuestionInput]:
        if self.question_oracle is None:
            return default_questions(job.title, difficulty)

        try:
            raw_questions = await asyncio.wait_for(
                self.question_oracle.generate(job.title, job.description, list(skills), difficulty, count, resume_text),
                timeout=self.timeout,
            )
            generated = [GeneratedQuestion.model_validate(raw) for raw in raw_questions][:count]
        except asyncio.TimeoutError:
            logger.warning(f"Question generation timed out for job {job.id}, using default questions")
            return default_questions(job.title, difficulty)
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Question generation returned malformed questions for job {job.id}: {e}")
            return default_questions(job.title, difficulty)
        except Exception as e:
            logger.error(f"Question generation failed for job {job.id}: {e}")
            return default_questions(job.title, difficulty)

        if not generated:
            logger.warning(f"Question generation returned no questions for job {job.id}, using default questions")
            return default_questions(job.title, difficulty)

        return [
            QuestionInput(
                question_text=question.question_text,
                question_type=question.question_type,
                skill_tag=question.skill_tag,
                difficulty=difficulty,
                time_limit=question.time_limit,
            )
            for question in generated
        ]

    async def create(
        self,
        candidate_id: str,
        job_id,
        questions: Optional[Sequence[Union[QuestionInput, Dict[str, Any]]]] = None,
        candidate_skills: Optional[Sequence[str]] = None,
        resume_text: Optional[str] = None,
        difficulty: str = "intermediate",
        question_count: int = 5,
        duration: Optional[int] = None,
    ) -> InterviewSession:
        """
        Create a session in `scheduled` with its questions at positions 1..n.

        Args:
            candidate_id: Requester creating (and owning) the session
            job_id: Job the interview is for
            questions: Questions in delivery order; generated when omitted
            candidate_skills: Candidate profile skills, used for skill gaps and generation
            resume_text: Resume text handed to question generation
            difficulty: Difficulty for generated questions
            question_count: Number of questions to generate
            duration: Planned duration in minutes

        Raises:
            Unauthorized, InvalidInput, JobNotFound
        """
        requester = require_requester(candidate_id)
        job_uuid = parse_uuid(job_id, "job_id")
        if len(difficulty or "") > 50:
            raise InvalidInput("difficulty must be at most 50 characters")

        try:
            question_inputs = [
                question if isinstance(question, QuestionInput) else QuestionInput.model_validate(question)
                for question in (questions or [])
            ]
        except ValidationError as e:
            raise InvalidInput(f"Invalid question: {e.errors()[0]['msg']}") from e

        with self.session_factory() as db:
            job = db.get(JobDescription, job_uuid)
            if job is None:
                raise JobNotFound(str(job_uuid))

            skill_gaps = None
            if candidate_skills is not None:
                skill_gaps = match_skills(candidate_skills, job.required_skills or []).skill_gaps

            if not question_inputs:
                question_inputs = await self._generate_questions(
                    job,
                    candidate_skills or job.required_skills or [],
                    difficulty,
                    question_count,
                    resume_text,
                )

            interview_session = InterviewSession(
                candidate_id=requester,
                job_id=job.id,
                status=SessionStatus.SCHEDULED,
                skill_gaps=skill_gaps,
                duration=duration,
            )
            interview_session.questions = [
                InterviewQuestion(
                    position=position,
                    question_text=question.question_text,
                    question_type=question.question_type,
                    skill_tag=question.skill_tag,
                    difficulty=question.difficulty,
                    time_limit=question.time_limit,
                )
                for position, question in enumerate(question_inputs, start=1)
            ]
            db.add(interview_session)
            db.commit()

            logger.info(
                f"Created interview session {interview_session.id} for job {job.id} "
                f"with {len(interview_session.questions)} questions"
            )
            return interview_session

    async def next_question(self, session_id, requester_id: str) -> Optional[InterviewQuestion]:
        """
        Deliver the first unanswered question by position.

        Delivering a question starts a scheduled session. Returns None once
        every question has an answer.

        Raises:
            Unauthorized, InvalidInput, SessionNotFound, Forbidden, InvalidState
        """
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")

        async with self.locks.acquire(str(session_uuid)):
            with self.session_factory() as db:
                interview_session = get_owned_session(db, session_uuid, requester, for_update=True)
                if interview_session.status == SessionStatus.COMPLETED:
                    raise InvalidState(f"Interview session '{session_uuid}' is already completed.")

                pending = [question for question in interview_session.questions if not question.answer_text]
                if not pending:
                    return None

                if interview_session.status == SessionStatus.SCHEDULED:
                    transition(interview_session, SessionStatus.IN_PROGRESS)
                    db.commit()

                return min(pending, key=lambda question: question.position)

    async def submit_answer(self, session_id, question_id, answer_text: str, requester_id: str) -> AnswerEvaluation:
        """
        Store an answer and score it.

        Re-submitting an answered question overwrites the previous answer and
        score. If evaluation fails the answer stays stored with a null score, so
        retrying is safe.

        Raises:
            Unauthorized, InvalidInput
            QuestionNotFound: If the question is not in a session owned by the requester
            InvalidState: If the session is completed (nothing is written)
            EvaluationUnavailable: If the scoring oracle fails (retryable)
        """
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        question_uuid = parse_uuid(question_id, "question_id")
        if answer_text is None or not str(answer_text).strip():
            raise InvalidInput("Question ID and answer are required")

        async with self.locks.acquire(str(session_uuid)):
            with self.session_factory() as db:
                interview_session = db.execute(
                    select(InterviewSession)
                    .where(InterviewSession.id == session_uuid, InterviewSession.candidate_id == requester)
                    .with_for_update()
                ).scalar_one_or_none()
                question = None
                if interview_session is not None:
                    question = db.execute(
                        select(InterviewQuestion).where(
                            InterviewQuestion.id == question_uuid,
                            InterviewQuestion.session_id == session_uuid,
                        )
                    ).scalar_one_or_none()
                if question is None:
                    logger.warning(f"Answer rejected: question {question_uuid} not found for requester in session {session_uuid}")
                    raise QuestionNotFound(str(question_uuid))

                if interview_session.status == SessionStatus.COMPLETED:
                    logger.warning(f"Answer rejected: interview session {session_uuid} is completed")
                    raise InvalidState(f"Interview session '{session_uuid}' is already completed.")
                if interview_session.status == SessionStatus.SCHEDULED:
                    transition(interview_session, SessionStatus.IN_PROGRESS)

                if question.answer_text:
                    logger.info(f"Overwriting previous answer for question {question_uuid}")
                question.answer_text = answer_text
                question.answered_at = utc_now()
                # The previous score belongs to the previous answer
                question.score = None
                question.feedback = None
                question.strengths = None
                question.weaknesses = None
                question.suggestions = None

                try:
                    evaluation = await self.evaluator.evaluate(question.question_text, answer_text, question.skill_tag)
                except EvaluationUnavailable:
                    # Keep the answer text; the score stays null until a retry succeeds
                    db.commit()
                    raise

                self.evaluator.record(question, evaluation)
                db.commit()

                logger.info(f"Stored answer for question {question_uuid} with score {evaluation.score}")
                return evaluation

    async def complete(self, session_id, requester_id: str) -> FeedbackReport:
        """
        Generate the feedback report and complete the session.

        The report write and the status change commit together; if report
        generation fails the session stays `in_progress` and no report exists.

        Raises:
            Unauthorized, InvalidInput, SessionNotFound, Forbidden
            AlreadyCompleted: If the session was completed before
            NoAnswers: If no question has an answer
            FeedbackGenerationFailed: If the summarization oracle fails (retryable)
        """
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")

        async with self.locks.acquire(str(session_uuid)):
            with self.session_factory() as db:
                interview_session = get_owned_session(db, session_uuid, requester, for_update=True)
                if interview_session.status == SessionStatus.COMPLETED:
                    logger.warning(f"Completion rejected: interview session {session_uuid} is already completed")
                    raise AlreadyCompleted(str(session_uuid))

                if not any(question.answer_text for question in interview_session.questions):
                    logger.warning(f"Completion rejected: interview session {session_uuid} has no answers")
                    raise NoAnswers(str(session_uuid))

                try:
                    report = await self.aggregator.aggregate(db, interview_session)
                    transition(interview_session, SessionStatus.COMPLETED)
                    interview_session.total_score = report.overall_score
                    db.commit()
                except FeedbackGenerationFailed:
                    db.rollback()
                    logger.error(f"Interview session {session_uuid} stays in progress: feedback generation failed")
                    raise
                except IntegrityError as e:
                    db.rollback()
                    logger.warning(f"Duplicate feedback report for interview session {session_uuid}")
                    raise AlreadyCompleted(str(session_uuid)) from e

                logger.info(f"Interview session {session_uuid} completed with total score {report.overall_score}")
                return report

    def get_session(self, session_id, requester_id: str) -> InterviewSession:
        """Session with its questions in position order."""
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        with self.session_factory() as db:
            interview_session = get_owned_session(db, session_uuid, requester)
            # Load the questions before the database session closes
            logger.debug(f"Loaded interview session {session_uuid} with {len(interview_session.questions)} questions")
            return interview_session

    def list_sessions(self, requester_id: str) -> List[InterviewSession]:
        requester = require_requester(requester_id)
        with self.session_factory() as db:
            statement = (
                select(InterviewSession)
                .options(selectinload(InterviewSession.questions))
                .where(InterviewSession.candidate_id == requester)
                .order_by(InterviewSession.created_at.desc())
            )
            return list(db.execute(statement).scalars().all())

    def get_feedback(self, session_id, requester_id: str) -> FeedbackReport:
        """
        Raises:
            SessionNotFound, Forbidden
            FeedbackNotFound: If the session has no report (it is not completed)
        """
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        with self.session_factory() as db:
            get_owned_session(db, session_uuid, requester)
            report = db.execute(
                select(FeedbackReport).where(FeedbackReport.session_id == session_uuid)
            ).scalar_one_or_none()
            if report is None:
                raise FeedbackNotFound(str(session_uuid))
            return report

    def get_feedback_report(self, report_id, requester_id: str) -> FeedbackReport:
        """
        Feedback report by its own id; the requester must own the report's session.

        Raises:
            ReportNotFound: If no report has this id
            Forbidden: If the report's session belongs to someone else
        """
        requester = require_requester(requester_id)
        report_uuid = parse_uuid(report_id, "report_id")
        with self.session_factory() as db:
            report = db.get(FeedbackReport, report_uuid)
            if report is None:
                raise ReportNotFound(str(report_uuid))
            owner = db.execute(
                select(InterviewSession.candidate_id).where(InterviewSession.id == report.session_id)
            ).scalar_one_or_none()
            if owner != requester:
                raise Forbidden(f"Feedback report '{report_uuid}' belongs to another candidate.")
            return report

    async def save_transcript(self, session_id, transcript: str, requester_id: str) -> InterviewSession:
        requester = require_requester(requester_id)
        session_uuid = parse_uuid(session_id, "session_id")
        if transcript is None or not str(transcript).strip():
            raise InvalidInput("Transcript is required")

        async with self.locks.acquire(str(session_uuid)):
            with self.session_factory() as db:
                interview_session = get_owned_session(db, session_uuid, requester, for_update=True)
                interview_session.transcript = transcript
                db.commit()
                logger.info(f"Saved transcript for interview session {session_uuid}")
                return interview_session
