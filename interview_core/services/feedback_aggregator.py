"""
Feedback Aggregator

Builds the single feedback report of a session: every answered question, in
position order, is sent to the summarization oracle in one batch together with
the job context, and the verdict becomes the report.

The report is added to the caller's transaction but never committed here; the
session state machine commits it together with the status change so a session
is never completed without its report.

Dependencies:
- pydantic: For validating the oracle's verdict
- loguru: For logging operations
"""

import asyncio
from typing import Dict, List, Optional
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session
from interview_core.core import config
from interview_core.errors.exceptions import FeedbackGenerationFailed
from interview_core.models.interview_models import FeedbackReport, InterviewSession
from interview_core.schemas.oracle_schemas import FeedbackVerdict
from interview_core.services.oracles.ports import SummarizationOracle


def collect_answers(interview_session: InterviewSession) -> List[Dict[str, str]]:
    """Answered questions of a session in delivery order, shaped for the oracle."""
    answered = sorted(
        (question for question in interview_session.questions if question.answer_text),
        key=lambda question: question.position,
    )
    return [
        {
            "skillTag": question.skill_tag,
            "questionText": question.question_text,
            "answerText": question.answer_text,
        }
        for question in answered
    ]


class FeedbackAggregator:

    def __init__(self, oracle: SummarizationOracle, timeout: Optional[float] = None):
        self.oracle = oracle
        self.timeout = timeout if timeout is not None else config.ORACLE_TIMEOUT_SECONDS

    async def aggregate(self, db: Session, interview_session: InterviewSession) -> FeedbackReport:
        """
        Generate the feedback report of a session.

        Args:
            db: Database session holding the caller's open transaction
            interview_session: Session to report on, loaded in `db`

        Returns:
            FeedbackReport: The pending report row

        Raises:
            FeedbackGenerationFailed: If the oracle fails, times out or returns malformed output
        """
        answers = collect_answers(interview_session)
        job = interview_session.job

        try:
            raw = await asyncio.wait_for(
                self.oracle.summarize(answers, job.title, job.description),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Summarization oracle timed out after {self.timeout}s for session {interview_session.id}")
            raise FeedbackGenerationFailed("Feedback generation timed out. Please retry.") from e
        except Exception as e:
            logger.error(f"Summarization oracle call failed for session {interview_session.id}: {e}")
            raise FeedbackGenerationFailed() from e

        if not isinstance(raw, dict):
            logger.error(f"Summarization oracle returned {type(raw).__name__} instead of an object")
            raise FeedbackGenerationFailed("Feedback generation returned an unexpected response. Please retry.")

        try:
            verdict = FeedbackVerdict.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Malformed summarization oracle response: {e}")
            raise FeedbackGenerationFailed("Feedback generation returned an unexpected response. Please retry.") from e

        report = FeedbackReport(
            session_id=interview_session.id,
            overall_score=verdict.overall_score,
            summary=verdict.summary,
            strengths=verdict.strengths,
            weaknesses=verdict.weaknesses,
            rated_skills=verdict.rated_skills,
            recommendations=verdict.recommendations,
        )
        db.add(report)
        db.flush()

        logger.info(
            f"Feedback report built for session {interview_session.id} from {len(answers)} answers "
            f"with overall score {report.overall_score}"
        )
        return report
