"""
Answer Evaluator

Scores a single question/answer pair through the scoring oracle. The oracle's
judgment is taken as-is apart from shape validation and clamping the score into
[0, 100]; if the oracle is down, slow or returns something unusable the
evaluation fails as a whole and nothing is written.

Dependencies:
- pydantic: For validating the oracle's response shape
- loguru: For logging operations
"""

import asyncio
from typing import Optional
from loguru import logger
from pydantic import ValidationError
from interview_core.core import config
from interview_core.errors.exceptions import EvaluationUnavailable
from interview_core.models.interview_models import InterviewQuestion
from interview_core.schemas.oracle_schemas import AnswerEvaluation
from interview_core.services.oracles.ports import ScoringOracle


class AnswerEvaluator:
    """
    Service for evaluating one interview answer with the scoring oracle.
    """

    def __init__(self, oracle: ScoringOracle, timeout: Optional[float] = None):
        """
        Args:
            oracle: Scoring oracle to delegate the judgment to
            timeout: Seconds to wait for the oracle, defaults to ORACLE_TIMEOUT_SECONDS
        """
        self.oracle = oracle
        self.timeout = timeout if timeout is not None else config.ORACLE_TIMEOUT_SECONDS

    async def evaluate(self, question_text: str, answer_text: str, skill_tag: str) -> AnswerEvaluation:
        """
        Score an answer.

        Args:
            question_text: The question as it was asked
            answer_text: The candidate's answer
            skill_tag: Skill the question targets

        Returns:
            AnswerEvaluation: Normalized evaluation with a score in [0, 100]

        Raises:
            EvaluationUnavailable: If the oracle fails, times out or returns malformed output
        """
        try:
            raw = await asyncio.wait_for(
                self.oracle.score(question_text, answer_text, skill_tag),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Scoring oracle timed out after {self.timeout}s")
            raise EvaluationUnavailable("Answer evaluation timed out. Please retry.") from e
        except Exception as e:
            logger.error(f"Scoring oracle call failed: {e}")
            raise EvaluationUnavailable() from e

        if not isinstance(raw, dict):
            logger.error(f"Scoring oracle returned {type(raw).__name__} instead of an object")
            raise EvaluationUnavailable("Answer evaluation returned an unexpected response. Please retry.")

        try:
            evaluation = AnswerEvaluation.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Malformed scoring oracle response: {e}")
            raise EvaluationUnavailable("Answer evaluation returned an unexpected response. Please retry.") from e

        logger.info(f"Answer evaluated for skill '{skill_tag}' with score {evaluation.score}")
        return evaluation

    @staticmethod
    def record(question: InterviewQuestion, evaluation: AnswerEvaluation) -> None:
        """Write a normalized evaluation onto its question row (caller commits)."""
        question.score = evaluation.score
        question.feedback = evaluation.feedback
        question.strengths = list(evaluation.strengths)
        question.weaknesses = list(evaluation.weaknesses)
        question.suggestions = list(evaluation.suggestions)
