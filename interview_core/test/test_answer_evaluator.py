"""
Test Answer Evaluator Module

This module tests the AnswerEvaluator to ensure oracle output is normalized and
every oracle failure surfaces as a retryable EvaluationUnavailable.

Dependencies:
- pytest / pytest-asyncio: For testing framework
- interview_core.services.answer_evaluator: The module being tested
"""

import math
import pytest
from interview_core.errors.exceptions import EvaluationUnavailable
from interview_core.models.interview_models import InterviewQuestion
from interview_core.schemas.oracle_schemas import AnswerEvaluation, clamp_score
from interview_core.services.answer_evaluator import AnswerEvaluator
from conftest import FakeScoringOracle


class TestClampScore:
    """Test score normalization."""

    @pytest.mark.parametrize("raw, expected", [
        (85, 85),
        (-10, 0),
        (250, 100),
        (72.5, 73),
        (72.4, 72),
        ("64", 64),
        (math.inf, 100),
        (-math.inf, 0),
    ])
    def test_clamped_into_range(self, raw, expected):
        assert clamp_score(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, "excellent", math.nan, [80]])
    def test_non_numeric_rejected(self, raw):
        with pytest.raises(ValueError):
            clamp_score(raw)


class TestAnswerEvaluator:
    """Test the AnswerEvaluator against fake oracles."""

    @pytest.mark.asyncio
    async def test_evaluation_passed_through(self):
        oracle = FakeScoringOracle(result={
            "score": 91,
            "feedback": "Excellent depth.",
            "strengths": ["Depth"],
            "weaknesses": [],
            "suggestions": ["Keep it concise"],
        })
        evaluator = AnswerEvaluator(oracle, timeout=1)

        evaluation = await evaluator.evaluate("What is a closure?", "A function with captured scope.", "python")

        assert evaluation.score == 91
        assert evaluation.strengths == ["Depth"]
        assert oracle.calls == [("What is a closure?", "A function with captured scope.", "python")]

    @pytest.mark.asyncio
    async def test_score_over_range_clamped(self):
        evaluator = AnswerEvaluator(FakeScoringOracle(result={"score": 140}), timeout=1)
        evaluation = await evaluator.evaluate("Q", "A", "general")
        assert evaluation.score == 100
        assert evaluation.feedback == ""

    @pytest.mark.asyncio
    async def test_negative_score_clamped(self):
        evaluator = AnswerEvaluator(FakeScoringOracle(result={"score": -3}), timeout=1)
        evaluation = await evaluator.evaluate("Q", "A", "general")
        assert evaluation.score == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", [
        {"feedback": "no score at all"},
        {"score": "brilliant"},
        {"score": 50, "strengths": "not a list"},
        ["score", 50],
        None,
    ])
    async def test_malformed_output(self, result):
        evaluator = AnswerEvaluator(FakeScoringOracle(result=result), timeout=1)
        with pytest.raises(EvaluationUnavailable):
            await evaluator.evaluate("Q", "A", "general")

    @pytest.mark.asyncio
    async def test_oracle_error(self):
        evaluator = AnswerEvaluator(FakeScoringOracle(error=ValueError("Oracle response is not valid JSON")), timeout=1)
        with pytest.raises(EvaluationUnavailable) as exc_info:
            await evaluator.evaluate("Q", "A", "general")
        assert exc_info.value.status_code == 503
        assert exc_info.value.kind == "EvaluationUnavailable"

    @pytest.mark.asyncio
    async def test_oracle_timeout(self):
        evaluator = AnswerEvaluator(FakeScoringOracle(result={"score": 50}, delay=0.5), timeout=0.05)
        with pytest.raises(EvaluationUnavailable):
            await evaluator.evaluate("Q", "A", "general")

    def test_record_writes_evaluation(self):
        question = InterviewQuestion(position=1, question_text="Q")
        evaluation = AnswerEvaluation(score=70, feedback="Fine", strengths=["s"], weaknesses=["w"], suggestions=["x"])

        AnswerEvaluator.record(question, evaluation)

        assert question.score == 70
        assert question.feedback == "Fine"
        assert question.strengths == ["s"]
        assert question.weaknesses == ["w"]
        assert question.suggestions == ["x"]
