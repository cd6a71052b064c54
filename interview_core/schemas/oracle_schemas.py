"""
Description:
Shapes of the oracle responses. The oracles are language models, so every field
is validated here and scores are clamped into [0, 100] before anything is stored.

Dependencies:
- pydantic: For data validation.
"""
import math
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def clamp_score(value) -> int:
    """Coerce an oracle score to an int in [0, 100].

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        raise ValueError("score must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError("score must be a number") from e
    if math.isnan(number):
        raise ValueError("score must be a number")
    if math.isinf(number):
        return 100 if number > 0 else 0
    return max(0, min(100, int(math.floor(number + 0.5))))


class GeneratedQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_text: str = Field(..., alias="questionText", min_length=1)
    question_type: str = Field(default="behavioral", alias="type", max_length=50)
    skill_tag: str = Field(default="general", alias="skillTag", max_length=100)
    time_limit: Optional[int] = Field(default=None, alias="timeLimit", ge=0)


class AnswerEvaluation(BaseModel):
    """Normalized result of scoring one answer."""
    score: int = Field(..., ge=0, le=100, description="Answer score between 0 and 100")
    feedback: str = Field(default="", description="Constructive feedback on the answer")
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def clamp(cls, value):
        return clamp_score(value)


class FeedbackVerdict(BaseModel):
    """Verdict of the summarization oracle for a whole session."""
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(..., min_length=1)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    rated_skills: Dict[str, int] = Field(default_factory=dict, alias="ratedSkills")
    overall_score: int = Field(..., alias="overallScore", ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)

    @field_validator("overall_score", mode="before")
    @classmethod
    def clamp_overall(cls, value):
        return clamp_score(value)

    @field_validator("rated_skills", mode="before")
    @classmethod
    def clamp_ratings(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("ratedSkills must be an object")
        return {str(skill): clamp_score(rating) for skill, rating in value.items()}
