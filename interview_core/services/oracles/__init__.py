"""
Oracle Ports

Request/response ports for the language-model collaborators: question
generation, answer scoring and session summarization. Services depend on the
protocols; the OpenAI-backed classes are the production implementations.
"""

from .ports import QuestionGenerationOracle, ScoringOracle, SummarizationOracle
from .openai_oracles import OpenAIQuestionGenerationOracle, OpenAIScoringOracle, OpenAISummarizationOracle

__all__ = [
    "QuestionGenerationOracle",
    "ScoringOracle",
    "SummarizationOracle",
    "OpenAIQuestionGenerationOracle",
    "OpenAIScoringOracle",
    "OpenAISummarizationOracle",
]
