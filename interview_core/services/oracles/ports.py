from typing import Any, Dict, List, Optional, Protocol, Sequence


class QuestionGenerationOracle(Protocol):
    async def generate(
        self,
        job_title: str,
        job_description: str,
        skills: Sequence[str],
        difficulty: str,
        count: int,
        resume_text: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return raw question objects (questionText, type, skillTag, timeLimit)."""
        ...


class ScoringOracle(Protocol):
    async def score(self, question_text: str, answer_text: str, skill_tag: str) -> Dict[str, Any]:
        """Return the raw evaluation object (score, feedback, strengths, weaknesses, suggestions)."""
        ...


class SummarizationOracle(Protocol):
    async def summarize(
        self,
        answers: List[Dict[str, str]],
        job_title: str,
        job_description: str,
    ) -> Dict[str, Any]:
        """Return the raw verdict (summary, strengths, weaknesses, ratedSkills, overallScore, recommendations)."""
        ...
