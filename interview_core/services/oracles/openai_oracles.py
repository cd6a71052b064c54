"""
OpenAI-backed Oracles

Implementations of the oracle ports on top of an OpenAI-compatible chat
completions endpoint. Each oracle renders its prompt through the secure prompt
manager, sends it on its dedicated client and decodes the JSON reply. Transport
and decoding errors propagate; callers translate them into their error kinds.

Dependencies:
- openai: For the AsyncOpenAI client
- loguru: For logging operations
- interview_core.core.ai_client_manager: For dedicated per-oracle clients
- interview_core.core.secure_prompt_manager: For sanitized prompts
"""

from typing import Any, Dict, List, Optional, Sequence
from loguru import logger
from openai import AsyncOpenAI
from interview_core.core import config
from interview_core.core.ai_client_manager import get_ai_client_manager
from interview_core.core.secure_prompt_manager import secure_prompt_manager
from interview_core.helper.parse_oracle_json import parse_oracle_json


class _ChatOracle:
    service_type = ""
    max_tokens = 1000
    temperature = 0.5

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        """
        Args:
            client: Optional AsyncOpenAI client. If not provided, the dedicated client
                    for this oracle is fetched on first use.
            model: Model name, defaults to ORACLE_MODEL
        """
        self._client = client
        self.model = model or config.ORACLE_MODEL

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_ai_client_manager().get_client(self.service_type)
        return self._client

    async def _complete(self, prompt: str) -> Any:
        response = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=0.9,
            messages=[
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        )
        content = response.choices[0].message.content or ""
        logger.debug(f"{self.service_type} oracle replied with {len(content)} characters")
        return parse_oracle_json(content)


class OpenAIQuestionGenerationOracle(_ChatOracle):
    service_type = "question_generation"
    max_tokens = 2000
    temperature = 0.7

    async def generate(
        self,
        job_title: str,
        job_description: str,
        skills: Sequence[str],
        difficulty: str,
        count: int,
        resume_text: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        prompt = secure_prompt_manager.get_question_generation_prompt(
            job_title=job_title,
            job_description=job_description,
            skills=skills,
            difficulty=difficulty,
            count=count,
            resume_text=resume_text,
        )
        questions = await self._complete(prompt)
        if not isinstance(questions, list):
            raise ValueError("Question generation oracle did not return a JSON array")
        return questions


class OpenAIScoringOracle(_ChatOracle):
    service_type = "scoring"

    async def score(self, question_text: str, answer_text: str, skill_tag: str) -> Dict[str, Any]:
        prompt = secure_prompt_manager.get_answer_scoring_prompt(
            question_text=question_text,
            answer_text=answer_text,
            skill_tag=skill_tag,
        )
        return await self._complete(prompt)


class OpenAISummarizationOracle(_ChatOracle):
    service_type = "summarization"
    max_tokens = 1500
    temperature = 0.6

    async def summarize(
        self,
        answers: List[Dict[str, str]],
        job_title: str,
        job_description: str,
    ) -> Dict[str, Any]:
        prompt = secure_prompt_manager.get_feedback_summary_prompt(
            answers=answers,
            job_title=job_title,
            job_description=job_description,
        )
        return await self._complete(prompt)
