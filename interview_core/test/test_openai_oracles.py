"""
Test OpenAI Oracles Module

Exercises the OpenAI-backed oracles against a stubbed chat completions client,
and the client manager that hands out their dedicated clients.

Dependencies:
- pytest / pytest-asyncio: For testing framework
- unittest.mock: For stubbing the AsyncOpenAI client
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock
import pytest
from interview_core.core.ai_client_manager import AIClientManager
from interview_core.services.oracles import (
    OpenAIQuestionGenerationOracle,
    OpenAIScoringOracle,
    OpenAISummarizationOracle,
)


def stub_client(content):
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    create = AsyncMock(return_value=response)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


class TestOpenAIOracles:
    """Test prompt dispatch and reply decoding."""

    @pytest.mark.asyncio
    async def test_scoring_oracle(self):
        client, create = stub_client('```json\n{"score": 77, "feedback": "Good"}\n```')
        oracle = OpenAIScoringOracle(client=client, model="test-model")

        result = await oracle.score("What is REST?", "An architectural style.", "apis")

        assert result == {"score": 77, "feedback": "Good"}
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        prompt = kwargs["messages"][0]["content"]
        assert "What is REST?" in prompt
        assert "An architectural style." in prompt

    @pytest.mark.asyncio
    async def test_summarization_oracle_sends_answers_in_order(self):
        client, create = stub_client('{"overallScore": 70, "summary": "Fine"}')
        oracle = OpenAISummarizationOracle(client=client)
        answers = [
            {"skillTag": "python", "questionText": "Q1", "answerText": "A1"},
            {"skillTag": "sql", "questionText": "Q3", "answerText": "A3"},
        ]

        result = await oracle.summarize(answers, "Backend Engineer", "Python services")

        assert result["overallScore"] == 70
        prompt = create.await_args.kwargs["messages"][0]["content"]
        assert prompt.index("A1") < prompt.index("A3")
        assert "Backend Engineer" in prompt

    @pytest.mark.asyncio
    async def test_question_oracle_returns_list(self):
        client, _ = stub_client('[{"questionText": "Why Python?", "type": "behavioral"}]')
        oracle = OpenAIQuestionGenerationOracle(client=client)

        questions = await oracle.generate("Backend Engineer", "", ["python"], "beginner", 1)

        assert questions == [{"questionText": "Why Python?", "type": "behavioral"}]

    @pytest.mark.asyncio
    async def test_question_oracle_rejects_object(self):
        client, _ = stub_client('{"questionText": "Why Python?"}')
        oracle = OpenAIQuestionGenerationOracle(client=client)

        with pytest.raises(ValueError):
            await oracle.generate("Backend Engineer", "", ["python"], "beginner", 1)

    @pytest.mark.asyncio
    async def test_unparseable_reply(self):
        client, _ = stub_client("Sorry, I can't help with that.")
        oracle = OpenAIScoringOracle(client=client)

        with pytest.raises(ValueError):
            await oracle.score("Q", "A", "general")


class TestAIClientManager:
    """Test the per-oracle client manager."""

    def test_dedicated_client_per_oracle(self):
        manager = AIClientManager(api_key="test-key", base_url="http://localhost:9999/v1")

        scoring = manager.get_client("scoring")
        summarization = manager.get_client("summarization")

        assert scoring is not summarization
        assert manager.get_client("scoring") is scoring

    def test_unknown_service_type(self):
        manager = AIClientManager(api_key="test-key")
        with pytest.raises(ValueError, match="Unsupported service type"):
            manager.get_client("transcription")

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr("interview_core.core.config.ORACLE_API_KEY", None)
        manager = AIClientManager()
        with pytest.raises(RuntimeError, match="ORACLE_API_KEY"):
            manager.get_client("scoring")
