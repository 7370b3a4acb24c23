"""Tests for AI answer synthesis prompts."""

from __future__ import annotations

import pytest

from kb_assistant.exceptions import GenerationError
from kb_assistant.generation.answer_generator import AIAnswerGenerator
from kb_assistant.models.domain import ConversationTurn


class FakeLLM:
    def __init__(self, response: str = "The answer.") -> None:
        self.response = response
        self.calls: list[tuple[str, str | None]] = []

    async def generate(self, prompt, system=None, temperature=0.7, max_tokens=800):
        self.calls.append((prompt, system))
        return self.response


async def test_prompt_contains_attributed_sources(sample_results):
    llm = FakeLLM()
    result = await AIAnswerGenerator(llm).generate("How long is onboarding?", sample_results)

    prompt, system = llm.calls[0]
    assert prompt == "How long is onboarding?"
    assert "[Source 1: Document - handbook.md]" in system
    assert "[Source 2: Q&A - HR]\nOnboarding takes one week" in system
    assert result.answer == "The answer."
    assert result.sources[0] == {"id": "doc-1", "source": "Document - handbook.md", "type": "document"}


async def test_only_recent_history_included(sample_results):
    llm = FakeLLM()
    history = [ConversationTurn(role="user", content=f"turn-{i}") for i in range(8)]
    await AIAnswerGenerator(llm, history_window=6).generate("q", sample_results, history)

    system = llm.calls[0][1]
    assert "turn-0" not in system and "turn-1" not in system
    assert "user: turn-7" in system


async def test_empty_answer_raises(sample_results):
    with pytest.raises(GenerationError):
        await AIAnswerGenerator(FakeLLM("   ")).generate("q", sample_results)
