"""AI answer synthesis from ranked search evidence."""

from __future__ import annotations

from kb_assistant.exceptions import GenerationError
from kb_assistant.generation.prompt_templates import (
    ANSWER_SYNTHESIS_SYSTEM,
    format_context_block,
    format_conversation_block,
)
from kb_assistant.models.domain import AIAnswer, ConversationTurn, SearchResult
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.llm import LLMProvider

logger = get_logger("generation")


class AIAnswerGenerator:
    def __init__(self, llm: LLMProvider, history_window: int = 6) -> None:
        self._llm = llm
        self._history_window = history_window

    async def generate(
        self,
        question: str,
        evidence: list[SearchResult],
        history: list[ConversationTurn] | None = None,
    ) -> AIAnswer:
        system = ANSWER_SYNTHESIS_SYSTEM.format(
            context_block=format_context_block(evidence),
            conversation_block=format_conversation_block(history or [], self._history_window),
        )

        answer = (await self._llm.generate(question, system=system)).strip()
        if not answer:
            raise GenerationError("LLM returned an empty answer")

        logger.info(
            "generated_answer",
            question_len=len(question),
            answer_len=len(answer),
            evidence=len(evidence),
        )

        return AIAnswer(
            answer=answer,
            sources=[{"id": r.id, "source": r.source, "type": r.type} for r in evidence],
        )
