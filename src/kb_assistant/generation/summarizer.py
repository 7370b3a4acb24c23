"""AI document summary and keyword extraction for ingestion."""

from __future__ import annotations

import re

from pydantic import BaseModel

from kb_assistant.config.constants import MAX_SUMMARY_KEYWORDS
from kb_assistant.exceptions import GenerationError
from kb_assistant.generation.prompt_templates import (
    DOCUMENT_SUMMARY_PROMPT,
    DOCUMENT_SUMMARY_SYSTEM,
)
from kb_assistant.models.domain import DocumentSummary
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.llm import LLMProvider

logger = get_logger("summarizer")


class SummaryResponse(BaseModel):
    summary: str
    keywords: list[str]


class DocumentSummarizer:
    def __init__(self, llm: LLMProvider, max_input_chars: int = 8000) -> None:
        self._llm = llm
        self._max_input_chars = max_input_chars

    async def summarize(self, text: str) -> DocumentSummary:
        prompt = DOCUMENT_SUMMARY_PROMPT.format(content=text[: self._max_input_chars])

        try:
            result = await self._llm.generate_structured(
                prompt, SummaryResponse, system=DOCUMENT_SUMMARY_SYSTEM
            )
            summary, keywords = result.summary.strip(), result.keywords
        except Exception:
            # Fallback: plain generation in the SUMMARY:/KEYWORDS: format
            raw = await self._llm.generate(prompt, system=DOCUMENT_SUMMARY_SYSTEM)
            summary, keywords = parse_summary_response(raw)

        if not summary:
            raise GenerationError("Summary response contained no summary")

        keywords = [k.strip() for k in keywords if k.strip()][:MAX_SUMMARY_KEYWORDS]
        logger.info("document_summarized", summary_len=len(summary), keywords=len(keywords))
        return DocumentSummary(summary=summary, keywords=keywords)


def parse_summary_response(content: str) -> tuple[str, list[str]]:
    summary_match = re.search(r"SUMMARY:\s*(.+?)(?=KEYWORDS:|$)", content, re.S)
    keywords_match = re.search(r"KEYWORDS:\s*(.+)", content, re.S)
    summary = summary_match.group(1).strip() if summary_match else ""
    keywords = keywords_match.group(1).split(",") if keywords_match else []
    return summary, [k.strip() for k in keywords if k.strip()]
