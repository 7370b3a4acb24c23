"""Paragraph-greedy text chunker with sentence overlap."""

from __future__ import annotations

import re
from uuid import uuid4

from kb_assistant.chunking.overlap import compute_overlap_text
from kb_assistant.config.constants import (
    CHUNKS_PER_PAGE,
    EMPTY_DOCUMENT_CHUNK,
    MIN_CHUNKABLE_CHARS,
)
from kb_assistant.exceptions import ConfigurationError
from kb_assistant.models.domain import DocumentChunk


class ParagraphChunker:
    def __init__(
        self, max_chunk_size: int = 1000, overlap_sentences: int = 2, overlap_target: int = 100
    ) -> None:
        if overlap_target >= max_chunk_size:
            raise ConfigurationError(
                f"overlap_target ({overlap_target}) must be smaller than "
                f"max_chunk_size ({max_chunk_size})"
            )
        self._max_chunk_size = max_chunk_size
        self._overlap_sentences = overlap_sentences
        self._overlap_target = overlap_target

    def chunk(self, text: str, source_name: str = "document") -> list[str]:
        if not text or len(text.strip()) < MIN_CHUNKABLE_CHARS:
            return [EMPTY_DOCUMENT_CHUNK.format(name=source_name)]

        chunks: list[str] = []
        buffer = ""
        for paragraph in self._split_by_paragraphs(text):
            if buffer and len(buffer) + len(paragraph) > self._max_chunk_size:
                chunks.append(buffer.strip())
                seed = compute_overlap_text(buffer, self._overlap_sentences, self._overlap_target)
                buffer = seed + "\n\n" if seed else ""
            buffer += paragraph + "\n\n"

        if buffer.strip():
            chunks.append(buffer.strip())

        if not chunks:
            chunks.append(text.strip())
        return chunks

    @staticmethod
    def _split_by_paragraphs(text: str) -> list[str]:
        """Split text by blank lines."""
        paragraphs = re.split(r"\n\s*\n", text)
        return [p.strip() for p in paragraphs if p.strip()]


def build_chunk_records(
    document_id: str, chunks: list[str], document_name: str | None = None
) -> list[DocumentChunk]:
    """Assign sequential chunk indexes and approximate page numbers."""
    return [
        DocumentChunk(
            chunk_id=str(uuid4()),
            document_id=document_id,
            chunk_index=index,
            content=content.strip(),
            page_number=index // CHUNKS_PER_PAGE + 1,
            document_name=document_name,
        )
        for index, content in enumerate(chunks)
    ]
