"""Overlap seed utilities for chunking."""

from __future__ import annotations

import re


def split_sentences(text: str) -> list[str]:
    """Split text by sentence boundaries."""
    sentences = re.split(r"(?<=[.!?])\s+", text.strip())
    return [s.strip() for s in sentences if s.strip()]


def compute_overlap_text(
    prev_chunk_text: str, sentence_count: int = 2, max_chars: int | None = None
) -> str:
    """Return the trailing sentences of prev_chunk_text to seed the next chunk.

    When max_chars is set, a tail longer than that (unpunctuated lists and
    tables split into one huge "sentence") is cut back to the trailing words
    that fit.
    """
    if sentence_count <= 0 or not prev_chunk_text.strip():
        return ""
    tail = " ".join(split_sentences(prev_chunk_text)[-sentence_count:])
    if max_chars is not None and len(tail) > max_chars:
        words: list[str] = []
        size = 0
        for word in reversed(tail.split()):
            size += len(word) + (1 if words else 0)
            if size > max_chars:
                break
            words.append(word)
        tail = " ".join(reversed(words))
    if tail and not tail.endswith("."):
        tail += "."
    return tail
