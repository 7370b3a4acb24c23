"""Text preprocessing for keyword extraction."""

from __future__ import annotations

import re

from kb_assistant.config.constants import MAX_KEYWORDS, STOPWORDS


def strip_punctuation(text: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    text = re.sub(r"[^\w\s]", " ", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation, drop stopwords and tokens of two chars or fewer."""
    return [t for t in strip_punctuation(text).split() if t not in STOPWORDS and len(t) > 2]


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """First `limit` distinct tokens, in their original order."""
    keywords: list[str] = []
    for token in tokenize(text):
        if token not in keywords:
            keywords.append(token)
        if len(keywords) == limit:
            break
    return keywords
