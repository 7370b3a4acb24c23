"""Deterministic content summary computed at ingestion time."""

from __future__ import annotations

import re

from kb_assistant.config.constants import DATE_PATTERN, EMAIL_PATTERN, PHONE_PATTERN


def create_content_summary(text: str, chunk_count: int) -> str:
    word_count = len(text.split())
    emails = re.findall(EMAIL_PATTERN, text)
    phones = re.findall(PHONE_PATTERN, text)
    dates = re.findall(DATE_PATTERN, text)

    summary = f"Document contains {word_count} words across {chunk_count} sections."
    if emails:
        summary += f" Contains {len(emails)} email address(es): {', '.join(emails[:3])}."
    if phones:
        summary += f" Contains {len(phones)} phone number(s)."
    if dates:
        summary += f" Contains {len(dates)} date reference(s)."
    return summary
