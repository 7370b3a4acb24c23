"""Content-type detection for ingested text."""

from __future__ import annotations

import re

from kb_assistant.config.constants import DATE_PATTERN, EMAIL_PATTERN, PHONE_PATTERN
from kb_assistant.models.domain import ContentProfile

INSTRUCTION_PATTERN = re.compile(r"\b(?:step|follow|procedure|process|instruction|guide)\b", re.I)


def analyze_content_type(content: str) -> ContentProfile:
    has_email = re.search(EMAIL_PATTERN, content) is not None
    has_phone = re.search(PHONE_PATTERN, content) is not None
    has_date = re.search(DATE_PATTERN, content) is not None
    has_instructions = INSTRUCTION_PATTERN.search(content) is not None

    if has_email or has_phone:
        content_type = "mixed" if has_instructions else "contact"
    elif has_instructions:
        content_type = "procedural"
    else:
        content_type = "informational"

    return ContentProfile(
        has_email=has_email,
        has_phone=has_phone,
        has_date=has_date,
        has_instructions=has_instructions,
        content_type=content_type,
    )
