"""Tests for question normalization."""

from __future__ import annotations

import pytest

from kb_assistant.query.normalizer import PATTERN_FAMILIES, QuestionNormalizer
from kb_assistant.query.tokenizer import extract_keywords, strip_punctuation, tokenize


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def debug(self, event, **kw):
        self.events.append((event, kw))

    info = warning = error = debug


@pytest.fixture
def normalizer():
    return QuestionNormalizer()


def test_support_phone_question_maps_to_canonical(normalizer):
    result = normalizer.normalize("What is the phone number for support?")
    assert result.intent == "support_phone"
    assert result.normalized == "support department phone number"
    assert result.semantic_score == 0.95
    assert "support" in result.keywords


def test_customer_call_question(normalizer):
    result = normalizer.normalize("Why must we call the customer one day before?")
    assert result.intent == "customer_communication"
    assert result.normalized == "always call the customer 1 day before installation"


def test_equipment_question(normalizer):
    result = normalizer.normalize("What equipment is included in the standard package?")
    assert result.intent == "equipment_inquiry"


def test_earlier_family_wins(normalizer):
    # Matches both the support and the customer-contact families
    result = normalizer.normalize("Should I call support or the customer one day before?")
    assert result.intent == "support_phone"


def test_unmatched_question(normalizer):
    result = normalizer.normalize("How do I reset the router password?")
    assert result.intent is None
    assert result.normalized == "how do i reset the router password"
    assert result.keywords == ["reset", "router", "password"]
    assert result.semantic_score == 0.5


def test_keywords_capped_at_eight(normalizer):
    question = "alpha bravo charlie delta echo foxtrot golf hotel india juliet kilo"
    result = normalizer.normalize(question)
    assert len(result.keywords) == 8
    assert result.keywords[0] == "alpha"


def test_unicode_and_whitespace_cleaned(normalizer):
    result = normalizer.normalize("  Reset   the\tROUTER password  ")
    assert result.normalized == "reset the router password"


@pytest.mark.parametrize(
    "question",
    [
        "What is the phone number for support?",
        "How do I reset the router password?",
        "What must be done with the customer after installation?",
    ],
)
def test_normalize_is_idempotent(normalizer, question):
    once = normalizer.normalize(question)
    twice = normalizer.normalize(once.normalized)
    assert twice.normalized == once.normalized
    assert twice.intent == once.intent


def test_every_canonical_form_maps_to_its_own_family(normalizer):
    for family in PATTERN_FAMILIES:
        assert normalizer.normalize(family.canonical).normalized == family.canonical


def test_match_is_logged():
    logger = RecordingLogger()
    QuestionNormalizer(logger=logger).normalize("support phone?")
    assert logger.events[0][0] == "question_pattern_matched"
    assert logger.events[0][1]["family"] == "support_phone"


def test_tokenizer_helpers():
    assert strip_punctuation("Hello, World!  OK?") == "hello world ok"
    assert tokenize("The door sensors, at the gate.") == ["door", "sensors", "gate"]
    assert extract_keywords("gate door gate sensor", limit=2) == ["gate", "door"]
