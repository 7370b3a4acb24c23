"""Tests for the basic and enhanced relevance scorers."""

import pytest

from kb_assistant.scoring.relevance import enhanced_relevance_score, relevance_score


def test_exact_match_scores_one():
    assert relevance_score("door sensor", "Install the door sensor near the entrance.") == 1.0


def test_partial_match_counts_half():
    # "sensors" is not in the content but its prefix "sensor" is
    assert relevance_score("sensors", "one sensor per door") == 0.5


def test_mixed_exact_and_missing_words():
    score = relevance_score("door window", "Check every door.")
    assert score == pytest.approx(0.5)


def test_short_words_ignored():
    assert relevance_score("is it on", "it is on") == 0.0


def test_empty_content_scores_zero():
    assert relevance_score("door sensor", "") == 0.0
    assert enhanced_relevance_score("door sensor", "") == 0.0


@pytest.mark.parametrize(
    "query,content",
    [
        ("door door door", "door"),
        ("sensors sensor", "sensor sensors"),
        ("anything at all", "nothing matches here"),
    ],
)
def test_basic_score_is_bounded(query, content):
    assert 0.0 <= relevance_score(query, content) <= 1.0


def test_enhanced_support_phone_bonus():
    content = "What is the support phone number? Support phone number? Call 555-123-4567"
    score = enhanced_relevance_score("support department phone number", content)
    # +0.9 phone/support vocabulary, +0.3 for each of support, phone, number
    assert score == pytest.approx(1.8)


def test_enhanced_containment_bonus():
    score = enhanced_relevance_score("turn off power", "Always turn off power first.")
    assert score == pytest.approx(1.0 + 3 * 0.3)


def test_enhanced_customer_call_bonus():
    score = enhanced_relevance_score("call customer", "The customer gets a call.")
    assert score == pytest.approx(0.95 + 2 * 0.3)


def test_enhanced_equipment_bonus():
    score = enhanced_relevance_score("equipment list", "The standard package ships with a siren.")
    assert score == pytest.approx(0.9)


def test_enhanced_is_uncapped_by_default():
    content = "support phone number support phone number"
    assert enhanced_relevance_score("support phone number", content) > 1.0


def test_enhanced_cap_clamps():
    content = "support phone number support phone number"
    assert enhanced_relevance_score("support phone number", content, cap=1.0) == 1.0
