"""Heuristic query/content relevance scoring.

Two scorers live here. `relevance_score` is the strict basic scorer used by the
fallback search path; it is bounded to [0, 1]. `enhanced_relevance_score` is
the additive scorer behind the store's enhanced ranking function; its bonuses
stack without an upper bound unless a cap is supplied, so a chunk hitting
several domain signals outranks one matching a single signal.
"""

from __future__ import annotations

from kb_assistant.config.constants import (
    CALL_TERMS,
    CUSTOMER_TERMS,
    EQUIPMENT_TERMS,
    PHONE_SUPPORT_TERMS,
)

CONTAINMENT_BONUS = 1.0
PHONE_SUPPORT_BONUS = 0.9
CUSTOMER_CALL_BONUS = 0.95
EQUIPMENT_BONUS = 0.9
WORD_MATCH_BONUS = 0.3
PARTIAL_MATCH_WEIGHT = 0.5


def _query_words(query: str) -> list[str]:
    return [w for w in query.lower().split() if len(w) > 2]


def relevance_score(query: str, content: str) -> float:
    query_words = _query_words(query)
    content_lower = content.lower()
    if not query_words or not content_lower:
        return 0.0

    exact_matches = 0
    partial_matches = 0
    for word in query_words:
        if word in content_lower:
            exact_matches += 1
        elif word[:-1] in content_lower:
            # Prefix match covers simple plurals ("sensors" vs "sensor")
            partial_matches += 1

    exact_score = exact_matches / len(query_words)
    partial_score = PARTIAL_MATCH_WEIGHT * partial_matches / len(query_words)
    return min(exact_score + partial_score, 1.0)


def _mentions(text: str, terms: tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


def enhanced_relevance_score(query: str, content: str, cap: float | None = None) -> float:
    query_lower = query.lower().strip()
    content_lower = content.lower()
    if not query_lower or not content_lower:
        return 0.0

    score = 0.0
    if query_lower in content_lower:
        score += CONTAINMENT_BONUS
    if _mentions(query_lower, PHONE_SUPPORT_TERMS) and _mentions(content_lower, PHONE_SUPPORT_TERMS):
        score += PHONE_SUPPORT_BONUS
    if all(
        _mentions(text, CUSTOMER_TERMS) and _mentions(text, CALL_TERMS)
        for text in (query_lower, content_lower)
    ):
        score += CUSTOMER_CALL_BONUS
    if _mentions(query_lower, EQUIPMENT_TERMS) and _mentions(content_lower, EQUIPMENT_TERMS):
        score += EQUIPMENT_BONUS

    for word in _query_words(query_lower):
        if word in content_lower:
            score += WORD_MATCH_BONUS

    if cap is not None:
        return min(score, cap)
    return score
