"""Query variant expansion for the basic search path."""

from __future__ import annotations

from kb_assistant.config.constants import STOPWORDS

TERM_PUNCTUATION = "?!.,;:\"'()"

# Domain trigger -> extra search terms
DOMAIN_EXPANSIONS: dict[str, tuple[str, ...]] = {
    "equipment": ("equipment", "package", "standard package"),
    "package": ("package", "equipment"),
    "phone": ("phone", "support", "number"),
    "support": ("support", "phone"),
    "customer": ("customer", "call"),
    "wiring": ("wiring", "power", "fusebox"),
    "install": ("installation", "mount"),
    "email": ("email", "contact"),
    "deadline": ("deadline", "within"),
}


def expand_query(query: str, max_variants: int = 8) -> list[str]:
    """Original query, its whitespace terms, then domain synonyms. Order-preserving, deduplicated."""
    query = query.strip()
    if not query:
        return []

    lowered = query.lower()
    candidates = [query]
    for term in lowered.split():
        term = term.strip(TERM_PUNCTUATION)
        if len(term) > 2 and term not in STOPWORDS:
            candidates.append(term)
    for trigger, extras in DOMAIN_EXPANSIONS.items():
        if trigger in lowered:
            candidates.extend(extras)

    variants: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        key = candidate.lower()
        if key in seen:
            continue
        seen.add(key)
        variants.append(candidate)
    return variants[:max_variants]
