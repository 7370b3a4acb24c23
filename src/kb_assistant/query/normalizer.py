"""Question normalization: canonical form, intent tag and keywords."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

from kb_assistant.config.constants import DEFAULT_SEMANTIC_SCORE, PATTERN_SEMANTIC_SCORE
from kb_assistant.models.domain import NormalizedQuestion
from kb_assistant.observability.logger import get_logger
from kb_assistant.query.tokenizer import extract_keywords, strip_punctuation


@dataclass(frozen=True)
class PatternFamily:
    name: str
    patterns: tuple[re.Pattern, ...]
    canonical: str
    intent: str
    keywords: tuple[str, ...]

    def matches(self, question: str) -> bool:
        return any(p.search(question) for p in self.patterns)


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# Order is priority: an earlier family wins even when a later one matches more strongly.
PATTERN_FAMILIES: tuple[PatternFamily, ...] = (
    PatternFamily(
        name="support_phone",
        patterns=_compile(
            r"(?:phone|telephone|number|hotline).*?\bsupport\b",
            r"\bsupport\b.*?(?:phone|telephone|number|hotline)",
            r"(?:call|reach|contact).*?\bsupport\b",
        ),
        canonical="support department phone number",
        intent="support_phone",
        keywords=("support", "phone", "number", "contact"),
    ),
    PatternFamily(
        name="customer_contact",
        patterns=_compile(
            r"why\s+(?:must|should|do)\s+(?:you|we)\s+(?:call|contact)\s+(?:the\s+)?customer.*?(?:before|one\s+day)",
            r"why\s+(?:call|contact)\s+customer.*?(?:before|day)",
            r"customer.*?(?:call|contact).*?(?:before|day)",
            r"(?:call|contact).*?customer.*?(?:before|one\s+day)",
        ),
        canonical="always call the customer 1 day before installation",
        intent="customer_communication",
        keywords=("customer", "call", "day", "before", "installation"),
    ),
    PatternFamily(
        name="equipment_package",
        patterns=_compile(
            r"what\s+(?:equipment|devices?|items?)\s+(?:is|are)\s+(?:included|in|part)",
            r"(?:standard|basic|premium)\s+package",
            r"equipment.*?(?:package|included|include)",
            r"(?:package|kit).*?(?:include|contain|come\s+with)",
        ),
        canonical="equipment included in standard package",
        intent="equipment_inquiry",
        keywords=("equipment", "standard", "package", "included"),
    ),
    PatternFamily(
        name="control_panel_installation",
        patterns=_compile(
            r"where\s+(?:should|must)\s+(?:the\s+)?(?:primary\s+)?control\s+(?:panel|unit)\s+be\s+(?:installed|mounted)",
            r"(?:primary\s+)?control\s+(?:panel|unit)\s+(?:installation|mounting)\s+(?:location|position)",
            r"where.*?(?:install|mount).*?control\s+(?:panel|unit)",
        ),
        canonical="mount control panel installation location height",
        intent="process_inquiry",
        keywords=("control", "panel", "mount", "installation", "location", "height"),
    ),
    PatternFamily(
        name="app_testing",
        patterns=_compile(
            r"what\s+(?:should|must)\s+(?:you|we)\s+do\s+in\s+(?:the\s+)?app\s+before\s+leaving",
            r"app.*?(?:before|leaving).*?(?:site|installation)",
            r"(?:test|check).*?app.*?before",
            r"sensors?.*?app.*?before",
        ),
        canonical="test sensors via app before leaving installation site",
        intent="process_inquiry",
        keywords=("test", "sensors", "app", "before", "leaving", "installation"),
    ),
    PatternFamily(
        name="post_installation",
        patterns=_compile(
            r"what\s+(?:must|should)\s+be\s+done\s+(?:with\s+)?(?:the\s+)?customer\s+after\s+installation",
            r"after\s+installation.*?(?:customer|complete)",
            r"installation.*?(?:complete|finished).*?customer",
            r"(?:done|completed).*?customer.*?after",
        ),
        canonical="what must be done with customer after installation complete",
        intent="process_inquiry",
        keywords=("customer", "after", "installation", "complete"),
    ),
)


class QuestionNormalizer:
    def __init__(
        self,
        families: tuple[PatternFamily, ...] = PATTERN_FAMILIES,
        logger=None,
    ) -> None:
        self._families = families
        self._log = logger or get_logger("question_normalizer")

    def normalize(self, question: str) -> NormalizedQuestion:
        cleaned = self._clean(question)

        for family in self._families:
            if family.matches(cleaned):
                self._log.debug("question_pattern_matched", family=family.name, intent=family.intent)
                return NormalizedQuestion(
                    normalized=family.canonical,
                    intent=family.intent,
                    keywords=list(family.keywords),
                    semantic_score=PATTERN_SEMANTIC_SCORE,
                )

        self._log.debug("question_pattern_unmatched", question=cleaned)
        return NormalizedQuestion(
            normalized=strip_punctuation(cleaned),
            intent=None,
            keywords=extract_keywords(cleaned),
            semantic_score=DEFAULT_SEMANTIC_SCORE,
        )

    @staticmethod
    def _clean(text: str) -> str:
        text = unicodedata.normalize("NFKC", text)
        return re.sub(r"\s+", " ", text).strip().lower()
