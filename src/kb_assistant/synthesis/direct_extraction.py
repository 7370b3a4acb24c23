"""Pattern-based extraction of literal answers from document text.

Each rule pairs a question matcher with a handler that scans document text.
Rules run in order; the first rule whose matcher accepts the question and
whose handler finds something wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from kb_assistant.chunking.overlap import split_sentences
from kb_assistant.config.constants import EMAIL_PATTERN, PHONE_PATTERN, TIMEFRAME_PATTERN
from kb_assistant.observability.logger import get_logger
from kb_assistant.query.tokenizer import tokenize

MIN_EXTRACTED_LENGTH = 10
MAX_SENTENCES = 3

_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.+)$")
_PACKAGE_INLINE = re.compile(
    r"((?:standard|basic|premium|advanced|starter)\s+package)\s+"
    r"(?:includes?|contains?|consists\s+of|comes\s+with)\b[ \t]*:?[ \t]*([^\s:][^\n]*)",
    re.I,
)
_PACKAGE_HEADING = re.compile(r"^\s*#*\s*(.*\bpackage\b.*?)\s*:?\s*$", re.I)
_HEADING_VERB = re.compile(
    r"\s+(?:includes?|contains?|consists\s+of|comes\s+with)(?:\s+the\s+following)?$", re.I
)


def _sentences(texts: list[str]) -> list[str]:
    """Sentences across all texts, line-aware, de-duplicated in order."""
    seen: set[str] = set()
    sentences: list[str] = []
    for text in texts:
        for line in text.splitlines():
            for sentence in split_sentences(line):
                key = sentence.lower()
                if key not in seen:
                    seen.add(key)
                    sentences.append(sentence)
    return sentences


def _matching_sentences(texts: list[str], *patterns: re.Pattern) -> list[str]:
    return [s for s in _sentences(texts) if all(p.search(s) for p in patterns)]


def _join(sentences: list[str]) -> str | None:
    if not sentences:
        return None
    return " ".join(sentences[:MAX_SENTENCES])


def extract_package_list(question: str, texts: list[str]) -> str | None:
    combined = "\n".join(texts)
    inline = _PACKAGE_INLINE.search(combined)
    if inline:
        name, items = inline.group(1).strip(), inline.group(2).strip().rstrip(".")
        return f"The {name} includes: {items}."

    for text in texts:
        lines = text.splitlines()
        for i, line in enumerate(lines):
            heading = _PACKAGE_HEADING.match(line)
            if not heading or _BULLET.match(line):
                continue
            items = []
            for following in lines[i + 1 :]:
                bullet = _BULLET.match(following)
                if bullet:
                    items.append(bullet.group(1).strip())
                elif items or following.strip():
                    break
            if items:
                name = _HEADING_VERB.sub("", heading.group(1).strip())
                return f"{name} includes: {', '.join(items)}."
    return None


_WIRING = re.compile(r"\bwir(?:e|es|ing)\b|\belectric", re.I)
_POWER_SAFETY = re.compile(r"turn\s+off|switch\s+off|disconnect|\bpower\b|fuse|breaker", re.I)


def extract_wiring_safety(question: str, texts: list[str]) -> str | None:
    return _join(_matching_sentences(texts, _WIRING, _POWER_SAFETY))


_MOUNTING = re.compile(r"\b(?:install|mount|place|position)\w*", re.I)
_PLACEMENT = re.compile(
    r"\b(?:height|high|location|wall|floor|ceiling|entrance|\d+(?:\.\d+)?\s*(?:cm|m|meters?|feet|ft|inches|in))\b",
    re.I,
)


def extract_installation_placement(question: str, texts: list[str]) -> str | None:
    return _join(_matching_sentences(texts, _MOUNTING, _PLACEMENT))


_CUSTOMER = re.compile(r"\bcustomers?\b", re.I)
_CALL = re.compile(r"\b(?:call|contact|phone|notify)\w*", re.I)
_TIMING = re.compile(r"\b(?:before|prior|advance|day|days|hours?)\b", re.I)


def extract_customer_call_timing(question: str, texts: list[str]) -> str | None:
    return _join(_matching_sentences(texts, _CUSTOMER, _CALL, _TIMING))


_CONTACT_VOCABULARY = frozenset(
    {"phone", "telephone", "number", "numbers", "call", "reach", "contact", "email", "mail", "address"}
)


def extract_contact_details(question: str, texts: list[str]) -> str | None:
    # Only sentences about the question's subject ("support", "billing") count
    subject = set(tokenize(question)) - _CONTACT_VOCABULARY
    sentences = _sentences(texts)
    if subject:
        sentences = [s for s in sentences if subject & set(tokenize(s))]
    combined = "\n".join(sentences)
    wants_email = re.search(r"e-?mail", question, re.I) is not None
    wants_phone = re.search(r"phone|number|call", question, re.I) is not None
    if not wants_email and not wants_phone:
        wants_email = wants_phone = True

    parts = []
    if wants_email:
        emails = list(dict.fromkeys(re.findall(EMAIL_PATTERN, combined)))
        if emails:
            parts.append(f"Contact email: {', '.join(emails[:3])}.")
    if wants_phone:
        phones = list(dict.fromkeys(re.findall(PHONE_PATTERN, combined)))
        if phones:
            parts.append(f"Contact phone: {', '.join(phones[:3])}.")
    return " ".join(parts) or None


_TIMEFRAME = re.compile(rf"{TIMEFRAME_PATTERN}|\bwithin\b|\bdeadline\b|\bno later than\b", re.I)


def extract_deadline(question: str, texts: list[str]) -> str | None:
    return _join(_matching_sentences(texts, _TIMEFRAME))


@dataclass(frozen=True)
class ExtractionRule:
    name: str
    question_pattern: re.Pattern
    handler: Callable[[str, list[str]], str | None]


EXTRACTION_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule(
        name="equipment_package",
        question_pattern=re.compile(r"\b(?:equipment|package|kit)\b|come\s+with|\bincluded\b", re.I),
        handler=extract_package_list,
    ),
    ExtractionRule(
        name="wiring_safety",
        question_pattern=re.compile(r"\bwir(?:e|es|ing)\b|electric|\bfuse|power\s+off", re.I),
        handler=extract_wiring_safety,
    ),
    ExtractionRule(
        name="installation_placement",
        question_pattern=re.compile(
            r"where.*?(?:install|mount|place)|(?:install|mount)\w*\s+(?:height|location|position)|how\s+high",
            re.I,
        ),
        handler=extract_installation_placement,
    ),
    ExtractionRule(
        name="customer_call_timing",
        question_pattern=re.compile(r"customer.*?(?:call|contact)|(?:call|contact).*?customer", re.I),
        handler=extract_customer_call_timing,
    ),
    ExtractionRule(
        name="contact_details",
        question_pattern=re.compile(r"e-?mail|\bcontact\b|\breach\b|\bphone\b|\bnumber\b", re.I),
        handler=extract_contact_details,
    ),
    ExtractionRule(
        name="deadline",
        question_pattern=re.compile(
            r"\bwhen\b|deadline|\bwithin\b|how\s+(?:long|soon)|time\s*frame", re.I
        ),
        handler=extract_deadline,
    ),
)


class DirectAnswerExtractor:
    def __init__(self, rules: tuple[ExtractionRule, ...] = EXTRACTION_RULES, logger=None) -> None:
        self._rules = rules
        self._log = logger or get_logger("direct_extraction")

    def extract(self, question: str, texts: list[str]) -> str | None:
        texts = [t for t in texts if t and t.strip()]
        if not texts:
            return None

        for rule in self._rules:
            if not rule.question_pattern.search(question):
                continue
            answer = rule.handler(question, texts)
            if answer and len(answer.strip()) >= MIN_EXTRACTED_LENGTH:
                self._log.info("direct_extraction_hit", rule=rule.name, answer_len=len(answer))
                return answer.strip()
            self._log.debug("direct_extraction_miss", rule=rule.name)
        return None
