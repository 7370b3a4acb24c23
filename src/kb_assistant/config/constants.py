"""Fixed vocabularies and sentinel texts shared across the pipeline."""

from __future__ import annotations

STOPWORDS = frozenset(
    {
        "a", "about", "above", "after", "again", "all", "am", "an", "and", "any",
        "are", "as", "at", "be", "because", "been", "before", "being", "below",
        "between", "both", "but", "by", "can", "could", "did", "do", "does",
        "doing", "down", "during", "each", "few", "for", "from", "further", "had",
        "has", "have", "having", "he", "her", "here", "hers", "him", "his", "how",
        "i", "if", "in", "into", "is", "it", "its", "just", "me", "more", "most",
        "must", "my", "no", "nor", "not", "now", "of", "off", "on", "once", "only",
        "or", "other", "our", "ours", "out", "over", "own", "same", "she", "should",
        "so", "some", "such", "than", "that", "the", "their", "them", "then",
        "there", "these", "they", "this", "those", "through", "to", "too", "under",
        "until", "up", "very", "was", "we", "were", "what", "when", "where",
        "which", "while", "who", "whom", "why", "will", "with", "would", "you",
        "your", "yours",
    }
)

MAX_KEYWORDS = 8
PATTERN_SEMANTIC_SCORE = 0.95
DEFAULT_SEMANTIC_SCORE = 0.5

CHUNKS_PER_PAGE = 3
MIN_CHUNKABLE_CHARS = 10
MAX_SUMMARY_KEYWORDS = 10

EMAIL_PATTERN = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
PHONE_PATTERN = r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"
DATE_PATTERN = r"\b\d{1,2}/\d{1,2}/\d{2,4}\b|\b\d{1,2}-\d{1,2}-\d{2,4}\b"
TIMEFRAME_PATTERN = r"\b\d+\s*(?:hours?|days?|weeks?|months?|business days?)\b"

# Enhanced scorer vocabularies
PHONE_SUPPORT_TERMS = ("phone", "support", "telephone", "hotline", "number")
CUSTOMER_TERMS = ("customer", "client")
CALL_TERMS = ("call", "contact", "phone")
EQUIPMENT_TERMS = ("equipment", "package", "standard")

NO_ANSWER_MESSAGE = (
    "I couldn't find a specific answer to your question in the current knowledge base. "
    "Here are some suggestions:\n\n"
    "1. Try rephrasing your question with different keywords\n"
    "2. Check if your question relates to company policies, procedures, or guidelines\n"
    "3. Contact your administrator if this topic should be added to the knowledge base"
)

EMPTY_DOCUMENT_CHUNK = "Document: {name}\n\nNo readable content could be extracted from this document."

UNREADABLE_DOCUMENT_TEXT = """Document: {name}

This document could not be fully processed for text extraction.
File type: {file_type}
File size: {size_kb:.1f} KB

Please try re-uploading the document or contact support if this issue persists."""
