"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

ResultType = Literal["qa_pair", "document"]
SourceType = Literal["qa_pair", "document", "ai_generated"]
ProcessingStatus = Literal["uploaded", "processing", "processed", "error"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class QAPair:
    qa_id: str
    question: str
    answer: str
    category: str
    usage_count: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Document:
    doc_id: str
    name: str
    file_type: str
    file_size: int = 0
    processing_status: ProcessingStatus = "uploaded"
    total_chunks: int = 0
    content_summary: str | None = None
    ai_summary: str | None = None
    keywords: list[str] = field(default_factory=list)
    processing_error: str | None = None
    content_profile: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    last_processed_at: datetime | None = None


@dataclass
class DocumentChunk:
    chunk_id: str
    document_id: str
    chunk_index: int
    content: str
    page_number: int
    document_name: str | None = None


@dataclass
class SearchResult:
    type: ResultType
    id: str
    answer: str
    source: str
    relevance_score: float
    question: str | None = None
    category: str | None = None


@dataclass
class NormalizedQuestion:
    normalized: str
    intent: str | None
    keywords: list[str]
    semantic_score: float


@dataclass
class ConversationTurn:
    role: Literal["user", "assistant"]
    content: str


@dataclass
class AIAnswer:
    answer: str
    sources: list[dict]  # {id, source, type}


@dataclass
class DocumentSummary:
    summary: str
    keywords: list[str]


@dataclass
class AnswerGenerationResult:
    answer: str
    source_type: SourceType
    source: str | None = None
    source_id: str | None = None
    search_results: list[SearchResult] = field(default_factory=list)
    ai_generated: bool = False
    tier: str = ""


@dataclass
class ContentProfile:
    has_email: bool
    has_phone: bool
    has_date: bool
    has_instructions: bool
    content_type: Literal["procedural", "contact", "informational", "mixed"]


@dataclass
class SearchAnalytic:
    analytic_id: str
    query: str
    normalized_query: str
    results_count: int
    tier: str
    source_type: str
    latency_ms: float
    spans: list[dict]
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass
class KnowledgeGap:
    search_query: str
    frequency: int
    last_searched: datetime
    status: Literal["open", "addressed", "ignored"] = "open"
