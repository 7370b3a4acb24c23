"""Pydantic models for API serialization and validated external rows."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class EnhancedSearchRow(BaseModel):
    """One row returned by the store's enhanced ranking function."""

    result_type: Literal["qa_pair", "document"]
    result_id: str
    title: str = ""
    content: str
    source: str
    relevance_score: float
    context_match: float | None = 0.0
    category: str | None = None


class ConversationTurnSchema(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AskRequest(BaseModel):
    question: str = Field(min_length=1)
    history: list[ConversationTurnSchema] = Field(default_factory=list)


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    context: dict = Field(default_factory=dict)
    basic: bool = False


class SearchResultSchema(BaseModel):
    type: Literal["qa_pair", "document"]
    id: str
    question: str | None = None
    answer: str
    source: str
    category: str | None = None
    relevance_score: float


class AnswerResponse(BaseModel):
    answer: str
    source: str | None = None
    source_type: Literal["qa_pair", "document", "ai_generated"]
    source_id: str | None = None
    search_results: list[SearchResultSchema]
    ai_generated: bool
    tier: str


class IngestResponse(BaseModel):
    doc_id: str
    chunks_created: int
    status: str
    ai_enhanced: bool = False
    content_length: int = 0


class KnowledgeGapSchema(BaseModel):
    search_query: str
    frequency: int
    last_searched: datetime
    status: str


class HealthResponse(BaseModel):
    status: str
    qa_pair_count: int
    doc_count: int
    chunk_count: int


class DocumentStatusResponse(BaseModel):
    doc_id: str
    name: str
    file_type: str
    processing_status: str
    total_chunks: int
    content_summary: str | None = None
    ai_summary: str | None = None
    keywords: list[str] = Field(default_factory=list)
    content_profile: str | None = None
    processing_error: str | None = None


class SuggestedQuestionsResponse(BaseModel):
    questions: list[str]
