"""Idempotent database schema creation."""

from __future__ import annotations

import aiosqlite

QA_PAIRS_TABLE = """
CREATE TABLE IF NOT EXISTS qa_pairs (
    qa_id TEXT PRIMARY KEY,
    question TEXT NOT NULL,
    answer TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT '',
    usage_count INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL
)
"""

DOCUMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS documents (
    doc_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    file_type TEXT NOT NULL,
    file_size INTEGER NOT NULL DEFAULT 0,
    processing_status TEXT NOT NULL DEFAULT 'uploaded',
    total_chunks INTEGER NOT NULL DEFAULT 0,
    content_summary TEXT,
    ai_summary TEXT,
    keywords TEXT NOT NULL DEFAULT '[]',
    processing_error TEXT,
    content_profile TEXT,
    created_at TEXT NOT NULL,
    last_processed_at TEXT
)
"""

CHUNKS_TABLE = """
CREATE TABLE IF NOT EXISTS document_chunks (
    chunk_id TEXT PRIMARY KEY,
    document_id TEXT NOT NULL,
    chunk_index INTEGER NOT NULL,
    content TEXT NOT NULL,
    page_number INTEGER NOT NULL,
    FOREIGN KEY (document_id) REFERENCES documents(doc_id)
)
"""

CHUNKS_DOC_INDEX = """
CREATE INDEX IF NOT EXISTS idx_chunks_document_id ON document_chunks(document_id, chunk_index)
"""

SEARCH_ANALYTICS_TABLE = """
CREATE TABLE IF NOT EXISTS search_analytics (
    analytic_id TEXT PRIMARY KEY,
    query TEXT NOT NULL,
    normalized_query TEXT NOT NULL,
    results_count INTEGER NOT NULL,
    tier TEXT NOT NULL,
    source_type TEXT NOT NULL,
    latency_ms REAL NOT NULL,
    spans TEXT NOT NULL DEFAULT '[]',
    timestamp TEXT NOT NULL
)
"""

KNOWLEDGE_GAPS_TABLE = """
CREATE TABLE IF NOT EXISTS knowledge_gaps (
    search_query TEXT PRIMARY KEY,
    frequency INTEGER NOT NULL DEFAULT 1,
    last_searched TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'open'
)
"""


async def initialize_corpus_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        for statement in (
            QA_PAIRS_TABLE,
            DOCUMENTS_TABLE,
            CHUNKS_TABLE,
            CHUNKS_DOC_INDEX,
            SEARCH_ANALYTICS_TABLE,
            KNOWLEDGE_GAPS_TABLE,
        ):
            await db.execute(statement)
        await db.commit()
