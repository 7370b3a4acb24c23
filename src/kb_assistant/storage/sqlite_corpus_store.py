"""SQLite-backed corpus store: Q&A pairs, documents, chunks and search analytics."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import aiosqlite

from kb_assistant.exceptions import StoreError
from kb_assistant.models.domain import (
    Document,
    DocumentChunk,
    KnowledgeGap,
    QAPair,
    SearchAnalytic,
)
from kb_assistant.scoring.relevance import enhanced_relevance_score
from kb_assistant.storage.migrations import initialize_corpus_db

_DOCUMENT_COLUMNS = {
    "name",
    "file_type",
    "file_size",
    "processing_status",
    "total_chunks",
    "content_summary",
    "ai_summary",
    "keywords",
    "processing_error",
    "content_profile",
    "last_processed_at",
}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class SQLiteCorpusStore:
    def __init__(
        self,
        db_path: str,
        score_cap: float | None = None,
        context_match_bonus: float = 0.1,
    ) -> None:
        self._db_path = db_path
        self._score_cap = score_cap
        self._context_match_bonus = context_match_bonus

    async def initialize(self) -> None:
        await initialize_corpus_db(self._db_path)

    # Q&A pairs

    async def save_qa_pair(self, qa: QAPair) -> str:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO qa_pairs "
                "(qa_id, question, answer, category, usage_count, is_active, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    qa.qa_id,
                    qa.question,
                    qa.answer,
                    qa.category,
                    qa.usage_count,
                    int(qa.is_active),
                    qa.created_at.isoformat(),
                ),
            )
            await db.commit()
        return qa.qa_id

    async def get_qa_pair(self, qa_id: str) -> QAPair | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM qa_pairs WHERE qa_id = ?", (qa_id,)) as cursor:
                row = await cursor.fetchone()
                return self._row_to_qa(row) if row else None

    async def search_qa_pairs(self, term: str) -> list[QAPair]:
        pattern = _like_pattern(term)
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM qa_pairs WHERE is_active = 1 AND ("
                "question LIKE ? ESCAPE '\\' OR answer LIKE ? ESCAPE '\\' "
                "OR category LIKE ? ESCAPE '\\') ORDER BY usage_count DESC",
                (pattern, pattern, pattern),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_qa(row) for row in rows]

    async def increment_qa_usage(self, qa_id: str) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "UPDATE qa_pairs SET usage_count = usage_count + 1 WHERE qa_id = ?", (qa_id,)
            )
            await db.commit()

    async def get_popular_questions(self, limit: int = 5) -> list[str]:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "SELECT question FROM qa_pairs WHERE is_active = 1 "
                "ORDER BY usage_count DESC, created_at DESC LIMIT ?",
                (limit,),
            ) as cursor:
                rows = await cursor.fetchall()
                return [row[0] for row in rows]

    async def _active_qa_pairs(self) -> list[QAPair]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM qa_pairs WHERE is_active = 1") as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_qa(row) for row in rows]

    # Documents and chunks

    async def save_document(self, doc: Document) -> str:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO documents (doc_id, name, file_type, file_size, "
                "processing_status, total_chunks, content_summary, ai_summary, keywords, "
                "processing_error, content_profile, created_at, last_processed_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    doc.doc_id,
                    doc.name,
                    doc.file_type,
                    doc.file_size,
                    doc.processing_status,
                    doc.total_chunks,
                    doc.content_summary,
                    doc.ai_summary,
                    json.dumps(doc.keywords),
                    doc.processing_error,
                    doc.content_profile,
                    doc.created_at.isoformat(),
                    doc.last_processed_at.isoformat() if doc.last_processed_at else None,
                ),
            )
            await db.commit()
        return doc.doc_id

    async def get_document(self, doc_id: str) -> Document | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM documents WHERE doc_id = ?", (doc_id,)) as cursor:
                row = await cursor.fetchone()
                if row is None:
                    return None
                return Document(
                    doc_id=row["doc_id"],
                    name=row["name"],
                    file_type=row["file_type"],
                    file_size=row["file_size"],
                    processing_status=row["processing_status"],
                    total_chunks=row["total_chunks"],
                    content_summary=row["content_summary"],
                    ai_summary=row["ai_summary"],
                    keywords=json.loads(row["keywords"]),
                    processing_error=row["processing_error"],
                    content_profile=row["content_profile"],
                    created_at=_parse_timestamp(row["created_at"]),
                    last_processed_at=_parse_timestamp(row["last_processed_at"]),
                )

    async def update_document(self, doc_id: str, **fields) -> None:
        unknown = set(fields) - _DOCUMENT_COLUMNS
        if unknown:
            raise StoreError(f"Unknown document fields: {sorted(unknown)}")
        if not fields:
            return

        values = []
        for key, value in fields.items():
            if key == "keywords":
                value = json.dumps(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            values.append(value)

        assignments = ", ".join(f"{key} = ?" for key in fields)
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                f"UPDATE documents SET {assignments} WHERE doc_id = ?", (*values, doc_id)
            )
            await db.commit()

    async def save_chunks(self, chunks: list[DocumentChunk]) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.executemany(
                "INSERT OR REPLACE INTO document_chunks "
                "(chunk_id, document_id, chunk_index, content, page_number) VALUES (?, ?, ?, ?, ?)",
                [
                    (c.chunk_id, c.document_id, c.chunk_index, c.content, c.page_number)
                    for c in chunks
                ],
            )
            await db.commit()

    async def get_chunks_by_document(self, doc_id: str) -> list[DocumentChunk]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT c.*, d.name AS document_name FROM document_chunks c "
                "JOIN documents d ON d.doc_id = c.document_id "
                "WHERE c.document_id = ? ORDER BY c.chunk_index",
                (doc_id,),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_chunk(row) for row in rows]

    async def search_chunks(self, term: str) -> list[DocumentChunk]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT c.*, d.name AS document_name FROM document_chunks c "
                "JOIN documents d ON d.doc_id = c.document_id "
                "WHERE d.processing_status = 'processed' AND c.content LIKE ? ESCAPE '\\' "
                "ORDER BY c.document_id, c.chunk_index",
                (_like_pattern(term),),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_chunk(row) for row in rows]

    async def _all_chunks(self) -> list[DocumentChunk]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT c.*, d.name AS document_name FROM document_chunks c "
                "JOIN documents d ON d.doc_id = c.document_id "
                "WHERE d.processing_status = 'processed' ORDER BY c.document_id, c.chunk_index"
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_chunk(row) for row in rows]

    # Enhanced ranking

    async def enhanced_search(
        self, query: str, context: dict | None = None, limit: int = 20
    ) -> list[dict]:
        context = context or {}
        wanted_category = str(context.get("category", "")).lower()
        rows: list[dict] = []

        for qa in await self._active_qa_pairs():
            score = enhanced_relevance_score(
                query, f"{qa.question} {qa.answer}", cap=self._score_cap
            )
            if score <= 0:
                continue
            context_match = (
                self._context_match_bonus
                if wanted_category and qa.category.lower() == wanted_category
                else 0.0
            )
            rows.append(
                {
                    "result_type": "qa_pair",
                    "result_id": qa.qa_id,
                    "title": qa.question,
                    "content": qa.answer,
                    "source": f"Q&A - {qa.category}",
                    "category": qa.category,
                    "relevance_score": score,
                    "context_match": context_match,
                }
            )

        for chunk in await self._all_chunks():
            score = enhanced_relevance_score(query, chunk.content, cap=self._score_cap)
            if score <= 0:
                continue
            rows.append(
                {
                    "result_type": "document",
                    "result_id": chunk.document_id,
                    "title": chunk.document_name or "",
                    "content": chunk.content,
                    "source": f"Document - {chunk.document_name}",
                    "relevance_score": score,
                    "context_match": 0.0,
                }
            )

        rows.sort(key=lambda r: r["relevance_score"] + r["context_match"], reverse=True)
        return rows[:limit]

    # Analytics

    async def record_search(self, analytic: SearchAnalytic) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO search_analytics (analytic_id, query, normalized_query, "
                "results_count, tier, source_type, latency_ms, spans, timestamp) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    analytic.analytic_id,
                    analytic.query,
                    analytic.normalized_query,
                    analytic.results_count,
                    analytic.tier,
                    analytic.source_type,
                    analytic.latency_ms,
                    json.dumps(analytic.spans),
                    analytic.timestamp.isoformat(),
                ),
            )
            await db.commit()

    async def get_recent_searches(self, limit: int = 50) -> list[SearchAnalytic]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM search_analytics ORDER BY timestamp DESC LIMIT ?", (limit,)
            ) as cursor:
                rows = await cursor.fetchall()
                return [
                    SearchAnalytic(
                        analytic_id=row["analytic_id"],
                        query=row["query"],
                        normalized_query=row["normalized_query"],
                        results_count=row["results_count"],
                        tier=row["tier"],
                        source_type=row["source_type"],
                        latency_ms=row["latency_ms"],
                        spans=json.loads(row["spans"]),
                        timestamp=_parse_timestamp(row["timestamp"]),
                    )
                    for row in rows
                ]

    async def record_knowledge_gap(self, query: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                "INSERT INTO knowledge_gaps (search_query, frequency, last_searched, status) "
                "VALUES (?, 1, ?, 'open') ON CONFLICT(search_query) DO UPDATE SET "
                "frequency = frequency + 1, last_searched = excluded.last_searched",
                (query.strip().lower(), now),
            )
            await db.commit()

    async def list_knowledge_gaps(self) -> list[KnowledgeGap]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM knowledge_gaps ORDER BY frequency DESC, last_searched DESC"
            ) as cursor:
                rows = await cursor.fetchall()
                return [
                    KnowledgeGap(
                        search_query=row["search_query"],
                        frequency=row["frequency"],
                        last_searched=_parse_timestamp(row["last_searched"]),
                        status=row["status"],
                    )
                    for row in rows
                ]

    # Counts

    async def count_qa_pairs(self) -> int:
        return await self._count("SELECT COUNT(*) FROM qa_pairs WHERE is_active = 1")

    async def count_documents(self) -> int:
        return await self._count("SELECT COUNT(*) FROM documents")

    async def count_chunks(self) -> int:
        return await self._count("SELECT COUNT(*) FROM document_chunks")

    async def _count(self, sql: str) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(sql) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    @staticmethod
    def _row_to_qa(row: aiosqlite.Row) -> QAPair:
        return QAPair(
            qa_id=row["qa_id"],
            question=row["question"],
            answer=row["answer"],
            category=row["category"],
            usage_count=row["usage_count"],
            is_active=bool(row["is_active"]),
            created_at=_parse_timestamp(row["created_at"]),
        )

    @staticmethod
    def _row_to_chunk(row: aiosqlite.Row) -> DocumentChunk:
        return DocumentChunk(
            chunk_id=row["chunk_id"],
            document_id=row["document_id"],
            chunk_index=row["chunk_index"],
            content=row["content"],
            page_number=row["page_number"],
            document_name=row["document_name"],
        )
