"""Protocol for the corpus store holding Q&A pairs, documents and chunks."""

from __future__ import annotations

from typing import Protocol

from kb_assistant.models.domain import (
    Document,
    DocumentChunk,
    KnowledgeGap,
    QAPair,
    SearchAnalytic,
)


class CorpusStore(Protocol):
    async def search_qa_pairs(self, term: str) -> list[QAPair]:
        """Active Q&A pairs whose question, answer or category contains term."""
        ...

    async def search_chunks(self, term: str) -> list[DocumentChunk]:
        """Chunks whose content contains term, with document_name populated."""
        ...

    async def enhanced_search(self, query: str, context: dict | None, limit: int) -> list[dict]:
        """Server-side ranking. Rows carry result_type, result_id, title, content,
        source, relevance_score and context_match."""
        ...

    async def increment_qa_usage(self, qa_id: str) -> None: ...

    async def save_qa_pair(self, qa: QAPair) -> str: ...

    async def get_popular_questions(self, limit: int = 5) -> list[str]: ...

    async def save_document(self, doc: Document) -> str: ...

    async def get_document(self, doc_id: str) -> Document | None: ...

    async def update_document(self, doc_id: str, **fields) -> None: ...

    async def save_chunks(self, chunks: list[DocumentChunk]) -> None:
        """Insert all chunks in one transaction."""
        ...

    async def get_chunks_by_document(self, doc_id: str) -> list[DocumentChunk]: ...

    async def record_search(self, analytic: SearchAnalytic) -> None: ...

    async def record_knowledge_gap(self, query: str) -> None: ...

    async def list_knowledge_gaps(self) -> list[KnowledgeGap]: ...
