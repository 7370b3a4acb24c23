"""Search aggregation: enhanced ranking with a transparent basic fallback."""

from __future__ import annotations

import asyncio

from pydantic import ValidationError

from kb_assistant.config.settings import Settings
from kb_assistant.models.domain import DocumentChunk, QAPair, SearchResult
from kb_assistant.models.schemas import EnhancedSearchRow
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.corpus import CorpusStore
from kb_assistant.query.normalizer import QuestionNormalizer
from kb_assistant.query.tokenizer import strip_punctuation
from kb_assistant.retrieval.query_expansion import expand_query
from kb_assistant.scoring.relevance import relevance_score


class SearchAggregator:
    def __init__(
        self,
        store: CorpusStore,
        normalizer: QuestionNormalizer,
        settings: Settings,
        logger=None,
    ) -> None:
        self._store = store
        self._normalizer = normalizer
        self._settings = settings
        self._log = logger or get_logger("search_aggregator")

    async def search(self, query: str, context: dict | None = None) -> list[SearchResult]:
        """Rank with the store's enhanced function; fall back to basic search on any error."""
        normalized = self._normalizer.normalize(query)
        try:
            rows = await self._store.enhanced_search(
                normalized.normalized, context or {}, self._settings.enhanced_search_limit
            )
        except Exception as e:
            self._log.warning("enhanced_search_failed", error=str(e), fallback="basic")
            return await self.search_basic(query)

        results = [r for r in (self._row_to_result(row) for row in rows) if r is not None]
        ranked = self._rank(results)
        self._log.info(
            "enhanced_search",
            normalized=normalized.normalized,
            intent=normalized.intent,
            rows=len(rows),
            kept=len(ranked),
        )
        return ranked

    async def search_basic(self, query: str) -> list[SearchResult]:
        variants = expand_query(query, self._settings.max_query_variants)
        if not variants:
            return []

        try:
            qa_lists, chunk_lists = await asyncio.gather(
                asyncio.gather(*(self._store.search_qa_pairs(v) for v in variants)),
                asyncio.gather(*(self._store.search_chunks(v) for v in variants)),
            )
        except Exception as e:
            self._log.error("basic_search_failed", error=str(e))
            return []

        qa_pairs: dict[str, QAPair] = {}
        for qa_list in qa_lists:
            for qa in qa_list:
                qa_pairs.setdefault(qa.qa_id, qa)
        chunks: dict[str, DocumentChunk] = {}
        for chunk_list in chunk_lists:
            for chunk in chunk_list:
                chunks.setdefault(chunk.chunk_id, chunk)

        scoring_query = strip_punctuation(query)
        results = [
            SearchResult(
                type="qa_pair",
                id=qa.qa_id,
                question=qa.question,
                answer=qa.answer,
                source=f"Q&A - {qa.category}",
                category=qa.category,
                relevance_score=relevance_score(scoring_query, f"{qa.question} {qa.answer}"),
            )
            for qa in qa_pairs.values()
        ]
        results.extend(
            SearchResult(
                type="document",
                id=chunk.document_id,
                answer=chunk.content,
                source=f"Document - {chunk.document_name}",
                relevance_score=relevance_score(scoring_query, chunk.content),
            )
            for chunk in chunks.values()
        )

        ranked = self._rank(results)
        self._log.info(
            "basic_search",
            variants=len(variants),
            qa_candidates=len(qa_pairs),
            chunk_candidates=len(chunks),
            kept=len(ranked),
        )
        return ranked

    def _row_to_result(self, row: dict) -> SearchResult | None:
        try:
            parsed = EnhancedSearchRow.model_validate(row)
        except ValidationError as e:
            self._log.warning("enhanced_row_invalid", error=str(e))
            return None

        is_qa = parsed.result_type == "qa_pair"
        return SearchResult(
            type=parsed.result_type,
            id=parsed.result_id,
            question=parsed.title if is_qa else None,
            answer=parsed.content,
            source=parsed.source,
            category=parsed.category if is_qa else None,
            relevance_score=parsed.relevance_score + (parsed.context_match or 0.0),
        )

    def _rank(self, results: list[SearchResult]) -> list[SearchResult]:
        """Drop noise, then sort by relevance descending."""
        kept = [
            r
            for r in results
            if r.relevance_score > self._settings.min_relevance
            and len(r.answer.strip()) > self._settings.min_answer_length
        ]
        return sorted(kept, key=lambda r: r.relevance_score, reverse=True)
