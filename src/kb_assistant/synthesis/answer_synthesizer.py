"""Tiered answer selection over ranked search results.

Tiers run in a fixed order and the first one that produces an answer wins:

1. no_results            -> canned "no answer" message
2. document_extraction   -> literal fact pulled from document text by pattern
3. qa_match              -> curated Q&A answer verbatim (usage counted)
4. ai_synthesis          -> one AI generation call over the top evidence;
                            on failure ai_fallback_document / ai_fallback_summary
5. best_match            -> best single result verbatim

`generate_answer` never raises. Usage counting, search analytics and
knowledge-gap tracking run as background tasks.
"""

from __future__ import annotations

from kb_assistant.config.constants import NO_ANSWER_MESSAGE
from kb_assistant.config.settings import Settings
from kb_assistant.exceptions import GenerationError
from kb_assistant.generation.answer_generator import AIAnswerGenerator
from kb_assistant.models.domain import AnswerGenerationResult, ConversationTurn, SearchResult
from kb_assistant.observability.background import BackgroundTasks
from kb_assistant.observability.logger import get_logger
from kb_assistant.observability.tracing import TraceContext
from kb_assistant.protocols.corpus import CorpusStore
from kb_assistant.query.normalizer import QuestionNormalizer
from kb_assistant.retrieval.aggregator import SearchAggregator
from kb_assistant.synthesis.direct_extraction import DirectAnswerExtractor


class AnswerSynthesizer:
    def __init__(
        self,
        aggregator: SearchAggregator,
        store: CorpusStore,
        settings: Settings,
        ai_generator: AIAnswerGenerator | None = None,
        extractor: DirectAnswerExtractor | None = None,
        normalizer: QuestionNormalizer | None = None,
        background: BackgroundTasks | None = None,
        logger=None,
    ) -> None:
        self._aggregator = aggregator
        self._store = store
        self._settings = settings
        self._ai = ai_generator
        self._log = logger or get_logger("answer_synthesizer")
        self._extractor = extractor or DirectAnswerExtractor(logger=self._log)
        self._normalizer = normalizer or QuestionNormalizer(logger=self._log)
        self._background = background or BackgroundTasks(logger=self._log)

    @property
    def background(self) -> BackgroundTasks:
        return self._background

    async def generate_answer(
        self,
        question: str,
        history: list[ConversationTurn] | None = None,
        context: dict | None = None,
    ) -> AnswerGenerationResult:
        trace = TraceContext()
        history = history or []

        try:
            with trace.span("search"):
                results = await self._aggregator.search(question, context)
        except Exception as e:
            self._log.error("search_failed", error=str(e))
            results = []

        try:
            result = await self._select(question, results, history, trace)
        except Exception as e:
            self._log.error("answer_selection_failed", error=str(e))
            result = AnswerGenerationResult(
                answer=NO_ANSWER_MESSAGE,
                source_type="ai_generated",
                search_results=[],
                tier="no_results",
            )

        self._log.info(
            "answer_tier",
            tier=result.tier,
            source_type=result.source_type,
            results=len(results),
            top_score=round(results[0].relevance_score, 4) if results else None,
        )
        self._record(question, results, result, trace)
        return result

    async def _select(
        self,
        question: str,
        results: list[SearchResult],
        history: list[ConversationTurn],
        trace: TraceContext,
    ) -> AnswerGenerationResult:
        trail = self._settings.evidence_trail_size

        # Tier 1: nothing usable
        if not results:
            return AnswerGenerationResult(
                answer=NO_ANSWER_MESSAGE,
                source_type="ai_generated",
                search_results=[],
                tier="no_results",
            )

        # Tier 2: literal facts from documents
        documents = [r for r in results if r.type == "document"]
        if documents:
            with trace.span("extraction", documents=len(documents)):
                extracted = self._extractor.extract(question, [d.answer for d in documents])
            if extracted:
                top_doc = documents[0]
                return AnswerGenerationResult(
                    answer=extracted,
                    source=top_doc.source,
                    source_type="document",
                    source_id=top_doc.id,
                    search_results=results[:trail],
                    tier="document_extraction",
                )

        # Tier 3: confident curated answer
        qa_results = [r for r in results if r.type == "qa_pair"]
        if qa_results and qa_results[0].relevance_score > self._settings.qa_confidence_threshold:
            best_qa = qa_results[0]
            self._background.spawn(
                self._store.increment_qa_usage(best_qa.id), name=f"increment_qa_usage:{best_qa.id}"
            )
            return AnswerGenerationResult(
                answer=best_qa.answer,
                source=best_qa.source,
                source_type="qa_pair",
                source_id=best_qa.id,
                search_results=results[:trail],
                tier="qa_match",
            )

        # Tier 4: AI synthesis, degrading on failure
        best = results[0]
        if best.relevance_score > self._settings.ai_synthesis_threshold:
            return await self._synthesize(question, results, documents, history, trace)

        # Tier 5: best single match
        return AnswerGenerationResult(
            answer=best.answer,
            source=best.source,
            source_type=best.type,
            source_id=best.id,
            search_results=results[:trail],
            tier="best_match",
        )

    async def _synthesize(
        self,
        question: str,
        results: list[SearchResult],
        documents: list[SearchResult],
        history: list[ConversationTurn],
        trace: TraceContext,
    ) -> AnswerGenerationResult:
        evidence = results[: self._settings.ai_evidence_limit]
        try:
            if self._ai is None:
                raise GenerationError("No AI answer generator configured")
            with trace.span("ai_synthesis", evidence=len(evidence)):
                ai_answer = await self._ai.generate(question, evidence, history)
            if not ai_answer.answer.strip():
                raise GenerationError("AI generator returned an empty answer")
            return AnswerGenerationResult(
                answer=ai_answer.answer,
                source=f"AI-generated from {len(ai_answer.sources)} sources",
                source_type="ai_generated",
                search_results=evidence,
                ai_generated=True,
                tier="ai_synthesis",
            )
        except Exception as e:
            self._log.warning("ai_synthesis_failed", error=str(e))

        if documents:
            top_doc = documents[0]
            return AnswerGenerationResult(
                answer=f"Based on {top_doc.source}:\n\n{top_doc.answer}",
                source=top_doc.source,
                source_type="document",
                source_id=top_doc.id,
                search_results=results[: self._settings.evidence_trail_size],
                tier="ai_fallback_document",
            )

        top = results[:3]
        numbered = "\n\n".join(
            f"{i}. {r.answer} (Source: {r.source})" for i, r in enumerate(top, 1)
        )
        return AnswerGenerationResult(
            answer=f"Based on available information:\n\n{numbered}",
            source=f"Multiple sources ({len(top)} references)",
            source_type="ai_generated",
            search_results=top,
            tier="ai_fallback_summary",
        )

    def _record(
        self,
        question: str,
        results: list[SearchResult],
        result: AnswerGenerationResult,
        trace: TraceContext,
    ) -> None:
        analytic = trace.to_analytic(
            query=question,
            normalized_query=self._normalizer.normalize(question).normalized,
            results_count=len(results),
            tier=result.tier,
            source_type=result.source_type,
        )
        self._background.spawn(self._store.record_search(analytic), name="record_search")
        if result.tier == "no_results":
            self._background.spawn(
                self._store.record_knowledge_gap(question), name="record_knowledge_gap"
            )
