"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from kb_assistant.api.middleware import RequestTimingMiddleware
from kb_assistant.api.routes_ask import router as ask_router
from kb_assistant.api.routes_documents import router as documents_router
from kb_assistant.api.routes_health import router as health_router
from kb_assistant.api.routes_search import router as search_router
from kb_assistant.chunking.paragraph_chunker import ParagraphChunker
from kb_assistant.config.settings import Settings
from kb_assistant.generation.answer_generator import AIAnswerGenerator
from kb_assistant.generation.gemini_provider import GeminiProvider
from kb_assistant.generation.summarizer import DocumentSummarizer
from kb_assistant.ingestion.extractors import create_default_registry
from kb_assistant.ingestion.pipeline import IngestionPipeline
from kb_assistant.observability.background import BackgroundTasks
from kb_assistant.observability.logger import get_logger, setup_logging
from kb_assistant.query.normalizer import QuestionNormalizer
from kb_assistant.retrieval.aggregator import SearchAggregator
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore
from kb_assistant.synthesis.answer_synthesizer import AnswerSynthesizer
from kb_assistant.synthesis.direct_extraction import DirectAnswerExtractor

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    setup_logging(settings.log_level, settings.log_json)

    Path(settings.sqlite_db_path).parent.mkdir(parents=True, exist_ok=True)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # Storage
    store = SQLiteCorpusStore(
        settings.sqlite_db_path,
        score_cap=settings.enhanced_score_cap,
        context_match_bonus=settings.context_match_bonus,
    )
    await store.initialize()

    # LLM (optional: without a key, AI tiers degrade to their fallbacks)
    ai_generator = None
    summarizer = None
    if settings.google_api_key:
        llm = GeminiProvider(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
            max_tokens=settings.gemini_max_tokens,
        )
        ai_generator = AIAnswerGenerator(llm=llm, history_window=settings.history_window)
        summarizer = DocumentSummarizer(llm=llm, max_input_chars=settings.summary_max_input_chars)
    else:
        logger.warning("llm_not_configured", hint="set KB_GOOGLE_API_KEY to enable AI answers")

    # Search and answering
    normalizer = QuestionNormalizer()
    aggregator = SearchAggregator(store=store, normalizer=normalizer, settings=settings)
    background = BackgroundTasks()
    synthesizer = AnswerSynthesizer(
        aggregator=aggregator,
        store=store,
        settings=settings,
        ai_generator=ai_generator,
        extractor=DirectAnswerExtractor(),
        normalizer=normalizer,
        background=background,
    )

    # Ingestion
    extractors = create_default_registry()
    ingest_pipeline = IngestionPipeline(
        store=store,
        extractors=extractors,
        chunker=ParagraphChunker(
            max_chunk_size=settings.chunk_max_size,
            overlap_sentences=settings.chunk_overlap_sentences,
            overlap_target=settings.chunk_overlap_target,
        ),
        summarizer=summarizer,
        settings=settings,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.aggregator = aggregator
    app.state.synthesizer = synthesizer
    app.state.extractors = extractors
    app.state.ingest_pipeline = ingest_pipeline

    logger.info(
        "startup_complete",
        qa_pairs=await store.count_qa_pairs(),
        docs=await store.count_documents(),
        chunks=await store.count_chunks(),
        ai_enabled=ai_generator is not None,
    )

    yield

    # Shutdown: let pending analytics and usage writes finish
    await background.drain()
    logger.info("shutdown_complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Knowledge Base Assistant",
        version="1.0.0",
        description="Question answering over curated Q&A pairs and uploaded documents",
        lifespan=lifespan,
    )
    app.add_middleware(RequestTimingMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(ask_router, tags=["ask"])
    app.include_router(search_router, tags=["search"])
    app.include_router(documents_router, tags=["documents"])
    return app
