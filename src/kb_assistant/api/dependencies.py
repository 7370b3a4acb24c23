"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from kb_assistant.config.settings import Settings
from kb_assistant.ingestion.extractors import ExtractorRegistry
from kb_assistant.ingestion.pipeline import IngestionPipeline
from kb_assistant.retrieval.aggregator import SearchAggregator
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore
from kb_assistant.synthesis.answer_synthesizer import AnswerSynthesizer


def get_synthesizer(request: Request) -> AnswerSynthesizer:
    return request.app.state.synthesizer


def get_aggregator(request: Request) -> SearchAggregator:
    return request.app.state.aggregator


def get_ingest_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.ingest_pipeline


def get_extractors(request: Request) -> ExtractorRegistry:
    return request.app.state.extractors


def get_store(request: Request) -> SQLiteCorpusStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
