"""Ingestion pipeline: extract -> chunk -> store -> summarize."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from kb_assistant.chunking.paragraph_chunker import ParagraphChunker, build_chunk_records
from kb_assistant.chunking.summary import create_content_summary
from kb_assistant.config.constants import UNREADABLE_DOCUMENT_TEXT
from kb_assistant.config.settings import Settings
from kb_assistant.exceptions import IngestionError
from kb_assistant.generation.summarizer import DocumentSummarizer
from kb_assistant.ingestion.extractors import ExtractorRegistry
from kb_assistant.models.domain import Document
from kb_assistant.models.schemas import IngestResponse
from kb_assistant.observability.logger import get_logger
from kb_assistant.protocols.corpus import CorpusStore
from kb_assistant.scoring.content_analysis import analyze_content_type

logger = get_logger("ingestion")


class IngestionPipeline:
    def __init__(
        self,
        store: CorpusStore,
        extractors: ExtractorRegistry,
        chunker: ParagraphChunker,
        summarizer: DocumentSummarizer | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._extractors = extractors
        self._chunker = chunker
        self._summarizer = summarizer
        self._settings = settings or Settings()

    async def register_upload(self, file_path: str | Path, name: str | None = None) -> Document:
        file_path = Path(file_path)
        doc = Document(
            doc_id=str(uuid4()),
            name=name or file_path.name,
            file_type=file_path.suffix.lower().lstrip("."),
            file_size=file_path.stat().st_size if file_path.exists() else 0,
        )
        await self._store.save_document(doc)
        logger.info("document_registered", doc_id=doc.doc_id, name=doc.name, size=doc.file_size)
        return doc

    async def process_document(self, doc_id: str, file_path: str | Path) -> IngestResponse:
        file_path = Path(file_path)
        doc = await self._store.get_document(doc_id)
        if doc is None:
            raise IngestionError(f"Unknown document: {doc_id}")

        await self._store.update_document(
            doc_id, processing_status="processing", processing_error=None
        )

        try:
            text = await self._extract_text(doc, file_path)

            chunks = await asyncio.to_thread(self._chunker.chunk, text, doc.name)
            records = build_chunk_records(doc_id, chunks, doc.name)
            await self._store.save_chunks(records)

            content_summary = create_content_summary(text, len(records))
            profile = analyze_content_type(text)
            ai_summary, keywords = await self._summarize(doc_id, text)

            await self._store.update_document(
                doc_id,
                processing_status="processed",
                total_chunks=len(records),
                content_summary=content_summary,
                ai_summary=ai_summary,
                keywords=keywords,
                content_profile=profile.content_type,
                last_processed_at=datetime.now(timezone.utc),
            )
        except Exception as e:
            logger.error("ingestion_failed", doc_id=doc_id, name=doc.name, error=str(e))
            await self._store.update_document(
                doc_id, processing_status="error", processing_error=str(e)
            )
            raise IngestionError(f"Failed to process document '{doc.name}': {e}") from e

        logger.info(
            "document_processed",
            doc_id=doc_id,
            chunks=len(records),
            content_type=profile.content_type,
            ai_enhanced=ai_summary is not None,
        )
        return IngestResponse(
            doc_id=doc_id,
            chunks_created=len(records),
            status="processed",
            ai_enhanced=ai_summary is not None,
            content_length=len(text),
        )

    async def ingest_file(self, file_path: str | Path, name: str | None = None) -> IngestResponse:
        doc = await self.register_upload(file_path, name)
        return await self.process_document(doc.doc_id, file_path)

    async def _extract_text(self, doc: Document, file_path: Path) -> str:
        try:
            extractor = self._extractors.get_extractor(file_path.name)
            text = await asyncio.to_thread(extractor.extract, file_path)
        except Exception as e:
            logger.warning("extraction_failed", doc_id=doc.doc_id, error=str(e))
            text = ""

        if len(text.strip()) < self._settings.min_extracted_chars:
            logger.warning("extraction_insufficient", doc_id=doc.doc_id, chars=len(text.strip()))
            return UNREADABLE_DOCUMENT_TEXT.format(
                name=doc.name, file_type=doc.file_type, size_kb=doc.file_size / 1024
            )
        return text

    async def _summarize(self, doc_id: str, text: str) -> tuple[str | None, list[str]]:
        if self._summarizer is None or len(text) <= self._settings.summary_min_content_chars:
            return None, []
        try:
            result = await self._summarizer.summarize(text[: self._settings.summary_max_input_chars])
        except Exception as e:
            logger.warning("ai_summary_failed", doc_id=doc_id, error=str(e))
            return None, []
        return result.summary, result.keywords
