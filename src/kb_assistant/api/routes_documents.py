"""Document upload, ingestion and status."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from kb_assistant.api.dependencies import (
    get_extractors,
    get_ingest_pipeline,
    get_settings,
    get_store,
)
from kb_assistant.config.settings import Settings
from kb_assistant.exceptions import IngestionError, ParsingError
from kb_assistant.ingestion.extractors import ExtractorRegistry
from kb_assistant.ingestion.pipeline import IngestionPipeline
from kb_assistant.models.schemas import DocumentStatusResponse, IngestResponse
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore

router = APIRouter()


@router.post("/documents", response_model=IngestResponse)
async def upload_document(
    file: UploadFile,
    pipeline: IngestionPipeline = Depends(get_ingest_pipeline),
    extractors: ExtractorRegistry = Depends(get_extractors),
    settings: Settings = Depends(get_settings),
) -> IngestResponse:
    filename = Path(file.filename or "upload.txt").name
    try:
        extractors.get_extractor(filename)
    except ParsingError as e:
        raise HTTPException(status_code=415, detail=str(e))

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_path = upload_dir / f"{uuid4().hex}_{filename}"
    stored_path.write_bytes(await file.read())

    try:
        return await pipeline.ingest_file(stored_path, name=filename)
    except IngestionError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/documents/{doc_id}", response_model=DocumentStatusResponse)
async def document_status(
    doc_id: str,
    store: SQLiteCorpusStore = Depends(get_store),
) -> DocumentStatusResponse:
    doc = await store.get_document(doc_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not found")
    return DocumentStatusResponse(
        doc_id=doc.doc_id,
        name=doc.name,
        file_type=doc.file_type,
        processing_status=doc.processing_status,
        total_chunks=doc.total_chunks,
        content_summary=doc.content_summary,
        ai_summary=doc.ai_summary,
        keywords=doc.keywords,
        content_profile=doc.content_profile,
        processing_error=doc.processing_error,
    )
