"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from kb_assistant.api.dependencies import get_store
from kb_assistant.models.schemas import HealthResponse
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(store: SQLiteCorpusStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        qa_pair_count=await store.count_qa_pairs(),
        doc_count=await store.count_documents(),
        chunk_count=await store.count_chunks(),
    )
