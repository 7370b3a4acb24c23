"""Raw search and knowledge-gap listing."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from kb_assistant.api.dependencies import get_aggregator, get_store
from kb_assistant.models.schemas import KnowledgeGapSchema, SearchRequest, SearchResultSchema
from kb_assistant.retrieval.aggregator import SearchAggregator
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore

router = APIRouter()


@router.post("/search", response_model=list[SearchResultSchema])
async def search(
    request: SearchRequest,
    aggregator: SearchAggregator = Depends(get_aggregator),
) -> list[SearchResultSchema]:
    if request.basic:
        results = await aggregator.search_basic(request.query)
    else:
        results = await aggregator.search(request.query, request.context)
    return [SearchResultSchema(**asdict(r)) for r in results]


@router.get("/knowledge-gaps", response_model=list[KnowledgeGapSchema])
async def knowledge_gaps(
    store: SQLiteCorpusStore = Depends(get_store),
) -> list[KnowledgeGapSchema]:
    gaps = await store.list_knowledge_gaps()
    return [KnowledgeGapSchema(**asdict(g)) for g in gaps]
