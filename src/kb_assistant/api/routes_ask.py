"""Question answering and suggested questions."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from kb_assistant.api.dependencies import get_store, get_synthesizer
from kb_assistant.models.domain import ConversationTurn
from kb_assistant.models.schemas import (
    AnswerResponse,
    AskRequest,
    SearchResultSchema,
    SuggestedQuestionsResponse,
)
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore
from kb_assistant.synthesis.answer_synthesizer import AnswerSynthesizer

router = APIRouter()


@router.post("/ask", response_model=AnswerResponse)
async def ask(
    request: AskRequest,
    synthesizer: AnswerSynthesizer = Depends(get_synthesizer),
) -> AnswerResponse:
    history = [ConversationTurn(role=t.role, content=t.content) for t in request.history]
    result = await synthesizer.generate_answer(request.question, history)
    return AnswerResponse(
        answer=result.answer,
        source=result.source,
        source_type=result.source_type,
        source_id=result.source_id,
        search_results=[SearchResultSchema(**asdict(r)) for r in result.search_results],
        ai_generated=result.ai_generated,
        tier=result.tier,
    )


@router.get("/suggested-questions", response_model=SuggestedQuestionsResponse)
async def suggested_questions(
    limit: int = Query(5, ge=1, le=20),
    store: SQLiteCorpusStore = Depends(get_store),
) -> SuggestedQuestionsResponse:
    return SuggestedQuestionsResponse(questions=await store.get_popular_questions(limit))
