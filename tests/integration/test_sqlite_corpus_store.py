"""Integration tests for the SQLite corpus store."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from kb_assistant.chunking.paragraph_chunker import build_chunk_records
from kb_assistant.exceptions import StoreError
from kb_assistant.models.domain import Document, QAPair, SearchAnalytic
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore


def _qa(question, answer, category="General", **kw):
    return QAPair(qa_id=str(uuid4()), question=question, answer=answer, category=category, **kw)


async def _processed_document(store, name, chunks):
    doc = Document(doc_id=str(uuid4()), name=name, file_type="md")
    await store.save_document(doc)
    await store.save_chunks(build_chunk_records(doc.doc_id, chunks))
    await store.update_document(doc.doc_id, processing_status="processed", total_chunks=len(chunks))
    return doc


async def test_save_and_get_qa_pair(store, support_qa):
    await store.save_qa_pair(support_qa)
    loaded = await store.get_qa_pair(support_qa.qa_id)
    assert loaded is not None
    assert loaded.answer == support_qa.answer
    assert loaded.is_active


async def test_search_qa_pairs_active_only(store):
    active = _qa("How do I test sensors?", "Use the app test mode.")
    hidden = _qa("How do I test sirens?", "Old procedure.", is_active=False)
    await store.save_qa_pair(active)
    await store.save_qa_pair(hidden)

    results = await store.search_qa_pairs("test")
    assert [q.qa_id for q in results] == [active.qa_id]


async def test_search_qa_pairs_treats_wildcards_literally(store):
    await store.save_qa_pair(_qa("Discount?", "Ten percent off."))
    assert await store.search_qa_pairs("%") == []
    assert await store.search_qa_pairs("_") == []


async def test_usage_and_popular_questions(store):
    first = _qa("First question?", "First answer text.")
    second = _qa("Second question?", "Second answer text.")
    await store.save_qa_pair(first)
    await store.save_qa_pair(second)

    await store.increment_qa_usage(second.qa_id)
    await store.increment_qa_usage(second.qa_id)

    assert (await store.get_qa_pair(second.qa_id)).usage_count == 2
    popular = await store.get_popular_questions(limit=1)
    assert popular == ["Second question?"]


async def test_document_update_round_trip(store):
    doc = Document(doc_id=str(uuid4()), name="guide.md", file_type="md", file_size=2048)
    await store.save_document(doc)
    processed_at = datetime(2025, 1, 2, tzinfo=timezone.utc)
    await store.update_document(
        doc.doc_id,
        processing_status="processed",
        keywords=["install", "panel"],
        content_profile="procedural",
        last_processed_at=processed_at,
    )

    loaded = await store.get_document(doc.doc_id)
    assert loaded.processing_status == "processed"
    assert loaded.keywords == ["install", "panel"]
    assert loaded.content_profile == "procedural"
    assert loaded.last_processed_at == processed_at
    assert loaded.file_size == 2048


async def test_update_unknown_field_rejected(store):
    doc = Document(doc_id=str(uuid4()), name="a.txt", file_type="txt")
    await store.save_document(doc)
    with pytest.raises(StoreError):
        await store.update_document(doc.doc_id, doc_id="other")


async def test_get_missing_document(store):
    assert await store.get_document("missing") is None


async def test_chunks_saved_in_order(store):
    doc = await _processed_document(store, "guide.md", ["one", "two", "three"])
    chunks = await store.get_chunks_by_document(doc.doc_id)
    assert [c.content for c in chunks] == ["one", "two", "three"]
    assert all(c.document_name == "guide.md" for c in chunks)


async def test_search_chunks_only_processed_documents(store):
    done = await _processed_document(store, "done.md", ["Fusebox safety first."])
    pending = Document(doc_id=str(uuid4()), name="pending.md", file_type="md")
    await store.save_document(pending)
    await store.save_chunks(build_chunk_records(pending.doc_id, ["Fusebox notes draft."]))

    results = await store.search_chunks("fusebox")
    assert [c.document_id for c in results] == [done.doc_id]


async def test_enhanced_search_scores_support_question(store, support_qa):
    await store.save_qa_pair(support_qa)
    await store.save_qa_pair(_qa("Parking?", "Rear lot only."))

    rows = await store.enhanced_search("support department phone number", {}, 20)
    assert len(rows) == 1
    row = rows[0]
    assert row["result_type"] == "qa_pair"
    assert row["result_id"] == support_qa.qa_id
    assert row["relevance_score"] == pytest.approx(1.8)
    assert row["source"] == "Q&A - Support"


async def test_enhanced_search_context_bonus(store):
    a = _qa("Door sensor battery?", "Replace the door sensor battery yearly.", category="Maintenance")
    b = _qa("Door sensor placement?", "Put the door sensor on the frame.", category="Installation")
    await store.save_qa_pair(a)
    await store.save_qa_pair(b)

    rows = await store.enhanced_search("door sensor", {"category": "installation"}, 20)
    by_id = {r["result_id"]: r for r in rows}
    assert by_id[b.qa_id]["context_match"] == pytest.approx(0.1)
    assert by_id[a.qa_id]["context_match"] == 0.0
    assert rows[0]["result_id"] == b.qa_id


async def test_enhanced_search_includes_documents_and_limit(store):
    doc = await _processed_document(
        store, "safety.md", ["If wiring is required, turn off power at the fusebox first."]
    )
    rows = await store.enhanced_search("wiring power", {}, 20)
    assert rows[0]["result_type"] == "document"
    assert rows[0]["result_id"] == doc.doc_id
    assert rows[0]["source"] == "Document - safety.md"
    assert await store.enhanced_search("wiring power", {}, 0) == []


async def test_enhanced_search_cap(tmp_dir, support_qa):
    capped = SQLiteCorpusStore(f"{tmp_dir}/capped.db", score_cap=1.0)
    await capped.initialize()
    await capped.save_qa_pair(support_qa)
    rows = await capped.enhanced_search("support department phone number", {}, 20)
    assert rows[0]["relevance_score"] == 1.0


async def test_knowledge_gap_frequency(store):
    await store.record_knowledge_gap("How do I fly?")
    await store.record_knowledge_gap("  how do i fly?  ")
    await store.record_knowledge_gap("Other")

    gaps = await store.list_knowledge_gaps()
    assert gaps[0].search_query == "how do i fly?"
    assert gaps[0].frequency == 2
    assert gaps[0].status == "open"
    assert len(gaps) == 2


async def test_record_search(store):
    analytic = SearchAnalytic(
        analytic_id=str(uuid4()),
        query="q",
        normalized_query="q",
        results_count=2,
        tier="qa_match",
        source_type="qa_pair",
        latency_ms=12.5,
        spans=[{"name": "search", "duration_ms": 3.0}],
    )
    await store.record_search(analytic)
    recent = await store.get_recent_searches()
    assert recent[0].tier == "qa_match"
    assert recent[0].spans == [{"name": "search", "duration_ms": 3.0}]


async def test_counts(store, support_qa):
    await store.save_qa_pair(support_qa)
    await _processed_document(store, "a.md", ["x", "y"])
    assert await store.count_qa_pairs() == 1
    assert await store.count_documents() == 1
    assert await store.count_chunks() == 2
