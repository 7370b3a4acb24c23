"""HTTP surface tests using FastAPI's TestClient."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from kb_assistant.api.app import create_app
from kb_assistant.config.constants import NO_ANSWER_MESSAGE
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore


@pytest.fixture
def db_path(tmp_dir, monkeypatch):
    path = str(Path(tmp_dir) / "api.db")
    monkeypatch.setenv("KB_SQLITE_DB_PATH", path)
    monkeypatch.setenv("KB_UPLOAD_DIR", str(Path(tmp_dir) / "uploads"))
    monkeypatch.setenv("KB_GOOGLE_API_KEY", "")
    return path


@pytest.fixture
def seeded_store(db_path, support_qa):
    store = SQLiteCorpusStore(db_path)

    async def seed():
        await store.initialize()
        await store.save_qa_pair(support_qa)

    asyncio.run(seed())
    return store


def test_health(seeded_store):
    with TestClient(create_app()) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "qa_pair_count": 1, "doc_count": 0, "chunk_count": 0}
    assert "X-Request-ID" in response.headers


def test_request_id_is_propagated(seeded_store):
    with TestClient(create_app()) as client:
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_ask_support_question(seeded_store, support_qa):
    with TestClient(create_app()) as client:
        response = client.post("/ask", json={"question": "What is the phone number for support?"})

    body = response.json()
    assert response.status_code == 200
    assert body["tier"] == "qa_match"
    assert body["answer"] == support_qa.answer
    assert body["source_type"] == "qa_pair"
    assert body["search_results"][0]["id"] == support_qa.qa_id

    # Usage is written in the background and drained at shutdown
    qa = asyncio.run(seeded_store.get_qa_pair(support_qa.qa_id))
    assert qa.usage_count == 1


def test_unanswerable_question_recorded_as_gap(seeded_store):
    with TestClient(create_app()) as client:
        response = client.post(
            "/ask",
            json={
                "question": "How do I repair a submarine engine?",
                "history": [{"role": "user", "content": "hello"}],
            },
        )
    assert response.json()["answer"] == NO_ANSWER_MESSAGE

    with TestClient(create_app()) as client:
        gaps = client.get("/knowledge-gaps").json()
    assert gaps[0]["search_query"] == "how do i repair a submarine engine?"
    assert gaps[0]["frequency"] == 1


def test_ask_rejects_empty_question(seeded_store):
    with TestClient(create_app()) as client:
        assert client.post("/ask", json={"question": ""}).status_code == 422


def test_search_enhanced_and_basic(seeded_store, support_qa):
    with TestClient(create_app()) as client:
        enhanced = client.post("/search", json={"query": "support phone number"}).json()
        basic = client.post("/search", json={"query": "support phone number", "basic": True}).json()
    assert enhanced[0]["id"] == support_qa.qa_id
    assert basic[0]["id"] == support_qa.qa_id
    assert basic[0]["relevance_score"] == 1.0


def test_suggested_questions(seeded_store, support_qa):
    with TestClient(create_app()) as client:
        body = client.get("/suggested-questions", params={"limit": 3}).json()
    assert body == {"questions": [support_qa.question]}


def test_upload_document_and_status(seeded_store):
    content = b"Site rules.\n\nIf wiring is required, turn off power at the fusebox first.\n"
    with TestClient(create_app()) as client:
        upload = client.post("/documents", files={"file": ("safety.txt", content, "text/plain")})
        assert upload.status_code == 200
        doc_id = upload.json()["doc_id"]
        assert upload.json()["chunks_created"] == 1

        status = client.get(f"/documents/{doc_id}").json()
        assert status["processing_status"] == "processed"
        assert status["name"] == "safety.txt"

        answer = client.post("/ask", json={"question": "Do I need to turn off power before wiring?"})
        assert answer.json()["tier"] == "document_extraction"


def test_upload_unsupported_type(seeded_store):
    with TestClient(create_app()) as client:
        response = client.post("/documents", files={"file": ("tool.exe", b"MZ", "application/octet-stream")})
    assert response.status_code == 415


def test_missing_document_status(seeded_store):
    with TestClient(create_app()) as client:
        assert client.get("/documents/nope").status_code == 404
