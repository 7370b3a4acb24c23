"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from uuid import uuid4

import pytest

from kb_assistant.config.settings import Settings
from kb_assistant.models.domain import QAPair, SearchResult
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore


@pytest.fixture
def tmp_dir():
    """Create a temporary directory."""
    return tempfile.mkdtemp()


@pytest.fixture
def settings(tmp_dir):
    """Test settings with temp paths and no LLM key."""
    return Settings(
        google_api_key="",
        sqlite_db_path=str(Path(tmp_dir) / "test_kb.db"),
        upload_dir=str(Path(tmp_dir) / "uploads"),
    )


@pytest.fixture
async def store(settings):
    corpus = SQLiteCorpusStore(settings.sqlite_db_path)
    await corpus.initialize()
    return corpus


@pytest.fixture
def support_qa():
    return QAPair(
        qa_id=str(uuid4()),
        question="What is the support phone number?",
        answer="Support phone number? Call 555-123-4567",
        category="Support",
    )


@pytest.fixture
def sample_results():
    """Mixed Q&A and document results, already ranked."""
    return [
        SearchResult(
            type="document",
            id="doc-1",
            answer="The onboarding handbook describes the first week for new technicians.",
            source="Document - handbook.md",
            relevance_score=0.9,
        ),
        SearchResult(
            type="qa_pair",
            id="qa-1",
            question="How long is onboarding?",
            answer="Onboarding takes one week with a senior technician.",
            source="Q&A - HR",
            category="HR",
            relevance_score=0.4,
        ),
        SearchResult(
            type="qa_pair",
            id="qa-2",
            question="Who runs onboarding?",
            answer="The field operations manager runs onboarding sessions.",
            source="Q&A - HR",
            category="HR",
            relevance_score=0.3,
        ),
    ]
