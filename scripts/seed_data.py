"""Seed the knowledge base with sample Q&A pairs and documents for development."""

from __future__ import annotations

import asyncio
import sys
import tempfile
from pathlib import Path
from uuid import uuid4

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kb_assistant.chunking.paragraph_chunker import ParagraphChunker
from kb_assistant.config.settings import Settings
from kb_assistant.ingestion.extractors import create_default_registry
from kb_assistant.ingestion.pipeline import IngestionPipeline
from kb_assistant.models.domain import QAPair
from kb_assistant.observability.logger import setup_logging
from kb_assistant.storage.sqlite_corpus_store import SQLiteCorpusStore

SAMPLE_QA_PAIRS = [
    {
        "question": "What is the support phone number?",
        "answer": "Support phone number? Call 555-123-4567, available Monday to Friday 8am-6pm.",
        "category": "Support",
    },
    {
        "question": "When should I call the customer before an installation?",
        "answer": "Always call the customer 1 day before installation to confirm the appointment.",
        "category": "Installation",
    },
    {
        "question": "How do I test the mobile app after installation?",
        "answer": "Open the app, log in with the customer's account and trigger a test alarm from the control panel.",
        "category": "Installation",
    },
]

SAMPLE_DOCS = [
    {
        "filename": "installation_guide.md",
        "content": """# Installation Guide

## Before You Start
Always call the customer 1 day before installation. Confirm the address and the time window.

## Safety
If wiring is required, turn off power at the fusebox first. Never work on live circuits.

## Control Panel
Mount the control panel at 1.5 meters height near the main entrance.

## Standard Package
The standard package includes: control panel, two door sensors, one motion detector, and a siren.

## After Installation
Submit the installation report within 24 hours.
""",
    },
    {
        "filename": "contacts.txt",
        "content": """Support contacts

For technical questions email support@example.com or call 555-987-6543.
Escalations go to the field operations manager.
""",
    },
]


async def main():
    settings = Settings()
    setup_logging(settings.log_level, settings.log_json)

    Path(settings.sqlite_db_path).parent.mkdir(parents=True, exist_ok=True)

    store = SQLiteCorpusStore(settings.sqlite_db_path)
    await store.initialize()

    for qa in SAMPLE_QA_PAIRS:
        await store.save_qa_pair(QAPair(qa_id=str(uuid4()), **qa))
        print(f"Added Q&A: {qa['question']}")

    pipeline = IngestionPipeline(
        store=store,
        extractors=create_default_registry(),
        chunker=ParagraphChunker(
            max_chunk_size=settings.chunk_max_size,
            overlap_sentences=settings.chunk_overlap_sentences,
            overlap_target=settings.chunk_overlap_target,
        ),
        settings=settings,
    )

    with tempfile.TemporaryDirectory() as tmp_dir:
        for doc in SAMPLE_DOCS:
            path = Path(tmp_dir) / doc["filename"]
            path.write_text(doc["content"], encoding="utf-8")
            result = await pipeline.ingest_file(path)
            print(f"Ingested {doc['filename']}: {result.chunks_created} chunks")

    print(f"\nTotal Q&A pairs: {await store.count_qa_pairs()}")
    print(f"Total documents: {await store.count_documents()}")
    print(f"Total chunks: {await store.count_chunks()}")


if __name__ == "__main__":
    asyncio.run(main())
