"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.7
    gemini_max_tokens: int = 800

    # Chunking
    chunk_max_size: int = 1000
    chunk_overlap_sentences: int = 2
    chunk_overlap_target: int = 100  # upper bound on the overlap seed, in characters

    # Search
    min_relevance: float = 0.1
    min_answer_length: int = 10
    enhanced_search_limit: int = 20
    context_match_bonus: float = 0.1
    enhanced_score_cap: float | None = None  # None keeps the additive scorer uncapped
    max_query_variants: int = 8

    # Answer tiers
    qa_confidence_threshold: float = 0.5
    ai_synthesis_threshold: float = 0.2
    ai_evidence_limit: int = 5
    evidence_trail_size: int = 3
    history_window: int = 6

    # Ingestion
    summary_max_input_chars: int = 8000
    summary_min_content_chars: int = 50
    min_extracted_chars: int = 20

    # Storage paths
    sqlite_db_path: str = "data/knowledge_base.db"
    upload_dir: str = "data/uploads"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {"env_file": ".env", "env_prefix": "KB_"}
