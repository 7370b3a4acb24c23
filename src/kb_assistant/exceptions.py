"""Custom exception hierarchy for the knowledge-base assistant."""


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge-base errors."""


class IngestionError(KnowledgeBaseError):
    """Error during document ingestion."""


class ParsingError(IngestionError):
    """Error extracting text from a document file."""


class GenerationError(KnowledgeBaseError):
    """Error during AI answer or summary generation."""


class StoreError(KnowledgeBaseError):
    """Error reading from or writing to the corpus store."""


class ConfigurationError(KnowledgeBaseError):
    """Error in system configuration."""
