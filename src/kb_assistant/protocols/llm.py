"""Protocol for text-generation providers used by answer synthesis and summaries."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class LLMProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Plain text completion. None falls back to the provider's configured default."""
        ...

    async def generate_structured(
        self,
        prompt: str,
        response_schema: type[BaseModel],
        system: str | None = None,
    ) -> BaseModel:
        """JSON completion validated against response_schema."""
        ...
