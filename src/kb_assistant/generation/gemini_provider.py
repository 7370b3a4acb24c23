"""Google Gemini LLM provider using the google-genai SDK."""

from __future__ import annotations

import time

from google import genai
from google.genai import types
from pydantic import BaseModel

from kb_assistant.exceptions import GenerationError
from kb_assistant.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    """Answer and summary generation backed by one Gemini model.

    Defaults for temperature and output length come from settings; callers may
    override them per request. Every SDK failure surfaces as GenerationError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        max_tokens: int = 800,
    ) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def _generate_content(self, prompt: str, config: types.GenerateContentConfig, kind: str):
        start = time.perf_counter()
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model, contents=prompt, config=config
            )
        except Exception as e:
            logger.warning("gemini_call_failed", kind=kind, model=self._model, error=str(e))
            raise GenerationError(f"Gemini {kind} generation failed: {e}") from e

        usage = response.usage_metadata
        logger.debug(
            "gemini_call",
            kind=kind,
            model=self._model,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            output_tokens=usage.candidates_token_count if usage else None,
        )
        return response

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=self._temperature if temperature is None else temperature,
            max_output_tokens=max_tokens or self._max_tokens,
        )
        response = await self._generate_content(prompt, config, kind="text")
        return response.text or ""

    async def generate_structured(
        self,
        prompt: str,
        response_schema: type[BaseModel],
        system: str | None = None,
    ) -> BaseModel:
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=0.0,
            max_output_tokens=self._max_tokens,
            response_mime_type="application/json",
            response_schema=response_schema,
        )
        response = await self._generate_content(prompt, config, kind="structured")

        # The SDK parses into the schema when it can; otherwise validate the raw JSON
        if isinstance(response.parsed, response_schema):
            return response.parsed
        try:
            return response_schema.model_validate_json(response.text or "")
        except ValueError as e:
            raise GenerationError(f"Gemini returned invalid {response_schema.__name__}: {e}") from e
