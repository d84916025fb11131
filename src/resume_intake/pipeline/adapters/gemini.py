"""Google GenAI adapter for the primary extraction tier."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

log = logging.getLogger(__name__)


class GoogleGenAIAdapter:
    """Text generation through the ``google-genai`` async client."""

    def __init__(self, api_key: str, *, timeout_seconds: float | None = None) -> None:
        http_options = (
            types.HttpOptions(timeout=int(timeout_seconds * 1000))
            if timeout_seconds
            else None
        )
        self._client = genai.Client(api_key=api_key, http_options=http_options)

    async def generate(self, *, model_name: str, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=0.0,
                response_mime_type="application/json",
            ),
        )
        text = response.text or ""
        log.debug("Gemini returned %d characters", len(text))
        return text
