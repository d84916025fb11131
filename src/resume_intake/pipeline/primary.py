"""Model-backed contact extraction (the primary tier).

The corpus is embedded in a fixed instruction template and sent to a hosted
Gemini model. The reply is cleaned of Markdown code fences, parsed as JSON,
and checked for the ``contactInformation`` object. Every failure is returned
as a ``Failure`` carrying an ``AIServiceError`` or ``AIResponseError``; the
coordinator decides what to do next.

Validation policy: a payload without a ``contactInformation`` object is
rejected outright. A payload that has it but with mistyped fields is kept,
with those fields coerced to empty values.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import json
import logging
import re
from typing import TYPE_CHECKING, Any

from google.genai import errors as genai_errors
import httpx

from resume_intake.core.types import ContactInformation, Failure, Result, Success
from resume_intake.exceptions import AIError, AIResponseError, AIServiceError
from resume_intake.pipeline.prompts import build_contact_prompt

if TYPE_CHECKING:
    from collections.abc import Callable

    from resume_intake.config import FrozenConfig
    from resume_intake.pipeline.adapters.base import GenerationAdapter

log = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```` ``` ```` or ```` ```json ```` block, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN_RE.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _string_entries(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def parse_contact_response(text: str) -> ContactInformation:
    """Parse a model reply into ``ContactInformation``.

    Raises:
        AIResponseError: If the reply is empty, is not JSON, or lacks a
            ``contactInformation`` object.
    """
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        raise AIResponseError("Model returned an empty response")
    try:
        payload = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; so are oversized integer literals
        raise AIResponseError(f"Model response is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise AIResponseError(
            f"Model response must be a JSON object, got {type(payload).__name__}"
        )
    contact = payload.get("contactInformation")
    if not isinstance(contact, Mapping):
        raise AIResponseError("Invalid response structure - missing contactInformation")

    full_name = contact.get("fullName")
    return ContactInformation(
        full_name=full_name if isinstance(full_name, str) else "",
        emails=_string_entries(contact.get("email")),
        phones=_string_entries(contact.get("phones")),
    )


class PrimaryContactExtractor:
    """Contact extraction through a hosted text generation model.

    Configuration is passed in explicitly. Without an API key (and without an
    injected adapter) the extractor reports ``available == False`` and never
    makes a call.
    """

    def __init__(
        self,
        config: FrozenConfig,
        *,
        adapter: GenerationAdapter | None = None,
        adapter_factory: Callable[[FrozenConfig], GenerationAdapter] | None = None,
    ) -> None:
        self.config = config
        self._adapter = adapter
        self._adapter_factory = adapter_factory or _default_adapter_factory

    @property
    def available(self) -> bool:
        return self._adapter is not None or self.config.has_credential

    def _select_adapter(self) -> GenerationAdapter:
        if self._adapter is None:
            try:
                self._adapter = self._adapter_factory(self.config)
            except Exception as e:
                raise AIServiceError(f"Failed to initialize provider: {e}") from e
        return self._adapter

    def _bounded_corpus(self, corpus: str) -> str:
        limit = self.config.max_corpus_chars
        if len(corpus) > limit:
            log.info("Truncating corpus from %d to %d characters", len(corpus), limit)
            return corpus[:limit]
        return corpus

    async def _generate(self, prompt: str) -> str:
        adapter = self._select_adapter()
        timeout = self.config.request_timeout_seconds
        try:
            return await asyncio.wait_for(
                adapter.generate(model_name=self.config.model, prompt=prompt),
                timeout=timeout,
            )
        except TimeoutError as e:
            raise AIServiceError(f"Generation timed out after {timeout:g}s") from e
        except genai_errors.APIError as e:
            raise AIServiceError(f"Gemini API error {e.code}: {e.message}") from e
        except httpx.HTTPError as e:
            raise AIServiceError(f"Network error calling Gemini: {e}") from e
        except AIError:
            raise
        except Exception as e:
            raise AIServiceError(f"Generation failed: {e}") from e

    async def extract(self, corpus: str) -> Result[ContactInformation, AIError]:
        """Run the model over ``corpus`` and return a tagged result."""
        if not self.available:
            return Failure(AIServiceError("No Gemini API key configured"))

        prompt = build_contact_prompt(self._bounded_corpus(corpus))
        try:
            text = await self._generate(prompt)
            log.debug("Gemini raw response: %s", text)
            contact = parse_contact_response(text)
        except AIError as e:
            log.warning("Primary extraction failed: %s", e)
            return Failure(e)
        return Success(contact)

    async def extract_or_raise(self, corpus: str) -> ContactInformation:
        """Like ``extract`` but raises the carried error on failure."""
        result = await self.extract(corpus)
        if isinstance(result, Failure):
            raise result.error
        return result.value


def _default_adapter_factory(config: FrozenConfig) -> GenerationAdapter:
    if not config.api_key:
        raise AIServiceError("No Gemini API key configured")
    # defer the SDK client import until a real call is needed
    from resume_intake.pipeline.adapters.gemini import GoogleGenAIAdapter

    return GoogleGenAIAdapter(
        config.api_key, timeout_seconds=config.request_timeout_seconds
    )
