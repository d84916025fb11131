"""Convenience entry points over ``IntakeExecutor``.

Callers at a transport boundary (an RPC handler, an HTTP route, a CLI) hand
their raw payload to ``parse_contact_payload``; callers that already hold the
document bytes use ``extract_contact_information``.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resume_intake.config import FrozenConfig
from resume_intake.exceptions import InputError, ResourceNotFoundError
from resume_intake.executor import IntakeExecutor, PipelineResult, create_executor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from resume_intake.files.store import DocumentStore
    from resume_intake.pipeline.adapters.base import GenerationAdapter

log = logging.getLogger(__name__)

# Characters of corpus echoed back in an error payload for diagnostics
DIAGNOSTIC_CORPUS_CHARS = 1000


class ParseRequest(BaseModel):
    """Validated request to extract contact information for one user."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    user_id: str = Field(alias="userId")
    file_paths: list[str] | None = Field(default=None, alias="filePaths")

    @field_validator("user_id")
    @classmethod
    def user_id_is_plain(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("userId is required")
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("userId must not contain path separators")
        return v

    @field_validator("file_paths")
    @classmethod
    def paths_not_blank(cls, v: list[str] | None) -> list[str] | None:
        if v is not None and any(not p.strip() for p in v):
            raise ValueError("filePaths must not contain empty paths")
        return v


def validate_request(payload: ParseRequest | Mapping[str, Any] | None) -> ParseRequest:
    """Coerce a raw payload into a ``ParseRequest``.

    Raises:
        InputError: If the user id is missing or the payload is malformed.
    """
    if isinstance(payload, ParseRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise InputError("userId is required")
    try:
        return ParseRequest.model_validate(payload)
    except ValidationError as e:
        for err in e.errors():
            if err["loc"] and err["loc"][0] in ("userId", "user_id"):
                cause = err.get("ctx", {}).get("error")
                raise InputError(str(cause) if cause else "userId is required") from e
        raise InputError(f"Invalid request: {e}") from e


def _executor(
    config: FrozenConfig | None, adapter: GenerationAdapter | None
) -> IntakeExecutor:
    return create_executor(config, adapter=adapter)


async def run_contact_pipeline(
    request: ParseRequest | Mapping[str, Any],
    store: DocumentStore,
    *,
    config: FrozenConfig | None = None,
    adapter: GenerationAdapter | None = None,
) -> PipelineResult:
    """Resolve a user's documents from ``store`` and extract contact information.

    Raises:
        InputError: The request has no usable user id.
        ResourceNotFoundError: No documents were found for the request.
    """
    parsed = validate_request(request)
    return await _executor(config, adapter).execute(parsed, store)


async def extract_contact_information(
    documents: Sequence[tuple[str, bytes]],
    *,
    config: FrozenConfig | None = None,
    adapter: GenerationAdapter | None = None,
) -> PipelineResult:
    """Extract contact information from already loaded ``(path, bytes)`` pairs.

    Example:
        ```python
        result = await extract_contact_information(
            [("resume.pdf", pdf_bytes), ("bio.txt", b"Jane Doe ...")]
        )
        print(result.contact.emails, result.attempt.tier)
        ```
    """
    return await _executor(config, adapter).execute_documents(list(documents))


async def parse_contact_payload(
    payload: Mapping[str, Any] | None,
    store: DocumentStore,
    *,
    config: FrozenConfig | None = None,
    adapter: GenerationAdapter | None = None,
) -> dict[str, Any]:
    """Wire-level entry point returning a JSON-ready payload.

    Returns ``{"contactInformation": {...}}`` on success. ``InputError`` and
    ``ResourceNotFoundError`` propagate to the caller; any other unexpected
    failure becomes ``{"error": ..., "corpus": ...}`` with a truncated corpus.
    """
    request = validate_request(payload)
    executor = _executor(config, adapter)
    paths = await executor.resolve_paths(request, store)

    corpus = ""
    try:
        segments = await executor.load_segments(executor.store_loaders(store, paths))
        corpus = executor.assembler.assemble(segments)
        outcome = await executor.coordinator.run(corpus)
    except (InputError, ResourceNotFoundError):
        raise
    except Exception as e:
        log.exception("Contact extraction failed for user %s", request.user_id)
        error: dict[str, Any] = {"error": str(e) or type(e).__name__}
        if corpus:
            error["corpus"] = corpus[:DIAGNOSTIC_CORPUS_CHARS]
        return error
    return outcome.contact.to_payload()
