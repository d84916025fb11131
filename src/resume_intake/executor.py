"""The pipeline executor: documents in, contact information out.

``IntakeExecutor`` wires the stages together for one configuration:

1. resolve the storage paths for a request (explicit list or user prefix)
2. fetch and extract every document with bounded concurrency
3. assemble the corpus in the caller's order
4. run the tier-selection coordinator

Only ``InputError`` and ``ResourceNotFoundError`` escape ``execute``. Per-file
failures are recorded inline in the corpus and model failures fall back to
the heuristic tier.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from resume_intake.config import FrozenConfig, resolve_config
from resume_intake.core.formats import detect_file_type
from resume_intake.core.types import (
    ContactInformation,
    DocumentSegment,
    ExtractionAttempt,
)
from resume_intake.exceptions import InputError, ResourceNotFoundError
from resume_intake.files.extractors import FormatExtractor
from resume_intake.files.store import user_prefix
from resume_intake.pipeline.coordinator import StructuredExtractionCoordinator
from resume_intake.pipeline.corpus import CorpusAssembler
from resume_intake.pipeline.primary import PrimaryContactExtractor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from resume_intake.files.store import DocumentStore
    from resume_intake.frontdoor import ParseRequest
    from resume_intake.pipeline.adapters.base import GenerationAdapter

    Loader = Callable[[], Awaitable[bytes]]

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Everything one pipeline run produced."""

    contact: ContactInformation
    attempt: ExtractionAttempt
    corpus: str
    segments: tuple[DocumentSegment, ...]

    def to_payload(self) -> dict[str, Any]:
        return self.contact.to_payload()

    @property
    def failed_paths(self) -> tuple[str, ...]:
        return tuple(s.path for s in self.segments if not s.is_ok)


class IntakeExecutor:
    """Runs documents through extraction, assembly and tier selection."""

    def __init__(
        self,
        config: FrozenConfig,
        *,
        primary: PrimaryContactExtractor | None = None,
        extractor: FormatExtractor | None = None,
        assembler: CorpusAssembler | None = None,
    ) -> None:
        self.config = config
        self.extractor = extractor or FormatExtractor(max_file_bytes=config.max_file_bytes)
        self.assembler = assembler or CorpusAssembler()
        self.coordinator = StructuredExtractionCoordinator(
            primary or PrimaryContactExtractor(config)
        )

    # --- Stages ---

    def store_loaders(
        self, store: DocumentStore, paths: Sequence[str]
    ) -> list[tuple[str, Loader]]:
        return [(path, _store_loader(store, path)) for path in paths]

    async def resolve_paths(self, request: ParseRequest, store: DocumentStore) -> list[str]:
        """Explicit paths from the request, else everything under the user's prefix."""
        if request.file_paths is not None:
            paths = list(request.file_paths)
        else:
            prefix = user_prefix(self.config.uploads_prefix, request.user_id)
            try:
                paths = await store.list_paths(prefix)
            except OSError as e:
                raise ResourceNotFoundError(f"No files found for user: {e}") from e
            log.debug("Found %d upload(s) under %s", len(paths), prefix)
        if not paths:
            raise ResourceNotFoundError("No files found for user")
        return paths

    async def load_segments(
        self, items: Sequence[tuple[str, Loader]]
    ) -> tuple[DocumentSegment, ...]:
        """Fetch and extract documents concurrently, keeping input order."""
        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def load(path: str, loader: Loader) -> DocumentSegment:
            async with semaphore:
                try:
                    data = await loader()
                except Exception as e:
                    log.warning("Failed to fetch %s: %s", path, e)
                    return DocumentSegment.failed(
                        path, detect_file_type(path), f"Failed to fetch {path}: {e}"
                    )
                return await asyncio.to_thread(self.extractor.extract, path, data)

        # gather returns results in argument order, whatever the completion order
        return tuple(await asyncio.gather(*(load(p, fn) for p, fn in items)))

    async def extract(self, segments: Sequence[DocumentSegment]) -> PipelineResult:
        corpus = self.assembler.assemble(segments)
        outcome = await self.coordinator.run(corpus)
        return PipelineResult(
            contact=outcome.contact,
            attempt=outcome.attempt,
            corpus=corpus,
            segments=tuple(segments),
        )

    # --- Entry points ---

    async def execute(self, request: ParseRequest, store: DocumentStore) -> PipelineResult:
        paths = await self.resolve_paths(request, store)
        segments = await self.load_segments(self.store_loaders(store, paths))
        return await self.extract(segments)

    async def execute_documents(
        self, documents: Sequence[tuple[str, bytes]]
    ) -> PipelineResult:
        if not documents:
            raise ResourceNotFoundError("No documents provided")
        if any(not isinstance(path, str) or not path.strip() for path, _ in documents):
            raise InputError("Document paths must not be empty")
        segments = await self.load_segments(
            [(path, _bytes_loader(data)) for path, data in documents]
        )
        return await self.extract(segments)


def _store_loader(store: DocumentStore, path: str) -> Loader:
    async def load() -> bytes:
        return await store.fetch(path)

    return load


def _bytes_loader(data: bytes) -> Loader:
    async def load() -> bytes:
        return data

    return load


def create_executor(
    config: FrozenConfig | None = None,
    *,
    adapter: GenerationAdapter | None = None,
) -> IntakeExecutor:
    """Build an executor, resolving configuration when none is given."""
    cfg = config or resolve_config()
    return IntakeExecutor(cfg, primary=PrimaryContactExtractor(cfg, adapter=adapter))
