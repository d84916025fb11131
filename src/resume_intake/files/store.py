"""Document sources that resolve a user's uploads into raw bytes.

The pipeline only needs two operations from a store: list the storage paths
under a user's upload prefix, and fetch the bytes of one path. Both may
block on I/O, so both are coroutines.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

log = logging.getLogger(__name__)


def user_prefix(uploads_prefix: str, user_id: str) -> str:
    """Storage prefix holding one user's uploads, e.g. ``uploads/<user_id>/``."""
    return f"{uploads_prefix.strip('/')}/{user_id}/"


@runtime_checkable
class DocumentStore(Protocol):
    """Source of uploaded documents."""

    async def list_paths(self, prefix: str) -> list[str]:
        """Return storage paths that start with ``prefix``."""
        ...

    async def fetch(self, path: str) -> bytes:
        """Return the bytes stored at ``path``."""
        ...


class InMemoryDocumentStore:
    """Store backed by a mapping of storage path to bytes.

    Useful when the caller already holds the uploads, and in tests.
    """

    def __init__(self, documents: Mapping[str, bytes] | None = None) -> None:
        self._documents: dict[str, bytes] = dict(documents or {})

    def put(self, path: str, data: bytes) -> None:
        self._documents[path] = data

    async def list_paths(self, prefix: str) -> list[str]:
        return sorted(p for p in self._documents if p.startswith(prefix))

    async def fetch(self, path: str) -> bytes:
        try:
            return self._documents[path]
        except KeyError:
            raise FileNotFoundError(f"No document stored at {path}") from None


class LocalDocumentStore:
    """Store rooted at a local directory; storage paths are relative to it."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        candidate = (self.root / path).resolve()
        if not candidate.is_relative_to(self.root):
            raise FileNotFoundError(f"{path} is outside the store root")
        return candidate

    async def list_paths(self, prefix: str) -> list[str]:
        base = self._resolve(prefix)
        if not base.is_dir():
            log.debug("No upload directory at %s", base)
            return []
        files = await asyncio.to_thread(
            lambda: sorted(p for p in base.rglob("*") if p.is_file())
        )
        return [p.relative_to(self.root).as_posix() for p in files]

    async def fetch(self, path: str) -> bytes:
        return await asyncio.to_thread(self._resolve(path).read_bytes)
