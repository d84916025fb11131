"""Provider-neutral seam for text generation."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationAdapter(Protocol):
    """Minimal text generation interface used by the primary extractor.

    Implementations may raise any exception; the caller maps failures to the
    pipeline's error types.
    """

    async def generate(self, *, model_name: str, prompt: str) -> str:
        """Return the model's text response for ``prompt``."""
        ...
