"""Generation adapters for the primary extraction tier."""

from .base import GenerationAdapter

__all__ = ["GenerationAdapter"]
