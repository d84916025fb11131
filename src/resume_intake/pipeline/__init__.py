"""Pipeline stages: corpus assembly, contact extraction tiers, coordination."""

from .coordinator import StructuredExtractionCoordinator
from .corpus import CorpusAssembler, segment_boundaries
from .heuristics import HeuristicContactExtractor
from .normalize import normalize_contact_information
from .primary import (
    PrimaryContactExtractor,
    parse_contact_response,
    strip_code_fences,
)

__all__ = [
    "CorpusAssembler",
    "HeuristicContactExtractor",
    "PrimaryContactExtractor",
    "StructuredExtractionCoordinator",
    "normalize_contact_information",
    "parse_contact_response",
    "segment_boundaries",
    "strip_code_fences",
]
