"""Corpus assembly: one text blob with explicit document boundaries."""

from __future__ import annotations

from collections.abc import Iterable
import re

from resume_intake.core.types import DocumentSegment

START_MARKER = "--- DOCUMENT START: {path} ---"
END_MARKER = "--- DOCUMENT END: {path} ---"
SEGMENT_SEPARATOR = "\n\n"

_START_RE = re.compile(r"^--- DOCUMENT START: (?P<path>.+) ---$", re.MULTILINE)


class CorpusAssembler:
    """Joins extracted segments into a single corpus string.

    Segments are emitted in exactly the order given. Repeated paths are kept
    as separate segments. Failed segments contribute their error placeholder.
    """

    def render(self, segment: DocumentSegment) -> str:
        return "\n".join(
            (
                START_MARKER.format(path=segment.path),
                segment.extracted_text,
                END_MARKER.format(path=segment.path),
            )
        )

    def assemble(self, segments: Iterable[DocumentSegment]) -> str:
        return SEGMENT_SEPARATOR.join(self.render(s) for s in segments)


def segment_boundaries(corpus: str) -> list[str]:
    """Paths named by start markers, in corpus order."""
    return [m.group("path") for m in _START_RE.finditer(corpus)]
