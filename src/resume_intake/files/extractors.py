"""Text extraction from uploaded document bytes.

Each extractor turns the raw bytes of one document into plain text. The
``FormatExtractor`` front picks an extractor by file type and converts any
failure into a failed ``DocumentSegment`` so one broken upload never stops
the rest of a request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
import logging
from typing import TYPE_CHECKING, ClassVar

import docx
from pypdf import PdfReader

from resume_intake.core.formats import FileType, detect_file_type
from resume_intake.core.types import DocumentSegment
from resume_intake.exceptions import ExtractionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = logging.getLogger(__name__)


class BaseExtractor(ABC):
    """Base class for per-format text extractors."""

    file_type: ClassVar[FileType]

    def can_extract(self, file_type: FileType) -> bool:
        """Check if this extractor handles the given file type."""
        return file_type is self.file_type

    @abstractmethod
    def extract_text(self, path: str, data: bytes) -> str:
        """Return the document's text or raise ExtractionError."""


class TextExtractor(BaseExtractor):
    """Plain text and Markdown, decoded as UTF-8."""

    file_type = FileType.TEXT

    def extract_text(self, path: str, data: bytes) -> str:
        try:
            # utf-8-sig drops a leading byte order mark and is otherwise utf-8
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ExtractionError(
                f"{path} is not valid UTF-8 text (byte {e.start}): {e.reason}",
                path=path,
            ) from e


class DocxExtractor(BaseExtractor):
    """Word documents via python-docx.

    Only visible paragraph text is kept: body paragraphs first, then the
    paragraphs inside table cells. Styles, images and embedded objects are
    ignored.
    """

    file_type = FileType.DOCX

    def extract_text(self, path: str, data: bytes) -> str:
        try:
            document = docx.Document(BytesIO(data))
            lines = [p.text for p in document.paragraphs]
            lines.extend(self._table_lines(document.tables))
        except Exception as e:
            raise ExtractionError(
                f"Could not read DOCX archive {path}: {e}", path=path
            ) from e
        return "\n".join(lines)

    def _table_lines(self, tables: Iterable) -> Iterator[str]:
        for table in tables:
            for row in table.rows:
                for cell in row.cells:
                    for paragraph in cell.paragraphs:
                        if paragraph.text:
                            yield paragraph.text


class PdfExtractor(BaseExtractor):
    """PDF text via pypdf, page by page in page order.

    The reader runs in non-strict mode so that damaged cross-reference tables
    and odd metadata are repaired where possible. Encrypted files are opened
    with the empty password, which covers owner-password-only PDFs.
    """

    file_type = FileType.PDF

    def extract_text(self, path: str, data: bytes) -> str:
        try:
            reader = PdfReader(BytesIO(data), strict=False)
            if reader.is_encrypted and not reader.decrypt(""):
                raise ExtractionError(f"{path} is password protected", path=path)
            pages = list(reader.pages)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Could not read PDF {path}: {e}", path=path) from e

        texts = []
        for number, page in enumerate(pages, start=1):
            try:
                texts.append(page.extract_text() or "")
            except Exception as e:
                # A single unreadable content stream should not lose the rest
                log.warning("Skipping page %d of %s: %s", number, path, e)
                texts.append("")
        return "\n".join(texts)


DEFAULT_EXTRACTORS: tuple[type[BaseExtractor], ...] = (
    TextExtractor,
    DocxExtractor,
    PdfExtractor,
)


class FormatExtractor:
    """Converts one document's bytes into a ``DocumentSegment``.

    Never raises for bad content: decode and parse errors become a segment
    with ``status=extraction-failed`` and an inline error placeholder.
    """

    def __init__(
        self,
        *,
        max_file_bytes: int | None = None,
        extractors: Iterable[BaseExtractor] | None = None,
    ) -> None:
        self.max_file_bytes = max_file_bytes
        self._extractors: list[BaseExtractor] = (
            list(extractors)
            if extractors is not None
            else [cls() for cls in DEFAULT_EXTRACTORS]
        )

    def _extractor_for(self, file_type: FileType) -> BaseExtractor:
        for extractor in self._extractors:
            if extractor.can_extract(file_type):
                return extractor
        raise ExtractionError(f"No extractor registered for {file_type.value} files")

    def extract(self, path: str, data: bytes) -> DocumentSegment:
        """Extract text from ``data``, declared to come from ``path``."""
        file_type = detect_file_type(path)
        log.debug(
            "Extracting %s content from %s (%d bytes)",
            file_type.value,
            path,
            len(data),
        )
        try:
            if self.max_file_bytes is not None and len(data) > self.max_file_bytes:
                raise ExtractionError(
                    f"{path} is {len(data)} bytes, above the "
                    f"{self.max_file_bytes} byte limit",
                    path=path,
                )
            text = self._extractor_for(file_type).extract_text(path, data)
        except ExtractionError as e:
            log.warning("Failed to extract %s content from %s: %s", file_type.label, path, e)
            return DocumentSegment.failed(path, file_type, str(e))
        return DocumentSegment.ok(path, text, file_type)
