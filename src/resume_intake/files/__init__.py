"""Document format detection, text extraction, and document stores."""

from resume_intake.core.formats import FileType, detect_file_type

from .extractors import (
    BaseExtractor,
    DocxExtractor,
    FormatExtractor,
    PdfExtractor,
    TextExtractor,
)
from .store import (
    DocumentStore,
    InMemoryDocumentStore,
    LocalDocumentStore,
    user_prefix,
)

__all__ = [
    "BaseExtractor",
    "DocumentStore",
    "DocxExtractor",
    "FileType",
    "FormatExtractor",
    "InMemoryDocumentStore",
    "LocalDocumentStore",
    "PdfExtractor",
    "TextExtractor",
    "detect_file_type",
    "user_prefix",
]
