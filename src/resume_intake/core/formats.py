"""Document format detection from declared file paths."""

from enum import Enum
from pathlib import PurePosixPath


class FileType(Enum):
    """Document formats the intake pipeline can read."""

    TEXT = "text"  # .txt, .md and anything unrecognized
    DOCX = "docx"
    PDF = "pdf"

    @property
    def label(self) -> str:
        """Upper-case name used in error placeholders."""
        return self.name


EXTENSION_TO_TYPE: dict[str, FileType] = {
    ".txt": FileType.TEXT,
    ".text": FileType.TEXT,
    ".md": FileType.TEXT,
    ".markdown": FileType.TEXT,
    ".docx": FileType.DOCX,
    ".pdf": FileType.PDF,
}


def detect_file_type(path: str) -> FileType:
    """Map a path's suffix to a FileType, defaulting to plain text."""
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    return EXTENSION_TO_TYPE.get(suffix, FileType.TEXT)
