"""Deterministic, pattern-based contact extraction.

The always-available tier. Phones use North American 3-3-4 grouping and a
name is two capitalized words at the start of an early line. No network, and
it never raises.
"""

from __future__ import annotations

import logging
import re

from resume_intake.core.types import ContactInformation

log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
NAME_RE = re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+")

NAME_SCAN_LINES = 50
NAME_MIN_LENGTH = 6
NAME_MAX_LENGTH = 49
SECTION_KEYWORDS: tuple[str, ...] = ("DOCUMENT", "EXPERIENCE", "EDUCATION")


def _unique(items: list[str]) -> tuple[str, ...]:
    # dict preserves first-seen order
    return tuple(dict.fromkeys(items))


def _is_name_line(line: str) -> bool:
    if not NAME_MIN_LENGTH <= len(line) <= NAME_MAX_LENGTH:
        return False
    if "@" in line or any(keyword in line for keyword in SECTION_KEYWORDS):
        return False
    return NAME_RE.match(line) is not None


class HeuristicContactExtractor:
    """Regex extraction of name, emails and phones from corpus text."""

    def extract_emails(self, corpus: str) -> tuple[str, ...]:
        return _unique(EMAIL_RE.findall(corpus))

    def extract_phones(self, corpus: str) -> tuple[str, ...]:
        return _unique([m.group(0) for m in PHONE_RE.finditer(corpus)])

    def extract_name(self, corpus: str) -> str:
        """First line among the leading lines that looks like a person's name."""
        for line in corpus.split("\n")[:NAME_SCAN_LINES]:
            trimmed = line.strip()
            if _is_name_line(trimmed):
                return trimmed
        return ""

    def extract(self, corpus: str) -> ContactInformation:
        if not isinstance(corpus, str):
            log.warning("Heuristic extractor received %s; treating as empty", type(corpus).__name__)
            corpus = ""
        contact = ContactInformation(
            full_name=self.extract_name(corpus),
            emails=self.extract_emails(corpus),
            phones=self.extract_phones(corpus),
        )
        log.debug(
            "Heuristic extraction found name=%r, %d email(s), %d phone(s)",
            contact.full_name,
            len(contact.emails),
            len(contact.phones),
        )
        return contact
