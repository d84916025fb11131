"""Core data types that flow through the intake pipeline.

Every value here is created and discarded within a single pipeline run. The
dataclasses are frozen so a stage can never mutate what an earlier stage
produced; each stage builds a new value instead.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
import typing

from resume_intake.core.formats import FileType

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


# --- Result type ---
# Fallible stages return Success/Failure instead of raising so that the
# coordinator can branch on an explicit value.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful stage result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failed stage result, carrying the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


# --- Documents ---


class SegmentStatus(str, Enum):
    """Outcome of extracting text from one document."""

    OK = "ok"
    EXTRACTION_FAILED = "extraction-failed"


def failure_placeholder(file_type: FileType, path: str) -> str:
    """Inline marker recorded in the corpus for a document that failed."""
    return f"[ERROR: Failed to extract {file_type.label} content from {path}]"


@dataclasses.dataclass(frozen=True, slots=True)
class DocumentSegment:
    """One input document's extraction result.

    A failed segment keeps the placeholder as its ``extracted_text`` so the
    corpus still shows where the document would have been.
    """

    path: str
    extracted_text: str
    status: SegmentStatus
    file_type: FileType = FileType.TEXT
    error_detail: str | None = None

    def __post_init__(self) -> None:
        """Validate segment invariants."""
        _require(
            condition=isinstance(self.path, str) and self.path.strip() != "",
            message="must be a non-empty str",
            field_name="path",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.extracted_text, str),
            message="must be str",
            field_name="extracted_text",
            exc=TypeError,
        )
        failed = self.status is SegmentStatus.EXTRACTION_FAILED
        _require(
            condition=failed == (self.error_detail is not None),
            message="must be set exactly when status is extraction-failed",
            field_name="error_detail",
        )

    @classmethod
    def ok(cls, path: str, text: str, file_type: FileType) -> DocumentSegment:
        """Build a successfully extracted segment."""
        return cls(
            path=path,
            extracted_text=text,
            status=SegmentStatus.OK,
            file_type=file_type,
        )

    @classmethod
    def failed(cls, path: str, file_type: FileType, detail: str) -> DocumentSegment:
        """Build a failed segment carrying the error placeholder."""
        return cls(
            path=path,
            extracted_text=failure_placeholder(file_type, path),
            status=SegmentStatus.EXTRACTION_FAILED,
            file_type=file_type,
            error_detail=detail or "unknown error",
        )

    @property
    def is_ok(self) -> bool:
        return self.status is SegmentStatus.OK


# --- Contact information ---


@dataclasses.dataclass(frozen=True, slots=True)
class ContactInformation:
    """Canonical contact details extracted from a corpus.

    ``full_name`` is always a string (empty when unknown). ``emails`` and
    ``phones`` are tuples of strings; the normalizer guarantees they carry no
    exact-string duplicates.
    """

    full_name: str = ""
    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate field types."""
        _require(
            condition=isinstance(self.full_name, str),
            message="must be str",
            field_name="full_name",
            exc=TypeError,
        )
        _require(
            condition=_is_tuple_of(self.emails, str),
            message="must be a tuple[str, ...]",
            field_name="emails",
            exc=TypeError,
        )
        _require(
            condition=_is_tuple_of(self.phones, str),
            message="must be a tuple[str, ...]",
            field_name="phones",
            exc=TypeError,
        )

    @classmethod
    def empty(cls) -> ContactInformation:
        return cls()

    def to_payload(self) -> dict[str, typing.Any]:
        """Return the wire shape ``{"contactInformation": {...}}``."""
        return {
            "contactInformation": {
                "fullName": self.full_name,
                "email": list(self.emails),
                "phones": list(self.phones),
            }
        }


# --- Extraction bookkeeping ---


class Tier(str, Enum):
    """Extraction strategy that produced a result."""

    PRIMARY = "primary"
    FALLBACK = "fallback"


class ExtractionState(str, Enum):
    """States of the tier-selection state machine."""

    INIT = "init"
    PRIMARY_ATTEMPTED = "primary-attempted"
    SUCCESS = "success"
    FALLBACK_TRIGGERED = "fallback-triggered"
    FALLBACK_ATTEMPTED = "fallback-attempted"
    DONE = "done"


class FailureKind(str, Enum):
    """Why the primary tier was abandoned."""

    NO_CREDENTIAL = "no-credential"
    SERVICE = "service"
    RESPONSE = "response"


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractionAttempt:
    """Record of which tier produced the final result and how it got there."""

    tier: Tier
    states: tuple[ExtractionState, ...]
    fallback_reason: str | None = None
    failure_kind: FailureKind | None = None

    def __post_init__(self) -> None:
        """Validate attempt invariants."""
        _require(
            condition=_is_tuple_of(self.states, ExtractionState),
            message="must be a tuple of ExtractionState",
            field_name="states",
            exc=TypeError,
        )
        _require(
            condition=bool(self.states)
            and self.states[0] is ExtractionState.INIT
            and self.states[-1] is ExtractionState.DONE,
            message="must start at init and end at done",
            field_name="states",
        )
        _require(
            condition=(self.tier is Tier.FALLBACK) == (self.failure_kind is not None),
            message="must be set exactly when the fallback tier was used",
            field_name="failure_kind",
        )

    @property
    def used_fallback(self) -> bool:
        return self.tier is Tier.FALLBACK


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractionOutcome:
    """Terminal value of the coordinator: the result and its audit record."""

    contact: ContactInformation
    attempt: ExtractionAttempt
