"""Document intake and contact extraction for uploaded resumes."""

import importlib.metadata
import logging

from resume_intake.config import FrozenConfig, resolve_config
from resume_intake.core.types import (
    ContactInformation,
    DocumentSegment,
    ExtractionAttempt,
    ExtractionOutcome,
    ExtractionState,
    Failure,
    FailureKind,
    Result,
    SegmentStatus,
    Success,
    Tier,
)
from resume_intake.exceptions import (
    AIError,
    AIResponseError,
    AIServiceError,
    ConfigurationError,
    ExtractionError,
    InputError,
    ResourceNotFoundError,
    ResumeIntakeError,
)
from resume_intake.executor import IntakeExecutor, PipelineResult, create_executor
from resume_intake.frontdoor import (
    ParseRequest,
    extract_contact_information,
    parse_contact_payload,
    run_contact_pipeline,
)

try:
    __version__ = importlib.metadata.version("resume-intake")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library logging stays silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Entry points
    "IntakeExecutor",
    "create_executor",
    "PipelineResult",
    "ParseRequest",
    "extract_contact_information",
    "parse_contact_payload",
    "run_contact_pipeline",
    # Configuration
    "FrozenConfig",
    "resolve_config",
    # Core types
    "ContactInformation",
    "DocumentSegment",
    "SegmentStatus",
    "ExtractionAttempt",
    "ExtractionOutcome",
    "ExtractionState",
    "FailureKind",
    "Tier",
    "Result",
    "Success",
    "Failure",
    # Exceptions
    "ResumeIntakeError",
    "InputError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "ExtractionError",
    "AIError",
    "AIServiceError",
    "AIResponseError",
]
