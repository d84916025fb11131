"""Exception hierarchy for the resume intake pipeline.

Only `InputError` and `ResourceNotFoundError` are meant to cross the pipeline
boundary. Everything else is recovered inside the pipeline: per-file failures
are recorded in the corpus and model failures trigger the heuristic tier.
"""


class ResumeIntakeError(Exception):
    """Base exception for resume intake errors."""

    code: str = "internal"


class InputError(ResumeIntakeError):
    """Raised when a required request identifier is missing or malformed."""

    code = "invalid-argument"


class ResourceNotFoundError(ResumeIntakeError):
    """Raised when no documents can be resolved for a request."""

    code = "not-found"


class ConfigurationError(ResumeIntakeError):
    """Raised when configuration values fail validation."""


class ExtractionError(ResumeIntakeError):
    """Raised when a single document cannot be decoded or parsed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Attach the offending document path to the error."""
        super().__init__(message)
        self.path = path


class AIError(ResumeIntakeError):
    """Base class for failures of the model-backed extraction tier."""


class AIServiceError(AIError):
    """The generation service was unreachable, timed out, or returned an error."""


class AIResponseError(AIError):
    """The generation service answered with an unusable payload."""
