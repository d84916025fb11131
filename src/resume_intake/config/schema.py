"""Configuration schema and validation using Pydantic.

Values from the environment, a ``.env`` file, or programmatic overrides are
validated and coerced here. Environment variables use the ``GEMINI_`` prefix.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gemini-1.5-flash"


class IntakeSettings(BaseSettings):
    """Pydantic settings schema for the intake pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Model service ---

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key; without it only the heuristic tier runs",
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier used for contact extraction",
        min_length=1,
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        description="Upper bound on a single generation request",
        gt=0,
    )

    max_corpus_chars: int = Field(
        default=200_000,
        description="Corpus characters sent to the model; longer corpora are truncated",
        ge=1,
    )

    # --- Document intake ---

    max_concurrency: int = Field(
        default=4,
        description="Documents fetched and extracted concurrently per request",
        ge=1,
    )

    max_file_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Documents larger than this are recorded as extraction failures",
        ge=1,
    )

    uploads_prefix: str = Field(
        default="uploads",
        description="Storage prefix under which each user's uploads live",
        min_length=1,
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, v: Any) -> Any:
        """Treat an empty or whitespace-only key as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_dict(self) -> dict[str, Any]:
        """Return field values keyed by field name."""
        return {name: getattr(self, name) for name in type(self).model_fields}


FIELD_NAMES: tuple[str, ...] = tuple(IntakeSettings.model_fields)
