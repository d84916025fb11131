"""Configuration data types, following a resolve-once, freeze-then-flow pattern."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "env_file", "default"]
SourceMap = Mapping[str, ConfigOrigin]


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration handed to pipeline components.

    Components receive this object explicitly through their constructors;
    nothing in the pipeline reads configuration from globals.
    """

    api_key: str | None = None
    model: str = "gemini-1.5-flash"
    request_timeout_seconds: float = 30.0
    max_corpus_chars: int = 200_000
    max_concurrency: int = 4
    max_file_bytes: int = 20 * 1024 * 1024
    uploads_prefix: str = "uploads"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def with_overrides(self, **overrides: Any) -> "FrozenConfig":
        """Return a copy with known fields replaced; unknown fields are ignored."""
        known = {f.name for f in fields(self)}
        return replace(self, **{k: v for k, v in overrides.items() if k in known})

    def redacted(self) -> dict[str, Any]:
        """Field values with the API key masked, safe for logs and CLI output."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["api_key"] = "[REDACTED]" if self.api_key else None
        return values

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        body = ", ".join(f"{k}={v!r}" for k, v in self.redacted().items())
        return f"FrozenConfig({body})"

    def __repr__(self) -> str:
        return self.__str__()


class ResolvedConfig(NamedTuple):
    """Configuration after resolution, with the origin of every field."""

    config: FrozenConfig
    origin: SourceMap

    def audit(self) -> str:
        """Human-readable, redacted report of where each value came from."""
        lines = []
        for field, value in self.config.redacted().items():
            origin = self.origin.get(field, "default")
            lines.append(f"{field}: {origin}:{value}")
        return "\n".join(lines)
