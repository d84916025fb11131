"""Configuration resolution.

Precedence, highest first: programmatic overrides, process environment,
an explicitly requested ``.env`` file, schema defaults.
"""

from collections.abc import Mapping
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError

from resume_intake.exceptions import ConfigurationError

from .schema import FIELD_NAMES, IntakeSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "GEMINI_"


def _prefixed(values: Mapping[str, str | None]) -> dict[str, str]:
    """Pick GEMINI_* entries and map them to field names."""
    found: dict[str, str] = {}
    for field in FIELD_NAMES:
        key = f"{ENV_PREFIX}{field.upper()}"
        value = values.get(key)
        if value is not None:
            found[field] = value
    return found


def _load_env_file(env_file: str | Path) -> dict[str, str]:
    env_path = Path(env_file)
    if not env_path.exists():
        raise ConfigurationError(f"Environment file not found: {env_path}")
    return _prefixed(dotenv_values(env_path, encoding="utf-8"))


def resolve_config_with_sources(
    programmatic: Mapping[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration and record the origin of every field.

    Args:
        programmatic: Overrides with the highest precedence. Unknown keys are
            ignored.
        use_env_file: Optional ``.env`` file read beneath the process
            environment. The process environment is not modified.

    Raises:
        ConfigurationError: If a value fails validation or the env file is missing.
    """
    merged: dict[str, Any] = {}
    origin: dict[str, ConfigOrigin] = {}

    layers: list[tuple[ConfigOrigin, Mapping[str, Any]]] = []
    if use_env_file:
        layers.append(("env_file", _load_env_file(use_env_file)))
    layers.append(("env", _prefixed(os.environ)))
    if programmatic:
        layers.append(
            ("programmatic", {k: v for k, v in programmatic.items() if k in FIELD_NAMES})
        )

    for source, values in layers:
        for field, value in values.items():
            merged[field] = value
            origin[field] = source

    try:
        # init kwargs only; the environment was already folded in above
        settings = IntakeSettings.model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e

    for field in FIELD_NAMES:
        origin.setdefault(field, "default")

    config = FrozenConfig(**settings.to_dict())
    log.debug("Resolved configuration: %s", config)
    return ResolvedConfig(config=config, origin=origin)


def resolve_config(
    programmatic: Mapping[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> FrozenConfig:
    """Resolve configuration from all sources and freeze it.

    Example:
        config = resolve_config()
        config = resolve_config({"model": "gemini-2.0-flash"})
        config = resolve_config(use_env_file=".env.local")
    """
    return resolve_config_with_sources(programmatic, use_env_file=use_env_file).config
