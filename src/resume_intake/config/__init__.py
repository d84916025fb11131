"""Configuration for the resume intake pipeline.

Configuration is resolved once (``resolve_config``), frozen into a
``FrozenConfig``, and passed explicitly to the components that need it.
"""

from .api import resolve_config, resolve_config_with_sources
from .schema import IntakeSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "ConfigOrigin",
    "FrozenConfig",
    "IntakeSettings",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
    "resolve_config_with_sources",
]
