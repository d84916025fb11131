"""Configuration introspection for debugging.

Usage:
    python -m resume_intake.config
    python -m resume_intake.config --json
    python -m resume_intake.config --env-file .env.local
"""

import argparse
import json
import sys
from typing import Any

from resume_intake.exceptions import ConfigurationError

from .api import resolve_config_with_sources

# ruff: noqa: T201


def get_config_info(env_file: str | None = None) -> dict[str, Any]:
    """Structured, redacted configuration details for programmatic use."""
    try:
        resolved = resolve_config_with_sources(use_env_file=env_file)
    except ConfigurationError as e:
        return {"status": "invalid", "error": str(e), "config": None, "sources": {}}

    return {
        "status": "valid",
        "config": resolved.config.redacted(),
        "sources": dict(resolved.origin),
        "warnings": []
        if resolved.config.has_credential
        else ["GEMINI_API_KEY is not set; only heuristic extraction will run"],
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m resume_intake.config",
        description="Show the effective resume-intake configuration.",
    )
    parser.add_argument("--json", action="store_true", help="emit JSON")
    parser.add_argument("--env-file", default=None, help="read a .env file first")
    args = parser.parse_args(argv)

    info = get_config_info(args.env_file)
    if args.json:
        print(json.dumps(info, indent=2, default=str))
    elif info["status"] != "valid":
        print(f"Configuration error: {info['error']}", file=sys.stderr)
    else:
        print("=== Effective Configuration ===")
        for field, value in info["config"].items():
            print(f"  {field}: {value}  ({info['sources'][field]})")
        for warning in info["warnings"]:
            print(f"warning: {warning}")

    return 0 if info["status"] == "valid" else 1
