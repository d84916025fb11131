"""Command line entry point.

Usage:
    python -m resume_intake resume.pdf cover_letter.docx notes.txt
    python -m resume_intake resume.pdf --env-file .env --show-corpus -v
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from resume_intake.config import resolve_config
from resume_intake.exceptions import (
    ConfigurationError,
    InputError,
    ResourceNotFoundError,
)
from resume_intake.frontdoor import extract_contact_information

# ruff: noqa: T201


def _read_documents(paths: list[str]) -> list[tuple[str, bytes]]:
    documents = []
    for raw in paths:
        path = Path(raw)
        try:
            documents.append((raw, path.read_bytes()))
        except OSError as e:
            raise InputError(f"Cannot read {raw}: {e.strerror}") from e
    return documents


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m resume_intake",
        description="Extract contact information from resume documents.",
    )
    parser.add_argument("files", nargs="+", help="documents in corpus order")
    parser.add_argument("--env-file", default=None, help="read GEMINI_* settings from a .env file")
    parser.add_argument("--show-corpus", action="store_true", help="include the assembled corpus")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(use_env_file=args.env_file)
        documents = _read_documents(args.files)
        result = asyncio.run(extract_contact_information(documents, config=config))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except (InputError, ResourceNotFoundError) as e:
        print(f"{e.code}: {e}", file=sys.stderr)
        return 2

    output = result.to_payload()
    output["tier"] = result.attempt.tier.value
    if result.attempt.fallback_reason:
        output["fallbackReason"] = result.attempt.fallback_reason
    if result.failed_paths:
        output["failedDocuments"] = list(result.failed_paths)
    if args.show_corpus:
        output["corpus"] = result.corpus
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
