"""Normalization of contact information into the canonical shape.

Applied to every tier's output. The rules are fixed points: normalizing a
normalized value returns an equal value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from resume_intake.core.types import ContactInformation


def unique_strings(values: Any) -> tuple[str, ...]:
    """Trimmed, non-empty string entries with exact duplicates removed.

    Order is first-seen. Anything that is not a list or tuple yields ``()``
    and non-string entries are dropped.
    """
    if not isinstance(values, list | tuple):
        return ()
    cleaned: Iterable[str] = (v.strip() for v in values if isinstance(v, str))
    return tuple(dict.fromkeys(v for v in cleaned if v))


def coerce_name(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_contact_information(
    value: ContactInformation | Mapping[str, Any] | None,
) -> ContactInformation:
    """Return ``value`` in canonical form.

    Accepts a ``ContactInformation``, the wire payload
    ``{"contactInformation": {...}}``, or just its inner mapping. Missing or
    mistyped fields fall back to empty values.
    """
    if isinstance(value, ContactInformation):
        return ContactInformation(
            full_name=coerce_name(value.full_name),
            emails=unique_strings(value.emails),
            phones=unique_strings(value.phones),
        )
    if not isinstance(value, Mapping):
        return ContactInformation.empty()

    inner = value.get("contactInformation", value)
    if not isinstance(inner, Mapping):
        return ContactInformation.empty()
    return ContactInformation(
        full_name=coerce_name(inner.get("fullName")),
        emails=unique_strings(inner.get("email")),
        phones=unique_strings(inner.get("phones")),
    )
