"""Heuristic owner and guardian name resolution over rows of unknown schema.

Resolution is two-staged: an ordered list of well-known field names is probed
first; failing that, every key of the row is scanned (in row order) for a
keyword substring. Either stage only accepts values passing ``is_valid_name``.

The field lists, keyword sets and noise words below are part of the observable
behaviour; changing any entry changes which names end up on the ledger.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .values import parse_number, stringify

if TYPE_CHECKING:
    from collections.abc import Mapping

NAME_FIELDS: Final[tuple[str, ...]] = (
    "owner_name",
    "name",
    "owner",
    "full_name",
    "firstname",
    "lastname",
    "prop_owner",
    "citizen_name",
    "taxpayer_name",
    "payer_name",
    "user_name",
    "display_name",
)
NAME_KEYWORDS: Final[tuple[str, ...]] = (
    "name",
    "owner",
    "citizen",
    "taxpayer",
    "payer",
    "full",
    "prop_ow",
)

GUARDIAN_FIELDS: Final[tuple[str, ...]] = (
    "guardian_name",
    "father_name",
    "husband_name",
    "guardian",
    "father",
    "husband",
    "so",
    "wo",
    "s/o",
    "w/o",
    "care_of",
    "co",
)
GUARDIAN_KEYWORDS: Final[tuple[str, ...]] = (
    "father",
    "husband",
    "guardian",
    "care_of",
    "s/o",
    "w/o",
)

NOISE_WORDS: Final[frozenset[str]] = frozenset(
    {
        "unnamed",
        "unknown",
        "null",
        "n/a",
        "undefined",
        "0",
        "-",
        ".",
        "none",
        "false",
        "nan",
        "owner",
        "null value",
        "tbd",
        "missing",
        "payer",
    }
)

# Marker embedded in synthesized placeholder names such as "Owner [ID:A1]".
PLACEHOLDER_MARKER: Final[str] = "[ID:"

# Short all-numeric strings are placeholder ids that leaked into name columns.
_NUMERIC_NAME_MAX_LENGTH = 10


def is_valid_name(value: object) -> bool:
    """Return whether ``value`` looks like a real person's name."""

    if value is None:
        return False
    text = stringify(value).strip()
    if len(text) <= 1:
        return False
    if len(text) < _NUMERIC_NAME_MAX_LENGTH and parse_number(text) is not None:
        return False
    if PLACEHOLDER_MARKER in text:
        return False
    return text.lower() not in NOISE_WORDS


def resolve_name(row: Mapping[str, object] | None) -> str | None:
    """Return the most plausible owner name of ``row``."""

    return _resolve(row, NAME_FIELDS, NAME_KEYWORDS)


def resolve_guardian_name(row: Mapping[str, object] | None) -> str | None:
    """Return the most plausible guardian (father, husband, care-of) name of ``row``."""

    return _resolve(row, GUARDIAN_FIELDS, GUARDIAN_KEYWORDS)


def _resolve(
    row: Mapping[str, object] | None,
    fields: tuple[str, ...],
    keywords: tuple[str, ...],
) -> str | None:
    if not row:
        return None

    for name in fields:
        value = row.get(name)
        if is_valid_name(value):
            return stringify(value).strip()

    for key, value in row.items():
        lowered = str(key).lower()
        if any(keyword in lowered for keyword in keywords) and is_valid_name(value):
            return stringify(value).strip()

    return None


__all__ = [
    "GUARDIAN_FIELDS",
    "GUARDIAN_KEYWORDS",
    "NAME_FIELDS",
    "NAME_KEYWORDS",
    "NOISE_WORDS",
    "PLACEHOLDER_MARKER",
    "is_valid_name",
    "resolve_guardian_name",
    "resolve_name",
]
