"""Identifier canonicalization shared by every source table.

The normalized identifier is the only merge key across the assessment, demand,
collection and owner tables: two rows refer to the same property if and only
if their identifiers normalize to the same string.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from .values import stringify

if TYPE_CHECKING:
    from collections.abc import Mapping

# Checked in order, first truthy value wins.
ID_FIELDS: Final[tuple[str, ...]] = ("assessment_no", "assessment_id", "property_id", "id")

_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")


def normalize_id(value: object) -> str | None:
    """Trim, upper-case and drop all whitespace; ``None`` stays ``None``."""

    if value is None:
        return None
    return _WHITESPACE_RE.sub("", stringify(value).strip().upper())


def resolve_id(row: Mapping[str, object] | None) -> str | None:
    """Return the normalized identifier of ``row`` or ``None`` if it has none."""

    if not row:
        return None
    raw = next((row[name] for name in ID_FIELDS if row.get(name)), None)
    return normalize_id(raw) or None


__all__ = ["ID_FIELDS", "normalize_id", "resolve_id"]
