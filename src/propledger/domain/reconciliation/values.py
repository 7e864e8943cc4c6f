"""Coercion of loosely typed source values into text and amounts."""

from __future__ import annotations

import math
import re
from decimal import Decimal

_NUMBER_RE = re.compile(
    r"""
    (?P<decimal>[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)
    | (?P<infinity>[+-]?Infinity)
    | 0(?:(?P<hex>[xX][0-9a-fA-F]+)|(?P<oct>[oO][0-7]+)|(?P<bin>[bB][01]+))
    """,
    re.VERBOSE,
)


def stringify(value: object) -> str:
    """Render a raw field value the way the source tables display it."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(text: str) -> float | None:
    """Parse a numeric literal as the source tables write them.

    Accepts plain decimals with optional exponent, signed ``Infinity`` and
    ``0x``/``0o``/``0b`` integer literals; anything else yields ``None``.
    """

    match = _NUMBER_RE.fullmatch(text.strip())
    if match is None:
        return None
    if match["decimal"] is not None:
        return float(match["decimal"])
    if match["infinity"] is not None:
        return -math.inf if match["infinity"].startswith("-") else math.inf
    if match["hex"] is not None:
        return float(int(match["hex"][1:], 16))
    if match["oct"] is not None:
        return float(int(match["oct"][1:], 8))
    return float(int(match["bin"][1:], 2))


def coerce_amount(value: object) -> float:
    """Return a finite, non-negative monetary contribution for ``value``.

    Missing, non-numeric and non-finite values contribute nothing; negative
    values are clamped to zero rather than subtracted.
    """

    amount: float | None = None
    try:
        if isinstance(value, bool | int | float | Decimal):
            amount = float(value)
        elif isinstance(value, str) and value.strip():
            amount = parse_number(value)
    except (OverflowError, ValueError):
        amount = None

    if amount is None or not math.isfinite(amount):
        return 0.0
    return max(0.0, amount)


__all__ = ["coerce_amount", "parse_number", "stringify"]
