"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ZoneStatus(StrEnum):
    """Collection health of a zone or property."""

    SETTLED = "settled"
    ONGOING = "ongoing"
    ACTION_NEEDED = "action_needed"
