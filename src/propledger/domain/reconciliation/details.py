"""Bucket the non-core fields of an assessment row into display categories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from propledger.domain.model import Details

OWNER_DETAILS: Final[str] = "Owner Details"
BUILDING_DETAILS: Final[str] = "Building Details"
FLOOR_DETAILS: Final[str] = "Floor Details"
MUTATION_DETAILS: Final[str] = "Mutation Details"
NEIGHBOURING_PROPERTIES: Final[str] = "Neighbouring Properties"
LIFE_CYCLE_DETAILS: Final[str] = "Life Cycle Details"
OTHER_INFO: Final[str] = "Other Info"

CATEGORIES: Final[tuple[str, ...]] = (
    OWNER_DETAILS,
    BUILDING_DETAILS,
    FLOOR_DETAILS,
    MUTATION_DETAILS,
    NEIGHBOURING_PROPERTIES,
    LIFE_CYCLE_DETAILS,
    OTHER_INFO,
)

# Ordered: the first keyword contained in the field name decides the category.
CATEGORY_KEYWORDS: Final[tuple[tuple[str, str], ...]] = (
    ("mobile", OWNER_DETAILS),
    ("phone", OWNER_DETAILS),
    ("email", OWNER_DETAILS),
    ("address", OWNER_DETAILS),
    ("gender", OWNER_DETAILS),
    ("father", OWNER_DETAILS),
    ("husband", OWNER_DETAILS),
    ("guardian", OWNER_DETAILS),
    ("s/o", OWNER_DETAILS),
    ("w/o", OWNER_DETAILS),
    ("care_of", OWNER_DETAILS),
    ("usage", BUILDING_DETAILS),
    ("construction", BUILDING_DETAILS),
    ("age", BUILDING_DETAILS),
    ("area", BUILDING_DETAILS),
    ("plot", BUILDING_DETAILS),
    ("category", BUILDING_DETAILS),
    ("build_up", BUILDING_DETAILS),
    ("floor", FLOOR_DETAILS),
    ("basement", FLOOR_DETAILS),
    ("terrace", FLOOR_DETAILS),
    ("levels", FLOOR_DETAILS),
    ("mutation", MUTATION_DETAILS),
    ("transfer", MUTATION_DETAILS),
    ("registry", MUTATION_DETAILS),
    ("seller", MUTATION_DETAILS),
    ("north", NEIGHBOURING_PROPERTIES),
    ("south", NEIGHBOURING_PROPERTIES),
    ("east", NEIGHBOURING_PROPERTIES),
    ("west", NEIGHBOURING_PROPERTIES),
    ("boundary", NEIGHBOURING_PROPERTIES),
    ("created", LIFE_CYCLE_DETAILS),
    ("approved", LIFE_CYCLE_DETAILS),
    ("updated", LIFE_CYCLE_DETAILS),
    ("active", LIFE_CYCLE_DETAILS),
    ("status", LIFE_CYCLE_DETAILS),
)

CORE_KEYS: Final[frozenset[str]] = frozenset(
    {"assessment_no", "owner_name", "cluster_id", "id", "created_at", "updated_at"}
)


def field_label(key: str) -> str:
    """``"plot_area"`` -> ``"Plot Area"``; only first letters are touched."""

    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def categorize_field(key: str) -> str:
    lowered = key.lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in lowered:
            return category
    return OTHER_INFO


def categorize_details(row: Mapping[str, object]) -> Details:
    """Group the displayable fields of ``row``; empty categories are omitted."""

    buckets: Details = {category: {} for category in CATEGORIES}
    for raw_key, value in row.items():
        key = str(raw_key)
        if key.lower() in CORE_KEYS or value is None or value == "":
            continue
        buckets[categorize_field(key)][field_label(key)] = value
    return {category: fields for category, fields in buckets.items() if fields}


__all__ = [
    "CATEGORIES",
    "CATEGORY_KEYWORDS",
    "CORE_KEYS",
    "categorize_details",
    "categorize_field",
    "field_label",
]
