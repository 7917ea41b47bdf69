"""Canonical labels for clothing categories and recommendation vocabularies.

Categories are stored exactly as the upload form submits them. The
recommendation slots accept a couple of legacy singular spellings, so the slot
mapping lives here next to the category list to keep both in one place.
"""

from typing import Dict, List, Tuple

CATEGORIES: Tuple[str, ...] = ("tops", "bottoms", "dresses", "outerwear", "shoes", "accessories")

# Slot -> category spellings accepted at recommendation time (case-sensitive).
SLOT_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "top": ("tops", "top"),
    "bottom": ("bottoms", "bottom"),
    "shoes": ("shoes",),
}
SLOTS: Tuple[str, ...] = ("top", "bottom", "shoes")

WEATHER_OPTIONS: List[str] = ["sunny", "cloudy", "rainy", "snowy", "windy", "hot", "cold", "mild"]
SEASON_OPTIONS: List[str] = ["spring", "summer", "fall", "winter"]
OCCASION_OPTIONS: List[str] = [
    "casual",
    "formal",
    "business",
    "party",
    "date",
    "workout",
    "outdoor",
    "travel",
]


def validate_category(value: str) -> str:
    """Validate an upload category.

    Raises a :class:`ValueError` if the category is not part of the canonical
    list. Surrounding whitespace is ignored; case is not.
    """

    key = (value or "").strip()
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {list(CATEGORIES)}")
    return key


def slot_for_category(category: str) -> str | None:
    """Return the outfit slot a category fills, or ``None`` if it fills none."""

    for slot, spellings in SLOT_CATEGORIES.items():
        if category in spellings:
            return slot
    return None


__all__ = [
    "CATEGORIES",
    "SLOT_CATEGORIES",
    "SLOTS",
    "WEATHER_OPTIONS",
    "SEASON_OPTIONS",
    "OCCASION_OPTIONS",
    "validate_category",
    "slot_for_category",
]
