"""Clothing item data model and helpers."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from models.taxonomy import validate_category


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalise_tags(values: Iterable[Any]) -> List[str]:
    """Trim tags and drop blanks while keeping order and duplicates."""

    return [str(tag).strip() for tag in values if str(tag).strip()]


@dataclass
class ClothingItem:
    """A single piece of clothing owned by a user."""

    item_id: str
    user_id: str
    name: str
    category: str
    image_url: str
    tags: List[str] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        self.tags = normalise_tags(_ensure_list(self.tags))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.item_id,
            "user_id": self.user_id,
            "name": self.name,
            "category": self.category,
            "image_url": self.image_url,
            "tags": list(self.tags),
            "created_at": self.created_at,
        }


def from_upload(
    *,
    user_id: str,
    name: str | None,
    category: str,
    image_url: str,
    tags: Iterable[Any] | None = None,
) -> ClothingItem:
    """Factory for items coming from the upload form.

    The category must be one of the canonical categories; a blank name falls
    back to ``Unnamed Item``.
    """

    missing = [label for label, value in (("user_id", user_id), ("image_url", image_url)) if not value]
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    return ClothingItem(
        item_id=uuid.uuid4().hex,
        user_id=str(user_id),
        name=(name or "").strip() or "Unnamed Item",
        category=validate_category(category),
        image_url=image_url,
        tags=_ensure_list(tags),
    )


__all__ = ["ClothingItem", "from_upload", "normalise_tags"]
