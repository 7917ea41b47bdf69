"""Hand-assembled outfits built from a user's own wardrobe."""

from __future__ import annotations

import uuid
from typing import Iterable, Optional

from logic.partitioning import partition_wardrobe
from models.clothing_item import ClothingItem
from models.outfit import SavedOutfit


def create_manual_outfit(
    items: Iterable[ClothingItem],
    name: str,
    top_id: Optional[str] = None,
    bottom_id: Optional[str] = None,
    shoes_id: Optional[str] = None,
) -> SavedOutfit:
    """Pick at most one item per slot; every given id must fit its slot."""

    if not name or not name.strip():
        raise ValueError("Please enter an outfit name")

    candidates = partition_wardrobe(items)
    chosen = {}
    for slot, item_id in (("top", top_id), ("bottom", bottom_id), ("shoes", shoes_id)):
        if not item_id:
            chosen[slot] = None
            continue
        item = candidates.resolve(slot, item_id)
        if item is None:
            raise ValueError(f"Item {item_id!r} is not a {slot} in this wardrobe")
        chosen[slot] = item

    return SavedOutfit(
        outfit_id=uuid.uuid4().hex,
        name=name.strip(),
        top=chosen["top"],
        bottom=chosen["bottom"],
        shoes=chosen["shoes"],
    )


__all__ = ["create_manual_outfit"]
