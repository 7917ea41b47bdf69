"""Split a loaded wardrobe into per-slot candidate lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from logic.errors import InsufficientWardrobe
from logic.tags import decode_tags
from models.clothing_item import ClothingItem
from models.taxonomy import slot_for_category


@dataclass
class CandidateLists:
    """Wardrobe items grouped by the outfit slot they can fill."""

    tops: List[ClothingItem] = field(default_factory=list)
    bottoms: List[ClothingItem] = field(default_factory=list)
    shoes: List[ClothingItem] = field(default_factory=list)
    other: List[ClothingItem] = field(default_factory=list)

    def for_slot(self, slot: str) -> List[ClothingItem]:
        return {"top": self.tops, "bottom": self.bottoms, "shoes": self.shoes}[slot]

    def resolve(self, slot: str, item_id: Any) -> Optional[ClothingItem]:
        """Exact string match of ``item_id`` against one slot's candidates."""

        if not isinstance(item_id, str):
            return None
        for item in self.for_slot(slot):
            if item.item_id == item_id:
                return item
        return None

    def require_minimum(self) -> None:
        if not self.tops or not self.bottoms:
            raise InsufficientWardrobe(
                "Not enough variety in your wardrobe. Please add more tops and bottoms."
            )


def record_to_item(record: Mapping[str, Any] | ClothingItem) -> ClothingItem:
    """Build a ClothingItem from a stored row, decoding tags leniently."""

    if isinstance(record, ClothingItem):
        return record
    raw_tags = record["tags_text"] if "tags_text" in record else record.get("tags")
    item = ClothingItem(
        item_id=str(record["item_id"]),
        user_id=str(record.get("user_id", "")),
        name=record.get("name") or "Unnamed Item",
        category=str(record.get("category", "")),
        image_url=str(record.get("image_url") or ""),
        tags=decode_tags(raw_tags),
    )
    if record.get("created_at") is not None:
        item.created_at = record["created_at"]
    return item


def partition_wardrobe(records: Iterable[Mapping[str, Any] | ClothingItem]) -> CandidateLists:
    """Classify every record into exactly one of tops/bottoms/shoes/other."""

    candidates = CandidateLists()
    buckets: Dict[str | None, List[ClothingItem]] = {
        "top": candidates.tops,
        "bottom": candidates.bottoms,
        "shoes": candidates.shoes,
        None: candidates.other,
    }
    for record in records:
        item = record_to_item(record)
        buckets[slot_for_category(item.category)].append(item)
    return candidates


__all__ = ["CandidateLists", "partition_wardrobe", "record_to_item"]
