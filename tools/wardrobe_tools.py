"""Wardrobe operations used by the HTTP layer: upload, browse, delete."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from agents.wardrobe_tagger import WardrobeTaggingAgent
from models.clothing_item import from_upload
from models.taxonomy import validate_category
from tools.image_store import LocalImageStore
from tools.observability import instrument_tool
from tools.wardrobe_store import ItemNotFound, WardrobeStore


class WardrobeTools:
    """Thin facade combining the item store, image store and tagger."""

    def __init__(
        self,
        store: WardrobeStore,
        images: LocalImageStore,
        tagger: WardrobeTaggingAgent,
    ) -> None:
        self.store = store
        self.images = images
        self.tagger = tagger

    @instrument_tool("upload_clothing_item")
    def upload_item(
        self,
        user_id: str,
        name: str,
        category: str,
        image_bytes: bytes,
        filename: Optional[str] = None,
        user_tags: Iterable[str] = (),
    ) -> Dict[str, Any]:
        category = validate_category(category)
        self.images.validate(image_bytes)
        tags = self.tagger.generate_tags(image_bytes, category, name or "Unnamed Item", list(user_tags))
        image_url = self.images.save(filename, image_bytes)
        item = from_upload(user_id=user_id, name=name, category=category, image_url=image_url, tags=tags)
        return self.store.create_item(item).to_dict()

    @instrument_tool("preview_clothing_tags")
    def preview_tags(self, image_bytes: bytes, category: str, name: Optional[str] = None) -> List[str]:
        """AI tags only; nothing is stored."""

        self.images.validate(image_bytes)
        return self.tagger.generate_tags(image_bytes, category, name or "Unnamed Item", [])

    def list_items(
        self,
        user_id: str,
        category: str = "all",
        tag: Optional[str] = None,
        text: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self.store.search_items(user_id, category=category, tag=tag, text=text)]

    def list_all_items(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self.store.list_all_items()]

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(item_id)
        return item.to_dict() if item else None

    @instrument_tool("delete_clothing_item")
    def delete_item(self, item_id: str) -> Dict[str, Any]:
        """Remove the record first, then its image; image errors are only logged."""

        removed = self.store.delete_item(item_id)
        if removed is None:
            raise ItemNotFound(item_id)
        self.images.delete(removed.image_url)
        return removed.to_dict()


__all__ = ["WardrobeTools"]
