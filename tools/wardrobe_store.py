"""Wardrobe storage abstractions and SQLite implementation."""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from logic.tags import decode_tags, encode_tags
from models.clothing_item import ClothingItem


class ItemNotFound(KeyError):
    """Raised when a clothing item id does not exist."""


class WardrobeStore:
    """Persistence interface for clothing items."""

    def create_item(self, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def get_item(self, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def list_records_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Return undecoded rows; ``tags_text`` keeps its stored encoding."""
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        raise NotImplementedError

    def list_all_items(self) -> List[ClothingItem]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def search_items(
        self,
        user_id: str,
        category: str | None = None,
        tag: str | None = None,
        text: str | None = None,
    ) -> List[ClothingItem]:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for clothing items."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    item_id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    image_url TEXT NOT NULL,
                    tags_text TEXT,
                    created_at REAL NOT NULL
                );
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_clothing_items_user ON clothing_items (user_id)"
            )

    def create_item(self, item: ClothingItem) -> ClothingItem:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO clothing_items (
                    item_id, user_id, name, category, image_url, tags_text, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.item_id,
                    item.user_id,
                    item.name,
                    item.category,
                    item.image_url,
                    encode_tags(item.tags),
                    item.created_at,
                ),
            )
        return item

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            item_id=row["item_id"],
            user_id=row["user_id"],
            name=row["name"],
            category=row["category"],
            image_url=row["image_url"],
            tags=decode_tags(row["tags_text"]),
            created_at=row["created_at"],
        )

    def get_item(self, item_id: str) -> Optional[ClothingItem]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM clothing_items WHERE item_id = ?", (item_id,)
            ).fetchone()
            return self._row_to_item(row) if row else None

    def list_records_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,),
            )
            return [dict(row) for row in cursor.fetchall()]

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def list_all_items(self) -> List[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT * FROM clothing_items ORDER BY created_at DESC")
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def delete_item(self, item_id: str) -> Optional[ClothingItem]:
        current = self.get_item(item_id)
        if not current:
            return None
        with self._connect() as conn:
            conn.execute("DELETE FROM clothing_items WHERE item_id = ?", (item_id,))
        return current

    def search_items(
        self,
        user_id: str,
        category: str | None = None,
        tag: str | None = None,
        text: str | None = None,
    ) -> List[ClothingItem]:
        items = self.list_items_for_user(user_id)
        category_key = None if not category or category == "all" else category
        tag_key = tag.strip().lower() if tag and tag.strip() else None
        text_key = text.strip().lower() if text and text.strip() else None

        def matches(item: ClothingItem) -> bool:
            if category_key and item.category != category_key:
                return False
            if tag_key and tag_key not in {t.lower() for t in item.tags}:
                return False
            if text_key and text_key not in item.name.lower():
                return False
            return True

        return [item for item in items if matches(item)]


__all__ = ["ItemNotFound", "WardrobeStore", "SQLiteWardrobeStore"]
