"""User-scoped saved outfit list backed by one JSON file per user."""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List
from urllib.parse import quote


class SavedOutfitStore:
    """Append-only list of outfit dicts; deletion removes by ``id``."""

    def __init__(self, base_dir: str = "data/saved_outfits") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, user_id: str) -> Path:
        if not user_id:
            raise ValueError("user_id is required")
        # Injective, and never contains a path separator.
        return self.base_dir / f"{quote(user_id, safe='')}.json"

    def list_outfits(self, user_id: str) -> List[Dict[str, Any]]:
        path = self._path(user_id)
        if not path.exists():
            return []
        return json.loads(path.read_text()).get("outfits", [])

    def _write(self, user_id: str, outfits: List[Dict[str, Any]]) -> None:
        payload = {"user_id": user_id, "outfits": outfits}
        path = self._path(user_id)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as handle:
                json.dump(payload, handle, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save_outfit(self, user_id: str, outfit: Dict[str, Any]) -> Dict[str, Any]:
        if not outfit.get("id"):
            raise ValueError("Outfit must carry an id")
        with self._lock:
            outfits = self.list_outfits(user_id)
            outfits.append(outfit)
            self._write(user_id, outfits)
        return outfit

    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        with self._lock:
            outfits = self.list_outfits(user_id)
            remaining = [outfit for outfit in outfits if outfit.get("id") != outfit_id]
            if len(remaining) == len(outfits):
                return False
            self._write(user_id, remaining)
        return True


__all__ = ["SavedOutfitStore"]
