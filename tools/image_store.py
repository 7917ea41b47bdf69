"""Local file storage for uploaded clothing photos."""

from __future__ import annotations

import io
import logging
import secrets
import time
from pathlib import Path

from PIL import Image, UnidentifiedImageError

LOGGER = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"


class ImageRejected(ValueError):
    """Raised when an upload is empty, too large or not an image."""


class LocalImageStore:
    """Writes uploads under ``base_dir`` and hands back ``/uploads/<name>`` URLs."""

    def __init__(self, base_dir: str | Path = "data/uploads", max_bytes: int = 5 * 1024 * 1024) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.max_bytes = max_bytes

    @staticmethod
    def _unique_name(original: str | None) -> str:
        suffix = Path(original or "").suffix.lower() or ".jpg"
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"

    def validate(self, data: bytes) -> None:
        if not data:
            raise ImageRejected("No image file provided")
        if len(data) > self.max_bytes:
            raise ImageRejected(f"Image exceeds the {self.max_bytes} byte upload limit")
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageRejected("Uploaded file is not a readable image") from exc

    def save(self, original_filename: str | None, data: bytes) -> str:
        self.validate(data)
        filename = self._unique_name(original_filename)
        (self.base_dir / filename).write_bytes(data)
        return f"{URL_PREFIX}{filename}"

    def path_for(self, image_url: str) -> Path:
        # Only the basename is honoured so stored URLs cannot escape base_dir.
        return self.base_dir / Path(image_url).name

    def delete(self, image_url: str | None) -> bool:
        """Remove a stored image; a missing or undeletable file is only logged."""

        if not image_url:
            return False
        path = self.path_for(image_url)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            LOGGER.error("Error deleting image file", extra={"error": str(exc)})
            return False
        LOGGER.info("Deleted image file", extra={"image_url": image_url})
        return True


__all__ = ["ImageRejected", "LocalImageStore", "URL_PREFIX"]
