"""Tag encoding for storage and parsing of model-generated tag lists."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List

LOGGER = logging.getLogger(__name__)


def encode_tags(tags: Iterable[str]) -> str:
    """Serialise tags to the JSON text stored in ``tags_text``."""

    return json.dumps([str(tag) for tag in tags])


def decode_tags(raw: Any) -> List[str]:
    """Decode persisted tags into an ordered list of strings.

    Accepts the JSON text encoding or an already-decoded list. Anything that
    does not decode to a list degrades to an empty list.
    """

    if raw is None or raw == "":
        return []
    if isinstance(raw, (list, tuple)):
        values = list(raw)
    else:
        try:
            values = json.loads(raw)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Could not decode stored tags: %s", exc)
            return []
    if not isinstance(values, list):
        LOGGER.warning("Stored tags are not a list: %s", type(values).__name__)
        return []
    return [str(value) for value in values if value is not None]


def parse_generated_tags(text: str) -> List[str]:
    """Turn a model's tag answer into lowercase tags.

    A bare JSON array is used as-is; anything else is treated as a
    comma-separated list.
    """

    stripped = (text or "").strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        try:
            values = json.loads(stripped)
        except ValueError:
            values = None
        if isinstance(values, list):
            return [str(v).strip().lower() for v in values if str(v).strip()]
    cleaned = stripped.strip("\"'")
    return [tag.strip().lower() for tag in cleaned.split(",") if tag.strip()]


def merge_tags(user_tags: Iterable[str], generated: Iterable[str]) -> List[str]:
    """Lowercase user tags first, then generated ones, first occurrence wins."""

    merged: List[str] = []
    seen = set()
    for tag in [*(str(t).strip().lower() for t in user_tags), *generated]:
        if tag and tag not in seen:
            merged.append(tag)
            seen.add(tag)
    return merged


__all__ = ["encode_tags", "decode_tags", "parse_generated_tags", "merge_tags"]
