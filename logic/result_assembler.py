"""Final assembly of a RecommendedOutfit from a resolved model answer."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from logic.response_parsing import ResolvedRecommendation
from models.outfit import RecommendedOutfit

DEFAULT_OUTFIT_NAME = "Recommended Outfit"


def assemble_outfit(
    resolved: ResolvedRecommendation,
    *,
    outfit_id: str | None = None,
    created_at: datetime | None = None,
) -> RecommendedOutfit:
    timestamp = (created_at or datetime.now(timezone.utc)).isoformat()
    return RecommendedOutfit(
        outfit_id=outfit_id or f"rec-{uuid.uuid4().hex}",
        name=resolved.name or DEFAULT_OUTFIT_NAME,
        description=resolved.description or "",
        top=resolved.top,
        bottom=resolved.bottom,
        shoes=resolved.shoes,
        occasion=resolved.occasion,
        weather=resolved.weather,
        season=resolved.season,
        created_at=timestamp,
    )


__all__ = ["assemble_outfit", "DEFAULT_OUTFIT_NAME"]
