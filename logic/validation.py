"""Pydantic schemas for the HTTP payloads and pipeline results."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from logic.errors import RecommendationError


class RecommendationPayload(BaseModel):
    """Inbound recommendation request.

    Fields are optional here so that absence is reported as a
    ``MissingParameter`` failure instead of a framework validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    weather: Optional[str] = None
    season: Optional[str] = None
    occasion: Optional[str] = None
    additional_info: Optional[str] = Field(None, alias="additionalInfo")


class ClothingItemOut(BaseModel):
    id: str
    user_id: str
    name: str
    category: str
    image_url: str
    tags: List[str] = []
    created_at: float


class RecommendedOutfitOut(BaseModel):
    id: str
    name: str
    description: str
    top: ClothingItemOut
    bottom: ClothingItemOut
    shoes: Optional[ClothingItemOut] = None
    occasion: str
    weather: str
    season: str
    date: str


class RecommendationSuccess(BaseModel):
    success: Literal[True] = True
    outfit: RecommendedOutfitOut


class RecommendationFailure(BaseModel):
    success: Literal[False] = False
    error: str
    details: str


class SavedOutfitPayload(BaseModel):
    """A saved outfit as sent by the client; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    top: Optional[Dict[str, Any]] = None
    bottom: Optional[Dict[str, Any]] = None
    shoes: Optional[Dict[str, Any]] = None


class ManualOutfitPayload(BaseModel):
    name: str
    top_id: Optional[str] = None
    bottom_id: Optional[str] = None
    shoes_id: Optional[str] = None


def recommendation_failure(exc: RecommendationError) -> Dict[str, Any]:
    """Translate a pipeline error into the structured failure payload."""

    return RecommendationFailure(error=exc.kind, details=exc.detail).model_dump()


__all__ = [
    "ClothingItemOut",
    "ManualOutfitPayload",
    "RecommendationFailure",
    "RecommendationPayload",
    "RecommendationSuccess",
    "RecommendedOutfitOut",
    "SavedOutfitPayload",
    "recommendation_failure",
]
