"""Outfit schemas: requests, recommendations and saved combinations."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.clothing_item import ClothingItem


@dataclass
class RecommendationRequest:
    user_id: str
    weather: str
    season: str
    occasion: str
    additional_info: Optional[str] = None


@dataclass
class RecommendedOutfit:
    """An AI-generated outfit; never mutated after assembly."""

    outfit_id: str
    name: str
    description: str
    top: ClothingItem
    bottom: ClothingItem
    shoes: Optional[ClothingItem]
    occasion: str
    weather: str
    season: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.outfit_id,
            "name": self.name,
            "description": self.description,
            "top": self.top.to_dict(),
            "bottom": self.bottom.to_dict(),
            "shoes": self.shoes.to_dict() if self.shoes else None,
            "occasion": self.occasion,
            "weather": self.weather,
            "season": self.season,
            "date": self.created_at,
        }


@dataclass
class SavedOutfit:
    """A hand-assembled outfit; every slot is optional."""

    outfit_id: str
    name: str
    top: Optional[ClothingItem] = None
    bottom: Optional[ClothingItem] = None
    shoes: Optional[ClothingItem] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.outfit_id,
            "name": self.name,
            "top": self.top.to_dict() if self.top else None,
            "bottom": self.bottom.to_dict() if self.bottom else None,
            "shoes": self.shoes.to_dict() if self.shoes else None,
        }
