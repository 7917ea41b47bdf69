"""Model package exports."""

from models.clothing_item import ClothingItem, from_upload
from models.outfit import RecommendationRequest, RecommendedOutfit, SavedOutfit

__all__ = ["ClothingItem", "from_upload", "RecommendationRequest", "RecommendedOutfit", "SavedOutfit"]
