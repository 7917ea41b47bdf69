"""Application container wiring stores, the model client and agents."""

import logging
from typing import Any, Dict, Optional

from agents.outfit_recommender import OutfitRecommendationAgent
from agents.wardrobe_tagger import WardrobeTaggingAgent
from logic.outfit_builder import create_manual_outfit
from memory.saved_outfits import SavedOutfitStore
from tools.generative_client import GeminiClient, GenerativeClient
from tools.image_store import LocalImageStore
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools
from wardrobe_app.config import AppConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event

LOGGER = get_logger(__name__)


class WardrobeApp:
    """Builds every collaborator once; tests inject a client or store."""

    def __init__(
        self,
        config: AppConfig | None = None,
        client: GenerativeClient | None = None,
        store: WardrobeStore | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()

        self.client = client or GeminiClient(api_key=self.config.gemini_api_key, model=self.config.model)
        self.wardrobe_store = store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.image_store = LocalImageStore(self.config.upload_dir, max_bytes=self.config.max_upload_bytes)
        self.saved_outfits = SavedOutfitStore(self.config.saved_outfits_dir)

        self.tagger = WardrobeTaggingAgent(self.client)
        self.recommender = OutfitRecommendationAgent(self.wardrobe_store, self.client)
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store, self.image_store, self.tagger)

    def recommend_outfit(
        self,
        *,
        user_id: Optional[str],
        weather: Optional[str],
        season: Optional[str],
        occasion: Optional[str],
        additional_info: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self.recommender.recommend(user_id, weather, season, occasion, additional_info)

    def save_manual_outfit(
        self,
        user_id: str,
        name: str,
        top_id: Optional[str] = None,
        bottom_id: Optional[str] = None,
        shoes_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build an outfit from the user's wardrobe and append it to their list."""

        items = self.wardrobe_store.list_items_for_user(user_id)
        outfit = create_manual_outfit(items, name, top_id=top_id, bottom_id=bottom_id, shoes_id=shoes_id)
        saved = self.saved_outfits.save_outfit(user_id, outfit.to_dict())
        log_event(
            LOGGER,
            logging.INFO,
            "manual_outfit_saved",
            user_id=user_id,
            outfit_id=outfit.outfit_id,
        )
        return saved


__all__ = ["WardrobeApp"]
