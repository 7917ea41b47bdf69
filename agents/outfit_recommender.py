"""Outfit recommendation agent: wardrobe in, one generated outfit out."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from logic.errors import GenerationFailed, InsufficientWardrobe, MissingParameter, RecommendationError
from logic.partitioning import CandidateLists, partition_wardrobe
from logic.prompt_builder import build_recommendation_prompt
from logic.response_parsing import DEFAULT_STRATEGIES, extract_json_object, resolve_recommendation
from logic.result_assembler import assemble_outfit
from logic.validation import RecommendationSuccess, recommendation_failure
from models.outfit import RecommendationRequest, RecommendedOutfit
from tools.generative_client import GenerativeClient
from tools.wardrobe_store import WardrobeStore
from wardrobe_app.logging_config import get_logger, log_event, operation_context

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("user_id", "weather", "season", "occasion")


class OutfitRecommendationAgent:
    """Runs one stateless recommendation round trip per call.

    Stages: load wardrobe, partition by slot, build prompt, call the model
    once, parse and resolve the answer, assemble the outfit. Nothing is
    retried and nothing is cached between calls.
    """

    def __init__(self, store: WardrobeStore, client: GenerativeClient) -> None:
        self.store = store
        self.client = client

    @staticmethod
    def build_request(
        user_id: Optional[str],
        weather: Optional[str],
        season: Optional[str],
        occasion: Optional[str],
        additional_info: Optional[str] = None,
    ) -> RecommendationRequest:
        values = {"user_id": user_id, "weather": weather, "season": season, "occasion": occasion}
        missing = [key for key in _REQUIRED_FIELDS if not isinstance(values[key], str) or not values[key].strip()]
        if missing:
            raise MissingParameter(f"Missing required parameters: {', '.join(missing)}")
        return RecommendationRequest(
            user_id=user_id.strip(),
            weather=weather.strip(),
            season=season.strip(),
            occasion=occasion.strip(),
            additional_info=additional_info.strip() if isinstance(additional_info, str) and additional_info.strip() else None,
        )

    def load_candidates(self, user_id: str) -> CandidateLists:
        records = self.store.list_records_for_user(user_id)
        if not records:
            raise InsufficientWardrobe(
                "No clothing items found. Please add some clothes to your wardrobe first.", empty=True
            )
        candidates = partition_wardrobe(records)
        candidates.require_minimum()
        return candidates

    def run(self, request: RecommendationRequest) -> RecommendedOutfit:
        """Execute the pipeline, raising a RecommendationError on any failure."""

        candidates = self.load_candidates(request.user_id)
        log_event(
            logger,
            logging.INFO,
            "wardrobe_partitioned",
            tops=len(candidates.tops),
            bottoms=len(candidates.bottoms),
            shoes=len(candidates.shoes),
            other=len(candidates.other),
        )

        prompt = build_recommendation_prompt(request, candidates)
        try:
            raw_text = self.client.generate(prompt)
        except GenerationFailed:
            raise
        except Exception as exc:  # noqa: BLE001
            raise GenerationFailed(f"Generative model call failed: {exc}") from exc

        try:
            strategy, parsed = extract_json_object(raw_text, DEFAULT_STRATEGIES)
            log_event(logger, logging.INFO, "model_response_parsed", strategy=strategy)
            resolved = resolve_recommendation(parsed, candidates, request)
        except RecommendationError:
            log_event(logger, logging.WARNING, "model_response_rejected", raw_response=raw_text)
            raise

        return assemble_outfit(resolved)

    def recommend(
        self,
        user_id: Optional[str],
        weather: Optional[str],
        season: Optional[str],
        occasion: Optional[str],
        additional_info: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Boundary entry point: every error kind becomes a failure payload."""

        payload, _ = self.execute(user_id, weather, season, occasion, additional_info)
        return payload

    def execute(
        self,
        user_id: Optional[str],
        weather: Optional[str],
        season: Optional[str],
        occasion: Optional[str],
        additional_info: Optional[str] = None,
    ) -> Tuple[Dict[str, Any], Optional[RecommendationError]]:
        """Like :meth:`recommend` but also hands back the error, if any."""

        with operation_context("agent:outfit_recommender.recommend") as correlation_id:
            log_event(
                logger,
                logging.INFO,
                "agent_call_started",
                agent="outfit_recommender",
                method="recommend",
                correlation_id=correlation_id,
                user_id=user_id,
                weather=weather,
                season=season,
                occasion=occasion,
            )
            try:
                request = self.build_request(user_id, weather, season, occasion, additional_info)
                outfit = self.run(request)
            except RecommendationError as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "agent_call_failed",
                    agent="outfit_recommender",
                    method="recommend",
                    correlation_id=correlation_id,
                    error_kind=exc.kind,
                    details=exc.detail,
                )
                return recommendation_failure(exc), exc

            log_event(
                logger,
                logging.INFO,
                "agent_call_completed",
                agent="outfit_recommender",
                method="recommend",
                correlation_id=correlation_id,
                outfit_id=outfit.outfit_id,
                has_shoes=outfit.shoes is not None,
            )
            return RecommendationSuccess.model_validate({"outfit": outfit.to_dict()}).model_dump(), None


__all__ = ["OutfitRecommendationAgent"]
