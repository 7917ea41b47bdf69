"""Upload-time tagging agent that asks the model to describe a photo."""

from __future__ import annotations

import logging
from typing import Iterable, List

from logic.prompt_builder import build_tagging_prompt
from logic.tags import merge_tags, parse_generated_tags
from tools.generative_client import GenerativeClient
from wardrobe_app.logging_config import get_logger, log_event, operation_context

logger = get_logger(__name__)


class WardrobeTaggingAgent:
    """Enriches user tags with model-generated ones; never blocks an upload."""

    def __init__(self, client: GenerativeClient) -> None:
        self.client = client

    def generate_tags(
        self,
        image_bytes: bytes,
        category: str,
        name: str,
        user_tags: Iterable[str] = (),
    ) -> List[str]:
        """Return lowercased user tags followed by new generated tags.

        When the model call fails the user tags are returned unchanged.
        """

        user_tags = [str(tag) for tag in user_tags]
        with operation_context("agent:wardrobe_tagger.generate_tags") as correlation_id:
            prompt = build_tagging_prompt(category, name, user_tags)
            try:
                text = self.client.generate_with_image(prompt, image_bytes)
            except Exception as exc:  # noqa: BLE001
                log_event(
                    logger,
                    logging.WARNING,
                    "tag_generation_failed",
                    correlation_id=correlation_id,
                    category=category,
                    details=getattr(exc, "detail", str(exc)),
                )
                return user_tags

            generated = parse_generated_tags(text)
            tags = merge_tags(user_tags, generated)
            log_event(
                logger,
                logging.INFO,
                "tag_generation_completed",
                correlation_id=correlation_id,
                category=category,
                user_tag_count=len(user_tags),
                tag_count=len(tags),
            )
            return tags


__all__ = ["WardrobeTaggingAgent"]
