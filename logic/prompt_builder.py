"""Prompt text for outfit recommendations and image tagging."""

from __future__ import annotations

from typing import Iterable, List, Optional

from logic.partitioning import CandidateLists
from models.clothing_item import ClothingItem
from models.outfit import RecommendationRequest

NO_PREFERENCES = "None specified"
NO_SHOES = "No shoes available"


def format_item_line(item: ClothingItem) -> str:
    return f'- ID: {item.item_id}, Name: "{item.name}", Tags: [{", ".join(item.tags)}]'


def _section(title: str, items: List[ClothingItem], empty_text: Optional[str] = None) -> str:
    header = f"{title} ({len(items)} items):"
    if not items and empty_text:
        return f"{header}\n{empty_text}"
    return "\n".join([header, *(format_item_line(item) for item in items)])


def build_recommendation_prompt(request: RecommendationRequest, candidates: CandidateLists) -> str:
    """Render the outfit prompt.

    The output contract is stated twice (schema, then a closing reminder);
    the response parser still treats whatever comes back as untrusted.
    """

    preferences = (request.additional_info or "").strip() or NO_PREFERENCES
    constraints = [
        f"- Weather: {request.weather}",
        f"- Season: {request.season}",
        f"- Occasion: {request.occasion}",
        f"- Additional preferences: {preferences}",
    ]
    schema = (
        "{\n"
        '  "name": "A creative name for the outfit",\n'
        '  "description": "A brief description of the outfit and why it works well for the given requirements",\n'
        '  "top": {"id": "ID of the selected top"},\n'
        '  "bottom": {"id": "ID of the selected bottom"},\n'
        '  "shoes": {"id": "ID of the selected shoes or null if no suitable shoes"},\n'
        f'  "occasion": "{request.occasion}",\n'
        f'  "weather": "{request.weather}",\n'
        f'  "season": "{request.season}"\n'
        "}"
    )
    return "\n\n".join(
        [
            "I need an outfit recommendation based on the following requirements:\n" + "\n".join(constraints),
            "Here are the clothing items available in the user's wardrobe:",
            _section("TOPS", candidates.tops),
            _section("BOTTOMS", candidates.bottoms),
            _section("SHOES", candidates.shoes, empty_text=NO_SHOES),
            "Based on these requirements and available items, create the perfect outfit by selecting "
            "exactly one top, exactly one bottom, and one pair of shoes (if available).",
            "Consider the following when making your recommendation:\n"
            f"1. Weather appropriateness - select items suitable for {request.weather} weather\n"
            f"2. Season compatibility - the outfit should be appropriate for {request.season}\n"
            f"3. Occasion suitability - the style should match {request.occasion} settings\n"
            "4. Color coordination and style matching between items\n"
            f"5. Take into account the additional preferences: {preferences}",
            "IMPORTANT: Your response MUST be a valid JSON object. "
            "Format your response with these exact fields (no other text):\n" + schema,
            "REMEMBER: Return ONLY the JSON object above, with double quotes around property names and "
            "string values. Use only IDs from the lists above. Do not include any explanations, "
            "markdown formatting, code fences, or other text.",
        ]
    )


def build_tagging_prompt(category: str, name: str, user_tags: Iterable[str] = ()) -> str:
    """Ask for 5-10 comma separated tags describing one clothing photo."""

    tags = [tag for tag in user_tags if tag]
    details = [f"- Category: {category}", f"- Name: {name}"]
    if tags:
        details.append(f"- User tags: {', '.join(tags)}")
    return (
        "Analyze this clothing image. Details:\n"
        + "\n".join(details)
        + "\n\nGenerate 5-10 tags for this clothing item covering:\n"
        "- Season appropriateness (summer, winter, fall, spring)\n"
        "- Occasions (casual, formal, party, work, etc.)\n"
        "- Style attributes (vintage, modern, classic, trendy, etc.)\n"
        "- Colors and patterns\n"
        "- Materials (when detectable)\n\n"
        "IMPORTANT: Return ONLY a comma-separated list of tags, nothing else.\n"
        'Example response: "summer, casual, floral, lightweight, cotton, blue, breathable, vacation"'
    )


__all__ = ["build_recommendation_prompt", "build_tagging_prompt", "format_item_line", "NO_PREFERENCES", "NO_SHOES"]
