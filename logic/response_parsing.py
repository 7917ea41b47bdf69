"""Defensive parsing of free-text model output into a resolved outfit.

Extraction runs an ordered list of strategies and stops at the first one that
yields a JSON object. Validation then treats every field as untrusted: slot
references must resolve against the requester's own candidate lists.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from logic.errors import IncompleteRecommendation, MalformedRecommendation, UnknownItemReference
from logic.partitioning import CandidateLists
from models.clothing_item import ClothingItem
from models.outfit import RecommendationRequest

JsonObject = Dict[str, Any]
ParseStrategy = Callable[[str], Optional[JsonObject]]


def _loads_object(text: str) -> Optional[JsonObject]:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def parse_direct(text: str) -> Optional[JsonObject]:
    """The whole response is the JSON object."""

    return _loads_object(text)


def parse_brace_span(text: str) -> Optional[JsonObject]:
    """Greedy span from the first ``{`` to the last ``}``."""

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return _loads_object(text[start : end + 1])


def _closed_brace_spans(text: str) -> List[Tuple[int, int]]:
    """``(start, end)`` of every closed ``{...}`` block, found in one pass.

    Quotes only open a string while a brace is open, so quoted prose before
    the object does not hide it.
    """

    spans: List[Tuple[int, int]] = []
    open_positions: List[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"' and open_positions:
            in_string = True
        elif char == "{":
            open_positions.append(index)
        elif char == "}" and open_positions:
            spans.append((open_positions.pop(), index))
    return spans


def parse_balanced_braces(text: str) -> Optional[JsonObject]:
    """First balanced ``{...}`` block, by start position, that parses as an object.

    Only reached when the greedy span fails, typically because prose around
    the object contains stray braces.
    """

    for start, end in sorted(_closed_brace_spans(text)):
        parsed = _loads_object(text[start : end + 1])
        if parsed is not None:
            return parsed
    return None


DEFAULT_STRATEGIES: Tuple[Tuple[str, ParseStrategy], ...] = (
    ("direct", parse_direct),
    ("brace_span", parse_brace_span),
    ("balanced_braces", parse_balanced_braces),
)


def extract_json_object(
    text: str, strategies: Sequence[Tuple[str, ParseStrategy]] = DEFAULT_STRATEGIES
) -> Tuple[str, JsonObject]:
    """Return ``(strategy_name, object)`` from the first strategy that succeeds."""

    for name, strategy in strategies:
        parsed = strategy(text or "")
        if parsed is not None:
            return name, parsed
    raise MalformedRecommendation("Could not parse a JSON object from the model response")


@dataclass(frozen=True)
class ResolvedRecommendation:
    """Validated model output with slot ids replaced by wardrobe items."""

    name: Optional[str]
    description: Optional[str]
    top: ClothingItem
    bottom: ClothingItem
    shoes: Optional[ClothingItem]
    occasion: str
    weather: str
    season: str


def _required_slot_id(parsed: JsonObject, slot: str) -> Any:
    ref = parsed.get(slot)
    if not isinstance(ref, dict) or ref.get("id") in (None, ""):
        raise IncompleteRecommendation(f"Missing required outfit item '{slot}' in response")
    return ref["id"]


def _text_or_none(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) and value.strip() else None


def resolve_recommendation(
    parsed: JsonObject, candidates: CandidateLists, request: RecommendationRequest
) -> ResolvedRecommendation:
    """Check required slots and cross-reference ids against the wardrobe."""

    top_id = _required_slot_id(parsed, "top")
    bottom_id = _required_slot_id(parsed, "bottom")

    top = candidates.resolve("top", top_id)
    bottom = candidates.resolve("bottom", bottom_id)
    unresolved = [
        f"{slot}={ref_id!r}" for slot, ref_id, item in (("top", top_id, top), ("bottom", bottom_id, bottom)) if item is None
    ]
    if unresolved:
        raise UnknownItemReference(
            "Could not find all recommended items in your wardrobe: " + ", ".join(unresolved)
        )

    shoes = None
    shoes_ref = parsed.get("shoes")
    if isinstance(shoes_ref, dict):
        shoes = candidates.resolve("shoes", shoes_ref.get("id"))

    return ResolvedRecommendation(
        name=_text_or_none(parsed.get("name")),
        description=_text_or_none(parsed.get("description")),
        top=top,
        bottom=bottom,
        shoes=shoes,
        occasion=_text_or_none(parsed.get("occasion")) or request.occasion,
        weather=_text_or_none(parsed.get("weather")) or request.weather,
        season=_text_or_none(parsed.get("season")) or request.season,
    )


def parse_recommendation(
    text: str,
    candidates: CandidateLists,
    request: RecommendationRequest,
    strategies: Sequence[Tuple[str, ParseStrategy]] = DEFAULT_STRATEGIES,
) -> ResolvedRecommendation:
    _, parsed = extract_json_object(text, strategies)
    return resolve_recommendation(parsed, candidates, request)


__all__ = [
    "DEFAULT_STRATEGIES",
    "ResolvedRecommendation",
    "extract_json_object",
    "parse_balanced_braces",
    "parse_brace_span",
    "parse_direct",
    "parse_recommendation",
    "resolve_recommendation",
]
