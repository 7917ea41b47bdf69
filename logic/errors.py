"""Failure kinds raised by the outfit recommendation pipeline."""

from __future__ import annotations


class RecommendationError(Exception):
    """Base class; ``kind`` is the machine-readable name sent to callers."""

    kind = "RecommendationError"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MissingParameter(RecommendationError):
    kind = "MissingParameter"


class InsufficientWardrobe(RecommendationError):
    kind = "InsufficientWardrobe"

    def __init__(self, detail: str, *, empty: bool = False) -> None:
        super().__init__(detail)
        self.empty = empty


class GenerationFailed(RecommendationError):
    kind = "GenerationFailed"


class MalformedRecommendation(RecommendationError):
    kind = "MalformedRecommendation"


class IncompleteRecommendation(RecommendationError):
    kind = "IncompleteRecommendation"


class UnknownItemReference(RecommendationError):
    kind = "UnknownItemReference"


__all__ = [
    "RecommendationError",
    "MissingParameter",
    "InsufficientWardrobe",
    "GenerationFailed",
    "MalformedRecommendation",
    "IncompleteRecommendation",
    "UnknownItemReference",
]
