"""Relevance tier derived from a continuous score."""

from enum import StrEnum


class RelevanceLevel(StrEnum):
    """Coarse relevance label shown next to search results."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: float) -> "RelevanceLevel":
        if score >= 0.7:
            return cls.HIGH
        if score >= 0.5:
            return cls.MEDIUM
        return cls.LOW
