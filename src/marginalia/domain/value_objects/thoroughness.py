"""Thoroughness level - how many chunks are considered and how weak a match is accepted."""

from dataclasses import dataclass
from enum import StrEnum


class ThoroughnessLevel(StrEnum):
    """Caller-selected analysis depth."""

    QUICK = "quick"
    STANDARD = "standard"
    THOROUGH = "thorough"
    EXHAUSTIVE = "exhaustive"


@dataclass(frozen=True)
class ThoroughnessPolicy:
    """Candidate bounds for one level. max_chunks None means the whole document."""

    max_chunks: int | None
    min_similarity: float


THOROUGHNESS_POLICIES: dict[ThoroughnessLevel, ThoroughnessPolicy] = {
    ThoroughnessLevel.QUICK: ThoroughnessPolicy(max_chunks=10, min_similarity=0.3),
    ThoroughnessLevel.STANDARD: ThoroughnessPolicy(max_chunks=30, min_similarity=0.3),
    ThoroughnessLevel.THOROUGH: ThoroughnessPolicy(max_chunks=100, min_similarity=0.3),
    ThoroughnessLevel.EXHAUSTIVE: ThoroughnessPolicy(max_chunks=None, min_similarity=0.1),
}


def parse_thoroughness(value: object) -> ThoroughnessLevel:
    """Parse a level name; anything unrecognized falls back to STANDARD."""
    if isinstance(value, ThoroughnessLevel):
        return value
    if isinstance(value, str):
        try:
            return ThoroughnessLevel(value.strip().lower())
        except ValueError:
            pass
    return ThoroughnessLevel.STANDARD


def policy_for(level: object) -> ThoroughnessPolicy:
    """Policy for a level name or enum member (unknown -> standard)."""
    return THOROUGHNESS_POLICIES[parse_thoroughness(level)]
