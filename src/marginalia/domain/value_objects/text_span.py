"""Text span produced by chunking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextSpan:
    """Slice of a text with its offsets in the original string."""

    text: str
    start_position: int
    end_position: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_position < self.end_position:
            raise ValueError(
                f"Invalid span offsets: {self.start_position}..{self.end_position}"
            )
