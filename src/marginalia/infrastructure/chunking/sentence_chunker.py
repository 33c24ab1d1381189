"""Sentence-aligned overlapping text chunker."""

from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.domain.value_objects import TextSpan

SENTENCE_ENDERS = (". ", ".\n", "! ", "!\n", "? ", "?\n")
BOUNDARY_TOLERANCE = 50
LOOKAHEAD = 100


def find_sentence_end(window: str, target_length: int) -> int | None:
    """Return the offset just past the sentence terminator closest to target_length.

    Only terminators starting within target_length +/- BOUNDARY_TOLERANCE count.
    Ties go to the earlier boundary.
    """
    lo = target_length - BOUNDARY_TOLERANCE
    hi = target_length + BOUNDARY_TOLERANCE
    best: int | None = None
    best_distance = 0
    for ender in SENTENCE_ENDERS:
        pos = window.find(ender, max(lo, 0))
        while pos != -1 and pos <= hi:
            boundary = pos + len(ender)
            distance = abs(boundary - target_length)
            if best is None or distance < best_distance or (
                distance == best_distance and boundary < best
            ):
                best, best_distance = boundary, distance
            pos = window.find(ender, pos + 1)
    return best


class SentenceChunker:
    """Chunker that cuts near chunk_size, snapping to a nearby sentence end."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextSpan]:
        """Split text into overlapping spans addressed by offsets into text."""
        chunk_size = config.chunk_size
        overlap = config.chunk_overlap
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if overlap < 0 or overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap must be in [0, chunk_size), got {overlap} for size {chunk_size}"
            )

        length = len(text)
        spans: list[TextSpan] = []
        start = 0
        while start < length:
            end = start + chunk_size
            if end < length:
                window = text[start : min(end + LOOKAHEAD, length)]
                boundary = find_sentence_end(window, chunk_size)
                # A boundary inside the overlap would move the cursor backwards.
                if boundary is not None and boundary > overlap:
                    end = start + boundary
            end = min(end, length)

            piece = text[start:end]
            if piece.strip():
                spans.append(TextSpan(text=piece, start_position=start, end_position=end))

            start = end - overlap
            if start >= length - overlap:
                break
        return spans
