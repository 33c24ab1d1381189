"""Lexical match score between a query and a text."""

TEXT_MATCH_SCORE = 0.6
SUBSTRING_BONUS = 0.3
MIN_WORD_LENGTH = 3
MIN_MATCH_RATIO = 0.5


def text_match_score(query: str, text: str) -> float:
    """Score in [0, 0.9].

    Whole-query substring match scores 0.9. Otherwise the share of query
    words (3+ chars) found in text, scaled by 0.6, or 0 below half coverage.
    """
    query_lower = query.strip().lower()
    if not query_lower:
        return 0.0
    text_lower = text.lower()

    if query_lower in text_lower:
        return TEXT_MATCH_SCORE + SUBSTRING_BONUS

    words = [w for w in query_lower.split() if len(w) >= MIN_WORD_LENGTH]
    if not words:
        return 0.0

    matched = sum(1 for w in words if w in text_lower)
    ratio = matched / len(words)
    return TEXT_MATCH_SCORE * ratio if ratio >= MIN_MATCH_RATIO else 0.0
