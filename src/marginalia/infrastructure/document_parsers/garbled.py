"""Heuristic detection of garbled text from failed PDF extraction."""

import re

MIN_LENGTH = 100
SAMPLE_SIZE = 2000
MIN_WORD_RATIO = 0.4
MAX_SYMBOL_RATIO = 0.1
MIN_AVG_WORD_LENGTH = 3

_WORD = re.compile(r"[a-zA-Z]{3,}")
_SYMBOL = re.compile(r"[\[\]{}\\|^~`@#$%&*+=<>]")
_WHITESPACE = re.compile(r"\s")


def is_garbled(text: str | None) -> bool:
    """True when extracted text looks like a scanned or custom-encoded PDF.

    Texts under MIN_LENGTH characters carry too little signal and are
    treated as usable. Only the first SAMPLE_SIZE characters are inspected.
    """
    if not text or len(text) < MIN_LENGTH:
        return False

    sample = text[:SAMPLE_SIZE]
    words = _WORD.findall(sample)
    word_chars = sum(len(w) for w in words)
    total_chars = len(_WHITESPACE.sub("", sample))
    symbols = len(_SYMBOL.findall(sample))

    word_ratio = word_chars / total_chars if total_chars else 0.0
    symbol_ratio = symbols / total_chars if total_chars else 0.0
    avg_word_len = word_chars / len(words) if words else 0.0

    return (
        word_ratio < MIN_WORD_RATIO
        or symbol_ratio > MAX_SYMBOL_RATIO
        or (len(words) > 10 and avg_word_len < MIN_AVG_WORD_LENGTH)
    )
