"""Parser for plain text and markdown."""

import re
from pathlib import Path

from marginalia.infrastructure.document_parsers.base import ParseResult

_SPACE_RUNS = re.compile(r" +")


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, falling back to cp1251 and finally replacement chars."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return data.decode("cp1251")
        except UnicodeDecodeError:
            return data.decode("utf-8", errors="replace")


def normalize_text(content: str) -> str:
    """Unify line endings, turn tabs into spaces, collapse space runs, trim."""
    content = content.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    return _SPACE_RUNS.sub(" ", content).strip()


def _file_properties(filename: str | None) -> dict[str, str]:
    if not filename:
        return {}
    return {"source_file_name": Path(filename).name}


def parse_txt(data: bytes, filename: str | None = None) -> ParseResult:
    """Plain text (.txt)."""
    return ParseResult(
        text=normalize_text(decode_text(data)),
        source_type="txt",
        properties=_file_properties(filename),
    )


def parse_md(data: bytes, filename: str | None = None) -> ParseResult:
    """Markdown (.md) - treated as plain text."""
    return ParseResult(
        text=normalize_text(decode_text(data)),
        source_type="md",
        properties=_file_properties(filename),
    )
