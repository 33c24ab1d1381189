"""Registry: select parser by extension/MIME and return normalized ParseResult."""

from collections.abc import Callable
from pathlib import Path

from marginalia.infrastructure.document_parsers.base import ParseResult
from marginalia.infrastructure.document_parsers.pdf_parser import parse_pdf
from marginalia.infrastructure.document_parsers.text_parser import parse_md, parse_txt

# extension (lower) -> parse function
_PARSERS_BY_EXT: dict[str, Callable[..., ParseResult]] = {
    "txt": parse_txt,
    "md": parse_md,
    "pdf": parse_pdf,
}

_MIME_TO_EXT: dict[str, str] = {
    "text/plain": "txt",
    "text/markdown": "md",
    "application/pdf": "pdf",
}


def get_parser_for_filename(filename: str | None) -> Callable[..., ParseResult] | None:
    """Return parse function for given filename (by extension) or None."""
    if not filename:
        return None
    ext = Path(filename).suffix.lstrip(".").lower()
    return _PARSERS_BY_EXT.get(ext)


def get_parser_for_content_type(content_type: str | None) -> Callable[..., ParseResult] | None:
    """Return parse function for MIME type or None."""
    if not content_type:
        return None
    mime = content_type.split(";")[0].strip().lower()
    ext = _MIME_TO_EXT.get(mime)
    if not ext:
        return None
    return _PARSERS_BY_EXT.get(ext)


def parse_file(
    data: bytes,
    filename: str | None = None,
    content_type: str | None = None,
) -> ParseResult:
    """
    Select parser by filename (extension) or content_type, run it, return ParseResult.
    Raises ValueError if no parser found or parse failed.
    """
    parser = get_parser_for_filename(filename) or get_parser_for_content_type(content_type)
    if not parser:
        ext = Path(filename).suffix if filename else content_type or "unknown"
        raise ValueError(f"No parser for file type: {ext}")
    return parser(data, filename)


def supported_extensions() -> list[str]:
    """Return list of supported file extensions."""
    return sorted(_PARSERS_BY_EXT.keys())
