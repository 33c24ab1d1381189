"""Base protocol for document parsers."""

from typing import Protocol


class ParseResult:
    """Result of parsing a file: extracted text, source format and metadata."""

    __slots__ = ("text", "source_type", "properties")

    def __init__(
        self,
        text: str,
        source_type: str,
        properties: dict[str, str] | None = None,
    ) -> None:
        self.text = text
        self.source_type = source_type
        self.properties = properties or {}


class DocumentParser(Protocol):
    """Parser that extracts text and metadata from file bytes."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Extract text and metadata. Raises ValueError on parse error."""
        ...
