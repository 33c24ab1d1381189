"""Document parsers: extract text and metadata from files."""

from marginalia.infrastructure.document_parsers.base import ParseResult
from marginalia.infrastructure.document_parsers.garbled import is_garbled
from marginalia.infrastructure.document_parsers.registry import (
    parse_file,
    supported_extensions,
)

__all__ = ["ParseResult", "is_garbled", "parse_file", "supported_extensions"]
