"""Unit tests for document_parsers.registry."""

import pytest

from marginalia.infrastructure.document_parsers.base import ParseResult
from marginalia.infrastructure.document_parsers.registry import (
    get_parser_for_content_type,
    get_parser_for_filename,
    parse_file,
    supported_extensions,
)


class TestGetParserForFilename:
    """Tests for get_parser_for_filename."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_filename(None) is None

    def test_txt_returns_parser(self) -> None:
        assert get_parser_for_filename("a.txt") is not None
        assert get_parser_for_filename("a.TXT") is not None

    def test_md_and_pdf_return_parser(self) -> None:
        for ext in ("md", "pdf"):
            assert get_parser_for_filename(f"file.{ext}") is not None

    def test_unsupported_extension_returns_none(self) -> None:
        for name in ("file.xyz", "report.docx", "sheet.xlsx"):
            assert get_parser_for_filename(name) is None


class TestGetParserForContentType:
    """Tests for get_parser_for_content_type."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_content_type(None) is None

    def test_known_types(self) -> None:
        assert get_parser_for_content_type("text/plain") is not None
        assert get_parser_for_content_type("text/markdown") is not None
        assert get_parser_for_content_type("application/pdf") is not None

    def test_content_type_with_charset(self) -> None:
        assert get_parser_for_content_type("text/plain; charset=utf-8") is not None

    def test_unknown_mime_returns_none(self) -> None:
        assert get_parser_for_content_type("application/octet-stream") is None


class TestParseFile:
    """Tests for parse_file."""

    def test_parse_txt_by_filename(self) -> None:
        result = parse_file(b"Hello world", filename="test.txt")
        assert isinstance(result, ParseResult)
        assert result.text == "Hello world"
        assert result.source_type == "txt"
        assert result.properties["source_file_name"] == "test.txt"

    def test_parse_by_content_type_when_no_filename(self) -> None:
        result = parse_file(b"# Notes\n\nbody", filename=None, content_type="text/markdown")
        assert result.source_type == "md"
        assert "body" in result.text

    def test_no_parser_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="No parser for file type"):
            parse_file(b"data", filename="file.xyz")
        with pytest.raises(ValueError, match="No parser for file type"):
            parse_file(b"data", filename=None, content_type="application/unknown")

    def test_unknown_extension_uses_content_type(self) -> None:
        result = parse_file(b"hello", filename="x.bin", content_type="text/plain")
        assert result.text == "hello"

    def test_corrupted_pdf_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid or corrupted PDF"):
            parse_file(b"definitely not a pdf", filename="broken.pdf")


def test_supported_extensions() -> None:
    assert supported_extensions() == ["md", "pdf", "txt"]
