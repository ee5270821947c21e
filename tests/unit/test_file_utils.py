"""
Unit tests for ingestion file utilities.

Tests cover:
- Plain and gzip files (by extension and by magic bytes)
- Missing paths and directories
- NDJSON detection
- JSON document loading errors
"""

import gzip
from pathlib import Path

import pytest

from resourcetiming_compression.ingestion.exceptions import (
    ParseError,
    SourceValidationError,
)
from resourcetiming_compression.ingestion.file_utils import (
    is_line_delimited,
    load_json_document,
    open_text_auto_decompress,
)


class TestOpenTextAutoDecompress:
    """Tests for open_text_auto_decompress function."""

    def test_plain_text_file(self, tmp_path: Path) -> None:
        test_file = tmp_path / "entries.json"
        test_file.write_text("[]\n")

        with open_text_auto_decompress(test_file) as f:
            assert f.read() == "[]\n"

    def test_gzip_file_with_extension(self, tmp_path: Path) -> None:
        test_file = tmp_path / "entries.json.gz"
        with gzip.open(test_file, "wt", encoding="utf-8") as f:
            f.write('[{"name": "http://x/"}]')

        with open_text_auto_decompress(test_file) as f:
            assert f.read() == '[{"name": "http://x/"}]'

    def test_gzip_file_magic_bytes_no_extension(self, tmp_path: Path) -> None:
        """Gzip content is detected even without a .gz suffix."""
        test_file = tmp_path / "entries.json"
        with gzip.open(test_file, "wt", encoding="utf-8") as f:
            f.write("[]")

        with open_text_auto_decompress(test_file) as f:
            assert f.read() == "[]"

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(SourceValidationError) as exc_info:
            open_text_auto_decompress(tmp_path / "missing.json")

        assert exc_info.value.reason == "path does not exist"

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(SourceValidationError, match="not a file"):
            open_text_auto_decompress(tmp_path)

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        test_file = tmp_path / "entries.json"
        test_file.write_text("{}")

        with open_text_auto_decompress(str(test_file)) as f:
            assert f.read() == "{}"


class TestIsLineDelimited:
    """Tests for is_line_delimited function."""

    @pytest.mark.parametrize(
        "name",
        ["rt.ndjson", "rt.jsonl", "rt.ndjson.gz", "RT.JSONL", "page.rt.ndjson"],
    )
    def test_line_delimited(self, name):
        assert is_line_delimited(name)

    @pytest.mark.parametrize("name", ["rt.json", "rt.json.gz", "rt", "rt.gz"])
    def test_document(self, name):
        assert not is_line_delimited(name)


class TestLoadJsonDocument:
    """Tests for load_json_document function."""

    def test_loads_gzipped_document(self, tmp_path: Path) -> None:
        test_file = tmp_path / "snapshot.json.gz"
        with gzip.open(test_file, "wt", encoding="utf-8") as f:
            f.write('{"url": "https://example.com/"}')

        assert load_json_document(test_file) == {"url": "https://example.com/"}

    def test_invalid_json_reports_line(self, tmp_path: Path) -> None:
        test_file = tmp_path / "broken.json"
        test_file.write_text('[\n{"name": "http://x/"},\n{oops}\n]')

        with pytest.raises(ParseError) as exc_info:
            load_json_document(test_file)

        assert exc_info.value.line_number == 3
        assert exc_info.value.source == str(test_file)
        assert str(exc_info.value).startswith("Invalid JSON")
