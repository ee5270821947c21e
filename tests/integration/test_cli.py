"""
Integration tests for the compress_resource_timing command-line script.
"""

import json

import pytest

from scripts.compress_resource_timing import main

pytestmark = pytest.mark.integration


class TestCompressCommand:
    """Tests for compression via the CLI."""

    def test_compress_to_stdout(self, entries_file, capsys):
        exit_code = main(["--input", str(entries_file)])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert list(payload) == ["https://"]

    def test_compress_to_file_with_stats(self, entries_file, tmp_path, capsys):
        output = tmp_path / "payload.json"

        exit_code = main(["-i", str(entries_file), "-o", str(output), "--stats"])

        assert exit_code == 0
        assert output.read_text().endswith("\n")
        assert json.loads(output.read_text())

        err = capsys.readouterr().err
        stats, _ = json.JSONDecoder().raw_decode(err[err.index("{"):])
        assert stats["records_in"] == 8
        assert stats["records_skipped"] == 1
        assert stats["compressed_bytes"] < stats["raw_bytes"]

    def test_frame_snapshot_provider(self, snapshot_file, capsys):
        exit_code = main(["--provider", "frame_snapshot", "--input", str(snapshot_file)])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert "ads.example.net/creative.png" in payload["https://"]

    def test_default_provider_from_config(self, snapshot_file, tmp_path, capsys):
        config = tmp_path / "rt.yaml"
        config.write_text("ingestion:\n  default_provider: frame_snapshot\n")

        exit_code = main(["--config", str(config), "--input", str(snapshot_file)])

        assert exit_code == 0
        assert "creative.png" in capsys.readouterr().out

    def test_missing_input_fails(self, tmp_path):
        assert main(["--input", str(tmp_path / "missing.json")]) == 1

    def test_reserved_character_fails(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"name": "https://x/a|b", "startTime": 1}]))

        assert main(["--input", str(path)]) == 1

    def test_lenient_urls_from_config(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"name": "https://x/a|b", "startTime": 1}]))
        config = tmp_path / "rt.yaml"
        config.write_text("compression:\n  strict_urls: false\n")

        exit_code = main(["--config", str(config), "--input", str(path)])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "[]"

    def test_non_file_provider_in_config_fails(self, entries_file, tmp_path):
        config = tmp_path / "rt.yaml"
        config.write_text("ingestion:\n  default_provider: static\n")

        assert main(["--config", str(config), "--input", str(entries_file)]) == 1

    def test_invalid_config_fails(self, entries_file, tmp_path):
        config = tmp_path / "rt.yaml"
        config.write_text("logging:\n  level: LOUD\n")

        assert main(["--config", str(config), "--input", str(entries_file)]) == 1


class TestDecompressCommand:
    """Tests for decompression via the CLI."""

    def test_round_trip(self, entries_file, tmp_path, capsys):
        payload_file = tmp_path / "payload.json"
        assert main(["-i", str(entries_file), "-o", str(payload_file)]) == 0

        exit_code = main(["--decompress", "--input", str(payload_file)])

        assert exit_code == 0
        entries = json.loads(capsys.readouterr().out)
        assert len(entries) == 7
        names = [entry["name"] for entry in entries]
        assert names.count("https://shop.example.com/api/cart") == 2
        assert all("initiatorType" in entry for entry in entries)

    def test_empty_payload(self, tmp_path, capsys):
        payload_file = tmp_path / "payload.json"
        payload_file.write_text("[]")

        assert main(["--decompress", "-i", str(payload_file)]) == 0
        assert json.loads(capsys.readouterr().out) == []

    def test_corrupt_payload_fails(self, tmp_path):
        payload_file = tmp_path / "payload.json"
        payload_file.write_text('{"https://x/": 5}')

        assert main(["--decompress", "-i", str(payload_file)]) == 1
