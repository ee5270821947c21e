"""
Unit tests for the payload wire form.
"""

import json

import pytest

from resourcetiming_compression.compression import (
    Branch,
    DecodeError,
    Leaf,
    compress,
    dumps_payload,
    loads_payload,
    trie_from_dict,
    trie_to_dict,
)


class TestTrieToDict:
    """Tests for trie_to_dict function."""

    def test_nested(self):
        trie = Branch({"/a": Branch({"|": Leaf("1"), "b": Leaf("2")})})
        assert trie_to_dict(trie) == {"/a": {"|": "1", "b": "2"}}

    def test_empty_branch(self):
        assert trie_to_dict(Branch()) == {}


class TestTrieFromDict:
    """Tests for trie_from_dict function."""

    def test_nested(self):
        trie = trie_from_dict({"/a": {"|": "1", "b": "2"}})
        assert trie == Branch({"/a": Branch({"|": Leaf("1"), "b": Leaf("2")})})

    def test_non_string_leaf(self):
        with pytest.raises(DecodeError) as exc_info:
            trie_from_dict({"/a": {"b": 5}})

        assert exc_info.value.key == "/ab"

    def test_empty_edge_label(self):
        with pytest.raises(DecodeError):
            trie_from_dict({"": "1"})


class TestDumpsPayload:
    """Tests for dumps_payload function."""

    def test_compact(self, script_record):
        text = dumps_payload(compress([script_record]))
        assert text == '{"http://example.com/app.js":"3,3c"}'

    def test_empty_batch_is_array(self):
        assert dumps_payload([]) == "[]"

    def test_non_ascii_kept(self):
        text = dumps_payload(Branch({"http://example.com/é": Leaf("0")}))
        assert "é" in text


class TestLoadsPayload:
    """Tests for loads_payload function."""

    def test_round_trip(self, page_records):
        payload = compress(page_records)
        assert loads_payload(dumps_payload(payload)) == payload

    def test_empty_array(self):
        assert loads_payload("[]") == []

    def test_empty_object_is_a_branch(self):
        """{} and [] are distinct on the wire."""
        assert loads_payload("{}") == Branch()

    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="Invalid JSON payload"):
            loads_payload("{not json")

    def test_non_empty_array(self):
        with pytest.raises(DecodeError):
            loads_payload(json.dumps(["3,3c"]))

    def test_scalar_root(self):
        with pytest.raises(DecodeError):
            loads_payload('"3,3c"')
