"""
Wire form of the compressed trie.

On the wire a trie is plain nested JSON: a branch is an object keyed by
edge label, a leaf is its encoded-timings string. An empty batch is sent
as an empty array, which receivers must tell apart from an empty object.
"""

import json
from typing import Any, Union

from .exceptions import DecodeError
from .trie import Branch, Leaf, TrieNode

Payload = Union[Branch, list]


def trie_to_dict(node: TrieNode) -> Union[dict, str]:
    """Convert a trie to nested dicts with string leaves."""
    if isinstance(node, Leaf):
        return node.value
    return {key: trie_to_dict(child) for key, child in node.children.items()}


def trie_from_dict(data: Any, path: str = "") -> TrieNode:
    """
    Rebuild a trie from its nested-dict form.

    Args:
        data: Nested dicts with string leaves
        path: Edge labels above data, for error messages

    Raises:
        DecodeError: If a node is neither a dict nor a string, or an edge
            label is empty
    """
    if isinstance(data, str):
        return Leaf(data)
    if not isinstance(data, dict):
        raise DecodeError(
            f"Trie node must be an object or string, got {type(data).__name__}",
            key=path,
        )

    children = {}
    for key, child in data.items():
        if not isinstance(key, str) or not key:
            raise DecodeError("Trie edge label must be a non-empty string", key=path)
        children[key] = trie_from_dict(child, path + key)
    return Branch(children)


def dumps_payload(payload: Payload) -> str:
    """
    Serialize a compression result to compact JSON.

    Args:
        payload: Root branch, or the empty list for an empty batch
    """
    if isinstance(payload, Branch):
        data = trie_to_dict(payload)
    else:
        data = list(payload)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def loads_payload(text: str) -> Payload:
    """
    Parse a JSON payload produced by dumps_payload().

    Returns:
        Root branch, or an empty list for an empty batch

    Raises:
        DecodeError: If text is not valid JSON or not a trie
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON payload: {e.msg}") from e

    if isinstance(data, list):
        if data:
            raise DecodeError("Array payload must be empty", content=text)
        return []
    if not isinstance(data, dict):
        raise DecodeError(
            f"Payload root must be an object, got {type(data).__name__}",
            content=text,
        )
    return trie_from_dict(data)
