"""
URL trie construction and optimization.

URLs are stored one character per edge, with each URL's encoded timings
as the leaf at the end of its path:

    {"h": {"t": {"t": {"p": ... {"a": "3,3c", "b": "1,5"}}}}}

If URL A is a prefix of URL B, A's value lives under the reserved "|"
key of the branch where A ends.

Optimization then collapses every chain of single-child branches into
one multi-character edge:

    {"http://example.com/": {"a": "3,3c", "b": "1,5"}}

A branch whose only child is its "|" leaf collapses too, leaving an edge
that ends in "|" (e.g. ``"a.js|"``). Since URLs never contain "|", an
edge ending in "|" always means "the URL ends here".
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Union

from ..config.constants import RESERVED_SEPARATOR
from .exceptions import ReservedCharacterError

logger = logging.getLogger(__name__)


# =============================================================================
# Trie Nodes
# =============================================================================


@dataclass
class Leaf:
    """Terminal trie node holding one URL's encoded timings."""

    value: str


@dataclass
class Branch:
    """Inner trie node mapping edge labels to child nodes."""

    children: dict[str, "TrieNode"] = field(default_factory=dict)

    @property
    def terminal(self) -> "Leaf | None":
        """The leaf for a URL ending exactly at this branch, if any."""
        node = self.children.get(RESERVED_SEPARATOR)
        return node if isinstance(node, Leaf) else None

    def __len__(self) -> int:
        return len(self.children)


TrieNode = Union[Leaf, Branch]


# =============================================================================
# Optimizer Results
# =============================================================================


@dataclass(frozen=True)
class NoChange:
    """The branch has several children and none of its subtree changed."""


@dataclass(frozen=True)
class ReplaceWithNode:
    """The branch was rebuilt; use node in its place."""

    node: Branch


@dataclass(frozen=True)
class MergeUp:
    """
    The branch has a single child.

    The parent should replace its edge ``k`` to this branch with an edge
    ``k + name`` pointing directly at value.
    """

    name: str
    value: TrieNode


OptimizeResult = Union[NoChange, ReplaceWithNode, MergeUp]


# =============================================================================
# Builder
# =============================================================================


def _join(existing: str, value: str) -> str:
    return f"{existing}{RESERVED_SEPARATOR}{value}"


def convert_to_trie(entries: Mapping[str, str]) -> Branch:
    """
    Convert a URL -> encoded-timings map into a character trie.

    Assumptions:
    1) Keys are unique (guaranteed by the mapping)
    2) Keys do not contain "|"
    3) Values are strings

    Args:
        entries: Encoded timings keyed by URL

    Returns:
        Root branch of the trie

    Raises:
        ReservedCharacterError: If a URL contains "|"
    """
    root = Branch()

    for url, value in entries.items():
        if RESERVED_SEPARATOR in url:
            raise ReservedCharacterError(url, RESERVED_SEPARATOR)

        if not url:
            _set_terminal(root, value)
            continue

        cur = root
        last = len(url) - 1

        for i, letter in enumerate(url):
            node = cur.children.get(letter)

            if i == last:
                if node is None:
                    cur.children[letter] = Leaf(value)
                elif isinstance(node, Leaf):
                    # only reachable by re-adding the same URL; keep both values
                    cur.children[letter] = Branch(
                        {RESERVED_SEPARATOR: Leaf(_join(node.value, value))}
                    )
                else:
                    _set_terminal(node, value)
                break

            if node is None:
                node = cur.children[letter] = Branch()
            elif isinstance(node, Leaf):
                # a shorter URL ends here; move its value under "|"
                node = cur.children[letter] = Branch({RESERVED_SEPARATOR: node})
            cur = node

    return root


def _set_terminal(branch: Branch, value: str) -> None:
    existing = branch.terminal
    if existing is None:
        branch.children[RESERVED_SEPARATOR] = Leaf(value)
    else:
        branch.children[RESERVED_SEPARATOR] = Leaf(_join(existing.value, value))


# =============================================================================
# Optimizer
# =============================================================================


def optimize_branch(branch: Branch, top: bool = False) -> OptimizeResult:
    """
    Optimize a branch by merging chains of single-child branches.

    Children are optimized first (post-order). The input branch is never
    modified; changed subtrees are rebuilt, unchanged ones are reused.

    Args:
        branch: Branch to optimize
        top: Whether this is the root of the trie

    Returns:
        For the root: always ReplaceWithNode.
        Otherwise: MergeUp when a single child remains, ReplaceWithNode
        when a descendant changed, NoChange when nothing did.
    """
    children: dict[str, TrieNode] = {}
    changed = False

    for key, node in branch.children.items():
        if isinstance(node, Branch):
            result = optimize_branch(node, top=False)
            if isinstance(result, MergeUp):
                children[key + result.name] = result.value
                changed = True
                continue
            if isinstance(result, ReplaceWithNode):
                children[key] = result.node
                changed = True
                continue
        children[key] = node

    if len(children) == 1:
        (key, node), = children.items()
        if top:
            # the root must stay a node, not a merge instruction
            return ReplaceWithNode(Branch({key: node}))
        return MergeUp(key, node)

    if top:
        return ReplaceWithNode(Branch(children) if changed else branch)

    if changed:
        return ReplaceWithNode(Branch(children))
    return NoChange()


def optimize_trie(root: Branch) -> Branch:
    """
    Optimize a whole trie.

    Args:
        root: Root branch as built by convert_to_trie()

    Returns:
        Root branch whose unbranching chains are single edges
    """
    result = optimize_branch(root, top=True)
    if isinstance(result, ReplaceWithNode):
        return result.node
    return root


# =============================================================================
# Traversal
# =============================================================================


def iter_trie(node: TrieNode, prefix: str = "") -> Iterator[tuple[str, str]]:
    """
    Yield every (url, encoded value) pair stored in a trie.

    Works on both raw and optimized tries: edge labels are concatenated,
    and a label ending in "|" (or the bare "|" key) terminates the URL.

    Args:
        node: Trie node to walk
        prefix: URL text accumulated above node

    Yields:
        (url, value) tuples in depth-first order
    """
    if isinstance(node, Leaf):
        yield prefix, node.value
        return

    for key, child in node.children.items():
        if key.endswith(RESERVED_SEPARATOR):
            label = key[: -len(RESERVED_SEPARATOR)]
        else:
            label = key
        yield from iter_trie(child, prefix + label)


def count_nodes(node: TrieNode) -> int:
    """Count every node (branches and leaves) in a trie."""
    if isinstance(node, Leaf):
        return 1
    return 1 + sum(count_nodes(child) for child in node.children.values())
