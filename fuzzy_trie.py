"""
Trie (Prefix Tree) with prefix and fuzzy (subsequence) search.

Techniques used:
  - One symbol per edge: every inserted key shares the maximal common-prefix
    path with the keys already present and diverges at the first differing
    symbol.
  - Iterative traversal: all public methods avoid recursion so the call
    stack stays constant regardless of key length.
  - One DFS core: exact enumeration, prefix search and fuzzy search walk the
    tree with the same explicit-stack generator, differing only in where
    they start and which terminal nodes they accept.
  - Bounded pruning: removal walks back up the recorded ancestor chain only.

Complexity (n = key length, m = number of matches, N = nodes in the trie):
  add / remove / contains    — O(n)
  keys                       — O(N)
  iter_prefix / iter_fuzzy   — lazy, stop once the caller has enough
  prefix_search              — O(n + size of the subtree under the prefix)
  fuzzy_search               — O(N), every node is visited
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass
class _TrieNode:
    """Internal node of the trie."""

    children: dict[str, _TrieNode] = field(default_factory=dict)
    is_end: bool = False


def _check_str(value: object, name: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, not {type(value).__name__}")


class Trie:
    """A prefix tree over strings.

    >>> t = Trie()
    >>> t.add("foo")
    3
    >>> t.add("football")
    5
    >>> t.prefix_search("foot")
    ['football']
    >>> sorted(t.fuzzy_search("fl"))
    ['football']
    >>> t.remove("football")
    >>> t.keys()
    ['foo']
    """

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, key: str) -> int:
        """Insert *key*; return how many nodes had to be created for it."""
        _check_str(key, "key")
        node = self._root
        created = 0
        for char in key:
            child = node.children.get(char)
            if child is None:
                child = _TrieNode()
                node.children[char] = child
                created += 1
            node = child
        if not node.is_end:
            node.is_end = True
            self._size += 1
        logger.debug("add key=%r created=%d", key, created)
        return created

    def remove(self, key: str) -> None:
        """Remove *key* from the trie. Absent keys are ignored."""
        _check_str(key, "key")
        path: list[tuple[_TrieNode, str]] = []
        node = self._root
        for char in key:
            child = node.children.get(char)
            if child is None:
                return
            path.append((node, char))
            node = child
        if not node.is_end:
            return
        node.is_end = False
        self._size -= 1
        # Drop dead tail nodes; stop at the first terminal or branching ancestor.
        pruned = 0
        while path and not node.children and not node.is_end:
            parent, edge_char = path.pop()
            del parent.children[edge_char]
            pruned += 1
            node = parent
        logger.debug("remove key=%r pruned=%d", key, pruned)

    def keys(self) -> list[str]:
        """Return every stored key in lexicographic order."""
        return list(self._walk(self._root, ""))

    def iter_prefix(self, prefix: str) -> Iterator[str]:
        """Yield the keys beginning with *prefix* lazily, in lexicographic order."""
        _check_str(prefix, "prefix")
        node = self._find_node(prefix)
        if node is None:
            return iter(())
        return self._walk(node, prefix)

    def prefix_search(self, prefix: str) -> list[str]:
        """Return the stored keys beginning with *prefix*, in lexicographic order."""
        return list(self.iter_prefix(prefix))

    def iter_fuzzy(self, pattern: str) -> Iterator[str]:
        """Yield the keys containing *pattern* as a subsequence, lazily."""
        _check_str(pattern, "pattern")
        return self._walk(self._root, "", pattern)

    def fuzzy_search(self, pattern: str) -> list[str]:
        """Return the stored keys that contain *pattern* as a subsequence.

        The symbols of *pattern* must appear in the key in the same order,
        with arbitrary gaps. An empty pattern matches every key.
        """
        return list(self.iter_fuzzy(pattern))

    def node_count(self) -> int:
        """Number of nodes below the root."""
        count = 0
        stack = [self._root]
        while stack:
            current = stack.pop()
            count += len(current.children)
            stack.extend(current.children.values())
        return count

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        node = self._find_node(key)
        return node is not None and node.is_end

    def __iter__(self) -> Iterator[str]:
        return self._walk(self._root, "")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _find_node(self, key: str) -> _TrieNode | None:
        """Walk the trie following *key*; return the landing node or None."""
        node = self._root
        for char in key:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    @staticmethod
    def _walk(start: _TrieNode, prefix: str, pattern: str = "") -> Iterator[str]:
        """Depth-first walk below *start* in ascending symbol order.

        Yields the key of every terminal node whose path from the root
        contains *pattern* as a subsequence. The cursor into *pattern*
        advances greedily on each matching symbol and never blocks descent,
        so with an empty pattern every terminal node is yielded.
        """
        target = len(pattern)
        # DFS with explicit stack: (node, accumulated_key, pattern_cursor)
        stack: list[tuple[_TrieNode, str, int]] = [(start, prefix, 0)]
        while stack:
            current, acc, cursor = stack.pop()
            if current.is_end and cursor == target:
                yield acc
            for char in sorted(current.children, reverse=True):
                nxt = cursor + 1 if cursor < target and char == pattern[cursor] else cursor
                stack.append((current.children[char], acc + char, nxt))


def create_trie() -> Trie:
    """Return an empty trie."""
    return Trie()


def add_from_file(trie: Trie, path: str) -> int:
    """Add each line of the word list at *path*; return the number of lines.

    Only the line terminator is stripped. A blank line adds the empty key.
    """
    added = 0
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            trie.add(line.rstrip("\r\n"))
            added += 1
    logger.info("Loaded %d words from %s", added, path)
    return added
