"""Prefix trie for word and prefix lookups."""

from typing import Dict, Iterator, Optional


class TrieNode:
    """Single node in the prefix trie."""

    __slots__ = ("children", "is_terminal")

    def __init__(self):
        self.children: Dict[str, "TrieNode"] = {}
        self.is_terminal: bool = False


class Trie:
    """Uppercase prefix trie: O(len) word checks and prefix checks."""

    def __init__(self):
        self.root = TrieNode()
        self.size = 0

    def insert(self, word: str) -> None:
        node = self.root
        for ch in word.upper():
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_terminal:
            node.is_terminal = True
            self.size += 1

    def is_word(self, word: str) -> bool:
        node = self._walk(word.upper())
        return node is not None and node.is_terminal

    def is_prefix(self, prefix: str) -> bool:
        return self._walk(prefix.upper()) is not None

    def words_with_prefix(self, prefix: str) -> Iterator[str]:
        """Yield stored words starting with prefix, shortest first then alphabetical."""
        prefix = prefix.upper()
        start = self._walk(prefix)
        if start is None:
            return

        level = [(prefix, start)]
        while level:
            next_level = []
            for stem, node in level:
                if node.is_terminal:
                    yield stem
                for ch in sorted(node.children):
                    next_level.append((stem + ch, node.children[ch]))
            level = next_level

    def _walk(self, s: str) -> Optional[TrieNode]:
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node
