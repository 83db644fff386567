# core/trie.py

from typing import Dict, List, Optional


class TrieNode:
    __slots__ = ("children", "word")

    def __init__(self):
        self.children: Dict[str, "TrieNode"] = {}
        self.word: Optional[str] = None


class Trie:
    """
    Prefix tree mapping romanised or Devanagari keys to display words.

    Inserting the same key twice keeps the last word. Children are kept in
    insertion order, which is also the order ``search`` yields them in.
    """

    def __init__(self):
        self.root = TrieNode()
        self.size = 0

    def insert(self, key: str, word: str) -> None:
        if not key or not word:
            return
        node = self.root
        for ch in key:
            node = node.children.setdefault(ch, TrieNode())
        if node.word is None:
            self.size += 1
        node.word = word

    def search(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        """
        Every stored word under ``prefix``, the prefix node's own word first

        Args:
            prefix: Key prefix
            limit: Stop after this many words

        Returns:
            Words in depth-first insertion order, ``[]`` if the prefix is absent
        """
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return []

        results: List[str] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.word:
                results.append(current.word)
                if limit is not None and len(results) >= limit:
                    break
            stack.extend(reversed(list(current.children.values())))
        return results

    def __len__(self) -> int:
        return self.size
