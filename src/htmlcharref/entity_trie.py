"""Prefix tree over named character reference names.

Names are stored exactly as the entity table spells them, so ``amp`` and
``amp;`` are two terminal nodes on the same path. The named decoder walks
the tree one stream character at a time with ``child()`` and remembers the
deepest terminal it passed, which is the longest-match rule HTML uses.
"""


class TrieNode:
    __slots__ = ("children", "expansion", "is_terminal")

    def __init__(self):
        self.children = {}
        self.expansion = None
        self.is_terminal = False


class Trie:
    """Entity name -> expansion lookup with incremental prefix walking.

    Usage:
        trie = Trie({"not": "\\u00ac", "not;": "\\u00ac", "notin;": "\\u2209"})
        trie.longest_prefix_item("notit;")   # ("not", "\\u00ac")
    """

    __slots__ = ("root", "size")

    def __init__(self, entities=None):
        self.root = TrieNode()
        self.size = 0
        if entities:
            for name, expansion in entities.items():
                self.insert(name, expansion)

    def insert(self, name, expansion):
        if not name:
            raise ValueError("Entity name cannot be empty")
        node = self.root
        for char in name:
            children = node.children
            next_node = children.get(char)
            if next_node is None:
                next_node = children[char] = TrieNode()
            node = next_node
        if not node.is_terminal:
            self.size += 1
        node.is_terminal = True
        node.expansion = expansion

    @staticmethod
    def child(node, char):
        """Return the node reached from ``node`` over ``char``, or None."""
        if char is None:
            return None
        return node.children.get(char)

    def longest_prefix_item(self, text):
        """Find the longest entity name that is a prefix of ``text``.

        Raises:
            KeyError: if no entity name is a prefix of ``text``

        Returns:
            tuple: (entity_name, expansion)
        """
        node = self.root
        match_len = 0
        expansion = None
        for index, char in enumerate(text):
            node = node.children.get(char)
            if node is None:
                break
            if node.is_terminal:
                match_len = index + 1
                expansion = node.expansion

        if match_len == 0:
            raise KeyError(f"No entity prefix match in {text!r}")
        return text[:match_len], expansion

    def _find(self, name):
        node = self.root
        for char in name:
            node = node.children.get(char)
            if node is None:
                return None
        return node if node.is_terminal else None

    def __contains__(self, name):
        return self._find(name) is not None

    def __getitem__(self, name):
        node = self._find(name)
        if node is None:
            raise KeyError(name)
        return node.expansion

    def __len__(self):
        return self.size
