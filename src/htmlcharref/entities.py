"""Named character reference table.

The default table is Python's complete WHATWG list (``html.entities.html5``,
2231 entries). Its keys already encode the partition HTML needs: names
ending in ``;`` must be written with the semicolon, while the 106 legacy
names from HTML4 also appear without it and may be used bare (``&copy``).
"""

import html.entities
import json
from pathlib import Path

from .entity_trie import Trie


def _to_expansion(value):
    """Normalize a table value to the string it expands to."""
    if isinstance(value, str):
        expansion = value
    elif isinstance(value, int):
        expansion = chr(value)
    elif isinstance(value, (list, tuple)):
        expansion = "".join(chr(codepoint) for codepoint in value)
    else:
        raise TypeError(f"Unsupported entity value: {value!r}")
    if not 1 <= len(expansion) <= 2:
        raise ValueError(f"Entity must expand to one or two characters, got {expansion!r}")
    return expansion


class NamedEntityTable:
    """Entity names split into semicolon-required and legacy subsets.

    ``named`` maps every name (without its ``;``) that is valid when
    terminated by a semicolon. ``legacy`` maps the names that are also
    recognised without one. The trie holds both spellings.
    """

    __slots__ = ("legacy", "named", "trie")

    def __init__(self, entities=None):
        if entities is None:
            entities = html.entities.html5
        self.named = {}
        self.legacy = {}
        normalized = {}
        for name, value in entities.items():
            name = name.lstrip("&")
            expansion = _to_expansion(value)
            normalized[name] = expansion
            if name.endswith(";"):
                self.named[name[:-1]] = expansion
            else:
                self.legacy[name] = expansion
        self.trie = Trie(normalized)

    @classmethod
    def from_json(cls, path):
        """Load the WHATWG ``entities.json`` format.

        Keys carry the leading ampersand (``"&amp;"``) and values are
        objects with ``codepoints`` and ``characters``.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls({name: entry["codepoints"] for name, entry in data.items()})

    def is_legacy(self, name):
        return name in self.legacy

    def __contains__(self, name):
        return name in self.trie

    def __getitem__(self, name):
        return self.trie[name]

    def __len__(self):
        return len(self.trie)


DEFAULT_TABLE = NamedEntityTable()
