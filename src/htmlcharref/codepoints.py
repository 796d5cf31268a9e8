"""Static code point tables for numeric character references.

Two read-only structures back the numeric decoder:

- ``LEGACY_REPLACEMENTS``: numeric references in 0x80-0x9F are read as the
  Windows-1252 bytes authors meant (``&#128;`` is a Euro sign, not a C1
  control).
- ``RESERVED_RANGES``: control characters and noncharacters that are
  dropped from decoded output with a parse error.
"""

from bisect import bisect_right
from types import MappingProxyType

REPLACEMENT_CHARACTER = "\ufffd"
MAX_CODEPOINT = 0x10FFFF

# Windows-1252 reading of the C1 range. The five bytes cp1252 leaves
# undefined (0x81, 0x8D, 0x8F, 0x90, 0x9D) map to themselves.
LEGACY_REPLACEMENTS = MappingProxyType(
    {
        0x80: "\u20ac",  # EURO SIGN
        0x81: "\u0081",
        0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
        0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
        0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
        0x85: "\u2026",  # HORIZONTAL ELLIPSIS
        0x86: "\u2020",  # DAGGER
        0x87: "\u2021",  # DOUBLE DAGGER
        0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
        0x89: "\u2030",  # PER MILLE SIGN
        0x8A: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
        0x8B: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
        0x8C: "\u0152",  # LATIN CAPITAL LIGATURE OE
        0x8D: "\u008d",
        0x8E: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
        0x8F: "\u008f",
        0x90: "\u0090",
        0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
        0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
        0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
        0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
        0x95: "\u2022",  # BULLET
        0x96: "\u2013",  # EN DASH
        0x97: "\u2014",  # EM DASH
        0x98: "\u02dc",  # SMALL TILDE
        0x99: "\u2122",  # TRADE MARK SIGN
        0x9A: "\u0161",  # LATIN SMALL LETTER S WITH CARON
        0x9B: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
        0x9C: "\u0153",  # LATIN SMALL LIGATURE OE
        0x9D: "\u009d",
        0x9E: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
        0x9F: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
    }
)

# Inclusive (start, end) pairs, sorted and non-overlapping.
_CONTROL_RANGES = (
    (0x0001, 0x0008),
    (0x000B, 0x000B),
    (0x000E, 0x001F),
    (0x007F, 0x009F),
)
_NONCHARACTER_RANGES = ((0xFDD0, 0xFDEF),) + tuple(
    ((plane << 16) | 0xFFFE, (plane << 16) | 0xFFFF) for plane in range(17)
)

RESERVED_RANGES = _CONTROL_RANGES + _NONCHARACTER_RANGES

_RANGE_STARTS = tuple(start for start, _ in RESERVED_RANGES)
_RANGE_ENDS = tuple(end for _, end in RESERVED_RANGES)


def is_reserved_codepoint(codepoint):
    """Return True if ``codepoint`` is a control or noncharacter code point
    that a numeric character reference may not produce."""
    index = bisect_right(_RANGE_STARTS, codepoint) - 1
    return index >= 0 and codepoint <= _RANGE_ENDS[index]


def is_noncharacter(codepoint):
    if 0xFDD0 <= codepoint <= 0xFDEF:
        return True
    return codepoint <= MAX_CODEPOINT and codepoint & 0xFFFE == 0xFFFE
