"""Character reference decoding (HTML tokenizer subroutine).

Called with a stream positioned just after an ``&``. Each call is a
self-contained transaction over the stream and the consume buffer: the
buffer length is recorded on entry and every failure path truncates back
to it, so nothing written here survives a rejected reference.

The functions return True when a reference was taken and the buffer
(past the entry watermark) holds its expansion, and False when the
caller should treat the ampersand as literal text.
"""

import string

from .codepoints import (
    LEGACY_REPLACEMENTS,
    MAX_CODEPOINT,
    REPLACEMENT_CHARACTER,
    is_noncharacter,
    is_reserved_codepoint,
)
from .entities import DEFAULT_TABLE

_NOT_A_REFERENCE = frozenset("\t\n\f")
_DECIMAL_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)

# Numbers are accumulated as unsigned 32-bit values; anything wider is
# treated as unparseable.
_UINT32_MAX = 0xFFFFFFFF


def consume_character_reference(
    stream,
    buffer,
    errors,
    additional_allowed_char=None,
    *,
    in_attribute=None,
    table=None,
):
    """Decode at most one character reference into ``buffer``.

    Args:
        stream: CharacterStream positioned after the ampersand
        buffer: ConsumeBuffer receiving the expansion
        errors: sink with a ``report(code)`` method
        additional_allowed_char: attribute value terminator; when it follows
            the ampersand directly, no reference is taken
        in_attribute: whether the reference sits in an attribute value.
            Defaults to whether a terminator was given.
        table: NamedEntityTable, defaults to the WHATWG list

    Returns:
        bool: True if a reference was consumed
    """
    if in_attribute is None:
        in_attribute = additional_allowed_char is not None

    c = stream.read()
    if c is None:
        buffer.clear()
        return False

    if additional_allowed_char is not None and c == additional_allowed_char:
        stream.unread()
        buffer.clear()
        return False

    if c in _NOT_A_REFERENCE:
        stream.unread()
        return False

    if c == "#":
        return consume_numeric_reference(stream, buffer, errors)

    return consume_named_reference(c, stream, buffer, errors, table or DEFAULT_TABLE, in_attribute)


def _parse_number(digits, radix):
    # Leading zeros never change the value; at most ten significant
    # digits fit in 32 bits, so longer strings are never converted.
    digits = digits.lstrip("0") or "0"
    if len(digits) > 10:
        return 0
    value = int(digits, radix)
    if value > _UINT32_MAX:
        return 0
    return value


def consume_numeric_reference(stream, buffer, errors):
    """Decode ``#[xX]<digits>;`` with the ``#`` already read."""
    watermark = buffer.length()
    buffer.append("#")

    is_hex = False
    marker = stream.lookahead(1)
    if marker == "x" or marker == "X":
        is_hex = True
        buffer.append(stream.read())

    allowed = _HEX_DIGITS if is_hex else _DECIMAL_DIGITS
    digits = []
    while True:
        c = stream.read()
        if c is None:
            buffer.truncate(watermark)
            return False
        if c not in allowed:
            stream.unread()
            break
        digits.append(c)
        buffer.append(c)

    c = stream.read()
    if c is None:
        buffer.truncate(watermark)
        return False

    if c != ";":
        stream.unread()
        errors.report("missing-semicolon-after-character-reference")
        buffer.truncate(watermark)
        return False

    if not digits:
        errors.report("absence-of-digits-in-numeric-character-reference")
        buffer.truncate(watermark)
        return False

    value = _parse_number("".join(digits), 16 if is_hex else 10)

    replacement = LEGACY_REPLACEMENTS.get(value)
    if replacement is not None:
        buffer.truncate(watermark)
        buffer.append(replacement)
        return True

    if value == 0:
        errors.report("null-character-reference")
        buffer.truncate(watermark)
        return True

    # The two checks below run in sequence, not as alternatives: a value
    # caught by both ends up with nothing appended.
    handled = False
    if 0xD800 < value < 0xDFFF or value > MAX_CODEPOINT:
        buffer.truncate(watermark)
        if value > MAX_CODEPOINT:
            errors.report("character-reference-outside-unicode-range")
        else:
            errors.report("surrogate-character-reference")
        buffer.append(REPLACEMENT_CHARACTER)
        handled = True

    if is_reserved_codepoint(value):
        buffer.truncate(watermark)
        if is_noncharacter(value):
            errors.report("noncharacter-character-reference")
        else:
            errors.report("control-character-reference")
        handled = True

    if not handled:
        buffer.truncate(watermark)
        buffer.append(chr(value))
    return True


def consume_named_reference(first, stream, buffer, errors, table=None, in_attribute=False):
    """Match the longest entity name starting with ``first``.

    Characters read past the longest match stay in the buffer as literal
    text after the expansion (``&notit;`` becomes ``\\u00acit``; the ``;``
    is left in the stream).
    """
    if first not in _ASCII_ALNUM:
        stream.unread()
        return False

    trie = (table or DEFAULT_TABLE).trie
    watermark = buffer.length()

    node = trie.root
    consumed = []
    match_len = 0
    expansion = None
    c = first
    while True:
        next_node = trie.child(node, c)
        if next_node is None:
            if c is not None:
                stream.unread()
            break
        node = next_node
        consumed.append(c)
        if node.is_terminal:
            match_len = len(consumed)
            expansion = node.expansion
        if c == ";":
            break
        c = stream.read()

    if expansion is None:
        buffer.extend(consumed)
        errors.report("unknown-named-character-reference")
        return False

    trailing = consumed[match_len:]
    if consumed[match_len - 1] != ";":
        next_char = trailing[0] if trailing else stream.lookahead(1)
        if in_attribute and next_char is not None and (next_char == "=" or next_char in _ASCII_ALNUM):
            buffer.extend(consumed)
            return False
        errors.report("missing-semicolon-after-character-reference")

    buffer.truncate(watermark)
    buffer.extend(expansion)
    buffer.extend(trailing)
    return True
