"""Text-level character reference decoding.

Runs the reference decoder over a whole text or attribute value, the way
a tokenizer's data and attribute value states would, and collects the
parse errors it reports.
"""

from .buffer import ConsumeBuffer
from .charref import consume_character_reference
from .errors import ParseErrorCollector, StrictModeError
from .stream import CharacterStream


class DecoderOpts:
    __slots__ = ("collect_errors", "debug", "discard_bom", "strict", "table")

    def __init__(self, collect_errors=False, strict=False, debug=False, discard_bom=False, table=None):
        self.collect_errors = bool(collect_errors)
        self.strict = bool(strict)
        self.debug = bool(debug)
        self.discard_bom = bool(discard_bom)
        self.table = table


class CharRefDecoder:
    """Decode every character reference in ``text``.

    A reference that is not taken (unknown name, missing ``;`` after a
    numeric reference, ...) is emitted as the literal text it was written
    as: the stream is rewound to just after its ampersand and scanning
    resumes from there.

    Usage:
        CharRefDecoder("fish &amp; chips").text    # "fish & chips"
        CharRefDecoder('a&ampb', in_attribute=True).text    # "a&ampb"
    """

    __slots__ = (
        "additional_allowed_char",
        "buffer",
        "errors",
        "in_attribute",
        "opts",
        "stream",
        "text",
        "_sink",
    )

    def __init__(
        self,
        text,
        *,
        in_attribute=False,
        additional_allowed_char=None,
        opts=None,
        collect_errors=None,
        strict=None,
        debug=None,
        table=None,
    ):
        opts = opts or DecoderOpts()
        # Overrides go into a copy; the caller's opts may be shared.
        opts = DecoderOpts(
            collect_errors=opts.collect_errors if collect_errors is None else collect_errors,
            strict=opts.strict if strict is None else strict,
            debug=opts.debug if debug is None else debug,
            discard_bom=opts.discard_bom,
            table=opts.table if table is None else table,
        )
        self.opts = opts
        self.in_attribute = bool(in_attribute)
        self.additional_allowed_char = additional_allowed_char

        self.stream = CharacterStream(text, discard_bom=opts.discard_bom)
        self.buffer = ConsumeBuffer()
        self._sink = ParseErrorCollector(self.stream, enabled=opts.collect_errors or opts.strict)
        self.text = self._run()
        self.errors = self._sink.errors if opts.collect_errors else []

    def debug(self, message, indent=4):
        # Only format when debugging is on
        if self.opts.debug:
            print(f"{' ' * indent}{self.__class__.__name__}: {message}")

    def _run(self):
        stream = self.stream
        buffer = self.buffer
        sink = self._sink
        parts = []
        while True:
            chunk = stream.read_until("&")
            if chunk:
                parts.append(chunk)
            if stream.read() is None:
                break

            start = stream.tell()
            errors_before = len(sink)
            buffer.clear()
            taken = consume_character_reference(
                stream,
                buffer,
                sink,
                self.additional_allowed_char,
                in_attribute=self.in_attribute,
                table=self.opts.table,
            )
            if taken:
                expansion = buffer.getvalue()
                parts.append(expansion)
                if self.opts.debug:
                    self.debug(f"&{stream.buffer[start:stream.tell()]} -> {expansion!r}")
            else:
                parts.append("&")
                stream.seek(start)
                if self.opts.debug:
                    self.debug(f"literal '&' at offset {start - 1}")

            if self.opts.strict and len(sink) > errors_before:
                raise StrictModeError(sink.errors[errors_before])

        return "".join(parts)


def decode_entities_in_text(text, in_attribute=False, table=None):
    """Decode all character references in ``text``.

    Args:
        text: Input text potentially containing references
        in_attribute: Whether this is an attribute value (stricter rules
            for legacy names written without a semicolon)
        table: NamedEntityTable to resolve names against

    Returns:
        Text with references decoded
    """
    if "&" not in text:
        return text
    return CharRefDecoder(text, in_attribute=in_attribute, table=table).text
