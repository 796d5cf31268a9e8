"""Parse errors raised while decoding character references.

Error codes follow the WHATWG parse error names. None of them is fatal:
decoders report through a sink and carry on.
"""

ERROR_MESSAGES = {
    "missing-semicolon-after-character-reference": "Character reference is not terminated by ';'",
    "absence-of-digits-in-numeric-character-reference": "Numeric character reference has no digits",
    "null-character-reference": "Numeric character reference resolves to U+0000",
    "surrogate-character-reference": "Numeric character reference resolves to a surrogate",
    "character-reference-outside-unicode-range": "Numeric character reference is beyond U+10FFFF",
    "noncharacter-character-reference": "Numeric character reference resolves to a noncharacter",
    "control-character-reference": "Numeric character reference resolves to a control character",
    "unknown-named-character-reference": "Unknown named character reference",
}


def generate_error_message(code):
    return ERROR_MESSAGES.get(code, code)


class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or generate_error_message(code)

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is None or self.column is None:
            return f"{self.code} - {self.message}"
        return f"({self.line},{self.column}): {self.code} - {self.message}"

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__


class StrictModeError(Exception):
    """Raised by the decoder in strict mode on the first parse error."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))


class ParseErrorCollector:
    """Parse error sink used by the decoders.

    Reporting never affects control flow. When ``enabled`` is false the
    sink drops everything, which keeps the common path allocation free.
    """

    __slots__ = ("enabled", "errors", "stream")

    def __init__(self, stream=None, enabled=True):
        self.stream = stream
        self.enabled = bool(enabled)
        self.errors = []

    def report(self, code, message=None):
        if not self.enabled:
            return
        if self.stream is not None:
            line, column = self.stream.position()
        else:
            line = column = None
        self.errors.append(ParseError(code, line=line, column=column, message=message))

    @property
    def codes(self):
        return [error.code for error in self.errors]

    def __len__(self):
        return len(self.errors)
