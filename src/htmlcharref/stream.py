from bisect import bisect_right


class CharacterStream:
    """Cursor over input text with one character of push-back.

    ``read()`` returns ``None`` at end of input. Newlines are normalized on
    construction (CRLF and lone CR become LF) so positions reported for
    errors match what the decoder actually saw.
    """

    __slots__ = ("_can_unread", "_newline_positions", "buffer", "length", "pos")

    def __init__(self, text, discard_bom=False):
        text = text or ""
        if discard_bom and text and text[0] == "\ufeff":
            text = text[1:]
        if "\r" in text:
            text = text.replace("\r\n", "\n").replace("\r", "\n")
        self.buffer = text
        self.length = len(text)
        self.pos = 0
        self._can_unread = False
        self._newline_positions = None

    def read(self):
        pos = self.pos
        if pos >= self.length:
            self._can_unread = False
            return None
        self.pos = pos + 1
        self._can_unread = True
        return self.buffer[pos]

    def lookahead(self, n=1):
        """Return the ``n``-th upcoming character without consuming it."""
        peek_pos = self.pos + n - 1
        if 0 <= peek_pos < self.length:
            return self.buffer[peek_pos]
        return None

    def unread(self):
        if not self._can_unread:
            raise ValueError("unread() must directly follow a read() that returned a character")
        self.pos -= 1
        self._can_unread = False

    def read_until(self, char):
        """Consume and return the run of text up to (not including) ``char``."""
        start = self.pos
        end = self.buffer.find(char, start)
        if end == -1:
            end = self.length
        self.pos = end
        self._can_unread = False
        return self.buffer[start:end]

    def tell(self):
        return self.pos

    def seek(self, pos):
        if pos < 0 or pos > self.length:
            raise ValueError(f"Position {pos} outside stream of length {self.length}")
        self.pos = pos
        self._can_unread = False

    def _get_line_at_pos(self, pos):
        if self._newline_positions is None:
            self._newline_positions = []
            newline = -1
            buffer = self.buffer
            while True:
                newline = buffer.find("\n", newline + 1)
                if newline == -1:
                    break
                self._newline_positions.append(newline)
        # Line number = count of newlines before pos + 1
        return bisect_right(self._newline_positions, pos - 1) + 1

    def position(self):
        """Return the 1-based (line, column) of the last character read."""
        pos = max(0, self.pos - 1)
        line = self._get_line_at_pos(pos)
        if line == 1:
            return line, pos + 1
        return line, pos - self._newline_positions[line - 2]
