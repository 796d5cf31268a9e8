class ConsumeBuffer:
    """Append-only character accumulator with watermark rollback.

    Decoders record ``length()`` before speculative appends and call
    ``truncate()`` with that watermark when the input turns out not to be a
    reference. Truncation only ever discards; it cannot grow the buffer.
    """

    __slots__ = ("_chars",)

    def __init__(self, initial=""):
        self._chars = list(initial)

    def length(self):
        return len(self._chars)

    def append(self, char):
        self._chars.append(char)

    def extend(self, text):
        self._chars.extend(text)

    def truncate(self, length):
        if length < 0 or length > len(self._chars):
            raise ValueError(f"Cannot truncate buffer of length {len(self._chars)} to {length}")
        del self._chars[length:]

    def clear(self):
        self._chars.clear()

    def getvalue(self, start=0):
        return "".join(self._chars[start:])

    def __len__(self):
        return len(self._chars)

    def __repr__(self):
        return f"ConsumeBuffer({self.getvalue()!r})"
