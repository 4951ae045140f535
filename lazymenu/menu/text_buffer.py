"""Editable query buffer with a byte cursor.

Text is stored UTF-8 encoded so the cursor can be addressed in bytes while
still stopping only on rune boundaries. Capacity is fixed; edits that would
overflow it are rejected instead of raising.
"""

from __future__ import annotations

BUFFER_SIZE = 8192
_CONTINUATION_MASK = 0xC0
_CONTINUATION_BITS = 0x80


def is_continuation_byte(value: int) -> bool:
    """Return whether ``value`` is a UTF-8 continuation byte (``10xxxxxx``)."""
    return (value & _CONTINUATION_MASK) == _CONTINUATION_BITS


class TextBuffer:
    """Query text plus cursor, bounded to ``BUFFER_SIZE - 1`` bytes."""

    def __init__(self, text: str = "", capacity: int = BUFFER_SIZE) -> None:
        self.capacity = capacity
        self._data = bytearray()
        self.cursor = 0
        if text:
            self.set_text(text)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def text(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    @property
    def cursor_text(self) -> str:
        """Text left of the cursor, used to place the caret when rendering."""
        return self._data[: self.cursor].decode("utf-8", errors="replace")

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self._data)

    def _fits(self, extra: int) -> bool:
        return len(self._data) + extra <= self.capacity - 1

    def next_rune(self, incr: int) -> int:
        """Return the byte offset one rune away from the cursor in direction ``incr``.

        Continuation bytes are skipped; the result is clamped to the buffer.
        """
        length = len(self._data)
        n = self.cursor + incr
        while 0 <= n < length and is_continuation_byte(self._data[n]):
            n += incr
        return max(0, min(n, length))

    def move_cursor(self, delta_runes: int) -> bool:
        """Move by ``delta_runes`` logical characters, returning whether it moved."""
        start = self.cursor
        step = 1 if delta_runes > 0 else -1
        for _ in range(abs(delta_runes)):
            if step < 0 and self.cursor == 0:
                break
            if step > 0 and self.at_end:
                break
            self.cursor = self.next_rune(step)
        return self.cursor != start

    def move_to_start(self) -> None:
        self.cursor = 0

    def move_to_end(self) -> None:
        self.cursor = len(self._data)

    def insert(self, text: str) -> bool:
        """Insert ``text`` at the cursor; reject the edit if it would overflow."""
        encoded = text.encode("utf-8")
        if not self._fits(len(encoded)):
            return False
        self._data[self.cursor : self.cursor] = encoded
        self.cursor += len(encoded)
        return True

    def delete_range(self, count: int) -> bool:
        """Delete ``count`` bytes from the cursor; negative counts delete leftwards."""
        if count < 0:
            start = max(0, self.cursor + count)
            end = self.cursor
        else:
            start = self.cursor
            end = min(len(self._data), self.cursor + count)
        if start == end:
            return False
        del self._data[start:end]
        self.cursor = start
        return True

    def delete_backward(self) -> bool:
        if self.cursor == 0:
            return False
        return self.delete_range(self.next_rune(-1) - self.cursor)

    def delete_forward(self) -> bool:
        if self.at_end:
            return False
        self.cursor = self.next_rune(+1)
        return self.delete_backward()

    def delete_word_backward(self) -> bool:
        """Delete trailing spaces left of the cursor, then the word before them."""
        start = self.cursor
        while self.cursor > 0 and self._data[self.next_rune(-1)] == ord(" "):
            self.delete_range(self.next_rune(-1) - self.cursor)
        while self.cursor > 0 and self._data[self.next_rune(-1)] != ord(" "):
            self.delete_range(self.next_rune(-1) - self.cursor)
        return self.cursor != start

    def delete_to_start(self) -> bool:
        return self.delete_range(-self.cursor)

    def truncate(self) -> bool:
        """Drop everything right of the cursor."""
        if self.at_end:
            return False
        del self._data[self.cursor :]
        return True

    def set_text(self, text: str) -> None:
        """Replace contents, clipping at a rune boundary, and move cursor to end."""
        encoded = text.encode("utf-8")
        limit = self.capacity - 1
        if len(encoded) > limit:
            cut = limit
            while cut > 0 and is_continuation_byte(encoded[cut]):
                cut -= 1
            encoded = encoded[:cut]
        self._data = bytearray(encoded)
        self.cursor = len(self._data)
