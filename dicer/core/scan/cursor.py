from __future__ import annotations

from typing import Optional


class Cursor:
    """Left-to-right reader over a string.

    ``offset`` is the 0-based index of the next unread character; ``position``
    is the same location expressed 1-based, which is what error messages report.
    """

    def __init__(self, text: str, offset: int = 0) -> None:
        self.text = text
        self.offset = offset

    @property
    def position(self) -> int:
        return self.offset + 1

    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self, ahead: int = 0) -> Optional[str]:
        i = self.offset + ahead
        if i < len(self.text):
            return self.text[i]
        return None

    def advance(self) -> str:
        ch = self.text[self.offset]
        self.offset += 1
        return ch

    def accept(self, ch: str) -> bool:
        if self.peek() == ch:
            self.offset += 1
            return True
        return False

    def take_digits(self) -> str:
        start = self.offset
        while not self.at_end() and is_digit(self.text[self.offset]):
            self.offset += 1
        return self.text[start : self.offset]

    def take_until(self, ch: str) -> Optional[str]:
        """Consume through the next ``ch`` and return what preceded it.

        Returns None (consuming nothing) when ``ch`` never appears.
        """
        end = self.text.find(ch, self.offset)
        if end < 0:
            return None
        chunk = self.text[self.offset : end]
        self.offset = end + 1
        return chunk


def is_digit(ch: Optional[str]) -> bool:
    # ASCII only; str.isdigit() also accepts superscripts and other scripts.
    return ch is not None and "0" <= ch <= "9"
