"""Offset to line number lookup for a source text."""

from bisect import bisect_right
from collections.abc import Iterator


class LineIndex:
    """Start offsets of every line of ``text`` plus an end-of-text sentinel.

    Offsets are ``str`` indices. Only ``\\n`` ends a line, so line numbers
    agree with the runtime's count files.
    """

    __slots__ = ("text", "offsets")

    def __init__(self, text: str) -> None:
        self.text = text
        offsets = [0] if text else []
        start = text.find("\n")
        while start != -1 and start + 1 < len(text):
            offsets.append(start + 1)
            start = text.find("\n", start + 1)
        offsets.append(len(text))
        self.offsets = offsets

    @property
    def line_count(self) -> int:
        return len(self.offsets) - 1

    def line_at(self, pos: int) -> int:
        """1-based line containing offset ``pos``.

        ``pos`` at the end of the text maps to one past the last line.
        """
        return bisect_right(self.offsets, pos)

    def lines(self) -> Iterator[str]:
        """Each line's text without its trailing newline."""
        for start, end in zip(self.offsets, self.offsets[1:]):
            yield self.text[start:end].rstrip("\n").rstrip("\r")
