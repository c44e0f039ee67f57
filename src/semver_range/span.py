# SPDX-License-Identifier: MIT
"""An immutable cursor over part of a string.

Every scanner in the package walks its input through :class:`Span` values
instead of threading index variables around. A span is a ``[start, end)``
window into the original text, so offsets reported in error messages are
always positions in the full input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True, slots=True)
class Span:
    """A view of ``source[start:end]``.

    Examples:
        >>> span = Span.of("  1.2.3")
        >>> span.skip_while(str.isspace).start
        2
        >>> str(Span.of("1.2.3").advance(2))
        '2.3'
    """

    source: str
    start: int
    end: int

    @classmethod
    def of(cls, text: str) -> "Span":
        return cls(text, 0, len(text))

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.source[self.start : self.end]

    def __getitem__(self, index: int) -> str:
        if not 0 <= index < len(self):
            raise IndexError(index)
        return self.source[self.start + index]

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def peek(self) -> Optional[str]:
        """Return the first character, or None for an empty span."""
        if self.start < self.end:
            return self.source[self.start]
        return None

    def advance(self, count: int = 1) -> "Span":
        return Span(self.source, min(self.start + count, self.end), self.end)

    def take(self, count: int) -> "Span":
        """Return the first ``count`` characters as a span."""
        return Span(self.source, self.start, min(self.start + count, self.end))

    def split_at(self, count: int) -> tuple["Span", "Span"]:
        return self.take(count), self.advance(count)

    def count_while(self, predicate: Callable[[str], bool]) -> int:
        index = self.start
        while index < self.end and predicate(self.source[index]):
            index += 1
        return index - self.start

    def take_while(self, predicate: Callable[[str], bool]) -> tuple["Span", "Span"]:
        """Split into the matching prefix and the rest."""
        return self.split_at(self.count_while(predicate))

    def skip_while(self, predicate: Callable[[str], bool]) -> "Span":
        return self.advance(self.count_while(predicate))

    def trim_end(self, predicate: Callable[[str], bool]) -> "Span":
        end = self.end
        while end > self.start and predicate(self.source[end - 1]):
            end -= 1
        return Span(self.source, self.start, end)

    def find(self, char: str, offset: int = 0) -> int:
        """Index of ``char`` relative to this span, or -1."""
        index = self.source.find(char, self.start + offset, self.end)
        return -1 if index < 0 else index - self.start

    def split(self, separator: str) -> list["Span"]:
        """Split on every occurrence of ``separator``.

        Examples:
            >>> [str(s) for s in Span.of("a||b||").split("||")]
            ['a', 'b', '']
        """
        pieces = []
        start = self.start
        while True:
            index = self.source.find(separator, start, self.end)
            if index < 0:
                pieces.append(Span(self.source, start, self.end))
                return pieces
            pieces.append(Span(self.source, start, index))
            start = index + len(separator)
