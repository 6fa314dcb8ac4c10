"""Logical text buffer protocol and an in-memory implementation.

A logical line is the text between two line delimiters (``\\r\\n``, ``\\r``
or ``\\n``).  The delimiter belongs to the line it ends but is not part of
the line text.
"""

from __future__ import annotations

import contextlib
import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Protocol

_DELIMITER_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TextChange:
    """Describes an applied replacement of ``deleted_chars`` characters at ``start``."""

    start: int
    inserted_lines: int
    deleted_lines: int
    inserted_chars: int
    deleted_chars: int


class TextChangeListener(Protocol):
    def text_changed(self, change: TextChange) -> None:
        """Called after a range of the buffer was replaced."""
        ...

    def text_set(self) -> None:
        """Called after the whole buffer was replaced."""
        ...


class TextContent(Protocol):
    def char_count(self) -> int: ...

    def line_count(self) -> int: ...

    def line_at_offset(self, offset: int) -> int: ...

    def offset_at_line(self, index: int) -> int: ...

    def line_text(self, index: int) -> str: ...

    def text_range(self, start: int, length: int) -> str: ...

    def line_delimiter(self) -> str: ...

    def replace_range(self, start: int, length: int, text: str) -> None: ...

    def set_text(self, text: str) -> None: ...

    def add_change_listener(self, listener: TextChangeListener) -> None: ...

    def remove_change_listener(self, listener: TextChangeListener) -> None: ...


class PlainTextContent:
    """A string buffer with a line start index, rebuilt after every change."""

    def __init__(self, text: str = "", delimiter: str = "\n") -> None:
        self._text = text
        self._delimiter = delimiter
        self._listeners: list[TextChangeListener] = []
        self._starts: list[int] = []
        self._ends: list[int] = []
        self._index_lines()

    def _index_lines(self) -> None:
        starts = [0]
        ends: list[int] = []
        for match in _DELIMITER_RE.finditer(self._text):
            ends.append(match.start())
            starts.append(match.end())
        ends.append(len(self._text))
        self._starts = starts
        self._ends = ends

    def _check_line(self, index: int) -> None:
        if index < 0 or index >= len(self._starts):
            raise ValueError(f"Line index {index} out of range (0..{len(self._starts) - 1})")

    def _check_range(self, start: int, length: int) -> None:
        if start < 0 or length < 0 or start + length > len(self._text):
            raise ValueError(f"Range {start}+{length} out of bounds (0..{len(self._text)})")

    # -- queries ---------------------------------------------------------

    def char_count(self) -> int:
        return len(self._text)

    def line_count(self) -> int:
        return len(self._starts)

    def line_at_offset(self, offset: int) -> int:
        if offset < 0 or offset > len(self._text):
            raise ValueError(f"Offset {offset} out of range (0..{len(self._text)})")
        return bisect_right(self._starts, offset) - 1

    def offset_at_line(self, index: int) -> int:
        self._check_line(index)
        return self._starts[index]

    def line_text(self, index: int) -> str:
        self._check_line(index)
        return self._text[self._starts[index] : self._ends[index]]

    def text_range(self, start: int, length: int) -> str:
        self._check_range(start, length)
        return self._text[start : start + length]

    def line_delimiter(self) -> str:
        return self._delimiter

    def get_text(self) -> str:
        return self._text

    # -- mutation --------------------------------------------------------

    def replace_range(self, start: int, length: int, text: str) -> None:
        """Replace ``length`` characters at ``start`` with *text* and notify listeners."""
        self._check_range(start, length)
        old_line_count = len(self._starts)
        # Line starts removed by the replacement; a start right after the
        # range only goes away if its delimiter is split.
        deleted_lines = bisect_right(self._starts, start + length) - bisect_right(self._starts, start)

        self._text = self._text[:start] + text + self._text[start + length :]
        self._index_lines()

        inserted_lines = len(self._starts) - old_line_count + deleted_lines
        if inserted_lines < 0:
            # A "\r" and "\n" joined into one delimiter, dropping one more line.
            deleted_lines -= inserted_lines
            inserted_lines = 0

        change = TextChange(
            start=start,
            inserted_lines=inserted_lines,
            deleted_lines=deleted_lines,
            inserted_chars=len(text),
            deleted_chars=length,
        )
        for listener in list(self._listeners):
            listener.text_changed(change)

    def set_text(self, text: str) -> None:
        """Replace the whole buffer and notify listeners with ``text_set``."""
        self._text = text
        self._index_lines()
        for listener in list(self._listeners):
            listener.text_set()

    def add_change_listener(self, listener: TextChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: TextChangeListener) -> None:
        with contextlib.suppress(ValueError):
            self._listeners.remove(listener)
