"""Style ranges and the style provider consulted while wrapping."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, Sequence


@dataclass(frozen=True)
class StyleRange:
    """Terminal attributes applied to ``[start, start + length)`` (absolute offsets)."""

    start: int
    length: int
    fg_color: str | None = None
    bg_color: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def end(self) -> int:
        return self.start + self.length

    def overlaps(self, start: int, length: int) -> bool:
        """Return ``True`` if this range shares at least one character with the given range.

        An empty range overlaps nothing.
        """
        return length > 0 and self.start < start + length and start < self.end


class StyleProvider(Protocol):
    def line_styles(self, line_offset: int, line: str) -> Sequence[StyleRange] | None:
        """Return the style ranges of the logical line starting at *line_offset*."""
        ...

    def is_bidi(self) -> bool:
        """Return ``True`` if segments must be measured with a direction-aware layout."""
        ...


def visual_line_styles(
    styles: Sequence[StyleRange],
    start: int,
    length: int,
) -> list[StyleRange]:
    """Return the *styles* overlapping ``[start, start + length)``, clipped to it.

    *styles* must be sorted by start offset, as line styles always are.
    """
    end = start + length
    result: list[StyleRange] = []
    for style in styles:
        if style.start >= end:
            break
        if not style.overlaps(start, length):
            continue
        clipped_start = max(style.start, start)
        clipped_end = min(style.end, end)
        if clipped_start == style.start and clipped_end == style.end:
            result.append(style)
        else:
            result.append(replace(style, start=clipped_start, length=clipped_end - clipped_start))
    return result


class NoStyles:
    """Style provider for unstyled, left-to-right text."""

    def line_styles(self, line_offset: int, line: str) -> Sequence[StyleRange] | None:
        return None

    def is_bidi(self) -> bool:
        return False


class StaticStyles:
    """Style provider backed by a fixed, document-wide list of ranges.

    Ranges are kept sorted; ``line_styles`` returns the ones overlapping the
    requested line.  Offsets are not adjusted on edits, callers replace the
    ranges with :meth:`set_ranges` after the buffer changes.
    """

    def __init__(self, ranges: Sequence[StyleRange] = (), bidi: bool = False) -> None:
        self._ranges: list[StyleRange] = sorted(ranges, key=lambda r: r.start)
        self._bidi = bidi

    def set_ranges(self, ranges: Sequence[StyleRange]) -> None:
        self._ranges = sorted(ranges, key=lambda r: r.start)

    def set_bidi(self, bidi: bool) -> None:
        self._bidi = bidi

    def line_styles(self, line_offset: int, line: str) -> Sequence[StyleRange] | None:
        if not self._ranges:
            return None
        return [r for r in self._ranges if r.overlaps(line_offset, len(line))]

    def is_bidi(self) -> bool:
        return self._bidi
