"""Width fitter: find the longest prefix of a line remainder that fits a width."""

from __future__ import annotations

from typing import Callable, NamedTuple, Sequence

from pi.wrap.measure import MeasureContext
from pi.wrap.styles import StyleRange, visual_line_styles
from pi.wrap.utils import is_space_char
from pi.wrap.words import word_end, word_start


class Fit(NamedTuple):
    """Length and measured width of one visual line segment."""

    length: int
    width: int


def segment_width(
    line: str,
    line_offset: int,
    start: int,
    length: int,
    styles: Sequence[StyleRange] | None,
    start_x: int,
    context: MeasureContext,
) -> int:
    """Measure ``line[start:start + length]`` drawn at *start_x*.

    Logical line styles may include ranges that lie entirely on the previous
    or next visual line; only the ranges overlapping the segment are passed
    on to the measure context.
    """
    segment_styles: Sequence[StyleRange] = ()
    if styles:
        segment_styles = visual_line_styles(styles, line_offset + start, length)
    text = line[start : start + length]
    if context.mode == "bidi":
        return context.layout(text, line_offset + start, segment_styles).width
    return context.text_width(text, segment_styles, start_x)


def fit_segment(
    line: str,
    line_offset: int,
    start: int,
    start_x: int,
    width: int,
    num_chars: int,
    styles: Sequence[StyleRange] | None,
    context: MeasureContext,
    is_space: Callable[[str], bool] = is_space_char,
) -> Fit:
    """Find the visual line that starts at *start* (relative to the line).

    A segment fits when its measured width is less than *width*.  Words are
    kept whole; only when no complete word fits is the line split between
    characters.  *num_chars* is an estimate of how many characters fit and
    only affects how many measurements the search needs.

    Always returns a length of at least 1 while ``start < len(line)``.
    """
    line_length = len(line)

    def measure(length: int) -> int:
        return segment_width(line, line_offset, start, length, styles, start_x, context)

    num_chars = min(num_chars, line_length - start)
    length = word_start(line, start, num_chars, is_space)
    line_width = 0

    if length > 0:
        line_width = measure(length)
        if line_width >= width:
            while length > 1 and line_width >= width:
                length = word_start(line, start, length, is_space)
                line_width = measure(length)
        else:
            while start + length < line_length:
                new_length = word_end(line, start, length, is_space)
                new_width = measure(new_length)
                if new_width >= width:
                    break
                length = new_length
                line_width = new_width

    if length <= 0:
        # No complete word fits: the first word is longer than the estimate
        # or wider than the budget.  Split between characters instead.
        length = max(num_chars, 1)
        line_width = measure(length)
        if line_width >= width:
            while length > 1 and line_width >= width:
                length -= 1
                line_width = measure(length)
        else:
            while start + length < line_length:
                new_width = measure(length + 1)
                if new_width >= width:
                    break
                length += 1
                line_width = new_width

    return Fit(length, line_width)
