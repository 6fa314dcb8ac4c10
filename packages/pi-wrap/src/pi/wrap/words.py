"""Word boundary search used by the width fitter.

A word is a run of non-space characters plus the spaces that follow it.
Offsets passed in and returned are relative to *line_start*; both functions
clamp to the line instead of raising.
"""

from __future__ import annotations

from typing import Callable

from pi.wrap.utils import is_space_char


def word_end(
    line: str,
    line_start: int,
    offset: int,
    is_space: Callable[[str], bool] = is_space_char,
) -> int:
    """Return the offset after the word following *offset*.

    Steps past the current character, then over any spaces, the next run of
    non-space characters and its trailing spaces.
    """
    line_length = len(line)
    offset += line_start
    if offset >= line_length:
        return line_length - line_start

    offset += 1
    while offset < line_length and is_space(line[offset]):
        offset += 1
    while offset < line_length and not is_space(line[offset]):
        offset += 1
    while offset < line_length and is_space(line[offset]):
        offset += 1
    return offset - line_start


def word_start(
    line: str,
    line_start: int,
    offset: int,
    is_space: Callable[[str], bool] = is_space_char,
) -> int:
    """Return the start of the word that ends at or before *offset*.

    Steps back over the character before *offset* and any trailing spaces,
    then over the preceding non-space run.  Returns 0 when only one word
    lies between *line_start* and *offset*.
    """
    offset = min(offset + line_start, len(line))
    if offset <= line_start:
        return 0

    offset -= 1
    while offset > line_start and is_space(line[offset]):
        offset -= 1
    while offset > line_start and not is_space(line[offset - 1]):
        offset -= 1
    return offset - line_start
