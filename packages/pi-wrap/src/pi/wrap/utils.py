"""Cell-width measurement and character classification.

Widths are terminal cells: grapheme clusters are measured with ``wcwidth``,
emoji sequences count as two cells and tabs advance to the next tab stop.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

DEFAULT_TAB_WIDTH = 3

_SPACE_CATEGORIES = ("Zs", "Zl", "Zp")


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (VS16, ZWJ sequences, skin tones, regional indicators) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# cell_width
# ---------------------------------------------------------------------------


def cell_width(text: str, start_x: int = 0, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return the number of cells *text* occupies when drawn at column *start_x*.

    A tab advances to the next multiple of *tab_width*, so the result depends
    on where the text starts.  Uses a fast path for printable ASCII.
    """
    if not text:
        return 0

    x = start_x
    if text.isascii() and text.isprintable():
        return len(text)

    for g in grapheme.graphemes(text):
        if g == "\t":
            if tab_width > 0:
                x += tab_width - (x % tab_width)
        else:
            x += grapheme_width(g)
    return x - start_x


def visible_width(text: str) -> int:
    """Cell width of *text* drawn at column 0."""
    return cell_width(text, 0)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_space_char(char: str) -> bool:
    """Return ``True`` if *char* separates words for wrapping.

    Unicode space separators (``Zs``, ``Zl``, ``Zp``) and TAB qualify.
    Non-breaking spaces are ``Zs`` and therefore break too.
    """
    return char == "\t" or unicodedata.category(char) in _SPACE_CATEGORIES

