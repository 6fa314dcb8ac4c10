"""Measurement capability used by the width fitter.

A :class:`Measurer` hands out one :class:`MeasureContext` per wrap pass.
The context is opened with ``with measurer.open(mode) as context:`` so it
is released however the pass ends.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ContextManager, Iterator, Literal, Protocol, Sequence

from pi.wrap.styles import StyleRange
from pi.wrap.utils import DEFAULT_TAB_WIDTH, cell_width

MeasureMode = Literal["simple", "bidi"]


# ---------------------------------------------------------------------------
# TextLayout
# ---------------------------------------------------------------------------


@dataclass
class TextLayout:
    """Layout of one segment, used instead of a plain width query in bidi mode.

    The segment is laid out on its own, so its width does not depend on where
    the previous segment of the same logical line ended.
    """

    text: str
    offset: int
    styles: Sequence[StyleRange] = ()
    tab_width: int = DEFAULT_TAB_WIDTH
    width: int = field(init=False)

    def __post_init__(self) -> None:
        self.width = cell_width(self.text, 0, self.tab_width)


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class MeasureContext(Protocol):
    @property
    def mode(self) -> MeasureMode: ...

    @property
    def average_char_width(self) -> int: ...

    def text_width(self, text: str, styles: Sequence[StyleRange], start_x: int) -> int:
        """Width of *text* drawn at horizontal position *start_x*."""
        ...

    def layout(self, text: str, offset: int, styles: Sequence[StyleRange]) -> TextLayout:
        """Direction-aware layout of *text*, which starts at buffer *offset*."""
        ...


class Measurer(Protocol):
    def open(self, mode: MeasureMode = "simple") -> ContextManager[MeasureContext]:
        """Context manager yielding a measure context for one wrap pass."""
        ...


# ---------------------------------------------------------------------------
# CellMeasurer
# ---------------------------------------------------------------------------


class CellMeasureContext:
    """Measures terminal cells.  Styles do not change cell widths."""

    def __init__(self, mode: MeasureMode, tab_width: int) -> None:
        self._mode = mode
        self._tab_width = tab_width
        self.closed = False

    @property
    def mode(self) -> MeasureMode:
        return self._mode

    @property
    def average_char_width(self) -> int:
        return 1

    def text_width(self, text: str, styles: Sequence[StyleRange], start_x: int) -> int:
        if self.closed:
            raise RuntimeError("Measure context used after its wrap pass ended")
        return cell_width(text, start_x, self._tab_width)

    def layout(self, text: str, offset: int, styles: Sequence[StyleRange]) -> TextLayout:
        if self.closed:
            raise RuntimeError("Measure context used after its wrap pass ended")
        return TextLayout(text=text, offset=offset, styles=styles, tab_width=self._tab_width)


class CellMeasurer:
    """Default measurer for terminal hosts."""

    def __init__(self, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        self.tab_width = tab_width
        self.open_count = 0

    @contextmanager
    def open(self, mode: MeasureMode = "simple") -> Iterator[CellMeasureContext]:
        context = CellMeasureContext(mode, self.tab_width)
        self.open_count += 1
        try:
            yield context
        finally:
            context.closed = True
            self.open_count -= 1
