"""Wrapped view of a logical text buffer.

:class:`WrappedContent` answers the same queries as the buffer it wraps,
but in terms of visual lines.  Until the first wrap (and after
:meth:`WrappedContent.unwrap`) every query passes straight through to the
logical buffer.
"""

from __future__ import annotations

import logging
from typing import Callable

from pi.wrap.config import WrapConfig
from pi.wrap.content import TextChange, TextChangeListener, TextContent
from pi.wrap.driver import WrapDriver
from pi.wrap.measure import CellMeasurer, Measurer
from pi.wrap.styles import NoStyles, StyleProvider
from pi.wrap.table import VisualLine, VisualLineTable
from pi.wrap.utils import is_space_char

logger = logging.getLogger(__name__)


class WrappedContent:
    """Maps a logical buffer onto word-wrapped visual lines.

    Edits must be reported through :meth:`on_text_changed` after the buffer
    applied them, either by the owner or by calling :meth:`attach` so that
    buffer change events are forwarded automatically.
    """

    def __init__(
        self,
        content: TextContent,
        measurer: Measurer | None = None,
        styles: StyleProvider | None = None,
        config: WrapConfig | None = None,
        is_space: Callable[[str], bool] = is_space_char,
    ) -> None:
        self.config = config or WrapConfig()
        self.content = content
        self.measurer: Measurer = measurer or CellMeasurer(self.config.tab_width)
        self.styles: StyleProvider = styles or NoStyles()
        self._table = VisualLineTable()
        self._driver = WrapDriver(content, self._table, self.measurer, self.styles, is_space)
        self._width: int | None = None
        self._attached = False

    # ------------------------------------------------------------------
    # Buffer listener
    # ------------------------------------------------------------------

    def attach(self) -> None:
        """Start following change events of the wrapped buffer."""
        if not self._attached:
            self.content.add_change_listener(self)
            self._attached = True

    def detach(self) -> None:
        if self._attached:
            self.content.remove_change_listener(self)
            self._attached = False

    def text_changed(self, change: TextChange) -> None:
        self.on_text_changed(
            change.start,
            change.inserted_lines,
            change.deleted_lines,
            change.inserted_chars,
            change.deleted_chars,
        )

    def text_set(self) -> None:
        if self.is_wrapped:
            self.wrap_all()

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def is_wrapped(self) -> bool:
        return self._table.count > 0

    @property
    def width(self) -> int | None:
        """Width of the last wrap, or ``None`` before the first one."""
        return self._width

    def char_count(self) -> int:
        return self.content.char_count()

    def line_count(self) -> int:
        if self._table.count == 0:
            return self.content.line_count()
        return self._table.count

    def visual_line_count(self) -> int:
        return self._table.count

    def visual_lines(self) -> tuple[VisualLine, ...]:
        return tuple(self._table)

    def line_text(self, index: int) -> str:
        if self._table.count == 0:
            return self.content.line_text(index)
        line = self._table[index]
        return self.content.text_range(line.offset, line.length)

    def line_at_offset(self, offset: int) -> int:
        if self._table.count == 0:
            return self.content.line_at_offset(offset)
        return self._table.line_at_offset(offset)

    def offset_at_line(self, index: int) -> int:
        if self._table.count == 0:
            return self.content.offset_at_line(index)
        return self._table[index].offset

    def text_range(self, start: int, length: int) -> str:
        return self.content.text_range(start, length)

    def line_delimiter(self) -> str:
        return self.content.line_delimiter()

    # ------------------------------------------------------------------
    # Pass-through mutation
    # ------------------------------------------------------------------

    def replace_range(self, start: int, length: int, text: str) -> None:
        self.content.replace_range(start, length, text)

    def set_text(self, text: str) -> None:
        self.content.set_text(text)

    def add_change_listener(self, listener: TextChangeListener) -> None:
        self.content.add_change_listener(listener)

    def remove_change_listener(self, listener: TextChangeListener) -> None:
        self.content.remove_change_listener(listener)

    # ------------------------------------------------------------------
    # Wrapping
    # ------------------------------------------------------------------

    def wrap_all(self, width: int | None = None) -> None:
        """Rebuild every visual line for *width*.

        Without a width the last width is reused, or ``config.width`` before
        the first wrap.  Wrapping an unwrapped buffer at width 0 does nothing.
        """
        if width is None:
            width = self._width if self._width is not None else self.config.width
        if width < 0:
            raise ValueError(f"Wrap width must not be negative, got {width}")

        line_count = self.content.line_count()
        self._width = width
        self._table.clear(line_count)
        try:
            self._driver.wrap_range(0, line_count, 0, width)
        except Exception:
            self._abandon_pass()
            raise
        self._check_invariants()

    def validate(self) -> None:
        """Raise ``RuntimeError`` unless the visual lines partition every logical line.

        Each non-empty logical line must be covered by contiguous, non-empty
        visual lines from its first character to its last; an empty logical
        line has exactly one zero-length visual line.  Does nothing while
        unwrapped.
        """
        table = self._table
        if table.count == 0:
            return
        table.validate()

        index = 0
        for i in range(self.content.line_count()):
            offset = self.content.offset_at_line(i)
            end = offset + len(self.content.line_text(i))
            if offset == end:
                if index >= table.count or table[index] != VisualLine(offset, 0):
                    raise RuntimeError(f"Empty logical line {i} at {offset} has no zero-length visual line")
                index += 1
                continue
            position = offset
            while position < end:
                if index >= table.count:
                    raise RuntimeError(f"Logical line {i} not covered past offset {position}")
                line = table[index]
                if line.offset != position or line.length <= 0:
                    raise RuntimeError(f"Visual line {index} {line} does not continue logical line {i} at {position}")
                position = line.end
                index += 1
            if position != end:
                raise RuntimeError(f"Visual lines of logical line {i} end at {position}, expected {end}")

        if index != table.count:
            raise RuntimeError(f"{table.count - index} visual lines past the last logical line")

    def unwrap(self) -> None:
        """Discard the visual lines and pass every query through to the buffer."""
        self._table.clear()
        logger.debug("Wrapping disabled")

    def rewrap(self, start_line: int, line_count: int) -> None:
        """Re-wrap every logical line touched by visual lines ``start_line..start_line+line_count-1``.

        Used when something other than the text changed the line layout,
        e.g. new line styles.
        """
        if line_count <= 0 or self._table.count == 0:
            return
        visual_first, logical_first, logical_end = self._reset(start_line, line_count, 0)
        try:
            self._driver.wrap_and_compact(logical_first, logical_end, visual_first, self._wrap_width())
        except Exception:
            self._abandon_pass()
            raise
        self._check_invariants()

    def on_text_changed(
        self,
        start: int,
        inserted_lines: int,
        deleted_lines: int,
        inserted_chars: int,
        deleted_chars: int,
    ) -> None:
        """Update the visual lines after the buffer replaced text at *start*.

        The buffer must already hold the new text while the table still
        describes the old one.  Only the logical lines touched by the change
        are re-wrapped; visual lines after them move by the character delta.
        """
        table = self._table
        if table.count == 0:
            return

        delta = inserted_chars - deleted_chars
        visual_start = table.line_at_offset(start)
        if deleted_lines > 0:
            replace_end = start + deleted_chars
            visual_last = table.line_at_offset(replace_end)
            # The end of the deleted text starts the next visual line.
            if visual_last < table.count - 1 and table[visual_last + 1].offset == replace_end:
                visual_last += 1
            line_count = visual_last - visual_start + 1
        else:
            line_count = 1

        visual_first, logical_first, logical_end = self._reset(visual_start, line_count, delta)
        logger.debug(
            "Text changed at %d (+%d/-%d lines): re-wrapping lines %d..%d",
            start,
            inserted_lines,
            deleted_lines,
            logical_first,
            logical_end,
        )
        try:
            next_index = self._driver.wrap_and_compact(logical_first, logical_end, visual_first, self._wrap_width())
        except Exception:
            self._abandon_pass()
            raise
        table.shift(next_index, delta)
        self._check_invariants()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _wrap_width(self) -> int:
        return self._width if self._width is not None else self.config.width

    def _reset(self, start_line: int, line_count: int, delta: int) -> tuple[int, int, int]:
        """Reserve the visual lines ``start_line..start_line+line_count-1``, widened to whole logical lines.

        A logical line always wraps as a whole, so the range grows back to the
        first visual line of its first logical line and forward over every
        continuation line of its last one.  *delta* converts old offsets after
        the range into buffer offsets.

        Returns ``(first visual line, first logical line, end logical line)``.
        """
        table = self._table
        first_offset = table[start_line].offset
        logical_first = self.content.line_at_offset(first_offset)
        visual_first = table.line_at_offset(self.content.offset_at_line(logical_first))

        last = min(start_line + line_count, table.count) - 1
        while last < table.count - 1 and table[last].end == table[last + 1].offset:
            last += 1

        if last == table.count - 1:
            logical_end = self.content.line_count()
        else:
            logical_end = self.content.line_at_offset(table[last + 1].offset + delta)

        table.invalidate(visual_first, last - visual_first + 1)
        return visual_first, logical_first, logical_end

    def _check_invariants(self) -> None:
        if self.config.check_invariants:
            self.validate()

    def _abandon_pass(self) -> None:
        # A pass that did not finish leaves reserved slots behind.
        logger.warning("Wrap pass failed, falling back to unwrapped lines")
        self._table.clear()
