"""Wrap driver: fill the visual line table for a range of logical lines."""

from __future__ import annotations

import logging
from typing import Callable

from pi.wrap.content import TextContent
from pi.wrap.fitter import fit_segment
from pi.wrap.measure import MeasureMode, Measurer
from pi.wrap.styles import StyleProvider
from pi.wrap.table import VisualLineTable
from pi.wrap.utils import is_space_char

logger = logging.getLogger(__name__)


class WrapDriver:
    """Runs wrap passes over a :class:`VisualLineTable`.

    The driver only writes the table; deciding which slots to reserve before
    a pass is up to the caller.
    """

    def __init__(
        self,
        content: TextContent,
        table: VisualLineTable,
        measurer: Measurer,
        styles: StyleProvider,
        is_space: Callable[[str], bool] = is_space_char,
    ) -> None:
        self.content = content
        self.table = table
        self.measurer = measurer
        self.styles = styles
        self.is_space = is_space

    def wrap_range(self, start_line: int, end_line: int, visual_index: int, width: int) -> int:
        """Wrap logical lines ``start_line..end_line-1`` into the table from *visual_index*.

        Returns the index after the last visual line written.  Before the
        first wrap a width of 0 means the host has not been sized yet; the
        pass is skipped and *visual_index* returned unchanged.
        """
        mode: MeasureMode = "bidi" if self.styles.is_bidi() else "simple"
        with self.measurer.open(mode) as context:
            if self.table.count == 0 and width == 0:
                logger.debug("Deferring wrap of lines %d..%d until width is known", start_line, end_line)
                return visual_index

            first_index = visual_index
            num_chars = max(1, width // max(1, context.average_char_width))

            for i in range(start_line, end_line):
                line = self.content.line_text(i)
                line_offset = self.content.offset_at_line(i)

                if not line:
                    self.table.put(visual_index, line_offset, 0)
                    visual_index += 1
                    continue

                line_styles = self.styles.line_styles(line_offset, line)
                start = 0
                start_x = 0
                while start < len(line):
                    fit = fit_segment(
                        line,
                        line_offset,
                        start,
                        start_x,
                        width,
                        num_chars,
                        line_styles,
                        context,
                        self.is_space,
                    )
                    self.table.put(visual_index, line_offset + start, fit.length)
                    start += fit.length
                    start_x += fit.width
                    visual_index += 1

        logger.debug(
            "Wrapped lines %d..%d at width %d into %d visual lines",
            start_line,
            end_line,
            width,
            visual_index - first_index,
        )
        return visual_index

    def wrap_and_compact(self, start_line: int, end_line: int, visual_index: int, width: int) -> int:
        """Like :meth:`wrap_range`, then close the reserved slots left after the pass."""
        visual_index = self.wrap_range(start_line, end_line, visual_index, width)
        removed = self.table.compact(visual_index)
        if removed:
            logger.debug("Compacted %d reserved visual lines at %d", removed, visual_index)
        return visual_index
