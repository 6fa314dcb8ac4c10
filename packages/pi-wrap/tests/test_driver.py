"""Tests for pi.wrap.driver -- wrap passes over logical line ranges."""

from __future__ import annotations

import pytest

from pi.wrap.content import PlainTextContent
from pi.wrap.driver import WrapDriver
from pi.wrap.styles import NoStyles, StaticStyles, StyleRange
from pi.wrap.table import VisualLine, VisualLineTable

from .recording_measurer import RecordingMeasurer


def _driver(
    text: str,
    measurer: RecordingMeasurer | None = None,
    styles: StaticStyles | None = None,
) -> WrapDriver:
    content = PlainTextContent(text)
    table = VisualLineTable(content.line_count())
    return WrapDriver(content, table, measurer or RecordingMeasurer(), styles or NoStyles())


class TestWrapRange:
    """Filling the table for a range of logical lines."""

    def test_wraps_single_line(self) -> None:
        driver = _driver("hello world foo")
        assert driver.wrap_range(0, 1, 0, 7) == 3
        assert list(driver.table) == [VisualLine(0, 6), VisualLine(6, 6), VisualLine(12, 3)]

    def test_empty_line_gets_one_zero_length_line(self) -> None:
        driver = _driver("a" * 19 + "\n\nxyz")
        driver.wrap_range(0, 3, 0, 80)
        assert list(driver.table) == [VisualLine(0, 19), VisualLine(20, 0), VisualLine(21, 3)]

    def test_subrange_writes_from_visual_index(self) -> None:
        driver = _driver("one\ntwo\nthree")
        assert driver.wrap_range(1, 3, 0, 80) == 2
        assert list(driver.table) == [VisualLine(4, 3), VisualLine(8, 5)]

    def test_start_x_accumulates_along_logical_line(self) -> None:
        measurer = RecordingMeasurer()
        driver = _driver("hello world foo\nbar", measurer)
        driver.wrap_range(0, 2, 0, 7)
        start_xs = {(call.text, call.start_x) for call in measurer.calls}
        assert ("hello ", 0) in start_xs
        assert ("world ", 6) in start_xs
        assert ("foo", 12) in start_xs
        # Each logical line starts at x = 0 again.
        assert ("bar", 0) in start_xs

    def test_line_styles_passed_to_measurement(self) -> None:
        measurer = RecordingMeasurer()
        styles = StaticStyles([StyleRange(0, 3, bold=True), StyleRange(13, 2, underline=True)])
        driver = _driver("hello world foo", measurer, styles)
        driver.wrap_range(0, 1, 0, 7)
        by_text = {call.text: call.styles for call in measurer.calls}
        assert by_text["hello "] == [StyleRange(0, 3, bold=True)]
        assert by_text["world "] == []
        assert by_text["foo"] == [StyleRange(13, 2, underline=True)]


class TestWrapRangeMeasureContext:
    """One measure context per pass, always released."""

    def test_one_context_per_pass(self) -> None:
        measurer = RecordingMeasurer()
        driver = _driver("aaa bbb ccc\nddd eee fff", measurer)
        driver.wrap_range(0, 2, 0, 5)
        assert measurer.opened == 1
        assert measurer.closed == 1

    def test_simple_mode_by_default(self) -> None:
        measurer = RecordingMeasurer()
        _driver("text", measurer).wrap_range(0, 1, 0, 10)
        assert measurer.contexts[0].mode == "simple"

    def test_bidi_mode_when_styles_request_it(self) -> None:
        measurer = RecordingMeasurer()
        _driver("text here", measurer, StaticStyles(bidi=True)).wrap_range(0, 1, 0, 10)
        assert measurer.contexts[0].mode == "bidi"
        assert all(call.offset is not None for call in measurer.calls)

    def test_context_released_when_measurement_fails(self) -> None:
        measurer = RecordingMeasurer(fail_after=1)
        driver = _driver("aaa bbb ccc", measurer)
        with pytest.raises(RuntimeError, match="measurement failed"):
            driver.wrap_range(0, 1, 0, 5)
        assert measurer.closed == measurer.opened == 1


class TestWrapRangeDefer:
    """Width 0 before the first wrap defers wrapping."""

    def test_zero_width_on_empty_table_is_noop(self) -> None:
        measurer = RecordingMeasurer()
        driver = _driver("hello world", measurer)
        assert driver.wrap_range(0, 1, 0, 0) == 0
        assert driver.table.count == 0
        assert measurer.calls == []
        assert measurer.closed == measurer.opened == 1

    def test_zero_width_on_wrapped_table_still_wraps(self) -> None:
        driver = _driver("abc\nde")
        driver.wrap_range(0, 1, 0, 80)
        assert driver.wrap_range(1, 2, 1, 0) == 3
        assert list(driver.table) == [VisualLine(0, 3), VisualLine(4, 1), VisualLine(5, 1)]


class TestWrapAndCompact:
    """Slots left over by a shrinking logical line are removed."""

    def test_compacts_after_fewer_visual_lines(self) -> None:
        driver = _driver("aaa bbb ccc\nzz")
        driver.wrap_range(0, 2, 0, 5)
        assert list(driver.table) == [
            VisualLine(0, 4),
            VisualLine(4, 4),
            VisualLine(8, 3),
            VisualLine(12, 2),
        ]
        # Pretend the first line now fits in one visual line.
        driver.table.invalidate(0, 3)
        assert driver.wrap_and_compact(0, 1, 0, 80) == 1
        assert list(driver.table) == [VisualLine(0, 11), VisualLine(12, 2)]
