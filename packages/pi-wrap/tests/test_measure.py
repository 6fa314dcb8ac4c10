"""Tests for pi.wrap.measure -- the terminal cell measurer and text layouts."""

from __future__ import annotations

import pytest

from pi.wrap.measure import CellMeasurer, TextLayout


class TestTextLayout:
    """Widths of laid-out segments."""

    def test_ltr_text(self) -> None:
        assert TextLayout(text="abc def", offset=0).width == 7

    def test_mixed_direction_text(self) -> None:
        assert TextLayout(text="abc \u05d0\u05d1\u05d2", offset=10).width == 7

    def test_empty_text(self) -> None:
        assert TextLayout(text="", offset=0).width == 0

    def test_tab_measured_from_segment_start(self) -> None:
        assert TextLayout(text="a\t", offset=5, tab_width=4).width == 4


class TestCellMeasurer:
    """Context lifetime and cell measurement."""

    def test_text_width_uses_start_column(self) -> None:
        measurer = CellMeasurer(tab_width=4)
        with measurer.open() as context:
            assert context.mode == "simple"
            assert context.average_char_width == 1
            assert context.text_width("ab", [], 0) == 2
            assert context.text_width("\t", [], 1) == 3

    def test_bidi_mode_layout(self) -> None:
        with CellMeasurer().open("bidi") as context:
            assert context.mode == "bidi"
            assert context.layout("שלום", 0, []).width == 4

    def test_open_count_returns_to_zero(self) -> None:
        measurer = CellMeasurer()
        with measurer.open():
            assert measurer.open_count == 1
        assert measurer.open_count == 0

    def test_context_released_on_error(self) -> None:
        measurer = CellMeasurer()
        with pytest.raises(KeyError):
            with measurer.open():
                raise KeyError("boom")
        assert measurer.open_count == 0

    def test_closed_context_rejects_use(self) -> None:
        with CellMeasurer().open() as context:
            pass
        with pytest.raises(RuntimeError):
            context.text_width("a", [], 0)
        with pytest.raises(RuntimeError):
            context.layout("a", 0, [])
