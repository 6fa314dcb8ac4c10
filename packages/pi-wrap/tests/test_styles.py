"""Tests for pi.wrap.styles."""

from __future__ import annotations

from pi.wrap.styles import NoStyles, StaticStyles, StyleRange, visual_line_styles


class TestVisualLineStyles:
    """Clip line styles to one visual line."""

    def test_keeps_ranges_inside(self) -> None:
        style = StyleRange(2, 3, bold=True)
        assert visual_line_styles([style], 0, 10) == [style]

    def test_clips_ranges_crossing_the_edges(self) -> None:
        styles = [StyleRange(0, 4, fg_color="red"), StyleRange(6, 6, italic=True)]
        result = visual_line_styles(styles, 2, 6)
        assert result == [StyleRange(2, 2, fg_color="red"), StyleRange(6, 2, italic=True)]

    def test_drops_ranges_outside(self) -> None:
        styles = [StyleRange(0, 2), StyleRange(10, 2)]
        assert visual_line_styles(styles, 2, 8) == []

    def test_empty_segment(self) -> None:
        assert visual_line_styles([StyleRange(0, 5)], 3, 0) == []

    def test_empty_range_overlaps_nothing(self) -> None:
        assert not StyleRange(0, 5).overlaps(3, 0)
        assert StyleRange(0, 5).overlaps(4, 1)
        assert not StyleRange(0, 5).overlaps(5, 1)


class TestProviders:
    """Built-in style providers."""

    def test_no_styles(self) -> None:
        provider = NoStyles()
        assert provider.line_styles(0, "text") is None
        assert not provider.is_bidi()

    def test_static_styles_selects_overlapping_ranges(self) -> None:
        first = StyleRange(0, 3, bold=True)
        second = StyleRange(8, 2, underline=True)
        provider = StaticStyles([second, first])
        assert provider.line_styles(0, "abcd") == [first]
        assert provider.line_styles(5, "abcde") == [second]

    def test_static_styles_empty_line(self) -> None:
        provider = StaticStyles([StyleRange(0, 5, bold=True)])
        assert provider.line_styles(3, "") == []

    def test_static_styles_without_ranges(self) -> None:
        assert StaticStyles().line_styles(0, "abc") is None

    def test_set_ranges_and_bidi(self) -> None:
        provider = StaticStyles()
        provider.set_ranges([StyleRange(1, 1)])
        provider.set_bidi(True)
        assert provider.line_styles(0, "abc") == [StyleRange(1, 1)]
        assert provider.is_bidi()
