"""pi-wrap: incremental word wrapping of text buffers into visual lines."""

# Configuration
from pi.wrap.config import WrapConfig

# Logical buffer
from pi.wrap.content import PlainTextContent, TextChange, TextChangeListener, TextContent

# Wrap driver
from pi.wrap.driver import WrapDriver

# Width fitting
from pi.wrap.fitter import Fit, fit_segment, segment_width

# Measurement
from pi.wrap.measure import (
    CellMeasureContext,
    CellMeasurer,
    MeasureContext,
    MeasureMode,
    Measurer,
    TextLayout,
)

# Styles
from pi.wrap.styles import NoStyles, StaticStyles, StyleProvider, StyleRange, visual_line_styles

# Visual line table
from pi.wrap.table import RESERVED, VisualLine, VisualLineTable

# Utilities
from pi.wrap.utils import cell_width, is_space_char, visible_width

# Word boundaries
from pi.wrap.words import word_end, word_start

# Wrapped content
from pi.wrap.wrapped import WrappedContent

__all__ = [
    # Configuration
    "WrapConfig",
    # Logical buffer
    "PlainTextContent",
    "TextChange",
    "TextChangeListener",
    "TextContent",
    # Wrap driver
    "WrapDriver",
    # Width fitting
    "Fit",
    "fit_segment",
    "segment_width",
    # Measurement
    "CellMeasureContext",
    "CellMeasurer",
    "MeasureContext",
    "MeasureMode",
    "Measurer",
    "TextLayout",
    # Styles
    "NoStyles",
    "StaticStyles",
    "StyleProvider",
    "StyleRange",
    "visual_line_styles",
    # Visual line table
    "RESERVED",
    "VisualLine",
    "VisualLineTable",
    # Utilities
    "cell_width",
    "is_space_char",
    "visible_width",
    # Word boundaries
    "word_end",
    "word_start",
    # Wrapped content
    "WrappedContent",
]
