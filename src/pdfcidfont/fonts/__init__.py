# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Composite (Type0) font resolution and string layout."""

from ..exceptions import (
    FontError,
    MalformedPDFError,
    RenderingUnsupportedError,
    UnsupportedFeatureError,
)
from .cache import FontResourceCache
from .cidtogid import ExplicitMap, IdentityMap, parse_cidtogidmap
from .glyph_source import (
    CFFCharsetKeyed,
    GlyphOutline,
    GlyphSource,
    TrueTypeMapped,
    select_glyph_source,
)
from .layout import (
    GlyphPainter,
    LayoutResult,
    Point,
    RecordingPainter,
    TextState,
    draw_string,
)
from .loader import FontProgram, load_font_program
from .traversal import iter_all_page_fonts, iter_type0_fonts
from .type0 import CIDSystemInfo, Type0Font
from .widths import WidthTable, parse_w_array

__all__ = [
    # Exceptions
    "FontError",
    "MalformedPDFError",
    "RenderingUnsupportedError",
    "UnsupportedFeatureError",
    # Descriptor
    "CIDSystemInfo",
    "Type0Font",
    "FontResourceCache",
    # Widths
    "WidthTable",
    "parse_w_array",
    # Glyph addressing
    "CFFCharsetKeyed",
    "TrueTypeMapped",
    "GlyphSource",
    "GlyphOutline",
    "select_glyph_source",
    "ExplicitMap",
    "IdentityMap",
    "parse_cidtogidmap",
    "FontProgram",
    "load_font_program",
    # Layout
    "GlyphPainter",
    "LayoutResult",
    "Point",
    "RecordingPainter",
    "TextState",
    "draw_string",
    # Discovery
    "iter_all_page_fonts",
    "iter_type0_fonts",
]
