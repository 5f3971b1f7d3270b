# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Type0 (composite) fonts with an Identity-H encoding.

A Type0 font dictionary names a single descendant CIDFont which carries
CIDSystemInfo, widths (/DW, /W), the FontDescriptor with the embedded
program and, for TrueType-based fonts, the /CIDToGIDMap.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pikepdf
from pikepdf import Dictionary

from ..exceptions import MalformedPDFError, UnsupportedFeatureError
from ..utils import (
    get_array,
    get_dict,
    get_int,
    get_name,
    get_number,
    get_string,
    resolve_indirect,
)
from .cidtogid import CIDToGIDMap, IdentityMap, parse_cidtogidmap
from .constants import (
    CID_FONT_TYPE0,
    CID_FONT_TYPE2,
    DEFAULT_WIDTH,
    IDENTITY_H,
    SUPPLEMENT_MASK,
)
from .glyph_source import GlyphSource, select_glyph_source
from .layout import GlyphPainter, LayoutResult, Point, draw_string
from .loader import load_font_program
from .utils import get_encoding_name
from .utils import safe_str as _safe_str
from .widths import WidthTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CIDSystemInfo:
    """Character collection a CIDFont's CIDs belong to."""

    registry: str
    ordering: str
    supplement: int

    @classmethod
    def from_dict(cls, system_info: Dictionary) -> "CIDSystemInfo":
        """Reads a /CIDSystemInfo dictionary.

        /Supplement is stored in an unsigned byte. Larger values are
        truncated and a warning is logged.

        Raises:
            MalformedPDFError: If an entry is missing or wrong-typed.
        """
        registry = get_string(system_info, "/Registry")
        ordering = get_string(system_info, "/Ordering")
        raw_supplement = get_int(system_info, "/Supplement")
        supplement = raw_supplement & SUPPLEMENT_MASK
        if supplement != raw_supplement:
            logger.warning(
                "CIDSystemInfo %s-%s: /Supplement %d truncated to %d",
                registry,
                ordering,
                raw_supplement,
                supplement,
            )
        return cls(registry, ordering, supplement)

    def __str__(self) -> str:
        return f"{self.registry}-{self.ordering}-{self.supplement}"


class Type0Font:
    """Composite font descriptor.

    Built once per font resource with :meth:`initialize`; read-only
    afterwards.
    """

    def __init__(
        self,
        system_info: CIDSystemInfo,
        widths: WidthTable,
        glyph_source: GlyphSource,
        font_size: float,
        *,
        base_font: str = "",
        subtype: str = "",
    ) -> None:
        self.system_info = system_info
        self.widths = widths
        self.glyph_source = glyph_source
        self.font_size = font_size
        self.base_font = base_font
        self.subtype = subtype

    @classmethod
    def initialize(cls, font_dict: Any, font_size: float = 0.0) -> "Type0Font":
        """Builds a descriptor from a Type0 font dictionary.

        Args:
            font_dict: The Type0 font dictionary (pikepdf Dictionary).
            font_size: Nominal font size from the text state.

        Returns:
            Type0Font.

        Raises:
            UnsupportedFeatureError: For encodings other than Identity-H
                and unsupported /CIDToGIDMap entries.
            MalformedPDFError: For missing or wrong-typed entries and
                unknown descendant subtypes.
        """
        font_dict = resolve_indirect(font_dict)
        if not isinstance(font_dict, Dictionary):
            raise MalformedPDFError("Type0 font is not a dictionary")

        encoding = font_dict.get("/Encoding")
        if encoding is None:
            raise MalformedPDFError("Missing required entry /Encoding")
        encoding = resolve_indirect(encoding)
        # Arbitrary CMaps (and vertical Identity-V) are not supported
        if not isinstance(encoding, pikepdf.Name) or str(encoding) != IDENTITY_H:
            raise UnsupportedFeatureError(
                "Unsupported Type0 encoding "
                f"{get_encoding_name(encoding) or type(encoding).__name__}"
            )

        descendants = get_array(font_dict, "/DescendantFonts")
        if len(descendants) == 0:
            raise MalformedPDFError("/DescendantFonts is empty")
        descendant = resolve_indirect(descendants[0])
        if not isinstance(descendant, Dictionary):
            raise MalformedPDFError("/DescendantFonts[0] is not a dictionary")

        system_info = CIDSystemInfo.from_dict(get_dict(descendant, "/CIDSystemInfo"))
        subtype = get_name(descendant, "/Subtype")
        if subtype not in (CID_FONT_TYPE0, CID_FONT_TYPE2):
            raise MalformedPDFError(f"Invalid /Subtype {subtype} for Type 0 font")
        font_descriptor = get_dict(descendant, "/FontDescriptor")

        default_width = DEFAULT_WIDTH
        if "/DW" in descendant:
            default_width = int(get_number(descendant, "/DW"))

        w_array = None
        if "/W" in descendant:
            w_array = get_array(descendant, "/W")
        widths = WidthTable.from_w_array(w_array, default_width)

        cid_to_gid: CIDToGIDMap = IdentityMap()
        if subtype == CID_FONT_TYPE2:
            # /CIDToGIDMap belongs to the CIDFont; some writers put it on
            # the Type0 dictionary instead
            cid_to_gid_entry = descendant.get("/CIDToGIDMap")
            if cid_to_gid_entry is None:
                cid_to_gid_entry = font_dict.get("/CIDToGIDMap")
            cid_to_gid = parse_cidtogidmap(cid_to_gid_entry)

        program = load_font_program(font_descriptor)
        glyph_source = select_glyph_source(subtype, program, cid_to_gid)

        base_font = font_dict.get("/BaseFont")
        font = cls(
            system_info,
            widths,
            glyph_source,
            font_size,
            base_font=_safe_str(base_font).lstrip("/") if base_font is not None else "",
            subtype=subtype,
        )
        logger.info(
            "Loaded Type0 font %s (%s, %s, %s, %d widths)",
            font.base_font or "<unnamed>",
            subtype.lstrip("/"),
            system_info,
            glyph_source.kind,
            len(widths),
        )
        return font

    def get_char_width(self, code: int) -> float:
        """Returns the width of a character code in text space units.

        Under Identity-H the code is the CID.
        """
        return self.widths.get_advance_width(code)

    def set_font_size(self, font_size: float) -> None:
        # Widths are in text space; nothing depends on the size
        pass

    def draw_string(
        self,
        painter: GlyphPainter,
        position: Point,
        string: bytes,
        color: Any,
        font_size: float,
        character_spacing: float = 0.0,
        word_spacing: float = 0.0,
        horizontal_scaling: float = 1.0,
    ) -> LayoutResult:
        """Paints a 2-byte encoded string and returns the final pen position.

        See :func:`pdfcidfont.fonts.layout.draw_string`.
        """
        return draw_string(
            self.widths,
            self.glyph_source,
            painter,
            position,
            string,
            color,
            font_size,
            character_spacing,
            word_spacing,
            horizontal_scaling,
        )

    def close(self) -> None:
        """Releases the parsed embedded font program."""
        if self.glyph_source.program is not None:
            self.glyph_source.program.close()

    def __repr__(self) -> str:
        return (
            f"<Type0Font {self.base_font!r} {self.subtype} "
            f"{self.system_info} {self.glyph_source.kind}>"
        )
