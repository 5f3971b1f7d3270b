# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Glyph selection in CIDFonts (ISO 32000-2, 9.7.4.2).

A CIDFont addresses glyphs by CID, the embedded font program by GID. The
translation depends on the descendant font's /Subtype:

- /CIDFontType0 (CFF): if the CFF Top DICT uses CIDFont operators (ROS),
  the CID is looked up in the CFF charset to find the GID. Otherwise the
  CID is used directly as the GID. The GID indexes the CharStrings INDEX.
- /CIDFontType2 (TrueType): the /CIDToGIDMap maps CIDs to glyph indices.
  If the TrueType program is not embedded, the map is ignored since glyph
  indices of an external font program are meaningless.

The two addressing rules form a closed set: ``GlyphSource`` is the union of
:class:`CFFCharsetKeyed` and :class:`TrueTypeMapped`.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar

from fontTools.pens.recordingPen import RecordingPen

from ..exceptions import MalformedPDFError, RenderingUnsupportedError
from .cidtogid import CIDToGIDMap, ExplicitMap, IdentityMap
from .constants import CID_FONT_TYPE0, CID_FONT_TYPE2, CID_GLYPH_PREFIX
from .loader import FontProgram

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlyphOutline:
    """A glyph outline recorded from the font program.

    Attributes:
        gid: Glyph index in the font program.
        glyph_name: Name of the glyph in the program's glyph order.
        commands: fontTools RecordingPen operations, e.g.
            ``("moveTo", ((0, 0),))``.
    """

    gid: int
    glyph_name: str
    commands: tuple[tuple[str, tuple[Any, ...]], ...]


def _cff_top_dict(program: FontProgram | None):
    """Returns the CFF Top DICT of a program, or None."""
    if program is None or not program.is_cff:
        return None
    return program.tt_font["CFF "].cff.topDictIndex[0]


def _charset_cid(glyph_name: str) -> int | None:
    """Returns the CID encoded in a CID-keyed charset glyph name."""
    if glyph_name == ".notdef":
        return 0
    if glyph_name.startswith(CID_GLYPH_PREFIX):
        try:
            return int(glyph_name[len(CID_GLYPH_PREFIX) :])
        except ValueError:
            return None
    return None


def _glyph_name(glyph_order: list[str], gid: int) -> str:
    if 0 <= gid < len(glyph_order):
        return glyph_order[gid]
    # Out-of-range GIDs render the missing glyph
    return glyph_order[0]


def _record_outline(program: FontProgram | None, gid: int) -> GlyphOutline:
    """Draws glyph ``gid`` of an embedded program into a RecordingPen.

    Raises:
        RenderingUnsupportedError: If the program is missing, unparsed or
            has no outline table that can be drawn.
    """
    if program is None:
        raise RenderingUnsupportedError("Font program is not embedded")
    tt_font = program.tt_font
    if tt_font is None:
        raise RenderingUnsupportedError(
            f"Embedded font program {program.font_file_key} could not be parsed"
        )

    pen = RecordingPen()
    try:
        if program.is_truetype:
            glyph_order = tt_font.getGlyphOrder()
            name = _glyph_name(glyph_order, gid)
            glyf = tt_font["glyf"]
            glyf[name].draw(pen, glyf)
        elif program.is_cff:
            top_dict = _cff_top_dict(program)
            name = _glyph_name(top_dict.charset, gid)
            top_dict.CharStrings[name].draw(pen)
        else:
            raise RenderingUnsupportedError(
                f"Font program {program.font_file_key} has no glyf or CFF table"
            )
    except RenderingUnsupportedError:
        raise
    except Exception as e:
        raise RenderingUnsupportedError(f"Cannot draw glyph {gid}: {e}") from e

    return GlyphOutline(gid, name, tuple(pen.value))


@dataclass(frozen=True)
class CFFCharsetKeyed:
    """CFF-based CID addressing (CIDFontType0).

    Attributes:
        program: Embedded font program, or None when not embedded.
        cid_keyed: True if the CFF Top DICT declares CIDFont operators.
        charset_gids: CID-to-GID mapping derived from the CFF charset;
            only consulted when ``cid_keyed`` is True.
    """

    kind: ClassVar[str] = "CFFCharsetKeyed"

    program: FontProgram | None = field(default=None, compare=False)
    cid_keyed: bool = False
    charset_gids: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "charset_gids", MappingProxyType(dict(self.charset_gids))
        )

    @classmethod
    def from_program(cls, program: FontProgram | None) -> "CFFCharsetKeyed":
        """Builds the source, reading the charset of a CID-keyed program."""
        try:
            top_dict = _cff_top_dict(program)
        except Exception as e:
            logger.warning("Cannot read CFF program: %s", e)
            top_dict = None

        if top_dict is None:
            if program is not None:
                logger.debug("No CFF program available; CIDs used as GIDs")
            return cls(program, cid_keyed=False)

        if not hasattr(top_dict, "ROS"):
            logger.debug("CFF program is not CID-keyed; CIDs used as GIDs")
            return cls(program, cid_keyed=False)

        charset_gids: dict[int, int] = {}
        for gid, glyph_name in enumerate(top_dict.charset):
            cid = _charset_cid(glyph_name)
            if cid is not None:
                charset_gids.setdefault(cid, gid)
        logger.debug("CID-keyed CFF program with %d charset entries", len(charset_gids))
        return cls(program, cid_keyed=True, charset_gids=charset_gids)

    def resolve(self, cid: int) -> int:
        """Returns the GID for ``cid``.

        CIDs missing from a CID-keyed charset resolve to GID 0 (.notdef).
        """
        if self.cid_keyed:
            return self.charset_gids.get(cid, 0)
        return cid

    def outline(self, gid: int) -> GlyphOutline:
        """Records the CharStrings outline for ``gid``."""
        return _record_outline(self.program, gid)


@dataclass(frozen=True)
class TrueTypeMapped:
    """TrueType-based CID addressing (CIDFontType2).

    Attributes:
        program: Embedded font program, or None when not embedded.
        mapping: CID-to-GID mapping; always identity when the program
            is not embedded.
    """

    kind: ClassVar[str] = "TrueTypeMapped"

    program: FontProgram | None = field(default=None, compare=False)
    mapping: CIDToGIDMap = field(default_factory=IdentityMap)

    def resolve(self, cid: int) -> int:
        """Returns the GID for ``cid``."""
        return self.mapping.resolve(cid)

    def outline(self, gid: int) -> GlyphOutline:
        """Records the glyf outline for ``gid``."""
        return _record_outline(self.program, gid)


GlyphSource = CFFCharsetKeyed | TrueTypeMapped


def select_glyph_source(
    subtype: str,
    program: FontProgram | None,
    cid_to_gid: CIDToGIDMap,
) -> GlyphSource:
    """Selects the CID addressing rule for a descendant CIDFont.

    Args:
        subtype: Descendant font /Subtype, with leading slash.
        program: Embedded font program, or None when not embedded.
        cid_to_gid: Parsed /CIDToGIDMap; ignored for CFF-based fonts.

    Returns:
        CFFCharsetKeyed or TrueTypeMapped.

    Raises:
        MalformedPDFError: If ``subtype`` is not a CIDFont subtype.
    """
    if subtype == CID_FONT_TYPE0:
        return CFFCharsetKeyed.from_program(program)

    if subtype == CID_FONT_TYPE2:
        if program is None and isinstance(cid_to_gid, ExplicitMap):
            logger.debug(
                "TrueType program not embedded; ignoring /CIDToGIDMap with %d entries",
                len(cid_to_gid),
            )
            cid_to_gid = IdentityMap(explicit=False)
        return TrueTypeMapped(program, cid_to_gid)

    raise MalformedPDFError(f"Invalid /Subtype {subtype} for Type 0 font")
