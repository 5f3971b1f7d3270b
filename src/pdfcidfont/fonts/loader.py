# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Access to font programs embedded in a CIDFont's FontDescriptor."""

import io
import logging
import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pikepdf
from fontTools.ttLib import TTFont

from ..utils import resolve_indirect as _resolve
from .constants import FONT_FILE_KEYS
from .utils import safe_str as _safe_str

if TYPE_CHECKING:
    from pikepdf import Dictionary

logger = logging.getLogger(__name__)

# FontFile3 subtypes holding a bare CFF program
_BARE_CFF_SUBTYPES = frozenset({"/CIDFontType0C", "/Type1C"})


@dataclass
class FontProgram:
    """An embedded font program.

    Attributes:
        font_file_key: FontDescriptor key the program was read from.
        subtype: /Subtype of the font file stream, if any.
        tt_font: Parsed fontTools font, or None when the program could
            not be parsed (it still counts as embedded).
    """

    font_file_key: str
    subtype: str | None
    tt_font: TTFont | None

    @property
    def is_cff(self) -> bool:
        """True if the program carries CFF (Type 2) outlines."""
        return self.tt_font is not None and "CFF " in self.tt_font

    @property
    def is_truetype(self) -> bool:
        """True if the program carries TrueType (glyf) outlines."""
        return self.tt_font is not None and "glyf" in self.tt_font

    def close(self) -> None:
        if self.tt_font is not None:
            self.tt_font.close()


_SFNT_HEADER_SIZE = 12
_TABLE_RECORD_SIZE = 16


def wrap_cff_in_otf(cff_data: bytes) -> bytes:
    """Wraps a bare CFF program in a single-table OpenType container.

    fontTools only reads CFF as the ``CFF `` table of an sfnt, while
    FontFile3 streams of subtype /CIDFontType0C hold the CFF data alone.

    Args:
        cff_data: CFF program starting with its header.

    Returns:
        OTTO sfnt bytes whose only table is ``CFF ``.

    Raises:
        ValueError: If ``cff_data`` does not start with a CFF 1.x header.
    """
    # CFF header: major, minor, hdrSize, offSize
    if len(cff_data) < 4 or cff_data[0] != 1:
        raise ValueError("Not a CFF version 1 program")

    padded = cff_data + b"\x00" * (-len(cff_data) % 4)
    words = struct.unpack(f">{len(padded) // 4}I", padded)
    checksum = sum(words) & 0xFFFFFFFF

    # numTables=1: searchRange=16, entrySelector=0, rangeShift=0
    header = struct.pack(">4sHHHH", b"OTTO", 1, _TABLE_RECORD_SIZE, 0, 0)
    record = struct.pack(
        ">4sIII",
        b"CFF ",
        checksum,
        _SFNT_HEADER_SIZE + _TABLE_RECORD_SIZE,
        len(cff_data),
    )
    return header + record + padded


def _open_ttfont(data: bytes, font_file_key: str) -> TTFont | None:
    try:
        return TTFont(io.BytesIO(data))
    except Exception as e:
        logger.debug("Font program %s not parsable: %s", font_file_key, e)
        return None


def parse_font_data(
    font_data: bytes, font_file_key: str, subtype: str | None = None
) -> TTFont | None:
    """Parses raw font program bytes with fontTools.

    Bare CFF (FontFile3 with /CIDFontType0C or /Type1C) is wrapped in a
    minimal OTF container first. Other FontFile3 data is tried as an
    sfnt, then as bare CFF. Type1 programs (/FontFile) are not parsed.

    Args:
        font_data: Decoded font file stream bytes.
        font_file_key: FontDescriptor key the data came from.
        subtype: /Subtype of the font file stream.

    Returns:
        fontTools TTFont, or None if the program cannot be parsed.
    """
    if font_file_key == "/FontFile":
        logger.debug("Type1 font programs are not parsed")
        return None

    bare_cff = subtype in _BARE_CFF_SUBTYPES
    if not bare_cff:
        tt_font = _open_ttfont(font_data, font_file_key)
        if tt_font is not None or font_file_key != "/FontFile3":
            return tt_font

    try:
        wrapped = wrap_cff_in_otf(font_data)
    except ValueError as e:
        logger.debug("Font program %s not parsable: %s", font_file_key, e)
        return None
    return _open_ttfont(wrapped, font_file_key)


def load_font_program(font_descriptor: "Dictionary") -> FontProgram | None:
    """Loads the embedded font program of a FontDescriptor.

    Args:
        font_descriptor: The CIDFont's /FontDescriptor dictionary.

    Returns:
        FontProgram, or None when no program is embedded.
    """
    for key in FONT_FILE_KEYS:
        stream = font_descriptor.get(key)
        if stream is None:
            continue
        stream = _resolve(stream)
        if not isinstance(stream, pikepdf.Stream):
            logger.warning("FontDescriptor %s is not a stream; ignoring", key)
            continue

        subtype_obj = stream.get("/Subtype")
        subtype = _safe_str(subtype_obj) if subtype_obj is not None else None
        try:
            font_data = bytes(stream.read_bytes())
        except pikepdf.PdfError as e:
            logger.warning("Cannot decode embedded font program %s: %s", key, e)
            return FontProgram(key, subtype, None)

        tt_font = parse_font_data(font_data, key, subtype)
        if tt_font is None:
            logger.warning(
                "Embedded font program %s could not be parsed; "
                "glyph outlines unavailable",
                key,
            )
        return FontProgram(key, subtype, tt_font)

    return None
