# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""String layout for Identity-H encoded Type0 fonts.

Strings are sequences of 2-byte big-endian codes, each code being the CID.
For every code the glyph is painted at the current pen position and the
pen advances by::

    (w0 * font_size + char_spacing) * horizontal_scaling

where ``w0`` is the CID's width in text space. Word spacing applies only
to the single-byte code 32, which a 2-byte encoding never produces.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Protocol

from ..exceptions import RenderingUnsupportedError
from .glyph_source import GlyphOutline, GlyphSource
from .widths import WidthTable

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    x: float
    y: float


class GlyphPainter(Protocol):
    """Paint surface receiving glyph outlines.

    Implementations may raise RenderingUnsupportedError for outlines
    they cannot paint; the glyph is then skipped.
    """

    def paint_glyph(
        self,
        outline: GlyphOutline,
        position: Point,
        color: Any,
        font_size: float,
    ) -> None: ...


@dataclass(frozen=True)
class PaintedGlyph:
    outline: GlyphOutline
    position: Point
    color: Any
    font_size: float


@dataclass
class RecordingPainter:
    """Painter that keeps every paint request in memory."""

    glyphs: list[PaintedGlyph] = field(default_factory=list)

    def paint_glyph(
        self,
        outline: GlyphOutline,
        position: Point,
        color: Any,
        font_size: float,
    ) -> None:
        self.glyphs.append(PaintedGlyph(outline, position, color, font_size))


@dataclass(frozen=True)
class TextState:
    """Text state parameters used for layout (ISO 32000-2, 9.3)."""

    font_size: float
    char_spacing: float = 0.0
    word_spacing: float = 0.0
    horizontal_scaling: float = 1.0

    def advance(self, width: float) -> float:
        """Horizontal displacement for a glyph of text-space ``width``."""
        return (width * self.font_size + self.char_spacing) * self.horizontal_scaling


@dataclass(frozen=True)
class LayoutResult:
    """Outcome of laying out one string.

    Attributes:
        position: Pen position after the last glyph.
        painted: Number of glyphs handed to the painter.
        skipped: Number of glyphs whose outline could not be painted.
    """

    position: Point
    painted: int = 0
    skipped: int = 0


def iter_codes(data: bytes) -> Iterator[int]:
    """Yields 2-byte big-endian character codes from ``data``.

    A trailing odd byte is ignored.
    """
    if len(data) % 2 != 0:
        logger.warning(
            "String of odd length %d for 2-byte encoding; ignoring last byte",
            len(data),
        )
    for i in range(0, len(data) - 1, 2):
        yield (data[i] << 8) | data[i + 1]


def draw_string(
    widths: WidthTable,
    glyph_source: GlyphSource,
    painter: GlyphPainter,
    position: Point,
    data: bytes,
    color: Any,
    font_size: float,
    character_spacing: float = 0.0,
    word_spacing: float = 0.0,
    horizontal_scaling: float = 1.0,
) -> LayoutResult:
    """Lays out and paints an Identity-H encoded string.

    Glyphs whose outline cannot be resolved or painted are skipped, but
    their advance is still applied.

    Args:
        widths: Width table of the font.
        glyph_source: CID addressing rule of the font.
        painter: Paint surface.
        position: Starting pen position.
        data: Encoded string bytes.
        color: Paint color, passed through to the painter.
        font_size: Text font size (Tfs).
        character_spacing: Character spacing (Tc).
        word_spacing: Word spacing (Tw); never applied to 2-byte codes.
        horizontal_scaling: Horizontal scaling (Th) as a factor.

    Returns:
        LayoutResult with the final pen position.
    """
    state = TextState(font_size, character_spacing, word_spacing, horizontal_scaling)
    x, y = position
    painted = 0
    skipped = 0

    for cid in iter_codes(bytes(data)):
        gid = glyph_source.resolve(cid)
        try:
            outline = glyph_source.outline(gid)
            painter.paint_glyph(outline, Point(x, y), color, font_size)
            painted += 1
        except RenderingUnsupportedError as e:
            logger.debug("Skipping CID %d (GID %d): %s", cid, gid, e)
            skipped += 1

        x += state.advance(widths.get_advance_width(cid))

    return LayoutResult(Point(x, y), painted, skipped)
