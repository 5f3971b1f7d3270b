# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for fonts/layout.py."""

import logging

import pytest

from font_helpers import make_truetype_data
from pdfcidfont.exceptions import RenderingUnsupportedError
from pdfcidfont.fonts.cidtogid import ExplicitMap
from pdfcidfont.fonts.glyph_source import TrueTypeMapped
from pdfcidfont.fonts.layout import (
    Point,
    RecordingPainter,
    TextState,
    draw_string,
    iter_codes,
)
from pdfcidfont.fonts.loader import FontProgram, parse_font_data
from pdfcidfont.fonts.widths import WidthTable


@pytest.fixture
def embedded_source():
    program = FontProgram(
        "/FontFile2", None, parse_font_data(make_truetype_data(), "/FontFile2")
    )
    yield TrueTypeMapped(program)
    program.close()


class _RejectingPainter:
    """Painter that cannot paint any glyph."""

    def paint_glyph(self, outline, position, color, font_size) -> None:
        raise RenderingUnsupportedError("no paint surface")


class TestIterCodes:
    """Tests for iter_codes()."""

    def test_big_endian_pairs(self) -> None:
        assert list(iter_codes(b"\x00\x41\x01\x02")) == [0x41, 0x0102]

    def test_empty(self) -> None:
        assert list(iter_codes(b"")) == []

    def test_odd_length(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="pdfcidfont"):
            codes = list(iter_codes(b"\x00\x01\x02"))

        assert codes == [1]
        assert "odd length" in caplog.text


class TestTextState:
    """Tests for TextState.advance()."""

    def test_plain(self) -> None:
        assert TextState(12.0).advance(0.5) == pytest.approx(6.0)

    def test_spacing_and_scaling(self) -> None:
        state = TextState(10.0, char_spacing=2.0, horizontal_scaling=0.5)

        assert state.advance(1.0) == pytest.approx((10.0 + 2.0) * 0.5)

    def test_word_spacing_not_applied(self) -> None:
        assert TextState(10.0, word_spacing=5.0).advance(1.0) == pytest.approx(10.0)


class TestDrawString:
    """Tests for draw_string()."""

    def test_paints_each_glyph_at_pen_position(self, embedded_source) -> None:
        widths = WidthTable.from_w_array([1, [500, 250]])
        painter = RecordingPainter()

        result = draw_string(
            widths,
            embedded_source,
            painter,
            Point(10.0, 20.0),
            b"\x00\x01\x00\x02",
            "black",
            12.0,
        )

        assert result.painted == 2
        assert result.skipped == 0
        assert [g.position for g in painter.glyphs] == [
            Point(10.0, 20.0),
            Point(16.0, 20.0),
        ]
        assert [g.outline.gid for g in painter.glyphs] == [1, 2]
        assert painter.glyphs[0].color == "black"
        assert painter.glyphs[0].font_size == 12.0
        assert result.position.x == pytest.approx(10.0 + 6.0 + 3.0)
        assert result.position.y == 20.0

    def test_default_width_advance(self, embedded_source) -> None:
        result = draw_string(
            WidthTable(),
            embedded_source,
            RecordingPainter(),
            Point(0.0, 0.0),
            b"\x00\x01\x00\x01\x00\x01",
            None,
            10.0,
        )

        assert result.position.x == pytest.approx(30.0)

    def test_character_spacing_and_scaling(self, embedded_source) -> None:
        result = draw_string(
            WidthTable.from_w_array([1, 1, 500]),
            embedded_source,
            RecordingPainter(),
            Point(0.0, 0.0),
            b"\x00\x01\x00\x01",
            None,
            10.0,
            character_spacing=1.0,
            horizontal_scaling=2.0,
        )

        assert result.position.x == pytest.approx(2 * (5.0 + 1.0) * 2.0)

    def test_word_spacing_ignored_for_two_byte_codes(self, embedded_source) -> None:
        result = draw_string(
            WidthTable(),
            embedded_source,
            RecordingPainter(),
            Point(0.0, 0.0),
            b"\x00\x20",
            None,
            10.0,
            word_spacing=100.0,
        )

        assert result.position.x == pytest.approx(10.0)

    def test_cid_to_gid_mapping_applied(self) -> None:
        program = FontProgram(
            "/FontFile2", None, parse_font_data(make_truetype_data(), "/FontFile2")
        )
        source = TrueTypeMapped(program, ExplicitMap((0, 3)))
        painter = RecordingPainter()

        draw_string(
            WidthTable(), source, painter, Point(0.0, 0.0), b"\x00\x01", None, 12.0
        )

        assert painter.glyphs[0].outline.gid == 3
        assert painter.glyphs[0].outline.glyph_name == "glyph00003"
        program.close()

    def test_unsupported_source_still_advances(self) -> None:
        """Glyphs without an outline are skipped but keep their width."""
        painter = RecordingPainter()

        result = draw_string(
            WidthTable.from_w_array([5, [600]]),
            TrueTypeMapped(None),
            painter,
            Point(1.0, 2.0),
            b"\x00\x05\x00\x06",
            None,
            10.0,
        )

        assert painter.glyphs == []
        assert result.painted == 0
        assert result.skipped == 2
        assert result.position == Point(pytest.approx(1.0 + 6.0 + 10.0), 2.0)

    def test_painter_rejection_still_advances(self, embedded_source) -> None:
        result = draw_string(
            WidthTable(),
            embedded_source,
            _RejectingPainter(),
            Point(0.0, 0.0),
            b"\x00\x01",
            None,
            12.0,
        )

        assert result.skipped == 1
        assert result.position.x == pytest.approx(12.0)

    def test_empty_string(self, embedded_source) -> None:
        result = draw_string(
            WidthTable(),
            embedded_source,
            RecordingPainter(),
            Point(3.0, 4.0),
            b"",
            None,
            12.0,
        )

        assert result.position == Point(3.0, 4.0)
        assert result.painted == 0

    def test_trailing_odd_byte_ignored(self, embedded_source) -> None:
        result = draw_string(
            WidthTable(),
            embedded_source,
            RecordingPainter(),
            Point(0.0, 0.0),
            b"\x00\x01\x00",
            None,
            10.0,
        )

        assert result.painted == 1
        assert result.position.x == pytest.approx(10.0)
