# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for fonts/traversal.py."""

import pikepdf
from pikepdf import Array, Dictionary, Name

from conftest import add_page, new_pdf
from font_helpers import make_type0_font
from pdfcidfont.fonts.traversal import iter_all_page_fonts, iter_type0_fonts


def _simple_font(pdf: pikepdf.Pdf, name: str = "Helvetica"):
    return pdf.make_indirect(
        Dictionary(Type=Name.Font, Subtype=Name.Type1, BaseFont=Name(f"/{name}"))
    )


def _form_xobject(pdf: pikepdf.Pdf, fonts: dict):
    form = pdf.make_stream(b"")
    form[Name.Type] = Name.XObject
    form[Name.Subtype] = Name.Form
    form[Name.BBox] = Array([0, 0, 100, 100])
    form[Name.Resources] = Dictionary(Font=Dictionary(fonts))
    return form


class TestIterAllPageFonts:
    """Tests for iter_all_page_fonts()."""

    def test_page_resources(self) -> None:
        pdf = new_pdf()
        type0 = make_type0_font(pdf)
        add_page(pdf, {"/F1": type0, "/F2": _simple_font(pdf)})

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert sorted(keys) == ["/F1", "/F2"]

    def test_no_resources(self) -> None:
        pdf = new_pdf()
        add_page(pdf)

        assert list(iter_all_page_fonts(pdf.pages[0])) == []

    def test_form_xobject(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {})
        form = _form_xobject(pdf, {"/FX": make_type0_font(pdf)})
        pdf.pages[0].Resources.XObject = Dictionary(X1=form)

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert keys == ["/FX"]

    def test_form_xobject_cycle(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {})
        form = pdf.make_indirect(_form_xobject(pdf, {"/FX": make_type0_font(pdf)}))
        form.Resources.XObject = Dictionary(Self=form)
        pdf.pages[0].Resources.XObject = Dictionary(X1=form)

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert keys == ["/FX"]

    def test_tiling_pattern(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {})
        pattern = pdf.make_stream(b"")
        pattern[Name.PatternType] = 1
        pattern[Name.Resources] = Dictionary(
            Font=Dictionary(FP=make_type0_font(pdf))
        )
        pdf.pages[0].Resources.Pattern = Dictionary(P1=pattern)

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert keys == ["/FP"]

    def test_annotation_appearance(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {})
        ap = _form_xobject(pdf, {"/FA": make_type0_font(pdf)})
        annot = Dictionary(
            Type=Name.Annot,
            Subtype=Name.FreeText,
            Rect=Array([0, 0, 100, 100]),
            AP=Dictionary(N=ap),
        )
        pdf.pages[0].Annots = Array([pdf.make_indirect(annot)])

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert keys == ["/FA"]

    def test_annotation_appearance_substates(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {})
        on = _form_xobject(pdf, {"/FOn": make_type0_font(pdf)})
        off = _form_xobject(pdf, {"/FOff": make_type0_font(pdf)})
        annot = Dictionary(
            Type=Name.Annot,
            Subtype=Name.Widget,
            Rect=Array([0, 0, 10, 10]),
            AP=Dictionary(N=Dictionary(On=on, Off=off)),
        )
        pdf.pages[0].Annots = Array([annot])

        keys = sorted(key for key, _ in iter_all_page_fonts(pdf.pages[0]))

        assert keys == ["/FOff", "/FOn"]

    def test_type3_resources(self) -> None:
        pdf = new_pdf()
        type3 = pdf.make_indirect(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type3,
                Resources=Dictionary(Font=Dictionary(FI=make_type0_font(pdf))),
            )
        )
        add_page(pdf, {"/T3": type3})

        keys = [key for key, _ in iter_all_page_fonts(pdf.pages[0])]

        assert keys == ["/T3", "/FI"]


class TestIterType0Fonts:
    """Tests for iter_type0_fonts()."""

    def test_only_type0(self) -> None:
        pdf = new_pdf()
        type0 = make_type0_font(pdf)
        add_page(pdf, {"/F1": type0, "/F2": _simple_font(pdf)})

        found = list(iter_type0_fonts(pdf))

        assert len(found) == 1
        page_number, key, font = found[0]
        assert page_number == 1
        assert key == "/F1"
        assert font.objgen == type0.objgen

    def test_shared_font_reported_once(self) -> None:
        pdf = new_pdf()
        type0 = make_type0_font(pdf)
        add_page(pdf, {"/F1": type0})
        add_page(pdf, {"/F1": type0})

        found = list(iter_type0_fonts(pdf))

        assert [(page, key) for page, key, _ in found] == [(1, "/F1")]

    def test_page_numbers(self) -> None:
        pdf = new_pdf()
        add_page(pdf, {"/F1": _simple_font(pdf)})
        add_page(pdf, {"/F2": make_type0_font(pdf)})

        found = list(iter_type0_fonts(pdf))

        assert [(page, key) for page, key, _ in found] == [(2, "/F2")]

    def test_empty_document(self) -> None:
        assert list(iter_type0_fonts(new_pdf())) == []
