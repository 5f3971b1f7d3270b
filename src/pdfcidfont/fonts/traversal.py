# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Finding the font resources a page can reference.

Fonts are collected from the page's /Resources and, recursively, from
every resource dictionary that content drawn on the page can use:

- Form XObjects (/Subtype /Form)
- Tiling patterns (/PatternType 1)
- Type3 fonts, whose glyph procedures have resources of their own
- Annotation appearance streams (/AP /N, /R, /D and their sub-states)

Indirect containers are visited once per page, which also breaks
reference cycles between forms.
"""

import logging
from collections.abc import Iterator
from typing import Any

import pikepdf

from ..utils import resolve_indirect
from .utils import ObjGen, first_visit, safe_str

logger = logging.getLogger(__name__)

_APPEARANCE_KEYS = ("/N", "/R", "/D")


def _entry(container: Any, key: str, kind: type) -> Any:
    """Returns the resolved ``key`` entry if it is of ``kind``, else None."""
    value = container.get(key)
    if value is None:
        return None
    value = resolve_indirect(value)
    if not isinstance(value, kind):
        return None
    return value


def _has_name(obj: Any, key: str, name: str) -> bool:
    value = obj.get(key)
    return value is not None and safe_str(value) == name


def iter_all_page_fonts(
    page: pikepdf.Page,
) -> Iterator[tuple[str, pikepdf.Object]]:
    """Yields every (resource key, font) pair reachable from a page.

    Args:
        page: A pikepdf Page.

    Yields:
        Tuples of (font key with leading slash, dereferenced font object).
        A key can appear more than once when nested resources reuse it.
    """
    seen: set[ObjGen] = set()

    resources = _entry(page, "/Resources", pikepdf.Dictionary)
    if resources is not None:
        yield from _walk_resources(resources, seen)

    annots = _entry(page, "/Annots", pikepdf.Array)
    if annots is not None:
        for annot in annots:
            annot = resolve_indirect(annot)
            if isinstance(annot, pikepdf.Dictionary):
                yield from _walk_appearances(annot, seen)


def iter_type0_fonts(
    pdf: pikepdf.Pdf,
) -> Iterator[tuple[int, str, pikepdf.Dictionary]]:
    """Yields each Type0 font of a document once.

    Args:
        pdf: Opened pikepdf PDF.

    Yields:
        Tuples of (1-based page number, font key, font dictionary) for the
        first page a font is reachable from.
    """
    reported: set[ObjGen] = set()
    for page_number, page in enumerate(pdf.pages, start=1):
        for font_key, font in iter_all_page_fonts(page):
            if not isinstance(font, pikepdf.Dictionary):
                continue
            if not _has_name(font, "/Subtype", "/Type0"):
                continue
            if first_visit(font, reported):
                yield page_number, font_key, font


def _walk_resources(
    resources: pikepdf.Dictionary, seen: set[ObjGen]
) -> Iterator[tuple[str, pikepdf.Object]]:
    fonts = _entry(resources, "/Font", pikepdf.Dictionary)
    if fonts is not None:
        for key in list(fonts.keys()):
            font = resolve_indirect(fonts[key])
            yield safe_str(key, repr(key)), font
            if (
                isinstance(font, pikepdf.Dictionary)
                and _has_name(font, "/Subtype", "/Type3")
                and first_visit(font, seen)
            ):
                yield from _walk_nested(font, seen)

    xobjects = _entry(resources, "/XObject", pikepdf.Dictionary)
    if xobjects is not None:
        for key in list(xobjects.keys()):
            xobj = resolve_indirect(xobjects[key])
            if isinstance(xobj, pikepdf.Stream) and _has_name(
                xobj, "/Subtype", "/Form"
            ):
                yield from _walk_form(xobj, seen)

    patterns = _entry(resources, "/Pattern", pikepdf.Dictionary)
    if patterns is not None:
        for key in list(patterns.keys()):
            pattern = resolve_indirect(patterns[key])
            if not isinstance(pattern, (pikepdf.Stream, pikepdf.Dictionary)):
                continue
            # Shading patterns (type 2) have no content
            pattern_type = pattern.get("/PatternType")
            if isinstance(pattern_type, int) and pattern_type == 1:
                yield from _walk_form(pattern, seen)


def _walk_appearances(
    annot: pikepdf.Dictionary, seen: set[ObjGen]
) -> Iterator[tuple[str, pikepdf.Object]]:
    ap = _entry(annot, "/AP", pikepdf.Dictionary)
    if ap is None:
        return
    for ap_key in _APPEARANCE_KEYS:
        appearance = ap.get(ap_key)
        if appearance is None:
            continue
        appearance = resolve_indirect(appearance)
        if isinstance(appearance, pikepdf.Stream):
            yield from _walk_form(appearance, seen)
        elif isinstance(appearance, pikepdf.Dictionary):
            # Appearance sub-states, e.g. /On and /Off of a checkbox
            for state in list(appearance.keys()):
                stream = resolve_indirect(appearance[state])
                if isinstance(stream, pikepdf.Stream):
                    yield from _walk_form(stream, seen)


def _walk_form(
    form: pikepdf.Object, seen: set[ObjGen]
) -> Iterator[tuple[str, pikepdf.Object]]:
    if not first_visit(form, seen):
        logger.debug("Skipping already visited content stream %s", form.objgen)
        return
    yield from _walk_nested(form, seen)


def _walk_nested(
    owner: pikepdf.Object, seen: set[ObjGen]
) -> Iterator[tuple[str, pikepdf.Object]]:
    resources = _entry(owner, "/Resources", pikepdf.Dictionary)
    if resources is not None:
        yield from _walk_resources(resources, seen)
