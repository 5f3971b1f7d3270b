# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the pdfcidfont test suite."""

import logging
from pathlib import Path

import pikepdf
import pytest
from pikepdf import Array, Dictionary, Name, Pdf

# -- Global PDF tracker --

_tracked_pdfs: list[Pdf] = []


@pytest.fixture(autouse=True)
def _auto_close_pdfs():
    """Close all tracked PDF objects after each test."""
    yield
    for pdf in reversed(_tracked_pdfs):
        try:
            pdf.close()
        except Exception:
            pass
    _tracked_pdfs.clear()


def new_pdf(**kwargs) -> Pdf:
    """Create a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.new(**kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def open_pdf(source, **kwargs) -> Pdf:
    """Open a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.open(source, **kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def add_page(pdf: Pdf, fonts: dict[str, pikepdf.Object] | None = None) -> None:
    """Append a page whose Resources/Font holds ``fonts``."""
    page_dict = Dictionary(
        Type=Name.Page,
        MediaBox=Array([0, 0, 612, 792]),
    )
    if fonts is not None:
        page_dict[Name.Resources] = Dictionary(Font=Dictionary(fonts))
    page_dict[Name.Contents] = pdf.make_stream(b"BT /F1 12 Tf <0001> Tj ET")
    pdf.pages.append(pikepdf.Page(page_dict))


# -- Fixtures --


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Temporary directory for tests.

    Args:
        tmp_path: Pytest-provided temporary directory.

    Returns:
        Path to the temporary directory.
    """
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo logging configuration done by CLI invocations."""
    yield
    package_logger = logging.getLogger("pdfcidfont")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
