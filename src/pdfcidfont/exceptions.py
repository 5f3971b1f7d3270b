# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for pdfcidfont."""


class PDFCIDFontError(Exception):
    """Base exception for all pdfcidfont errors."""


class FontError(PDFCIDFontError):
    """Font could not be constructed from its dictionary."""


class MalformedPDFError(FontError):
    """Font dictionary entries are missing, wrong-typed or invalid."""


class UnsupportedFeatureError(FontError):
    """Font uses a valid construct that is not implemented."""


class RenderingUnsupportedError(PDFCIDFontError):
    """Glyph outline cannot be resolved or painted.

    Raised per glyph while drawing. Callers skip the glyph and keep
    the advance.
    """
