# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""pdfcidfont - Resolve composite (Type0) PDF fonts and lay out their text."""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    FontError,
    MalformedPDFError,
    PDFCIDFontError,
    RenderingUnsupportedError,
    UnsupportedFeatureError,
)
from .fonts import (
    CIDSystemInfo,
    FontResourceCache,
    Point,
    RecordingPainter,
    TextState,
    Type0Font,
    WidthTable,
)

try:
    __version__ = version("pdfcidfont")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "Type0Font",
    "CIDSystemInfo",
    "WidthTable",
    "FontResourceCache",
    "Point",
    "RecordingPainter",
    "TextState",
    "PDFCIDFontError",
    "FontError",
    "MalformedPDFError",
    "UnsupportedFeatureError",
    "RenderingUnsupportedError",
]
