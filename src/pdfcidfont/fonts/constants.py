# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font constants for composite (Type0) fonts."""

# The only supported Type0 encoding: 2-byte codes, code == CID
IDENTITY_H = "/Identity-H"

# CIDToGIDMap name for the identity mapping
IDENTITY = "/Identity"

# Descendant CIDFont subtypes
CID_FONT_TYPE0 = "/CIDFontType0"  # CFF-based
CID_FONT_TYPE2 = "/CIDFontType2"  # TrueType-based

# /DW when the descendant font does not specify one (1.0 em)
DEFAULT_WIDTH = 1000

# Glyph space units per text space unit
GLYPH_UNITS_PER_EM = 1000.0

# CIDs and GIDs are 16-bit values
MAX_CID = 0xFFFF

# /W and /DW widths are unsigned 16-bit glyph space values
MAX_WIDTH = 0xFFFF

# CIDSystemInfo /Supplement is kept in an unsigned byte
SUPPLEMENT_MASK = 0xFF

# Embedded font program keys in a FontDescriptor, in lookup order
FONT_FILE_KEYS = ("/FontFile2", "/FontFile3", "/FontFile")

# CFF glyph name prefix for CID-keyed charsets (cid00041, ...)
CID_GLYPH_PREFIX = "cid"
