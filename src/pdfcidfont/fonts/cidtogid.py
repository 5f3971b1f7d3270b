# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CIDToGIDMap parsing for TrueType-based CIDFonts (CIDFontType2).

The /CIDToGIDMap entry is either absent, the name /Identity, or a stream
of 2-byte big-endian GIDs indexed by CID. Whether the map is honored at
all depends on the font program being embedded, which is decided when
the glyph source is selected, not here.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Any

import pikepdf
from pikepdf import Name, Stream

from ..exceptions import MalformedPDFError, UnsupportedFeatureError
from ..utils import resolve_indirect
from .constants import IDENTITY
from .utils import safe_str

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityMap:
    """CID is used as the GID.

    ``explicit`` records whether /CIDToGIDMap /Identity was present.
    """

    explicit: bool = False

    def resolve(self, cid: int) -> int:
        return cid


@dataclass(frozen=True)
class ExplicitMap:
    """Explicit CID-to-GID table read from a /CIDToGIDMap stream."""

    gids: tuple[int, ...]

    def resolve(self, cid: int) -> int:
        """Returns the GID for ``cid``; CIDs past the table map to GID 0."""
        if 0 <= cid < len(self.gids):
            return self.gids[cid]
        return 0

    def __len__(self) -> int:
        return len(self.gids)


CIDToGIDMap = IdentityMap | ExplicitMap


def parse_cidtogidmap_stream(stream_data: bytes) -> ExplicitMap:
    """Parses CIDToGIDMap stream data.

    The stream contains 2-byte big-endian GID values, indexed by CID.
    CID 0 maps to the first 2 bytes, CID 1 to the next 2 bytes, etc.

    Args:
        stream_data: Decoded bytes of the CIDToGIDMap stream.

    Returns:
        ExplicitMap holding one GID per CID.
    """
    if len(stream_data) % 2 != 0:
        logger.warning(
            "CIDToGIDMap stream has odd length %d; possibly truncated",
            len(stream_data),
        )
    num_entries = len(stream_data) // 2
    gids = struct.unpack(f">{num_entries}H", stream_data[: num_entries * 2])
    return ExplicitMap(gids)


def parse_cidtogidmap(value: Any) -> CIDToGIDMap:
    """Resolves a /CIDToGIDMap entry.

    Args:
        value: The entry value, or None when the entry is absent.

    Returns:
        IdentityMap for an absent entry or /Identity, ExplicitMap for
        a stream.

    Raises:
        UnsupportedFeatureError: For any other entry shape.
        MalformedPDFError: If the stream cannot be decoded.
    """
    if value is None:
        return IdentityMap(explicit=False)

    value = resolve_indirect(value)
    if isinstance(value, Stream):
        try:
            data = bytes(value.read_bytes())
        except pikepdf.PdfError as e:
            raise MalformedPDFError(f"Cannot decode /CIDToGIDMap stream: {e}") from e
        return parse_cidtogidmap_stream(data)

    if isinstance(value, Name):
        if safe_str(value) == IDENTITY:
            return IdentityMap(explicit=True)
        raise UnsupportedFeatureError(
            f"Unsupported /CIDToGIDMap name {safe_str(value)}"
        )

    raise UnsupportedFeatureError(
        f"Unsupported /CIDToGIDMap entry of type {type(value).__name__}"
    )
