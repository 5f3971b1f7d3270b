# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CIDFont width tables.

The /W array of a CIDFont stores widths in two interleaved formats:

- ``c [w1 w2 ... wn]``: individual widths for consecutive CIDs starting at c
- ``c_first c_last w``: the same width for every CID in the inclusive range

After a starting CID has been read, the kind of the next element decides
which format applies: an array selects the first, a number the second.
CIDs not listed fall back to /DW (1000 when absent).
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pikepdf import Array

from ..exceptions import MalformedPDFError
from ..utils import is_number, resolve_indirect
from .constants import DEFAULT_WIDTH, GLYPH_UNITS_PER_EM, MAX_CID, MAX_WIDTH

logger = logging.getLogger(__name__)


def _is_array(value: Any) -> bool:
    return isinstance(value, (Array, list, tuple))


def _to_cid(value: int, index: int) -> int:
    if not 0 <= value <= MAX_CID:
        raise MalformedPDFError(f"/W entry {index}: CID {value} out of range")
    return value


def _to_int(value: Any, index: int) -> int:
    value = resolve_indirect(value)
    if not is_number(value):
        raise MalformedPDFError(
            f"/W entry {index}: expected a number, got {type(value).__name__}"
        )
    return int(value)


def _check_width(width: int, where: str) -> int:
    if not 0 <= width <= MAX_WIDTH:
        raise MalformedPDFError(f"{where}: width {width} out of range")
    return width


def parse_w_array(w_array: Iterable[Any]) -> dict[int, int]:
    """Parses a CIDFont /W array into a CID-to-width mapping.

    Args:
        w_array: pikepdf Array (or any iterable of numbers and nested
            arrays) representing the /W entry.

    Returns:
        Dictionary mapping CID to declared width.

    Raises:
        MalformedPDFError: If an element has the wrong kind, a CID or
            width is out of range, or the array ends mid-entry.
    """
    widths: dict[int, int] = {}
    first_cid: int | None = None
    last_cid: int | None = None

    for index, item in enumerate(resolve_indirect(w_array)):
        item = resolve_indirect(item)

        if _is_array(item):
            if first_cid is None or last_cid is not None:
                raise MalformedPDFError(f"/W entry {index}: unexpected array")
            for offset, width in enumerate(item):
                cid = _to_cid(first_cid + offset, index)
                width = _to_int(width, index)
                widths[cid] = _check_width(width, f"/W entry {index}")
            first_cid = None
            continue

        value = _to_int(item, index)
        if first_cid is None:
            first_cid = _to_cid(value, index)
        elif last_cid is None:
            last_cid = _to_cid(value, index)
        else:
            width = _check_width(value, f"/W entry {index}")
            for cid in range(first_cid, last_cid + 1):
                widths[cid] = width
            first_cid = last_cid = None

    if first_cid is not None:
        raise MalformedPDFError("/W array ends with an incomplete entry")

    return widths


@dataclass(frozen=True)
class WidthTable:
    """Sparse CID-to-width store with a default fallback.

    Widths are in glyph space (1/1000 of text space).
    """

    widths: Mapping[int, int] = field(default_factory=dict)
    default_width: int = DEFAULT_WIDTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "widths", MappingProxyType(dict(self.widths)))

    @classmethod
    def from_w_array(
        cls, w_array: Iterable[Any] | None, default_width: int = DEFAULT_WIDTH
    ) -> "WidthTable":
        """Builds a table from a /W array (None means no explicit widths).

        Raises:
            MalformedPDFError: If /W is malformed or ``default_width`` is
                outside 0..65535.
        """
        _check_width(default_width, "/DW")
        widths = parse_w_array(w_array) if w_array is not None else {}
        logger.debug(
            "Width table: %d explicit widths, default %d", len(widths), default_width
        )
        return cls(widths, default_width)

    def get_width(self, cid: int) -> int:
        """Returns the glyph-space width for a CID."""
        return self.widths.get(cid, self.default_width)

    def get_advance_width(self, cid: int) -> float:
        """Returns the width of a CID in text space units."""
        return self.get_width(cid) / GLYPH_UNITS_PER_EM

    def __len__(self) -> int:
        return len(self.widths)

    def __contains__(self, cid: object) -> bool:
        return cid in self.widths
