# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Helpers shared by the font modules."""

from typing import Any

import pikepdf

ObjGen = tuple[int, int]


def obj_key(obj: Any) -> ObjGen | None:
    """Returns the (object number, generation) of an indirect object.

    Direct objects and plain Python values have no stable identity in the
    document and yield None.
    """
    objgen = getattr(obj, "objgen", None)
    if objgen is None or objgen == (0, 0):
        return None
    return objgen


def first_visit(obj: Any, seen: set[ObjGen]) -> bool:
    """Records ``obj`` in ``seen``; False if it was recorded before.

    Direct objects are always reported as a first visit.
    """
    key = obj_key(obj)
    if key is None:
        return True
    if key in seen:
        return False
    seen.add(key)
    return True


def safe_str(obj: Any, fallback: str = "Unknown") -> str:
    """str() for pikepdf names and strings that may hold non-UTF-8 bytes."""
    try:
        return str(obj)
    except (UnicodeDecodeError, UnicodeEncodeError):
        try:
            return bytes(obj).decode("latin-1")
        except (TypeError, ValueError):
            return fallback


def get_encoding_name(encoding: Any) -> str:
    """Names a Type0 /Encoding for diagnostics.

    Args:
        encoding: The /Encoding value, a Name or an embedded CMap stream.

    Returns:
        The name with its leading slash, the stream's /CMapName, or ""
        when neither is available.
    """
    if isinstance(encoding, pikepdf.Name):
        return safe_str(encoding)
    if isinstance(encoding, pikepdf.Stream):
        cmap_name = encoding.get("/CMapName")
        if cmap_name is not None:
            return safe_str(cmap_name)
    return ""
