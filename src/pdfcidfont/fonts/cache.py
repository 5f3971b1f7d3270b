# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""One-time construction of Type0 font descriptors per font resource."""

import logging
import threading
from collections.abc import Hashable
from typing import Any

from .type0 import Type0Font
from .utils import obj_key

logger = logging.getLogger(__name__)


class FontResourceCache:
    """Builds each Type0 font resource once, on first reference.

    Indirect font dictionaries are keyed by objgen. Direct dictionaries
    have no identity of their own: pikepdf hands out a fresh wrapper on
    every read. They are cached only under a ``resource_key`` supplied by
    the caller, e.g. ``(resources.objgen, "/F1")``; without one they are
    built on every lookup and not stored, and the caller owns the result.

    Construction is serialized with a lock; cached fonts are read-only and
    may be shared between threads. Failed constructions are not cached.
    """

    def __init__(self) -> None:
        self._fonts: dict[Hashable, Type0Font] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(font_dict: Any, resource_key: Hashable | None) -> Hashable | None:
        key = obj_key(font_dict)
        if key is not None:
            return key
        if resource_key is not None:
            return ("resource", resource_key)
        return None

    def get(
        self,
        font_dict: Any,
        font_size: float = 0.0,
        *,
        resource_key: Hashable | None = None,
    ) -> Type0Font:
        """Returns the descriptor for ``font_dict``, building it if needed.

        Args:
            font_dict: Type0 font dictionary.
            font_size: Nominal font size used when the font is built.
            resource_key: Stable key for a direct font dictionary. Ignored
                for indirect dictionaries.

        Raises:
            FontError: If the font cannot be constructed.
        """
        key = self._key(font_dict, resource_key)
        if key is None:
            logger.debug("Direct font dictionary without resource key; not cached")
            return Type0Font.initialize(font_dict, font_size)

        with self._lock:
            font = self._fonts.get(key)
            if font is None:
                font = Type0Font.initialize(font_dict, font_size)
                self._fonts[key] = font
            else:
                logger.debug("Font cache hit for %s", key)
            return font

    def __len__(self) -> int:
        return len(self._fonts)

    def contains(self, font_dict: Any, resource_key: Hashable | None = None) -> bool:
        """Returns True if a descriptor for the font is cached."""
        key = self._key(font_dict, resource_key)
        return key is not None and key in self._fonts

    def __contains__(self, font_dict: Any) -> bool:
        return self.contains(font_dict)

    def clear(self) -> None:
        """Closes and forgets all cached fonts."""
        with self._lock:
            for font in self._fonts.values():
                font.close()
            self._fonts.clear()
