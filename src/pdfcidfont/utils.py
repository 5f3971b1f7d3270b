# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for pdfcidfont.

Besides logging setup, this module holds the typed accessors used to read
font dictionaries. Each accessor returns a value of the expected PDF type or
raises :class:`MalformedPDFError` naming the offending key.
"""

import logging
import sys
from decimal import Decimal
from typing import Any

import pikepdf
from pikepdf import Array, Dictionary, Name

from .exceptions import MalformedPDFError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for pdfcidfont.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for pdfcidfont.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    package_logger = logging.getLogger("pdfcidfont")
    package_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return package_logger


def resolve_indirect(obj: Any) -> Any:
    """Resolve indirect object reference if needed.

    pikepdf objects may be indirect references that need to be resolved.
    This safely handles the resolution without using hasattr which can
    throw exceptions on certain pikepdf object types.

    Args:
        obj: A pikepdf object that may be an indirect reference.

    Returns:
        The resolved object.
    """
    try:
        return obj.get_object()
    except Exception:
        return obj


def is_number(value: Any) -> bool:
    """Returns True for PDF integers and reals (booleans excluded)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def _lookup(container: Any, key: str) -> Any:
    try:
        value = container.get(key)
    except pikepdf.PdfError as e:
        raise MalformedPDFError(f"Cannot read {key}: {e}") from e
    if value is None:
        raise MalformedPDFError(f"Missing required entry {key}")
    return resolve_indirect(value)


def get_dict(container: Any, key: str) -> Dictionary:
    """Returns the dictionary stored under ``key``.

    Raises:
        MalformedPDFError: If the entry is missing or not a dictionary.
    """
    value = _lookup(container, key)
    if not isinstance(value, Dictionary):
        raise MalformedPDFError(f"{key} is not a dictionary")
    return value


def get_array(container: Any, key: str) -> Array:
    """Returns the array stored under ``key``.

    Raises:
        MalformedPDFError: If the entry is missing or not an array.
    """
    value = _lookup(container, key)
    if not isinstance(value, Array):
        raise MalformedPDFError(f"{key} is not an array")
    return value


def get_name(container: Any, key: str) -> str:
    """Returns the name stored under ``key`` as a string with leading slash.

    Raises:
        MalformedPDFError: If the entry is missing or not a name.
    """
    value = _lookup(container, key)
    if not isinstance(value, Name):
        raise MalformedPDFError(f"{key} is not a name")
    return str(value)


def get_string(container: Any, key: str) -> str:
    """Returns the text of the string stored under ``key``.

    Strings that are not valid text are decoded as Latin-1.

    Raises:
        MalformedPDFError: If the entry is missing or not a string.
    """
    value = _lookup(container, key)
    if not isinstance(value, pikepdf.String):
        raise MalformedPDFError(f"{key} is not a string")
    try:
        return str(value)
    except (UnicodeDecodeError, UnicodeEncodeError):
        return bytes(value).decode("latin-1")


def get_int(container: Any, key: str) -> int:
    """Returns the integer stored under ``key``.

    Raises:
        MalformedPDFError: If the entry is missing or not an integer.
    """
    value = _lookup(container, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPDFError(f"{key} is not an integer")
    return value


def get_number(container: Any, key: str) -> int | float | Decimal:
    """Returns the integer or real stored under ``key``.

    Raises:
        MalformedPDFError: If the entry is missing or not numeric.
    """
    value = _lookup(container, key)
    if not is_number(value):
        raise MalformedPDFError(f"{key} is not a number")
    return value
