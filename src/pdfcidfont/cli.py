# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for pdfcidfont.

This module provides commands to inspect the Type0 fonts of a PDF and
to lay out Identity-H strings with them.
"""

# Standard Library
import logging
import sys
from pathlib import Path

# Third Party
import click
import pikepdf
from colorama import Fore, Style, init

# Local
from . import __version__
from .exceptions import FontError
from .fonts.layout import Point, RecordingPainter
from .fonts.traversal import iter_all_page_fonts, iter_type0_fonts
from .fonts.type0 import Type0Font
from .utils import setup_logging

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_FONT_ERROR = 3

logger = logging.getLogger(__name__)


def print_success(msg: str) -> None:
    """Prints a success message in green.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.GREEN}\u2713{Style.RESET_ALL} {msg}")


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}\u2717 Error:{Style.RESET_ALL} {msg}", err=True)


def _open_pdf(path: str) -> pikepdf.Pdf:
    try:
        return pikepdf.open(path)
    except FileNotFoundError as e:
        print_error(str(e))
        sys.exit(EXIT_FILE_NOT_FOUND)
    except pikepdf.PdfError as e:
        print_error(f"Cannot open {Path(path).name}: {e}")
        sys.exit(EXIT_GENERAL_ERROR)


def _describe_font(font: Type0Font) -> str:
    return (
        f"{font.base_font or '<unnamed>'}  {font.subtype.lstrip('/')}  "
        f"{font.system_info}  {font.glyph_source.kind}  "
        f"DW={font.widths.default_width}  W={len(font.widths)}"
    )


@click.group()
@click.option("-q", "--quiet", is_flag=True, help="Only output errors")
@click.option("--verbose", is_flag=True, help="Detailed output")
@click.version_option(version=__version__)
def main(quiet: bool, verbose: bool) -> None:
    """Inspects composite (Type0) fonts in PDF files."""
    # Initialize colorama for Windows compatibility
    init()
    setup_logging(verbose=verbose, quiet=quiet)


@main.command("fonts")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def fonts_command(input_path: str) -> None:
    """Lists the Type0 fonts of INPUT_PATH."""
    exit_code = EXIT_SUCCESS
    with _open_pdf(input_path) as pdf:
        found = 0
        for page_number, font_key, font_dict in iter_type0_fonts(pdf):
            found += 1
            try:
                font = Type0Font.initialize(font_dict)
            except FontError as e:
                print_error(f"Page {page_number} {font_key}: {e}")
                exit_code = EXIT_FONT_ERROR
                continue
            try:
                click.echo(f"Page {page_number} {font_key}: {_describe_font(font)}")
            finally:
                font.close()

        if found == 0:
            click.echo("No Type0 fonts found")

    sys.exit(exit_code)


@main.command("measure")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("font_key")
@click.argument("hex_string")
@click.option("-p", "--page", "page_number", type=int, default=1, show_default=True)
@click.option("-s", "--size", "font_size", type=float, default=12.0, show_default=True)
@click.option("--char-spacing", type=float, default=0.0, show_default=True)
@click.option(
    "--horizontal-scaling",
    type=float,
    default=1.0,
    show_default=True,
    help="Horizontal scaling as a factor (Tz / 100)",
)
def measure_command(
    input_path: str,
    font_key: str,
    hex_string: str,
    page_number: int,
    font_size: float,
    char_spacing: float,
    horizontal_scaling: float,
) -> None:
    """Lays out HEX_STRING with font FONT_KEY of a page.

    HEX_STRING holds 2-byte Identity-H codes, e.g. 00410042.
    """
    try:
        data = bytes.fromhex(hex_string)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="HEX_STRING") from e

    if not font_key.startswith("/"):
        font_key = "/" + font_key

    with _open_pdf(input_path) as pdf:
        if not 1 <= page_number <= len(pdf.pages):
            print_error(f"Page {page_number} out of range (1-{len(pdf.pages)})")
            sys.exit(EXIT_GENERAL_ERROR)

        font_dict = None
        for key, font_obj in iter_all_page_fonts(pdf.pages[page_number - 1]):
            if key == font_key:
                font_dict = font_obj
                break
        if font_dict is None:
            print_error(f"Font {font_key} not found on page {page_number}")
            sys.exit(EXIT_FONT_ERROR)

        try:
            font = Type0Font.initialize(font_dict, font_size)
        except FontError as e:
            print_error(f"{font_key}: {e}")
            sys.exit(EXIT_FONT_ERROR)

        try:
            painter = RecordingPainter()
            result = font.draw_string(
                painter,
                Point(0.0, 0.0),
                data,
                None,
                font_size,
                character_spacing=char_spacing,
                horizontal_scaling=horizontal_scaling,
            )
        finally:
            font.close()

    print_success(
        f"{font_key}: advance {result.position.x:.3f}, "
        f"{result.painted} painted, {result.skipped} skipped"
    )
    sys.exit(EXIT_SUCCESS)
