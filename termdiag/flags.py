"""
termdiag/flags.py
═════════════════

Command-line flags that select how diagnostics are written.

    parser = argparse.ArgumentParser()
    register_flags(parser)
    args = parser.parse_args()
    reporter = reporter_from_flags(args, sys.stdout)
"""

from __future__ import annotations

import argparse
from typing import Optional, TextIO

from termdiag.errors import OutputFormatError
from termdiag.reporter import (
    FORMATS,
    Reporter,
    reporter_for_format,
    terminal_reporter,
    text_reporter,
)


def parse_output_format(value: str) -> str:
    """Validate an ``--output-format`` value.  Raises :class:`OutputFormatError`."""
    if value not in FORMATS:
        raise OutputFormatError(f"output-format: invalid value '{value}'")
    return value


def _format_type(value: str) -> str:
    try:
        return parse_output_format(value)
    except OutputFormatError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def register_flags(parser: argparse.ArgumentParser) -> None:
    """Add ``--output-format`` and ``--debug`` to *parser*."""
    parser.add_argument(
        "--output-format",
        dest="output_format",
        type=_format_type,
        default=None,
        metavar="{" + ",".join(FORMATS) + "}",
        help="The format to output diagnostics in "
             "(default: terminal on a TTY, otherwise text)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="enable debug output",
    )


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def reporter_from_flags(
    args: argparse.Namespace,
    stream: TextIO,
    base_path: Optional[str] = None,
) -> Reporter:
    """Build the reporter selected by parsed flags, writing to *stream*."""
    fmt = getattr(args, "output_format", None)
    if fmt:
        reporter = reporter_for_format(parse_output_format(fmt), stream, base_path=base_path)
    elif _is_terminal(stream):
        reporter = terminal_reporter(stream, base_path=base_path)
    else:
        reporter = text_reporter(stream)
    reporter.show_debug(bool(getattr(args, "debug", False)))
    return reporter


__all__ = ["parse_output_format", "register_flags", "reporter_from_flags"]
