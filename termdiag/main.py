"""termdiag/main.py — CLI entry-point.

Renders diagnostics stored as JSON lines (the shape written by
``--output-format json``) in any supported output format.

Usage examples
--------------
    # Pretty-print a linter's JSON output with source excerpts
    mylinter --output-format json src/ | termdiag --output-format terminal

    # Turn saved diagnostics into GitHub Actions annotations
    termdiag --output-format github results.jsonl

Exit codes
----------
    0   Success (no error diagnostics).
    1   One or more diagnostics with severity ``error`` were reported.
    2   Unreadable input or a malformed record.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from typing import Iterator, Optional, Sequence, TextIO, Tuple

from termdiag import __version__
from termdiag.diagnostic import Diagnostic
from termdiag.errors import DiagnosticError
from termdiag.flags import register_flags, reporter_from_flags

_log = logging.getLogger("termdiag")

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``termdiag`` logger: 0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("termdiag")
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termdiag",
        description="Render JSON-lines diagnostics for terminals, CI and logs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              termdiag --output-format terminal results.jsonl
              mylinter --output-format json | termdiag --output-format github
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--base-path",
        default=None,
        help="Show file paths relative to this directory (terminal format).",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="JSON-lines input files; '-' or none reads standard input.",
    )
    register_flags(parser)
    return parser


def _read_records(source: TextIO, label: str) -> Iterator[Tuple[int, Diagnostic]]:
    for lineno, raw in enumerate(source, 1):
        raw = raw.strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DiagnosticError(f"{label}:{lineno}: malformed JSON: {exc}") from None
        if not isinstance(data, dict):
            raise DiagnosticError(f"{label}:{lineno}: expected a JSON object")
        try:
            yield lineno, Diagnostic.from_dict(data)
        except DiagnosticError as exc:
            raise DiagnosticError(f"{label}:{lineno}: {exc}") from None


def _iter_inputs(paths: Sequence[str]) -> Iterator[Tuple[int, Diagnostic, str]]:
    if not paths:
        paths = ["-"]
    for path in paths:
        if path == "-":
            for lineno, diag in _read_records(sys.stdin, "<stdin>"):
                yield lineno, diag, "<stdin>"
            continue
        with open(path, "r", encoding="utf-8") as fh:
            for lineno, diag in _read_records(fh, path):
                yield lineno, diag, path


def run(args: argparse.Namespace, stream: TextIO) -> int:
    reporter = reporter_from_flags(args, stream, base_path=args.base_path)
    try:
        for lineno, diag, label in _iter_inputs(args.files):
            try:
                reporter.report(diag)
            except DiagnosticError as exc:
                _log.error("%s:%d: %s", label, lineno, exc)
                return EXIT_INFRA
    except OSError as exc:
        _log.error("I/O error: %s", exc)
        return EXIT_INFRA
    except DiagnosticError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    metrics = reporter.metrics
    print(metrics.summary_line(), file=sys.stderr)
    return EXIT_ERROR if metrics.errors else EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the termdiag CLI and return its exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return run(args, sys.stdout)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
