"""
termdiag/reporter.py
════════════════════

Central diagnostic dispatcher.

Usage
─────
    from termdiag import annotate as at
    from termdiag.diagnostic import warning
    from termdiag.reporter import terminal_reporter

    rep = terminal_reporter(sys.stderr)
    rep.report(warning("variable %r is never used", "x").annotate(
        at.file("demo.c"), at.start(14, 5), at.end(14, 6)))
    print(rep.metrics.summary_line())

A :class:`Reporter` validates each diagnostic, counts it, drops debug output
unless enabled, and forwards the rest to exactly one emitter.  Reporters are
not safe for concurrent use without external locking.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from termdiag import diagnostic as _d
from termdiag.diagnostic import Diagnostic
from termdiag.emitters import (
    Emitter,
    GitHubEmitter,
    JsonEmitter,
    LogEmitter,
    NoopEmitter,
    TextEmitter,
)
from termdiag.errors import OutputFormatError
from termdiag.severity import Severity
from termdiag.terminal import TerminalEmitter
from termdiag.wrap import Wrapper

_log = logging.getLogger(__name__)

EXIT_FATAL: int = 1


@dataclass
class Metrics:
    """Per-reporter counts, one per severity."""
    errors: int = 0
    warnings: int = 0
    notices: int = 0
    debugs: int = 0

    def record(self, severity: Severity) -> None:
        """Increment the counter that corresponds to *severity*."""
        if severity is Severity.ERROR:
            self.errors += 1
        elif severity is Severity.WARNING:
            self.warnings += 1
        elif severity is Severity.NOTICE:
            self.notices += 1
        elif severity is Severity.DEBUG:
            self.debugs += 1

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.notices + self.debugs

    def summary_line(self) -> str:
        parts: List[str] = []
        if self.errors:
            parts.append(f"{self.errors} error{'s' if self.errors != 1 else ''}")
        if self.warnings:
            parts.append(f"{self.warnings} warning{'s' if self.warnings != 1 else ''}")
        if self.notices:
            parts.append(f"{self.notices} notice{'s' if self.notices != 1 else ''}")
        if self.debugs:
            parts.append(f"{self.debugs} debug")
        if not parts:
            return "no diagnostics reported"
        return "; ".join(parts) + f" ({self.total} total)"


class Reporter:
    """
    Validates, counts and routes diagnostics to one :class:`Emitter`.

    ``emitter=None`` gives a reporter that counts but never writes.
    """

    def __init__(self, emitter: Optional[Emitter] = None) -> None:
        self._emitter: Emitter = emitter if emitter is not None else NoopEmitter()
        self._metrics = Metrics()
        self._show_debug = False

    @property
    def emitter(self) -> Emitter:
        return self._emitter

    @property
    def metrics(self) -> Metrics:
        """Live counters; updated by every successful :meth:`report`."""
        return self._metrics

    @property
    def debug_enabled(self) -> bool:
        return self._show_debug

    def show_debug(self, enabled: bool) -> None:
        """Enable or disable emission of debug diagnostics (they are always counted)."""
        self._show_debug = enabled

    def report(self, diag: Diagnostic) -> None:
        """
        Report *diag*.

        Raises :class:`~termdiag.errors.ValidationError` before anything is
        counted or written if *diag* is invalid.  Errors raised by the
        emitter's sink propagate unchanged.
        """
        severity = diag.validate()
        self._metrics.record(severity)
        if severity is Severity.DEBUG and not self._show_debug:
            return
        self._emitter.emit(diag)

    # ── convenience ──────────────────────────────────────────────────

    def error(self, message: str, *args: Any) -> None:
        self.report(_d.error(message, *args))

    def warning(self, message: str, *args: Any) -> None:
        self.report(_d.warning(message, *args))

    def notice(self, message: str, *args: Any) -> None:
        self.report(_d.notice(message, *args))

    def debug(self, message: str, *args: Any) -> None:
        self.report(_d.debug(message, *args))

    def fatal(self, message: str, *args: Any) -> None:
        """
        Report an error and terminate the process.

        This never returns: after reporting it raises
        ``SystemExit(EXIT_FATAL)``.  If the diagnostic is invalid or the sink
        fails while writing it, the failure is logged and the exit still
        happens.
        """
        try:
            self.error(message, *args)
        except Exception as exc:
            _log.error("failed to report fatal diagnostic: %s", exc)
        raise SystemExit(EXIT_FATAL)


# ═════════════════════════════════════════════════════════════════════════
#  FACTORIES
# ═════════════════════════════════════════════════════════════════════════

def noop_reporter() -> Reporter:
    return Reporter(NoopEmitter())


def text_reporter(stream: Optional[TextIO]) -> Reporter:
    if stream is None:
        return noop_reporter()
    return Reporter(TextEmitter(stream))


def terminal_reporter(
    stream: Optional[TextIO],
    base_path: Optional[str] = None,
    width: int = 0,
    colour: Optional[bool] = None,
) -> Reporter:
    """
    Reporter with source excerpts for ANSI terminals.

    *base_path* defaults to the current working directory; *width* of 0
    means the terminal width of *stream*, falling back to 120 columns.
    """
    if stream is None:
        return noop_reporter()
    wrapper = Wrapper(max_width=width) if width > 0 else Wrapper.from_stream(stream)
    return Reporter(
        TerminalEmitter(
            stream,
            base_path=base_path or os.getcwd(),
            wrapper=wrapper,
            colour=colour,
        )
    )


def json_reporter(stream: Optional[TextIO]) -> Reporter:
    if stream is None:
        return noop_reporter()
    return Reporter(JsonEmitter(stream))


def github_reporter(stream: Optional[TextIO]) -> Reporter:
    if stream is None:
        return noop_reporter()
    return Reporter(GitHubEmitter(stream))


def log_reporter(stream: Optional[TextIO]) -> Reporter:
    if stream is None:
        return noop_reporter()
    return Reporter(LogEmitter(stream))


FORMATS = ("text", "terminal", "json", "github", "log", "none")


def reporter_for_format(
    fmt: str,
    stream: Optional[TextIO],
    base_path: Optional[str] = None,
) -> Reporter:
    """
    Build a reporter by format name (see :data:`FORMATS`).

    Raises :class:`~termdiag.errors.OutputFormatError` for unknown names.
    """
    if fmt == "text":
        return text_reporter(stream)
    if fmt == "terminal":
        return terminal_reporter(stream, base_path=base_path)
    if fmt == "json":
        return json_reporter(stream)
    if fmt == "github":
        return github_reporter(stream)
    if fmt == "log":
        return log_reporter(stream)
    if fmt == "none":
        return noop_reporter()
    raise OutputFormatError(f"output-format: invalid value '{fmt}'")


__all__ = [
    "EXIT_FATAL",
    "FORMATS",
    "Metrics",
    "Reporter",
    "noop_reporter",
    "text_reporter",
    "terminal_reporter",
    "json_reporter",
    "github_reporter",
    "log_reporter",
    "reporter_for_format",
]
