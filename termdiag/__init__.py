"""
termdiag — Structured Diagnostics for Terminals, CI and Logs
============================================================

This package models diagnostic messages (severity, optional source location,
optional error code, human-readable text) and renders them to one of several
output surfaces.

Core modules
------------
diagnostic
    ``Position`` / ``Diagnostic`` data model and severity factories.
annotate
    Composable builders that fill in title, file, code and positions.
emitters
    The ``Emitter`` protocol plus text, log, JSON, GitHub and no-op outputs.
terminal
    Colour terminal renderer with source excerpts and caret underlines.
reporter
    ``Reporter``: validation, per-severity metrics, debug gating.
flags
    ``--output-format`` / ``--debug`` argparse glue.
testing
    ``Recorder`` emitter and match conditions for test suites.

Quick start
-----------
>>> import io
>>> from termdiag import annotate as at, error, text_reporter
>>> buf = io.StringIO()
>>> rep = text_reporter(buf)
>>> rep.report(error("bad value %d", 3).annotate(at.code("E1")))
>>> buf.getvalue()
'bad value 3'
>>> rep.metrics.errors
1
"""

from __future__ import annotations

__version__: str = "0.1.0"

from termdiag import annotate
from termdiag.diagnostic import (
    Diagnostic,
    Position,
    debug,
    error,
    new,
    notice,
    warning,
)
from termdiag.emitters import (
    Emitter,
    GitHubEmitter,
    JsonEmitter,
    LogEmitter,
    NoopEmitter,
    TextEmitter,
)
from termdiag.errors import DiagnosticError, OutputFormatError, ValidationError
from termdiag.reporter import (
    Metrics,
    Reporter,
    github_reporter,
    json_reporter,
    log_reporter,
    noop_reporter,
    reporter_for_format,
    terminal_reporter,
    text_reporter,
)
from termdiag.severity import Severity
from termdiag.terminal import TerminalEmitter
from termdiag.wrap import Wrapper

__all__ = [
    "__version__",
    "annotate",
    "Diagnostic",
    "Position",
    "Severity",
    "new",
    "error",
    "warning",
    "notice",
    "debug",
    "Emitter",
    "NoopEmitter",
    "TextEmitter",
    "LogEmitter",
    "JsonEmitter",
    "GitHubEmitter",
    "TerminalEmitter",
    "Wrapper",
    "Metrics",
    "Reporter",
    "noop_reporter",
    "text_reporter",
    "terminal_reporter",
    "json_reporter",
    "github_reporter",
    "log_reporter",
    "reporter_for_format",
    "DiagnosticError",
    "ValidationError",
    "OutputFormatError",
]
