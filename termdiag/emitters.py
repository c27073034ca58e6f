"""
termdiag/emitters.py
════════════════════

Output backends.

Every emitter implements a single method, ``emit(diagnostic)``, which writes
the diagnostic to its sink and raises whatever the sink raises on failure.

Variants
────────
  • NoopEmitter   : discards everything
  • TextEmitter   : the bare message, verbatim
  • LogEmitter    : ``<severity>\\t<message>`` through a ``logging.Logger``
  • JsonEmitter   : one compact JSON object per line
  • GitHubEmitter : GitHub Actions workflow-command annotations

The colour terminal renderer lives in :mod:`termdiag.terminal`.
"""

from __future__ import annotations

import json
import logging
import os
from typing import List, Optional, Protocol, TextIO, runtime_checkable

from termdiag.diagnostic import Diagnostic
from termdiag.severity import Severity


@runtime_checkable
class Emitter(Protocol):
    """Anything that can turn a :class:`Diagnostic` into output."""

    def emit(self, diag: Diagnostic) -> None:
        ...


class NoopEmitter:
    """Accepts every diagnostic and writes nothing."""

    def emit(self, diag: Diagnostic) -> None:
        return None


class TextEmitter:
    """Writes the message text only; no newline is added."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def emit(self, diag: Diagnostic) -> None:
        self._stream.write(diag.message)


# ═════════════════════════════════════════════════════════════════════════
#  LOG
# ═════════════════════════════════════════════════════════════════════════

_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.NOTICE: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
}


class _SinkHandler(logging.StreamHandler):
    """A stream handler that lets write failures reach the caller."""

    def handleError(self, record: logging.LogRecord) -> None:
        # called from inside StreamHandler.emit's except block
        raise


class LogEmitter:
    """
    Emits ``<severity>\\t<message>`` lines through a ``logging.Logger``.

    Given a *stream*, a private logger is built whose only handler writes the
    bare record message to that stream; write failures on it propagate.
    Alternatively an existing *logger* can be supplied, in which case its
    handlers decide where lines go.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if logger is None:
            if stream is None:
                raise ValueError("LogEmitter needs a stream or a logger")
            logger = logging.Logger("termdiag.emit", logging.DEBUG)
            handler = _SinkHandler(stream)
            handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(handler)
            logger.propagate = False
        self._logger = logger

    def emit(self, diag: Diagnostic) -> None:
        level = _LOG_LEVELS.get(diag.severity, logging.INFO)
        self._logger.log(level, "%s\t%s", diag.severity_name, diag.message)


# ═════════════════════════════════════════════════════════════════════════
#  JSON
# ═════════════════════════════════════════════════════════════════════════

class JsonEmitter:
    """
    One compact JSON object per diagnostic, newline terminated.

    Side effect: a non-empty ``diag.file`` is rewritten in place to its
    absolute path before serialising.  If the path cannot be made absolute it
    is left unchanged.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def emit(self, diag: Diagnostic) -> None:
        if diag.file:
            try:
                diag.file = os.path.abspath(diag.file)
            except OSError:
                pass
        self._stream.write(json.dumps(diag.to_dict(), separators=(",", ":")) + "\n")


# ═════════════════════════════════════════════════════════════════════════
#  GITHUB ACTIONS
# ═════════════════════════════════════════════════════════════════════════

def _escape_field(value: str) -> str:
    return value.replace(",", "%2C")


def _escape_message(value: str) -> str:
    return value.replace("\n", "%0A").replace("\r", "%0D")


class GitHubEmitter:
    """
    Emits GitHub Actions annotations::

        ::warning title=[W1] Oops,file=a.go,col=5,line=3::message
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    @staticmethod
    def fields(diag: Diagnostic) -> List[str]:
        """The ``key=value`` parameters, in workflow-command order."""
        fields: List[str] = []
        if diag.title:
            if diag.code:
                fields.append(f"title={_escape_field(f'[{diag.code}] {diag.title}')}")
            else:
                fields.append(f"title={_escape_field(diag.title)}")
        if diag.file:
            fields.append(f"file={_escape_field(diag.file)}")
        if diag.start.column > 0:
            fields.append(f"col={diag.start.column}")
        if diag.start.line > 0:
            fields.append(f"line={diag.start.line}")
        if diag.end.column > 0:
            fields.append(f"colEnd={diag.end.column}")
        if diag.end.line > 0:
            fields.append(f"lineEnd={diag.end.line}")
        return fields

    def format(self, diag: Diagnostic) -> str:
        params = ",".join(self.fields(diag))
        head = f"::{diag.severity_name}"
        if params:
            head += f" {params}"
        return f"{head}::{_escape_message(diag.message)}"

    def emit(self, diag: Diagnostic) -> None:
        self._stream.write(self.format(diag) + "\n")


__all__ = [
    "Emitter",
    "NoopEmitter",
    "TextEmitter",
    "LogEmitter",
    "JsonEmitter",
    "GitHubEmitter",
]
