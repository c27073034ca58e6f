"""
termdiag/terminal.py
════════════════════

Colourful terminal renderer with source excerpts.

A diagnostic with a file and a position renders as::

    warning[W1]: Oops
      ---> src/a.go:4:2-4
       |
     4 |      foo()
       |      ^~~
       |
       | something bad happened
       |

Rendering pipeline (one ``emit`` call)
──────────────────────────────────────
  1. title line   : ``<severity>[<code>]:`` + title (or the wrapped message)
  2. file line    : arrow + path relative to the base path + line/column
  3. excerpt      : the start line, and the end line of a multi-line range,
                    behind a right-aligned line-number gutter; ``...`` marks
                    elided lines between them
  4. underline    : ``^~~`` under a single-line column range
  5. body         : the wrapped message, only when a title took its place

The source file is re-read on every call.  If it cannot be read the excerpt
and underline are skipped; that is never an error.  Tabs are displayed as
three spaces, and columns are counted in decoded characters.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Tuple

from termcolor import colored

from termdiag.diagnostic import Diagnostic
from termdiag.severity import Severity
from termdiag.wrap import Wrapper

_log = logging.getLogger(__name__)

TAB_WIDTH: int = 3

Style = Tuple[Optional[str], Sequence[str]]

_SEVERITY_STYLES = {
    Severity.ERROR: ("red", ("bold",)),
    Severity.WARNING: ("yellow", ()),
    Severity.NOTICE: ("cyan", ()),
    Severity.DEBUG: (None, ("dark",)),
}
_DEFAULT_STYLE: Style = (None, ("dark",))

_TITLE_STYLE: Style = ("white", ())
_FILE_STYLE: Style = ("white", ("underline",))
_UNDERLINE_STYLE: Style = ("green", ())
_CODE_STYLE: Style = ("light_grey", ("bold",))
_EXCERPT_STYLE: Style = ("dark_grey", ())


# ═════════════════════════════════════════════════════════════════════════
#  SOURCE HELPERS
# ═════════════════════════════════════════════════════════════════════════

def count_digits(n: int) -> int:
    return len(str(abs(n)))


def expand_tabs(text: str) -> str:
    """Display form of a source line."""
    return text.replace("\t", " " * TAB_WIDTH)


def visual_column(text: str, column: int) -> int:
    """
    Display width of the first *column* characters of *text*.

    A tab counts :data:`TAB_WIDTH`, anything else 1.  Columns past the end
    of the line stop counting at the end.
    """
    width = 0
    for ch in text[:column]:
        width += TAB_WIDTH if ch == "\t" else 1
    return width


def read_lines(path: str) -> List[str]:
    """Read *path* and split it on line feeds.  Carriage returns are kept."""
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as fh:
        return fh.read().split("\n")


@dataclass(frozen=True)
class SourceLine:
    number: int
    text: str


def _pick(lines: Sequence[str], number: int) -> Optional[SourceLine]:
    if number <= 0 or number > len(lines):
        return None
    return SourceLine(number, lines[number - 1])


# ═════════════════════════════════════════════════════════════════════════
#  TERMINAL EMITTER
# ═════════════════════════════════════════════════════════════════════════

class TerminalEmitter:
    """
    Render diagnostics for a human reading a terminal.

    Parameters
    ----------
    stream:
        Output sink.
    base_path:
        Directory file paths are shown relative to.  Defaults to the current
        working directory at construction time.
    wrapper:
        Line wrapper for messages.  Defaults to the width of *stream*'s
        terminal, or 120 columns.
    colour:
        Force colour on or off.  ``None`` enables it when *stream* is a TTY
        and ``NO_COLOR`` is not set.

    Not safe for concurrent use without external locking.
    """

    def __init__(
        self,
        stream: TextIO = sys.stderr,
        base_path: Optional[str] = None,
        wrapper: Optional[Wrapper] = None,
        colour: Optional[bool] = None,
    ) -> None:
        self._stream = stream
        self.base_path = base_path if base_path else os.getcwd()
        self.wrapper = wrapper if wrapper is not None else Wrapper.from_stream(stream)
        if colour is None:
            colour = (
                "NO_COLOR" not in os.environ
                and hasattr(stream, "isatty")
                and stream.isatty()
            )
        self.colour = colour

    # ── public API ───────────────────────────────────────────────────

    def emit(self, diag: Diagnostic) -> None:
        style = _SEVERITY_STYLES.get(diag.severity, _DEFAULT_STYLE)
        gutter = " " * self._gutter_width(diag)

        out: List[str] = [self._title_line(style, diag)]
        if diag.file:
            out.append(self._file_line(style, gutter, diag))

        source = self._load(diag)
        if source is not None:
            out.extend(self._excerpt(style, gutter, diag, source))
            underline = self._underline(style, gutter, diag, source)
            if underline is not None:
                out.append(underline)

        if diag.title:
            out.extend(self._body(style, gutter, diag))

        self._stream.write("\n".join(out) + "\n")
        self._stream.flush()

    # ── colour ───────────────────────────────────────────────────────

    def _paint(self, text: str, style: Style) -> str:
        if not self.colour or not text:
            return text
        color, attrs = style
        return colored(text, color, attrs=list(attrs) or None, force_color=True)

    # ── pieces ───────────────────────────────────────────────────────

    @staticmethod
    def _gutter_width(diag: Diagnostic) -> int:
        width = 1
        if diag.start.line > 0:
            width = max(width, count_digits(diag.start.line))
        if diag.end.line > 0:
            width = max(width, count_digits(diag.end.line))
        return width

    def _title_line(self, style: Style, diag: Diagnostic) -> str:
        head = self._paint(diag.severity_name, style)
        if diag.code:
            head += (
                self._paint("[", style)
                + self._paint(diag.code, _CODE_STYLE)
                + self._paint("]", style)
            )
        head += self._paint(":", style)
        if diag.title:
            return f"{head} {self._paint(diag.title, _TITLE_STYLE)}"
        return f"{head} {self.wrapper.string(diag.message)}"

    def _file_line(self, style: Style, gutter: str, diag: Diagnostic) -> str:
        arrow = self._paint("--->", style)
        return f" {gutter}{arrow} {self._paint(self.source_descriptor(diag), _FILE_STYLE)}"

    def source_descriptor(self, diag: Diagnostic) -> str:
        """``path[:line[-endline | :col[-endcol]]]``"""
        desc = self.relative_path(diag.file)
        start, end = diag.start, diag.end
        if not start.line:
            return desc
        desc += f":{start.line}"
        if end.line and end.line != start.line:
            return desc + f"-{end.line}"
        if start.column:
            desc += f":{start.column}"
            if end.column:
                desc += f"-{end.column}"
        return desc

    def relative_path(self, path: str) -> str:
        if not self.base_path:
            return path
        try:
            return os.path.relpath(os.path.abspath(path), self.base_path)
        except (OSError, ValueError) as exc:
            _log.debug("cannot relativise %s against %s: %s", path, self.base_path, exc)
            return path

    def _load(self, diag: Diagnostic) -> Optional[List[str]]:
        if not diag.file or diag.start.line <= 0:
            return None
        try:
            return read_lines(diag.file)
        except OSError as exc:
            _log.debug("skipping excerpt, cannot read %s: %s", diag.file, exc)
            return None

    def _quote_row(self, style: Style, label: str, text: str) -> str:
        return f" {label}{self._paint(' |', style)}   {text}"

    def _blank_row(self, style: Style, gutter: str) -> str:
        return f" {gutter}{self._paint(' |', style)}"

    def _excerpt(
        self,
        style: Style,
        gutter: str,
        diag: Diagnostic,
        lines: Sequence[str],
    ) -> List[str]:
        first = _pick(lines, diag.start.line)
        if first is None:
            return []
        width = len(gutter)
        rows = [
            self._blank_row(style, gutter),
            self._numbered(style, width, first),
        ]
        if diag.end.line > first.number:
            last = _pick(lines, diag.end.line)
            if last is not None:
                if last.number != first.number + 1:
                    rows.append(self._quote_row(style, gutter, self._paint("...", _EXCERPT_STYLE)))
                rows.append(self._numbered(style, width, last))
        return rows

    def _numbered(self, style: Style, width: int, line: SourceLine) -> str:
        label = self._paint(str(line.number).rjust(width), _CODE_STYLE)
        return self._quote_row(style, label, self._paint(expand_tabs(line.text), _EXCERPT_STYLE))

    def _underline(
        self,
        style: Style,
        gutter: str,
        diag: Diagnostic,
        lines: Sequence[str],
    ) -> Optional[str]:
        start, end = diag.start, diag.end
        if start.column <= 0:
            return None
        if end.is_set():
            if end.line and end.line != start.line:
                return None
            if end.column <= 0 or start.column > end.column:
                return None
        line = _pick(lines, start.line)
        if line is None:
            return None

        first = visual_column(line.text, start.column)
        marker = "^"
        if end.column > 0:
            marker += "~" * (visual_column(line.text, end.column) - first)
        pad = " " * max(0, first - 1)
        return self._quote_row(style, gutter, pad + self._paint(marker, _UNDERLINE_STYLE))

    def _body(self, style: Style, gutter: str, diag: Diagnostic) -> List[str]:
        wrapped = self.wrapper.narrowed(len(gutter) + 3).lines(*diag.message.split("\n"))
        if not wrapped:
            return []
        pipe = self._paint(" |", style)
        rows = [self._blank_row(style, gutter)]
        rows.extend(f" {gutter}{pipe} {text}" for text in wrapped)
        rows.append(self._blank_row(style, gutter))
        return rows


__all__ = [
    "TAB_WIDTH",
    "TerminalEmitter",
    "count_digits",
    "expand_tabs",
    "visual_column",
    "read_lines",
]
