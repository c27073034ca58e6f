"""
termdiag/annotate.py
════════════════════

Annotation builders.

Each builder returns a callable that fills in one or more optional fields of
a :class:`~termdiag.diagnostic.Diagnostic`.  Annotations only ever write the
fields they name, so they compose in any order::

    diag.annotate(line(3), column(5))   # same result as
    diag.annotate(column(5), line(3))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from termdiag.diagnostic import Diagnostic

Annotation = Callable[["Diagnostic"], None]


def title(text: str) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.title = text
    return _apply


def file(path: str) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.file = path
    return _apply


def code(value: str) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.code = value
    return _apply


def line(number: int) -> Annotation:
    """Set the start line."""
    def _apply(d: Diagnostic) -> None:
        d.start.line = number
    return _apply


def column(number: int) -> Annotation:
    """Set the start column."""
    def _apply(d: Diagnostic) -> None:
        d.start.column = number
    return _apply


def line_range(first: int, last: int) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.start.line = first
        d.end.line = last
    return _apply


def column_range(first: int, last: int) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.start.column = first
        d.end.column = last
    return _apply


def start(line_no: int, column_no: int) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.start.line = line_no
        d.start.column = column_no
    return _apply


def end(line_no: int, column_no: int) -> Annotation:
    def _apply(d: Diagnostic) -> None:
        d.end.line = line_no
        d.end.column = column_no
    return _apply


__all__ = [
    "Annotation",
    "title",
    "file",
    "code",
    "line",
    "column",
    "line_range",
    "column_range",
    "start",
    "end",
]
