"""
termdiag/diagnostic.py
══════════════════════

The diagnostic data model.

A :class:`Diagnostic` is built once, optionally decorated with annotations
(see :mod:`termdiag.annotate`), and handed to a single
:meth:`Reporter.report <termdiag.reporter.Reporter.report>` call.

Usage
─────
    from termdiag import annotate as at
    from termdiag.diagnostic import warning

    diag = warning("unused variable %r", "x").annotate(
        at.file("demo.c"),
        at.line(14),
        at.column_range(5, 6),
        at.code("W0612"),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Union

from termdiag.errors import ValidationError
from termdiag.severity import Severity, severity_name


@dataclass
class Position:
    """
    A (line, column) pair in a source file.

    Both fields are 1-based; ``0`` means unknown.
    """
    line: int = 0
    column: int = 0

    def is_set(self) -> bool:
        return bool(self.line or self.column)

    def to_dict(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        if self.line:
            out["line"] = self.line
        if self.column:
            out["column"] = self.column
        return out

    @classmethod
    def from_dict(cls, data: Any, key: str = "position") -> Position:
        """
        Build a position from its wire shape.

        Raises :class:`ValidationError` unless *data* is an object whose
        ``line``/``column`` values are integers (or integer strings).
        """
        if not isinstance(data, dict):
            raise ValidationError(f"{key}: expected an object")
        values = []
        for name in ("line", "column"):
            raw = data.get(name, 0)
            if isinstance(raw, (bool, float)):
                raise ValidationError(f"{key}.{name}: invalid value {raw!r}")
            try:
                values.append(int(raw))
            except (TypeError, ValueError):
                raise ValidationError(f"{key}.{name}: invalid value {raw!r}") from None
        return cls(line=values[0], column=values[1])


@dataclass
class Diagnostic:
    """
    A single reportable message.

    ``start`` and ``end`` are always present; an unset position simply has
    zero fields, so annotations can be applied in any order.
    """
    severity: Union[Severity, str]
    message: str
    title: str = ""
    code: str = ""
    file: str = ""
    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)

    def __post_init__(self) -> None:
        if isinstance(self.severity, str):
            try:
                self.severity = Severity.parse(self.severity)
            except ValueError:
                # kept verbatim; validate() reports it
                pass

    # ── annotation ───────────────────────────────────────────────────

    def annotate(self, *annotations: Callable[[Diagnostic], None]) -> Diagnostic:
        """Apply *annotations* in order and return ``self`` for chaining."""
        for annotation in annotations:
            annotation(self)
        return self

    # ── validation ───────────────────────────────────────────────────

    def validate(self) -> Severity:
        """
        Check the required fields and return the parsed severity.

        Raises :class:`ValidationError` when severity or message is missing,
        or when severity is not one of the known values.  File and position
        fields are not inspected.
        """
        if not self.severity:
            raise ValidationError("diagnostic: required field 'severity' is missing")
        if not self.message:
            raise ValidationError("diagnostic: required field 'message' is missing")
        try:
            return Severity.parse(self.severity)
        except ValueError:
            raise ValidationError(
                f"severity: unknown value '{self.severity}'"
            ) from None

    # ── wire shape ───────────────────────────────────────────────────

    @property
    def severity_name(self) -> str:
        return severity_name(self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """
        The JSON wire shape.  Empty strings and zero positions are omitted;
        ``severity`` and ``message`` are always present.
        """
        d: Dict[str, Any] = {"severity": self.severity_name}
        if self.code:
            d["code"] = self.code
        if self.title:
            d["title"] = self.title
        d["message"] = self.message
        if self.file:
            d["file"] = self.file
        if self.start.is_set():
            d["position"] = self.start.to_dict()
        if self.end.is_set():
            d["end"] = self.end.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Diagnostic:
        """
        Inverse of :meth:`to_dict`.

        Raises :class:`ValidationError` on a bad severity or on a field of the
        wrong type.
        """
        raw = data.get("severity", "")
        if not isinstance(raw, str):
            raise ValidationError(f"severity: invalid value {raw!r}")
        try:
            severity: Union[Severity, str] = Severity.parse(raw) if raw else ""
        except ValueError:
            raise ValidationError(f"severity: unknown value '{raw}'") from None
        text = {}
        for name in ("message", "title", "code", "file"):
            value = data.get(name, "")
            if not isinstance(value, str):
                raise ValidationError(f"{name}: expected a string, got {value!r}")
            text[name] = value
        return cls(
            severity=severity,
            start=Position.from_dict(data.get("position") or {}, "position"),
            end=Position.from_dict(data.get("end") or {}, "end"),
            **text,
        )


# ═════════════════════════════════════════════════════════════════════════
#  CONSTRUCTORS
# ═════════════════════════════════════════════════════════════════════════

def _format(message: str, args: tuple) -> str:
    return message % args if args else message


def new(severity: Union[Severity, str], message: str) -> Diagnostic:
    """Create a diagnostic with an explicit severity."""
    return Diagnostic(severity=severity, message=message)


def error(message: str, *args: Any) -> Diagnostic:
    """Error-level diagnostic; *args* are ``%``-formatted into *message*."""
    return new(Severity.ERROR, _format(message, args))


def warning(message: str, *args: Any) -> Diagnostic:
    return new(Severity.WARNING, _format(message, args))


def notice(message: str, *args: Any) -> Diagnostic:
    return new(Severity.NOTICE, _format(message, args))


def debug(message: str, *args: Any) -> Diagnostic:
    return new(Severity.DEBUG, _format(message, args))


__all__ = [
    "Position",
    "Diagnostic",
    "new",
    "error",
    "warning",
    "notice",
    "debug",
]
