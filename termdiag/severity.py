"""
termdiag/severity.py
════════════════════

The closed set of diagnostic severities.
"""

from __future__ import annotations

import enum
from typing import Union


class Severity(enum.Enum):
    """
    Diagnostic severity levels.

    The value is the wire name used by every emitter (``"error"`` etc.).
    """

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    DEBUG = "debug"

    @classmethod
    def parse(cls, value: Union[Severity, str]) -> Severity:
        """
        Parse a severity from its wire name.

        Names are matched exactly (case-sensitive).  Raises ``ValueError``
        for anything else.
        """
        if isinstance(value, Severity):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"unknown severity: {value!r}")


def severity_name(value: Union[Severity, str]) -> str:
    """Return the wire name of *value*, passing unknown strings through."""
    if isinstance(value, Severity):
        return value.value
    return str(value)


__all__ = ["Severity", "severity_name"]
