"""
termdiag/errors.py
══════════════════

Exception types raised by the package.

Hierarchy
─────────
    DiagnosticError
    ├── ValidationError    - a Diagnostic is missing a required field or
    │                        carries an unknown severity
    └── OutputFormatError  - an unknown output format was selected

Failures of the output sink itself are not wrapped: whatever the stream
raises (usually ``OSError``) propagates to the caller unchanged.
"""

from __future__ import annotations


class DiagnosticError(Exception):
    """Base class for all termdiag errors."""


class ValidationError(DiagnosticError):
    """Raised by :meth:`Diagnostic.validate` before anything is counted or emitted."""


class OutputFormatError(DiagnosticError, ValueError):
    """Raised when an output format name is not recognised."""


__all__ = ["DiagnosticError", "ValidationError", "OutputFormatError"]
