"""
termdiag/testing.py
═══════════════════

Helpers for asserting on diagnostics in tests.

    recorder = Recorder()
    reporter = recording_reporter(recorder)
    run_my_linter(reporter)
    assert recorder.contains(has_severity(Severity.ERROR), contains_message("unused"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from termdiag.diagnostic import Diagnostic
from termdiag.reporter import Reporter, noop_reporter
from termdiag.severity import Severity

Condition = Callable[[Diagnostic], bool]


@dataclass
class Recorder:
    """An emitter that keeps every diagnostic it is given."""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def emit(self, diag: Diagnostic) -> None:
        self.diagnostics.append(diag)

    def filter(self, *conditions: Condition) -> List[Diagnostic]:
        """Diagnostics matching every condition."""
        return [d for d in self.diagnostics if all(c(d) for c in conditions)]

    def count(self, *conditions: Condition) -> int:
        return len(self.filter(*conditions))

    def contains(self, *conditions: Condition) -> bool:
        return self.count(*conditions) > 0


def recording_reporter(recorder: Optional[Recorder]) -> Reporter:
    """A reporter that records into *recorder* with debug output enabled."""
    if recorder is None:
        return noop_reporter()
    reporter = Reporter(recorder)
    reporter.show_debug(True)
    return reporter


# ── conditions ───────────────────────────────────────────────────────

def has_message(message: str) -> Condition:
    return lambda d: d.message == message


def contains_message(substr: str) -> Condition:
    return lambda d: substr in d.message


def has_title(title: str) -> Condition:
    return lambda d: d.title == title


def contains_title(substr: str) -> Condition:
    return lambda d: substr in d.title


def has_severity(*severities: Union[Severity, str]) -> Condition:
    names = {s.value if isinstance(s, Severity) else s for s in severities}
    return lambda d: d.severity_name in names


def has_code(code: str) -> Condition:
    return lambda d: d.code == code


def has_file(path: str) -> Condition:
    return lambda d: d.file == path


def has_start(line: int, column: int) -> Condition:
    return lambda d: d.start.line == line and d.start.column == column


def has_end(line: int, column: int) -> Condition:
    return lambda d: d.end.line == line and d.end.column == column


def has_range(start_line: int, start_column: int, end_line: int, end_column: int) -> Condition:
    return lambda d: has_start(start_line, start_column)(d) and has_end(end_line, end_column)(d)


__all__ = [
    "Condition",
    "Recorder",
    "recording_reporter",
    "has_message",
    "contains_message",
    "has_title",
    "contains_title",
    "has_severity",
    "has_code",
    "has_file",
    "has_start",
    "has_end",
    "has_range",
]
