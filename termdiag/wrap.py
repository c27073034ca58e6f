"""
termdiag/wrap.py
════════════════

Greedy word wrapping for terminal output.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, TextIO

_log = logging.getLogger(__name__)

DEFAULT_WIDTH: int = 120


@dataclass
class Wrapper:
    """
    Wraps text to at most ``max_width`` columns.

    A ``max_width`` of zero (or less) means :data:`DEFAULT_WIDTH`.
    """
    max_width: int = 0

    @property
    def width(self) -> int:
        if self.max_width <= 0:
            return DEFAULT_WIDTH
        return self.max_width

    @classmethod
    def from_stream(cls, stream: TextIO) -> Wrapper:
        """Size the wrapper to *stream*'s terminal, or the default width."""
        try:
            columns = os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, OSError, ValueError) as exc:
            _log.debug("terminal width unavailable, using %d: %s", DEFAULT_WIDTH, exc)
            return cls()
        return cls(max_width=columns)

    def narrowed(self, amount: int) -> Wrapper:
        """A copy of this wrapper that is *amount* columns narrower (never below 1)."""
        return Wrapper(max_width=max(1, self.width - amount))

    def lines(self, *texts: str) -> List[str]:
        """
        Wrap *texts* (each one input line) into output lines.

        Words are never split and runs of whitespace collapse to a single
        space.  Consecutive non-blank lines are reflowed together; a blank
        line ends the paragraph and appears as ``""`` in the output.
        """
        if not texts or texts == ("",):
            return []
        out: List[str] = []
        current = ""
        limit = self.width
        for text in texts:
            words = text.split()
            if not words:
                if current:
                    out.append(current)
                    current = ""
                out.append("")
                continue
            for word in words:
                if current and len(current) + len(word) + 1 > limit:
                    out.append(current)
                    current = ""
                current = f"{current} {word}" if current else word
        if current:
            out.append(current)
        return out

    def strings(self, *texts: str) -> str:
        return "\n".join(self.lines(*texts))

    def string(self, text: str) -> str:
        """Wrap a possibly multi-line string and join the result with newlines."""
        return self.strings(*text.split("\n"))


__all__ = ["DEFAULT_WIDTH", "Wrapper"]
