# tests/conftest.py
"""
Shared fixtures for the termdiag test-suite.
"""

import io

import pytest

from termdiag.terminal import TerminalEmitter
from termdiag.wrap import Wrapper


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def write_source(tmp_path):
    """Write *text* to ``tmp_path / name`` and return the path as a string."""
    def _write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def terminal(stream, tmp_path):
    """A colourless terminal emitter rooted at ``tmp_path``."""
    return TerminalEmitter(
        stream,
        base_path=str(tmp_path),
        wrapper=Wrapper(max_width=80),
        colour=False,
    )
