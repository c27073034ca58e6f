# tests/test_emitters.py
"""
Tests for the plain emitters: text, log, JSON and GitHub Actions.
"""

import io
import json
import logging
import os

import pytest

from termdiag import annotate as at
from termdiag.diagnostic import error, notice, warning
from termdiag.emitters import (
    Emitter,
    GitHubEmitter,
    JsonEmitter,
    LogEmitter,
    NoopEmitter,
    TextEmitter,
)
from termdiag.terminal import TerminalEmitter


class TestProtocol:

    def test_all_variants_are_emitters(self, stream):
        for emitter in (
            NoopEmitter(),
            TextEmitter(stream),
            LogEmitter(stream),
            JsonEmitter(stream),
            GitHubEmitter(stream),
            TerminalEmitter(stream, colour=False),
        ):
            assert isinstance(emitter, Emitter)


class TestTextEmitter:

    def test_message_verbatim(self, stream):
        emitter = TextEmitter(stream)
        emitter.emit(error("first"))
        emitter.emit(notice("second\n"))
        assert stream.getvalue() == "firstsecond\n"


class TestLogEmitter:

    def test_tab_separated_line(self, stream):
        LogEmitter(stream).emit(warning("look out"))
        assert stream.getvalue() == "warning\tlook out\n"

    def test_supplied_logger(self, stream):
        logger = logging.getLogger("termdiag.tests.log_emitter")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(handler)
        try:
            LogEmitter(logger=logger).emit(notice("hello"))
        finally:
            logger.removeHandler(handler)
        assert stream.getvalue() == "INFO notice\thello\n"

    def test_sink_error_propagates(self):
        sink = io.StringIO()
        sink.close()
        with pytest.raises(ValueError):
            LogEmitter(sink).emit(error("x"))


class TestJsonEmitter:

    def test_single_line_object(self, stream):
        JsonEmitter(stream).emit(error("boom").annotate(at.code("E1"), at.start(3, 0)))
        out = stream.getvalue()
        assert out.endswith("\n")
        assert out.count("\n") == 1
        assert json.loads(out) == {
            "severity": "error",
            "code": "E1",
            "message": "boom",
            "position": {"line": 3},
        }

    def test_file_made_absolute(self, stream):
        diag = error("boom").annotate(at.file(os.path.join("rel", "a.go")))
        JsonEmitter(stream).emit(diag)
        expected = os.path.abspath(os.path.join("rel", "a.go"))
        assert json.loads(stream.getvalue())["file"] == expected
        # documented in-place rewrite
        assert diag.file == expected


class TestGitHubEmitter:

    def test_full_annotation(self, stream):
        diag = warning("message").annotate(
            at.title("Oops"), at.code("W1"), at.file("a.go"), at.start(3, 5))
        GitHubEmitter(stream).emit(diag)
        assert stream.getvalue() == "::warning title=[W1] Oops,file=a.go,col=5,line=3::message\n"

    def test_title_without_code_and_end_fields(self, stream):
        diag = error("m").annotate(at.title("T"), at.start(1, 2), at.end(4, 9))
        GitHubEmitter(stream).emit(diag)
        assert stream.getvalue() == "::error title=T,col=2,line=1,colEnd=9,lineEnd=4::m\n"

    def test_message_escaping(self, stream):
        GitHubEmitter(stream).emit(notice("one\ntwo\r\nthree"))
        assert stream.getvalue() == "::notice::one%0Atwo%0D%0Athree\n"

    def test_field_commas_escaped(self):
        diag = error("m").annotate(at.title("a, b"), at.file("x,y.c"))
        assert GitHubEmitter.fields(diag) == ["title=a%2C b", "file=x%2Cy.c"]

    def test_zero_positions_omitted(self):
        diag = error("m").annotate(at.line(0), at.column(0))
        assert GitHubEmitter.fields(diag) == []
