# tests/test_reporter.py
"""
Tests for Reporter validation, metrics, debug gating, factories and the
recording helpers in termdiag.testing.
"""

import io

import pytest

from termdiag import annotate as at
from termdiag.diagnostic import Diagnostic, debug, error, new, notice, warning
from termdiag.emitters import (
    GitHubEmitter,
    JsonEmitter,
    LogEmitter,
    NoopEmitter,
    TextEmitter,
)
from termdiag.errors import OutputFormatError, ValidationError
from termdiag.reporter import (
    EXIT_FATAL,
    Metrics,
    Reporter,
    github_reporter,
    json_reporter,
    log_reporter,
    noop_reporter,
    reporter_for_format,
    terminal_reporter,
    text_reporter,
)
from termdiag.severity import Severity
from termdiag.terminal import TerminalEmitter
from termdiag.testing import (
    Recorder,
    contains_message,
    contains_title,
    has_code,
    has_end,
    has_file,
    has_message,
    has_range,
    has_severity,
    has_start,
    has_title,
    recording_reporter,
)

_COUNTERS = {
    Severity.ERROR: "errors",
    Severity.WARNING: "warnings",
    Severity.NOTICE: "notices",
    Severity.DEBUG: "debugs",
}


class TestMetrics:

    @pytest.mark.parametrize("show_debug", [False, True])
    @pytest.mark.parametrize("severity", list(Severity))
    def test_report_increments_matching_counter(self, severity, show_debug):
        rep = Reporter(Recorder())
        rep.show_debug(show_debug)
        rep.report(new(severity, "m"))
        counts = {name: getattr(rep.metrics, name) for name in _COUNTERS.values()}
        expected = {name: 0 for name in _COUNTERS.values()}
        expected[_COUNTERS[severity]] = 1
        assert counts == expected

    def test_metrics_is_live(self):
        rep = Reporter()
        view = rep.metrics
        rep.error("a")
        rep.warning("b")
        assert view.errors == 1
        assert view.warnings == 1
        assert view.total == 2

    def test_summary_line(self):
        m = Metrics(errors=2, warnings=1)
        assert m.summary_line() == "2 errors; 1 warning (3 total)"
        assert Metrics().summary_line() == "no diagnostics reported"


class TestDebugGating:

    def test_debug_suppressed_by_default(self):
        recorder = Recorder()
        rep = Reporter(recorder)
        rep.report(debug("hidden"))
        assert recorder.diagnostics == []
        assert rep.metrics.debugs == 1

    def test_debug_forwarded_when_enabled(self):
        recorder = Recorder()
        rep = Reporter(recorder)
        rep.show_debug(True)
        rep.debug("shown %s", "now")
        assert recorder.contains(has_message("shown now"))

    def test_toggle_at_any_time(self):
        recorder = Recorder()
        rep = Reporter(recorder)
        rep.debug("one")
        rep.show_debug(True)
        rep.debug("two")
        rep.show_debug(False)
        rep.debug("three")
        assert [d.message for d in recorder.diagnostics] == ["two"]
        assert rep.metrics.debugs == 3


class TestValidation:

    @pytest.mark.parametrize("diag", [
        Diagnostic(severity="", message="m"),
        Diagnostic(severity=Severity.ERROR, message=""),
        Diagnostic(severity="panic", message="m"),
    ])
    def test_invalid_diagnostic_is_not_counted_or_emitted(self, diag):
        recorder = Recorder()
        rep = Reporter(recorder)
        with pytest.raises(ValidationError):
            rep.report(diag)
        assert rep.metrics == Metrics()
        assert recorder.diagnostics == []


class _BrokenStream(io.StringIO):
    def write(self, s):
        raise OSError("disk full")


class TestSinkErrors:

    def test_sink_error_propagates(self):
        rep = text_reporter(_BrokenStream())
        with pytest.raises(OSError, match="disk full"):
            rep.error("x")
        # counted before the emitter ran
        assert rep.metrics.errors == 1


class TestFatal:

    def test_fatal_reports_then_exits(self):
        recorder = Recorder()
        rep = Reporter(recorder)
        with pytest.raises(SystemExit) as exc:
            rep.fatal("cannot continue: %s", "oops")
        assert exc.value.code == EXIT_FATAL
        assert recorder.contains(has_severity(Severity.ERROR), has_message("cannot continue: oops"))
        assert rep.metrics.errors == 1

    def test_fatal_exits_even_if_sink_fails(self):
        rep = text_reporter(_BrokenStream())
        with pytest.raises(SystemExit):
            rep.fatal("x")

    def test_fatal_exits_on_invalid_diagnostic(self):
        rep = Reporter()
        with pytest.raises(SystemExit) as exc:
            rep.fatal("")
        assert exc.value.code == EXIT_FATAL
        assert rep.metrics.errors == 0

    def test_fatal_exits_on_closed_stream(self):
        sink = io.StringIO()
        sink.close()
        with pytest.raises(SystemExit) as exc:
            text_reporter(sink).fatal("x")
        assert exc.value.code == EXIT_FATAL


class TestFactories:

    def test_default_emitter_is_noop(self):
        assert isinstance(Reporter().emitter, NoopEmitter)

    @pytest.mark.parametrize("factory", [
        text_reporter, terminal_reporter, json_reporter, github_reporter, log_reporter,
    ])
    def test_none_stream_gives_noop(self, factory):
        assert isinstance(factory(None).emitter, NoopEmitter)

    @pytest.mark.parametrize("name, cls", [
        ("text", TextEmitter),
        ("terminal", TerminalEmitter),
        ("json", JsonEmitter),
        ("github", GitHubEmitter),
        ("log", LogEmitter),
        ("none", NoopEmitter),
    ])
    def test_reporter_for_format(self, name, cls):
        assert isinstance(reporter_for_format(name, io.StringIO()).emitter, cls)

    def test_unknown_format(self):
        with pytest.raises(OutputFormatError, match="xml"):
            reporter_for_format("xml", io.StringIO())

    def test_terminal_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        emitter = terminal_reporter(io.StringIO()).emitter
        assert emitter.base_path == str(tmp_path)
        assert emitter.wrapper.width == 120

    def test_terminal_explicit_width(self):
        emitter = terminal_reporter(io.StringIO(), base_path="/src", width=60).emitter
        assert emitter.base_path == "/src"
        assert emitter.wrapper.width == 60

    def test_noop_reporter_still_counts(self):
        rep = noop_reporter()
        rep.notice("n")
        assert rep.metrics.notices == 1


class TestRecorder:

    def _recorded(self):
        recorder = Recorder()
        rep = recording_reporter(recorder)
        rep.report(warning("unused variable x").annotate(
            at.title("Unused"), at.code("W1"), at.file("a.c"), at.start(3, 5), at.end(3, 6)))
        rep.report(error("syntax error"))
        rep.report(debug("trace"))
        return recorder

    def test_recording_reporter_shows_debug(self):
        recorder = self._recorded()
        assert recorder.count() == 3
        assert recorder.contains(has_severity("debug"))

    def test_conditions(self):
        recorder = self._recorded()
        assert recorder.count(contains_message("unused")) == 1
        assert recorder.count(has_severity(Severity.ERROR, Severity.WARNING)) == 2
        assert recorder.contains(has_title("Unused"), contains_title("Unu"), has_code("W1"))
        assert recorder.contains(has_file("a.c"), has_start(3, 5), has_end(3, 6))
        assert recorder.contains(has_range(3, 5, 3, 6))
        assert not recorder.contains(has_code("W1"), has_severity("error"))

    def test_none_recorder(self):
        assert isinstance(recording_reporter(None).emitter, NoopEmitter)
