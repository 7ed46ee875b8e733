"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb colour disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- Spinner gating on stderr TTY
- Global instance management
"""

from __future__ import annotations

import pytest

from zsh_llm import output as output_module
from zsh_llm.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    """Ensure the global output instance is reset between tests."""
    reset_output()
    yield
    reset_output()


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_colour_enabled(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys):
        OutputManager(no_color=True).print_data("ls -la")
        captured = capsys.readouterr()
        assert captured.out == "ls -la\n"
        assert captured.err == ""

    def test_error_goes_to_stderr(self, capsys):
        OutputManager(no_color=True).error("HTTP 500: boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: HTTP 500: boom\n"

    def test_error_not_suppressed_by_quiet(self, capsys):
        OutputManager(no_color=True, quiet=True).error("still shown")
        assert "still shown" in capsys.readouterr().err


class TestVerbose:
    def test_debug_hidden_by_default(self, capsys):
        OutputManager(no_color=True).debug("POST https://x")
        assert capsys.readouterr().err == ""

    def test_debug_shown_when_verbose(self, capsys):
        mgr = OutputManager(no_color=True, verbose=True)
        mgr.debug("POST https://x")
        assert capsys.readouterr().err == "[debug] POST https://x\n"


class TestSpinner:
    def test_no_spinner_without_tty(self, capsys, monkeypatch):
        monkeypatch.setattr("zsh_llm.output._stderr_is_tty", lambda: False)
        ran = []
        with OutputManager(no_color=True).spinner():
            ran.append(True)
        assert ran == [True]
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_spinner_body_runs_on_tty(self, monkeypatch):
        monkeypatch.setattr("zsh_llm.output._stderr_is_tty", lambda: True)
        ran = []
        with OutputManager(no_color=True).spinner("Working"):
            ran.append(True)
        assert ran == [True]

    def test_quiet_never_draws_spinner(self, monkeypatch):
        monkeypatch.setattr("zsh_llm.output._stderr_is_tty", lambda: True)
        mgr = OutputManager(no_color=True, quiet=True)
        drawn = []
        monkeypatch.setattr(mgr._stderr, "status", lambda *a, **kw: drawn.append(a))
        ran = []
        with mgr.spinner():
            ran.append(True)
        assert ran == [True]
        assert drawn == []

    def test_exception_propagates_through_spinner(self, monkeypatch):
        monkeypatch.setattr("zsh_llm.output._stderr_is_tty", lambda: False)
        with pytest.raises(ValueError):
            with OutputManager(no_color=True).spinner():
                raise ValueError("boom")


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_and_get(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset(self):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None

    def test_convenience_functions(self, capsys):
        set_output(OutputManager(no_color=True, verbose=True))
        output_module.print_data("cmd")
        output_module.error("bad")
        output_module.debug("dbg")
        captured = capsys.readouterr()
        assert captured.out == "cmd\n"
        assert "Error: bad" in captured.err
        assert "[debug] dbg" in captured.err


class TestMarkup:
    def test_error_brackets_are_literal(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager().error("[red]not markup[/red]")
        assert "[red]not markup[/red]" in capsys.readouterr().err
