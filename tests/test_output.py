"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline, quiet and verbose modes
- JSON, plain and rich rendering of API data
- print_table in all three modes
- Output file redirection
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from statamic_client import output as output_module
from statamic_client.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("statamic_client.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("statamic_client.output._is_tty", lambda: True)


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True, **kwargs)


# ------------------------------------------------------------------ #
# Format resolution and colour
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_data_goes_to_stdout(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON, no_color=True).format_response({"id": "home"})
        captured = capfd.readouterr()
        assert json.loads(captured.out) == {"id": "home"}
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "error", "suggest"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        getattr(_plain(), method)("message text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "message text" in captured.err

    def test_brackets_survive_color_output(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.info("[dry-run] GET filter[site]=en")
        assert "[dry-run] GET filter[site]=en" in capfd.readouterr().err

    def test_error_prefix(self, capfd, non_tty):
        _plain().error("bad")
        assert "Error: bad" in capfd.readouterr().err


class TestQuietAndVerbose:
    @pytest.mark.parametrize("method", ["info", "success", "suggest"])
    def test_quiet_suppresses(self, capfd, non_tty, method):
        getattr(_plain(quiet=True), method)("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors(self, capfd, non_tty):
        _plain(quiet=True).error("shown")
        assert "shown" in capfd.readouterr().err

    def test_quiet_keeps_data(self, capfd, non_tty):
        _plain(quiet=True).print_data("payload")
        assert "payload" in capfd.readouterr().out

    def test_debug_hidden_by_default(self, capfd, non_tty):
        _plain().debug("GET https://example.com/api/forms")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        _plain(verbose=True).debug("GET https://example.com/api/forms")
        assert "[debug] GET https://example.com/api/forms" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Data rendering
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_envelope(self, capfd, non_tty):
        body = {"data": [{"id": "a"}], "meta": {"total": 1}}
        OutputManager(format=OutputFormat.JSON).format_response(body)
        out = capfd.readouterr().out
        assert json.loads(out) == body
        assert '\n  "data"' in out

    def test_json_keeps_unicode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"title": "Über uns"})
        assert "Über uns" in capfd.readouterr().out

    def test_plain_record_as_key_value(self, capfd, non_tty):
        _plain().format_response({"id": "home", "title": "Home"})
        assert capfd.readouterr().out.splitlines() == ["id\thome", "title\tHome"]

    def test_plain_list_of_records_as_rows(self, capfd, non_tty):
        _plain().format_response([{"handle": "footer", "api_url": "x"}, {"handle": "seo", "api_url": "y"}])
        assert capfd.readouterr().out.splitlines() == ["footer\tx", "seo\ty"]

    def test_plain_nested_values_as_compact_json(self, capfd, non_tty):
        _plain().format_response({"taxonomy": {"handle": "tags"}})
        assert capfd.readouterr().out.strip() == 'taxonomy\t{"handle": "tags"}'

    def test_rich_produces_output(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).format_response({"id": "home"})
        out = capfd.readouterr().out
        assert "id" in out
        assert "home" in out


class TestPrintTable:
    HEADERS = ["name", "api_url"]
    ROWS = [["prod", "https://example.com/api/"]]

    def test_json_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(self.HEADERS, self.ROWS)
        assert json.loads(capfd.readouterr().out) == [
            {"name": "prod", "api_url": "https://example.com/api/"}
        ]

    def test_plain_mode(self, capfd, non_tty):
        _plain().print_table(self.HEADERS, self.ROWS, title="Profiles")
        assert capfd.readouterr().out.splitlines() == [
            "name\tapi_url",
            "prod\thttps://example.com/api/",
        ]

    def test_rich_mode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            self.HEADERS, self.ROWS, title="Profiles"
        )
        out = capfd.readouterr().out
        assert "Profiles" in out
        assert "prod" in out


class TestOutputFile:
    def test_format_response_writes_to_file(self, tmp_path, capfd, non_tty):
        target = tmp_path / "entries.json"
        OutputManager(format=OutputFormat.PLAIN, output_file=str(target)).format_response(
            {"data": []}
        )
        assert json.loads(target.read_text()) == {"data": []}
        assert capfd.readouterr().out == ""

    def test_print_data_appends(self, tmp_path, non_tty):
        target = tmp_path / "out.txt"
        mgr = OutputManager(format=OutputFormat.PLAIN, output_file=str(target))
        mgr.print_data("one")
        mgr.print_data("two\n")
        assert target.read_text() == "one\ntwo\n"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_output_overrides(self):
        mgr = _plain()
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output_clears(self):
        set_output(_plain())
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_delegate(self, capfd, non_tty):
        set_output(_plain(verbose=True))
        output_module.info("info line")
        output_module.debug("debug line")
        output_module.format_response({"k": "v"})
        captured = capfd.readouterr()
        assert "info line" in captured.err
        assert "debug line" in captured.err
        assert captured.out.strip() == "k\tv"
