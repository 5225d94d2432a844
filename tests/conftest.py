"""Shared test fixtures for statamic_client.

Provides reusable fixtures for loading API response fixtures, building
clients on top of :class:`httpx.MockTransport`, creating isolated config
environments, managing output state, and running CLI commands. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from statamic_client.models import Profile, RequestOptions
from statamic_client.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
API_URL = "https://example.com/api/"


def load_fixture(name: str) -> Any:
    """Load a JSON response body from ``tests/fixtures``."""
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


class RecordingHandler:
    """MockTransport handler that records requests and answers with a fixed body.

    Usable with both :class:`httpx.Client` and :class:`httpx.AsyncClient`.
    """

    def __init__(self, body: Any = None, status_code: int = 200) -> None:
        self.body = {"data": []} if body is None else body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_url(self) -> str:
        return str(self.last.url)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Response fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixture_body() -> Callable[[str], Any]:
    """Return the :func:`load_fixture` helper."""
    return load_fixture


@pytest.fixture
def entries_body() -> dict[str, Any]:
    return load_fixture("entries.json")


@pytest.fixture
def entry_body() -> dict[str, Any]:
    return load_fixture("entry.json")


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recorder() -> RecordingHandler:
    """A handler answering ``{"data": []}`` with status 200."""
    return RecordingHandler()


@pytest.fixture
def make_recorder() -> Callable[..., RecordingHandler]:
    """Factory for handlers with a custom body or status code."""
    return RecordingHandler


# ---------------------------------------------------------------------------
# Profile fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_profile() -> Profile:
    """A sample profile for a two-site Statamic install."""
    return Profile(
        name="test-site",
        api_url=API_URL,
        default_site="en",
        request=RequestOptions(headers={"Authorization": "Bearer abc"}, timeout=5),
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    config. Clears all STATAMIC_* environment variables and changes
    the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["STATAMIC_PROFILE", "STATAMIC_API_URL", "STATAMIC_SITE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
