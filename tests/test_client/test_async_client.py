"""Tests for the asynchronous Statamic client."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from statamic_client.client import AsyncClient
from statamic_client.exceptions import ConfigError, InvalidUsageError, RequestError
from statamic_client.models import Entries, Entry, FilterField, NavigationItem, Params
from statamic_client.output import OutputManager, reset_output, set_output


API_URL = "https://example.com/api/"


@pytest.fixture(autouse=True)
def _clean_output():
    set_output(OutputManager(no_color=True, quiet=True))
    yield
    reset_output()


class TestAsyncClient:
    def test_invalid_url(self) -> None:
        with pytest.raises(ConfigError):
            AsyncClient("https://example.com/api")

    def test_context_manager(self) -> None:
        async def run() -> None:
            client = AsyncClient(API_URL)
            async with client:
                assert client._client is not None
            assert client._client is None

        asyncio.run(run())

    def test_call_outside_context_raises(self) -> None:
        async def run() -> None:
            await AsyncClient(API_URL).get_forms()

        with pytest.raises(InvalidUsageError, match="async context manager"):
            asyncio.run(run())

    def test_entries_with_site_filter(self, make_recorder, entries_body) -> None:
        handler = make_recorder(entries_body)

        async def run() -> Entries:
            transport = httpx.MockTransport(handler)
            async with AsyncClient(API_URL, default_site="en", transport=transport) as client:
                return await client.get_entries(
                    "pages", Params(filter=FilterField(field="published", value="true"))
                )

        entries = asyncio.run(run())
        assert entries.meta.total == 5
        assert handler.last.url.path == "/api/collections/pages/entries"
        assert handler.last.url.params.multi_items() == [
            ("filter[published]", "true"),
            ("filter[site]", "en"),
        ]

    def test_async_handler(self, entry_body) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=entry_body)

        async def run() -> Entry:
            async with AsyncClient(API_URL, transport=httpx.MockTransport(handler)) as client:
                return await client.get_entry("pages", "3a2b1c0d-0001", {"site": "en"})

        entry = asyncio.run(run())
        assert entry.id == "3a2b1c0d-0001"

    def test_navigation_tree(self, make_recorder, fixture_body) -> None:
        handler = make_recorder(fixture_body("navigation_tree.json"))

        async def run():
            async with AsyncClient(API_URL, transport=httpx.MockTransport(handler)) as client:
                return await client.get_navigation_tree("main", {"max_depth": 2})

        tree = asyncio.run(run())
        assert isinstance(tree[0].item, NavigationItem)
        assert str(handler.last.url) == "https://example.com/api/navs/main/tree?max_depth=2"

    def test_concurrent_calls_are_independent(self, make_recorder) -> None:
        handler = make_recorder({"data": {"handle": "footer"}})

        async def run():
            async with AsyncClient(API_URL, transport=httpx.MockTransport(handler)) as client:
                return await asyncio.gather(
                    client.get_global("footer"), client.get_form("contact")
                )

        global_, form = asyncio.run(run())
        assert global_.handle == "footer"
        assert form.handle == "footer"
        assert sorted(r.url.path for r in handler.requests) == [
            "/api/forms/contact",
            "/api/globals/footer",
        ]

    def test_error_carries_url(self, make_recorder) -> None:
        handler = make_recorder({"message": "Server Error"}, status_code=500)

        async def run() -> None:
            async with AsyncClient(API_URL, transport=httpx.MockTransport(handler)) as client:
                await client.get_assets("main")

        with pytest.raises(RequestError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.status_code == 500
        assert "https://example.com/api/assets/main" in str(exc_info.value)

    def test_reenter_raises(self, recorder) -> None:
        async def run() -> None:
            client = AsyncClient(API_URL, transport=httpx.MockTransport(recorder))
            async with client:
                opened = client._client
                with pytest.raises(InvalidUsageError, match="already open"):
                    await client.__aenter__()
                assert client._client is opened
                await client.get_forms()
            assert client._client is None

        asyncio.run(run())
        assert len(recorder.requests) == 1

    def test_invalid_identifier_wrapped(self, recorder) -> None:
        async def run() -> None:
            async with AsyncClient(API_URL, transport=httpx.MockTransport(recorder)) as client:
                await client.get_entry("blog", "a\x01b")

        with pytest.raises(RequestError) as exc_info:
            asyncio.run(run())
        assert isinstance(exc_info.value.cause, httpx.InvalidURL)
        assert recorder.requests == []
