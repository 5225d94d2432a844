"""Asynchronous Statamic API client -- mirrors :class:`~statamic_client.client.sync_client.Client`.

:class:`AsyncClient` wraps :class:`httpx.AsyncClient` and offers the same
resource methods as the blocking client, as coroutines. Each call suspends
only while awaiting the response; timeouts and cancellation are left to
httpx and the caller's event loop.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from statamic_client.client.base import BaseClient, ParamsInput, ResourceCall
from statamic_client.exceptions import InvalidUsageError
from statamic_client.models import (
    Asset,
    Assets,
    CollectionTree,
    Entries,
    Entry,
    Form,
    Global,
    NavigationTree,
    RequestOptions,
    Term,
    Terms,
    User,
    Users,
)
from statamic_client.output import get_output


class AsyncClient(BaseClient):
    """Asynchronous client for the Statamic REST API.

    Must be used as an async context manager.

    Args:
        api_url: The Statamic API URL, ending with a slash.
        request_options: Headers, timeout and SSL settings.
        default_site: Site handle applied to multi-site list calls that do
            not name a site.
        transport: Optional :class:`httpx.AsyncBaseTransport`.

    Example::

        async with AsyncClient("https://example.com/api/") as client:
            tree = await client.get_navigation_tree("main", {"max_depth": 2})
    """

    def __init__(
        self,
        api_url: str,
        request_options: Optional[RequestOptions] = None,
        default_site: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(api_url, request_options, default_site)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        if self._client is not None:
            raise InvalidUsageError("AsyncClient is already open")
        self._client = httpx.AsyncClient(transport=self._transport, **self._client_kwargs())
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Generic request
    # ------------------------------------------------------------------ #

    async def get(self, path: str, params: ParamsInput = None) -> Any:
        """GET *path* with optional query *params* and return the decoded JSON.

        Behaves like :meth:`~statamic_client.client.sync_client.Client.get`.
        """
        url = self.build_url(path, params)
        return await self._request(url)

    async def _request(self, url: str) -> Any:
        if self._client is None:
            raise InvalidUsageError(
                "AsyncClient not initialised -- use it as an async context manager"
            )

        get_output().debug(f"GET {url}")
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise self._transport_failed(exc, url) from exc
        return self._decode(response, url)

    async def execute(self, call: ResourceCall) -> Any:
        """Send a planned call (see :meth:`plan`) and return the shaped result."""
        url = self.build_url(call.path, call.params)
        return self._shape(call, await self._request(url), url)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    async def get_entries(self, collection: str, params: ParamsInput = None) -> Entries:
        return await self.execute(self._entries(collection, params))

    async def get_entry(self, collection: str, id: str, params: ParamsInput = None) -> Entry:
        return await self.execute(self._entry(collection, id, params))

    async def get_collection_tree(
        self, collection: str, params: ParamsInput = None
    ) -> CollectionTree:
        return await self.execute(self._collection_tree(collection, params))

    async def get_navigation_tree(
        self, navigation: str, params: ParamsInput = None
    ) -> NavigationTree:
        return await self.execute(self._navigation_tree(navigation, params))

    async def get_taxonomy_terms(self, taxonomy: str, params: ParamsInput = None) -> Terms:
        return await self.execute(self._taxonomy_terms(taxonomy, params))

    async def get_taxonomy_term(
        self, taxonomy: str, slug: str, params: ParamsInput = None
    ) -> Term:
        return await self.execute(self._taxonomy_term(taxonomy, slug, params))

    async def get_globals(self, params: ParamsInput = None) -> list[Global]:
        return await self.execute(self._globals(params))

    async def get_global(self, handle: str, params: ParamsInput = None) -> Global:
        return await self.execute(self._global(handle, params))

    async def get_forms(self, params: ParamsInput = None) -> list[Form]:
        return await self.execute(self._forms(params))

    async def get_form(self, handle: str, params: ParamsInput = None) -> Form:
        return await self.execute(self._form(handle, params))

    async def get_users(self, params: ParamsInput = None) -> Users:
        return await self.execute(self._users(params))

    async def get_user(self, id: str, params: ParamsInput = None) -> User:
        return await self.execute(self._user(id, params))

    async def get_assets(self, container: str, params: ParamsInput = None) -> Assets:
        return await self.execute(self._assets(container, params))

    async def get_asset(self, container: str, path: str, params: ParamsInput = None) -> Asset:
        return await self.execute(self._asset(container, path, params))
