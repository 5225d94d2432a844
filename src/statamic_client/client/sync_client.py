"""Synchronous Statamic API client.

This module provides :class:`Client`, the blocking client used by the CLI.
It wraps :class:`httpx.Client` and exposes one method per Statamic resource
kind. Every method performs exactly one GET request: there is no retry, no
caching and no walking of paginated results.

See Also:
    :class:`~statamic_client.client.async_client.AsyncClient` for the
    equivalent non-blocking implementation.
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


class Client(BaseClient):
    """Synchronous client for the Statamic REST API.

    Must be used as a context manager so that the underlying
    :class:`httpx.Client` is opened and closed properly. Calling any
    request method outside the ``with`` block raises
    :class:`~statamic_client.exceptions.InvalidUsageError`.

    Args:
        api_url: The Statamic API URL, ending with a slash.
        request_options: Headers, timeout and SSL settings.
        default_site: Site handle applied to multi-site list calls that do
            not name a site.
        transport: Optional :class:`httpx.BaseTransport` to send requests
            through (e.g. :class:`httpx.MockTransport` in tests).

    Example::

        with Client("https://example.com/api/") as client:
            entries = client.get_entries("blog", {"limit": 5})
    """

    def __init__(
        self,
        api_url: str,
        request_options: Optional[RequestOptions] = None,
        default_site: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(api_url, request_options, default_site)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Client:
        if self._client is not None:
            raise InvalidUsageError("Client is already open")
        self._client = httpx.Client(transport=self._transport, **self._client_kwargs())
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Generic request
    # ------------------------------------------------------------------ #

    def get(self, path: str, params: ParamsInput = None) -> Any:
        """GET *path* with optional query *params* and return the decoded JSON.

        Raises:
            InvalidUsageError: If the client is not opened.
            RequestError: On network errors, non-2xx responses or bodies
                that are not valid JSON.
        """
        url = self.build_url(path, params)
        return self._request(url)

    def _request(self, url: str) -> Any:
        if self._client is None:
            raise InvalidUsageError("Client not initialised -- use it as a context manager")

        get_output().debug(f"GET {url}")
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise self._transport_failed(exc, url) from exc
        return self._decode(response, url)

    def execute(self, call: ResourceCall) -> Any:
        """Send a planned call (see :meth:`plan`) and return the shaped result."""
        url = self.build_url(call.path, call.params)
        return self._shape(call, self._request(url), url)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def get_entries(self, collection: str, params: ParamsInput = None) -> Entries:
        """Get a page of entries from a collection (site-scoped)."""
        return self.execute(self._entries(collection, params))

    def get_entry(self, collection: str, id: str, params: ParamsInput = None) -> Entry:
        """Get a single entry from a collection by its ID."""
        return self.execute(self._entry(collection, id, params))

    def get_collection_tree(self, collection: str, params: ParamsInput = None) -> CollectionTree:
        """Get the structure tree of a collection."""
        return self.execute(self._collection_tree(collection, params))

    def get_navigation_tree(self, navigation: str, params: ParamsInput = None) -> NavigationTree:
        """Get the tree of a navigation."""
        return self.execute(self._navigation_tree(navigation, params))

    def get_taxonomy_terms(self, taxonomy: str, params: ParamsInput = None) -> Terms:
        """Get a page of terms from a taxonomy (site-scoped)."""
        return self.execute(self._taxonomy_terms(taxonomy, params))

    def get_taxonomy_term(self, taxonomy: str, slug: str, params: ParamsInput = None) -> Term:
        """Get a single taxonomy term by its slug."""
        return self.execute(self._taxonomy_term(taxonomy, slug, params))

    def get_globals(self, params: ParamsInput = None) -> list[Global]:
        """Get all global sets (site-scoped)."""
        return self.execute(self._globals(params))

    def get_global(self, handle: str, params: ParamsInput = None) -> Global:
        return self.execute(self._global(handle, params))

    def get_forms(self, params: ParamsInput = None) -> list[Form]:
        return self.execute(self._forms(params))

    def get_form(self, handle: str, params: ParamsInput = None) -> Form:
        return self.execute(self._form(handle, params))

    def get_users(self, params: ParamsInput = None) -> Users:
        return self.execute(self._users(params))

    def get_user(self, id: str, params: ParamsInput = None) -> User:
        return self.execute(self._user(id, params))

    def get_assets(self, container: str, params: ParamsInput = None) -> Assets:
        """Get a page of assets from an asset container."""
        return self.execute(self._assets(container, params))

    def get_asset(self, container: str, path: str, params: ParamsInput = None) -> Asset:
        """Get a single asset by its path inside the container."""
        return self.execute(self._asset(container, path, params))
