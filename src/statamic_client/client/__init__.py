"""Statamic API clients.

Provides a synchronous and an asynchronous client that wrap :mod:`httpx`
and expose one method per Statamic resource kind.

Classes:
    :class:`Client` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Both clients are context managers and accept the same arguments: the API
URL, optional :class:`~statamic_client.models.RequestOptions`, an optional
default site handle and an optional ``httpx`` transport.

Example::

    from statamic_client.client import Client

    with Client("https://example.com/api/", default_site="en") as client:
        page = client.get_entries("pages", {"select": ["title", "url"]})
        print(page.meta.total)
"""

from statamic_client.client.async_client import AsyncClient
from statamic_client.client.sync_client import Client

__all__ = ["Client", "AsyncClient"]
