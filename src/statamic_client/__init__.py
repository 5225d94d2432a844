"""statamic_client -- a typed client for the Statamic REST API.

The package builds Statamic query strings from structured parameters
(field selection, filters, sorting, pagination, multi-site scoping), fetches
resources over HTTP and validates the responses into Pydantic models. A
Typer CLI exposes the same operations from the shell.

Typical use::

    from statamic_client import Client, Condition, FilterField, Params

    params = Params(filter=FilterField(field="title", condition=Condition.CONTAINS, value="news"))
    with Client("https://example.com/api/") as client:
        entries = client.get_entries("blog", params)

Modules:
    app: Typer application and CLI entry point.
    client: Synchronous and asynchronous API clients.
    params: Query-string construction and the multi-site rule.
    models: Pydantic models for queries, responses and configuration.
    config: XDG-aware configuration and profile management.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from statamic_client.client import AsyncClient, Client  # noqa: E402
from statamic_client.exceptions import (  # noqa: E402
    ConfigError,
    InvalidUsageError,
    RequestError,
    StatamicError,
)
from statamic_client.models import (  # noqa: E402
    Condition,
    FilterField,
    Params,
    RequestOptions,
    SortField,
    TreeParams,
)

__all__ = [
    "AsyncClient",
    "Client",
    "Condition",
    "ConfigError",
    "FilterField",
    "InvalidUsageError",
    "Params",
    "RequestError",
    "RequestOptions",
    "SortField",
    "StatamicError",
    "TreeParams",
    "__version__",
]
