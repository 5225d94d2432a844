"""Behaviour shared by :class:`~statamic_client.client.sync_client.Client`
and :class:`~statamic_client.client.async_client.AsyncClient`.

:class:`BaseClient` validates the API URL, holds the immutable client
configuration, resolves URLs, and turns each resource operation into a
:class:`ResourceCall` -- the path to fetch, the query parameters to send
and the parser that shapes the decoded body. The concrete clients only add
the transport round trip.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from urllib.parse import urljoin

import httpx
from pydantic import ValidationError

from statamic_client.client import response as parsers
from statamic_client.exceptions import ConfigError, InvalidUsageError, RequestError
from statamic_client.models import Params, RequestOptions, TreeParams
from statamic_client.output import get_output
from statamic_client.params import apply_default_site, encode_params, set_site_filter

ParamsInput = Union[Params, dict[str, Any], None]


class Endpoint(str, enum.Enum):
    """Path segments of the Statamic REST API."""

    COLLECTIONS = "collections"
    ENTRIES = "entries"
    NAVIGATION = "navs"
    TREE = "tree"
    TAXONOMIES = "taxonomies"
    TERMS = "terms"
    GLOBALS = "globals"
    FORMS = "forms"
    USERS = "users"
    ASSETS = "assets"


OPERATIONS = (
    "entries",
    "entry",
    "collection_tree",
    "navigation_tree",
    "taxonomy_terms",
    "taxonomy_term",
    "globals",
    "global",
    "forms",
    "form",
    "users",
    "user",
    "assets",
    "asset",
)


@dataclass(frozen=True)
class ResourceCall:
    """A resolved resource operation, ready to be sent."""

    path: str
    params: Optional[Params]
    parse: Callable[[Any], Any]


class BaseClient:
    """Configuration and request planning common to both clients.

    Args:
        api_url: The Statamic API URL, for example
            ``https://example.com/api/``. Must end with a slash.
        request_options: Headers, timeout and SSL settings. The JSON
            ``Accept``/``Content-Type`` headers are always present; headers
            given here are merged on top of them.
        default_site: Site handle applied to entries, taxonomy terms and
            globals list calls that do not name a site themselves.

    Raises:
        ConfigError: If *api_url* is empty or does not end with ``/``.
    """

    def __init__(
        self,
        api_url: str,
        request_options: Optional[RequestOptions] = None,
        default_site: Optional[str] = None,
    ) -> None:
        if not api_url:
            raise ConfigError("No API URL provided")
        if not api_url.endswith("/"):
            raise ConfigError(f"API URL must end with a slash: {api_url}")

        self._api_url = api_url
        self._request_options = (request_options or RequestOptions()).merged_over_defaults()
        self._default_site = default_site or None

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def request_options(self) -> RequestOptions:
        return self._request_options

    @property
    def default_site(self) -> Optional[str]:
        return self._default_site

    # ------------------------------------------------------------------ #
    # URL building
    # ------------------------------------------------------------------ #

    def build_url(self, path: str, params: ParamsInput = None) -> str:
        """Resolve *path* against the API URL and append the encoded *params*."""
        url = urljoin(self._api_url, path)
        query = encode_params(Params.coerce(params)) if params is not None else ""
        return f"{url}?{query}" if query else url

    # ------------------------------------------------------------------ #
    # Resource planning
    # ------------------------------------------------------------------ #

    def plan(self, operation: str, *args: str, params: ParamsInput = None) -> ResourceCall:
        """Resolve a resource operation by name without sending it.

        Args:
            operation: One of :data:`OPERATIONS`, e.g. ``"entries"``.
            *args: The operation's handles/ids, e.g. the collection handle.
            params: Query parameters for the call.

        Raises:
            InvalidUsageError: If *operation* is unknown.
        """
        if operation not in OPERATIONS:
            raise InvalidUsageError(
                f"Unknown operation '{operation}'. Expected one of: {', '.join(OPERATIONS)}"
            )
        planner: Callable[..., ResourceCall] = getattr(self, f"_{operation}")
        return planner(*args, params)

    def _site_scoped(self, params: ParamsInput) -> Optional[Params]:
        """Apply the default site, then move ``site`` into a filter."""
        coerced = Params.coerce(params) if params is not None else None
        return set_site_filter(apply_default_site(coerced, self._default_site))

    @staticmethod
    def _plain(params: ParamsInput) -> Optional[Params]:
        return Params.coerce(params) if params is not None else None

    @staticmethod
    def _tree(params: ParamsInput) -> Optional[Params]:
        return TreeParams.coerce(params) if params is not None else None

    def _entries(self, collection: str, params: ParamsInput) -> ResourceCall:
        # Multi-site entries endpoints serve every site at once.
        return ResourceCall(
            f"{Endpoint.COLLECTIONS.value}/{collection}/{Endpoint.ENTRIES.value}",
            self._site_scoped(params),
            parsers.parse_entries,
        )

    def _entry(self, collection: str, id: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.COLLECTIONS.value}/{collection}/{Endpoint.ENTRIES.value}/{id}",
            self._plain(params),
            parsers.parse_entry,
        )

    def _collection_tree(self, collection: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.COLLECTIONS.value}/{collection}/{Endpoint.TREE.value}",
            self._tree(params),
            parsers.parse_collection_tree,
        )

    def _navigation_tree(self, navigation: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.NAVIGATION.value}/{navigation}/{Endpoint.TREE.value}",
            self._tree(params),
            parsers.parse_navigation_tree,
        )

    def _taxonomy_terms(self, taxonomy: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.TAXONOMIES.value}/{taxonomy}/{Endpoint.TERMS.value}",
            self._site_scoped(params),
            parsers.parse_taxonomy_terms,
        )

    def _taxonomy_term(self, taxonomy: str, slug: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.TAXONOMIES.value}/{taxonomy}/{Endpoint.TERMS.value}/{slug}",
            self._plain(params),
            parsers.parse_taxonomy_term,
        )

    def _globals(self, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            Endpoint.GLOBALS.value, self._site_scoped(params), parsers.parse_globals
        )

    def _global(self, handle: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.GLOBALS.value}/{handle}", self._plain(params), parsers.parse_global
        )

    def _forms(self, params: ParamsInput) -> ResourceCall:
        return ResourceCall(Endpoint.FORMS.value, self._plain(params), parsers.parse_forms)

    def _form(self, handle: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.FORMS.value}/{handle}", self._plain(params), parsers.parse_form
        )

    def _users(self, params: ParamsInput) -> ResourceCall:
        return ResourceCall(Endpoint.USERS.value, self._plain(params), parsers.parse_users)

    def _user(self, id: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.USERS.value}/{id}", self._plain(params), parsers.parse_user
        )

    def _assets(self, container: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.ASSETS.value}/{container}", self._plain(params), parsers.parse_assets
        )

    def _asset(self, container: str, path: str, params: ParamsInput) -> ResourceCall:
        return ResourceCall(
            f"{Endpoint.ASSETS.value}/{container}/{path}",
            self._plain(params),
            parsers.parse_asset,
        )

    # ------------------------------------------------------------------ #
    # Response handling
    # ------------------------------------------------------------------ #

    def _client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the underlying ``httpx`` client."""
        options = self._request_options
        return {
            "headers": options.headers,
            "timeout": options.timeout,
            "verify": options.verify_ssl,
            "follow_redirects": True,
        }

    def _options_for_error(self) -> dict[str, Any]:
        return self._request_options.model_dump(mode="json")

    def _decode(self, response: httpx.Response, url: str) -> Any:
        """Require a 2xx status and return the decoded JSON body."""
        get_output().debug(f"HTTP {response.status_code} {url}")
        try:
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise RequestError(
                Exception(
                    f"Request failed with status code {response.status_code}: "
                    f"{response.reason_phrase}"
                ),
                url,
                self._options_for_error(),
                status_code=response.status_code,
            ) from exc
        except ValueError as exc:
            raise RequestError(
                exc, url, self._options_for_error(), status_code=response.status_code
            ) from exc

    def _transport_failed(self, exc: Exception, url: str) -> RequestError:
        return RequestError(exc, url, self._options_for_error())

    def _shape(self, call: ResourceCall, body: Any, url: str) -> Any:
        """Run the call's parser, reporting shape mismatches as request errors."""
        try:
            return call.parse(body)
        except (ValidationError, parsers.EnvelopeError) as exc:
            raise RequestError(exc, url, self._options_for_error()) from exc
