"""Canonical Pydantic models shared across all statamic_client modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Query models** -- the structured request description serialised by
:mod:`statamic_client.params`:
    :class:`Condition`, :class:`FilterField`, :class:`SortField`,
    :class:`Params` and :class:`TreeParams`.

**Response models** -- the shapes returned by the Statamic REST API:
    :class:`Entry`, :class:`Term`, :class:`Global`, :class:`Form`,
    :class:`User`, :class:`Asset`, the paginated envelopes
    (:class:`Entries`, :class:`Terms`, :class:`Users`, :class:`Assets`) and
    the tree nodes (:class:`CollectionTreeLeaf`, :class:`NavigationTreeLeaf`).

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestOptions`, :class:`OutputConfig`, :class:`GlobalConfig`
    and :class:`Profile`.

Response records declare the fields the API is known to return and use
``extra="allow"`` so that any additional (blueprint-defined) fields are
preserved in ``model_extra``.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from statamic_client.exceptions import ConfigError


# --- Query models ---


class Condition(str, enum.Enum):
    """Filter conditions understood by the Statamic API.

    See `Conditions <https://statamic.dev/conditions>`_ in the Statamic docs.
    When a :class:`FilterField` has no condition, Statamic compares for
    equality.
    """

    EQUALS = "is"
    NOT_EQUALS = "not"
    EXISTS = "exists"
    DOES_NOT_EXIST = "doesnt_exist"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesnt_contain"
    IN = "in"
    NOT_IN = "not_in"
    STARTS_WITH = "starts_with"
    DOES_NOT_START_WITH = "doesnt_start_with"
    ENDS_WITH = "ends_with"
    DOES_NOT_END_WITH = "doesnt_end_with"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    REGEX = "regex"
    NOT_REGEX = "not_regex"
    IS_ALPHA = "is_alpha"
    IS_NUMERIC = "is_numeric"
    IS_ALPHANUMERIC = "is_alpha_numeric"
    IS_URL = "is_url"
    IS_EMBEDDABLE = "is_embeddable"
    IS_EMAIL = "is_email"
    IS_AFTER = "is_after"
    IS_BEFORE = "is_before"


class FilterField(BaseModel):
    """A single ``field``/``condition``/``value`` comparison.

    Multiple filters are combined with AND semantics by the API. Filtering
    is disabled by default in Statamic and has to be allowed per resource
    in the site's ``config/statamic/api.php``.

    Example::

        FilterField(field="title", condition=Condition.CONTAINS, value="news")
    """

    model_config = ConfigDict(frozen=True)

    field: str
    condition: Optional[Condition] = None
    value: str


class SortField(BaseModel):
    """A sort clause that can be reversed.

    A plain string is also accepted wherever a sort clause is expected and
    sorts ascending.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    reverse: bool = False


SortClause = Union[str, SortField]


class Params(BaseModel):
    """Query parameters for one API call.

    All fields are optional. Unknown keyword arguments are kept (in the
    order given) and sent as plain query parameters so that parameters
    added to the API later can be used without a model change.

    Instances are frozen: helpers such as
    :func:`~statamic_client.params.set_site_filter` return new instances
    instead of modifying the one passed in.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    select: Optional[Union[str, list[str]]] = Field(
        default=None, description="Field or fields to include in the result"
    )
    filter: Optional[Union[FilterField, list[FilterField]]] = Field(
        default=None, description="Filter or filters applied to the result"
    )
    sort: Optional[Union[SortClause, list[SortClause]]] = Field(
        default=None, description="Field or fields to sort by"
    )
    page: Optional[int] = Field(default=None, ge=1, description="Page of results")
    limit: Optional[int] = Field(default=None, ge=1, description="Results per page")
    site: Optional[str] = Field(
        default=None, description="Multi-site handle to return results from"
    )

    @classmethod
    def coerce(cls, value: Any) -> Params:
        """Turn ``None``, a mapping or a ``Params`` instance into a ``Params``.

        Raises:
            ConfigError: If *value* is of any other type.
        """
        if value is None:
            return cls()
        if isinstance(value, Params):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise ConfigError(
            f"Expected query parameters as a mapping or {cls.__name__}, "
            f"got {type(value).__name__}"
        )


class TreeParams(Params):
    """Query parameters for tree endpoints (collection and navigation trees)."""

    max_depth: Optional[int] = Field(
        default=None, ge=0, description="Maximum depth of the returned tree"
    )


# --- Response records ---


class Entry(BaseModel):
    """A collection entry. Blueprint fields end up in ``model_extra``."""

    model_config = ConfigDict(extra="allow")

    id: str


class Author(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    name: Optional[str] = None
    email: Optional[str] = None
    api_url: Optional[str] = None


class Taxonomy(BaseModel):
    model_config = ConfigDict(extra="allow")

    handle: str
    title: Optional[str] = None
    uri: Optional[str] = None
    url: Optional[str] = None
    permalink: Optional[str] = None


class Term(BaseModel):
    """A taxonomy term."""

    model_config = ConfigDict(extra="allow")

    id: str
    slug: Optional[str] = None
    title: Optional[str] = None
    taxonomy: Optional[Taxonomy] = None
    locale: Optional[str] = None
    permalink: Optional[str] = None
    url: Optional[str] = None
    uri: Optional[str] = None
    api_url: Optional[str] = None
    edit_url: Optional[str] = None
    entries_count: Optional[int] = None
    is_term: Optional[bool] = None
    updated_at: Optional[str] = None
    updated_by: Optional[Author] = None


class Global(BaseModel):
    """A global set. The set's values end up in ``model_extra``."""

    model_config = ConfigDict(extra="allow")

    handle: str
    api_url: Optional[str] = None


class Form(BaseModel):
    """A form definition.

    ``fields`` is an empty list when the form has no fields, otherwise a
    mapping of field handle to field config.
    """

    model_config = ConfigDict(extra="allow")

    handle: str
    title: Optional[str] = None
    api_url: Optional[str] = None
    fields: Union[dict[str, Any], list[Any]] = Field(default_factory=list)


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None
    api_url: Optional[str] = None


class Asset(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    url: Optional[str] = None
    api_url: Optional[str] = None


class NavigationItem(BaseModel):
    """A navigation item.

    Items that link to an entry carry that entry's fields too (``collection``,
    ``slug`` and blueprint data); they land in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None
    url: Optional[str] = None
    uri: Optional[str] = None
    permalink: Optional[str] = None


# --- Envelopes ---


class Links(BaseModel):
    first: Optional[str] = None
    last: Optional[str] = None
    next: Optional[str] = None
    prev: Optional[str] = None


class MetaLink(BaseModel):
    url: Optional[str] = None
    label: str
    active: bool = False


class Meta(BaseModel):
    """Pagination metadata of a paginated envelope."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int
    from_: Optional[int] = Field(default=None, alias="from")
    last_page: int
    links: list[MetaLink] = Field(default_factory=list)
    path: Optional[str] = None
    per_page: int
    to: Optional[int] = None
    total: int


class Entries(BaseModel):
    data: list[Entry]
    links: Optional[Links] = None
    meta: Optional[Meta] = None


class Terms(BaseModel):
    data: list[Term]
    links: Optional[Links] = None
    meta: Optional[Meta] = None


class Users(BaseModel):
    data: list[User]
    links: Optional[Links] = None
    meta: Optional[Meta] = None


class Assets(BaseModel):
    data: list[Asset]
    links: Optional[Links] = None
    meta: Optional[Meta] = None


# --- Trees ---


class Page(BaseModel):
    """Display data of a node in a structure tree."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    url: Optional[str] = None
    depth: Optional[int] = None
    children: list[Page] = Field(default_factory=list)


class CollectionTreeLeaf(BaseModel):
    entry: Optional[Entry] = None
    depth: int
    page: Optional[Page] = None
    children: list[CollectionTreeLeaf] = Field(default_factory=list)


class NavigationTreeLeaf(BaseModel):
    item: Optional[NavigationItem] = None
    depth: int
    page: Optional[Page] = None
    children: list[NavigationTreeLeaf] = Field(default_factory=list)


CollectionTree = list[CollectionTreeLeaf]
NavigationTree = list[NavigationTreeLeaf]


# --- Configuration ---


DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class RequestOptions(BaseModel):
    """HTTP settings applied to every request a client sends."""

    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")

    def merged_over_defaults(self) -> RequestOptions:
        """Return a copy whose headers are the JSON defaults overlaid with ours."""
        return self.model_copy(update={"headers": {**DEFAULT_HEADERS, **self.headers}})


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/statamic-client/config.json``.

    Fields here have the lowest precedence and can be overridden by project
    config, environment variables, or CLI flags. See
    :func:`~statamic_client.config.resolve_config`.
    """

    default_profile: Optional[str] = None
    output: OutputConfig = Field(default_factory=OutputConfig)


class Profile(BaseModel):
    """Connection settings for one Statamic site.

    Stored as JSON under the ``profiles/`` config directory and managed with
    ``statamic-client profile``.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    api_url: str = Field(description="Statamic API URL, e.g. https://example.com/api/")
    default_site: Optional[str] = Field(
        default=None, description="Site handle applied to multi-site list calls"
    )
    request: RequestOptions = Field(default_factory=RequestOptions)
