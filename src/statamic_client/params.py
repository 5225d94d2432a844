"""Translate a :class:`~statamic_client.models.Params` into a query string.

**Encoding rules:**

* ``select`` becomes ``fields=<f1>,<f2>,...`` (order and duplicates kept).
* Each filter becomes its own ``filter[<field>]`` or
  ``filter[<field>:<condition>]`` pair, so several filters on the same
  field are all sent.
* ``sort`` becomes one ``sort=`` value; reversed clauses get a ``-`` prefix.
* Every other parameter (``page``, ``limit``, ``site``, ``max_depth`` and
  any extra keyword) is sent as ``key=value``.

Pairs are emitted in that order: select, filters, sort, then the rest.
:func:`build_params` returns the pairs and :func:`encode_params` the encoded
query string.

:func:`set_site_filter` implements the multi-site rule used by the entries,
taxonomy terms and globals endpoints, which otherwise return results from
all sites at once.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from statamic_client.exceptions import ConfigError
from statamic_client.models import FilterField, Params, SortClause, SortField

_SPECIAL_KEYS = ("select", "filter", "sort")
_REPEATABLE_PREFIX = "filter["

QueryPairs = list[tuple[str, str]]


def build_params(params: Optional[Params]) -> QueryPairs:
    """Build the ordered ``(key, value)`` pairs for *params*.

    Args:
        params: The query parameters. ``None`` yields no pairs.

    Returns:
        A new list of pairs. Filter keys may repeat; any other key
        appears at most once.

    Raises:
        ConfigError: If an extra parameter holds a non-primitive value.
    """
    if params is None:
        return []

    pairs: QueryPairs = []
    pairs.extend(build_select_params(params.select))
    pairs.extend(build_filter_params(params.filter))
    pairs.extend(build_sort_params(params.sort))
    pairs.extend(build_other_params(params))
    return _merge_singletons(pairs)


def encode_params(params: Optional[Params]) -> str:
    """Return the percent-encoded query string for *params* (without ``?``)."""
    return str(httpx.QueryParams(build_params(params)))


def build_select_params(select: Union[str, list[str], None]) -> QueryPairs:
    if not select:
        return []
    parsed = ",".join(select) if isinstance(select, list) else select
    return [("fields", parsed)]


def build_filter_params(
    filter: Union[FilterField, list[FilterField], None],
) -> QueryPairs:
    if not filter:
        return []
    filters = filter if isinstance(filter, list) else [filter]
    return [build_filter_param(f) for f in filters]


def build_filter_param(filter: FilterField) -> tuple[str, str]:
    """Build the pair for one filter, e.g. ``("filter[title:contains]", "foo")``."""
    if filter.condition:
        return f"filter[{filter.field}:{filter.condition.value}]", filter.value
    return f"filter[{filter.field}]", filter.value


def build_sort_param(sort: SortClause) -> str:
    """Return ``field`` or ``-field`` for a single sort clause."""
    if isinstance(sort, str):
        return sort
    return f"-{sort.field}" if sort.reverse else sort.field


def build_sort_params(
    sort: Union[SortClause, list[SortClause], None],
) -> QueryPairs:
    if not sort:
        return []
    if isinstance(sort, list):
        parsed = ",".join(build_sort_param(s) for s in sort)
    else:
        parsed = build_sort_param(sort)
    return [("sort", parsed)]


def build_other_params(params: Params) -> QueryPairs:
    """Build pairs for every set parameter except select, filter and sort.

    Declared fields come first in declaration order, followed by extra
    keywords in the order they were given. Unset (``None``) values are
    skipped.
    """
    pairs: QueryPairs = []
    values: dict[str, Any] = {
        name: getattr(params, name) for name in type(params).model_fields
    }
    values.update(params.model_extra or {})

    for key, value in values.items():
        if key in _SPECIAL_KEYS or value is None:
            continue
        pairs.append((key, _stringify(key, value)))
    return pairs


def _stringify(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(
        f"Query parameter '{key}' must be a string, number or boolean, "
        f"got {type(value).__name__}"
    )


def _merge_singletons(pairs: QueryPairs) -> QueryPairs:
    """Collapse repeated non-filter keys, keeping the first position and the last value."""
    merged: QueryPairs = []
    positions: dict[str, int] = {}
    for key, value in pairs:
        if key.startswith(_REPEATABLE_PREFIX):
            merged.append((key, value))
        elif key in positions:
            merged[positions[key]] = (key, value)
        else:
            positions[key] = len(merged)
            merged.append((key, value))
    return merged


def set_site_filter(params: Optional[Params]) -> Optional[Params]:
    """Replace the ``site`` parameter with a ``site`` filter.

    Returns a new :class:`~statamic_client.models.Params` whose ``site`` is
    unset and whose filters end with ``filter[site]=<site>``. When no site
    is set, *params* is returned as is. *params* itself is never modified.
    """
    if params is None or not params.site:
        return params

    site_filter = FilterField(field="site", value=params.site)
    if params.filter is None:
        filters = [site_filter]
    elif isinstance(params.filter, list):
        filters = [*params.filter, site_filter]
    else:
        filters = [params.filter, site_filter]

    return params.model_copy(update={"filter": filters, "site": None})


def apply_default_site(params: Optional[Params], default_site: Optional[str]) -> Optional[Params]:
    """Fill in *default_site* when *params* names no site and has no site filter."""
    if not default_site:
        return params
    if params is None:
        return Params(site=default_site)
    if params.site:
        return params
    filters = params.filter if isinstance(params.filter, list) else [params.filter]
    if any(f is not None and f.field == "site" for f in filters):
        return params
    return params.model_copy(update={"site": default_site})
