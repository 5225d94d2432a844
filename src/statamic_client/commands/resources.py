"""Resource commands -- one CLI command per Statamic resource operation.

Every command builds a :class:`~statamic_client.models.Params` from its
query options, plans the matching client operation and either prints the
resolved URL (``--dry-run``) or sends the request and renders the result
through the output manager.

Query options shared by all commands:

* ``--select/-s FIELD`` (repeatable) -- fields to return.
* ``--filter/-f FIELD[:CONDITION]=VALUE`` (repeatable) -- filters.
* ``--sort FIELD`` / ``--sort -FIELD`` (repeatable) -- sort order.
* ``--page``, ``--limit``, ``--site``.
* ``--param KEY=VALUE`` (repeatable) -- any other query parameter.

Tree commands additionally accept ``--max-depth``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer
from pydantic import BaseModel, ValidationError

from statamic_client.client import Client
from statamic_client.config import resolve_config
from statamic_client.exceptions import InvalidUsageError, StatamicError
from statamic_client.models import (
    Condition,
    FilterField,
    Params,
    SortClause,
    SortField,
    TreeParams,
)
from statamic_client.output import error, format_response, info


# ------------------------------------------------------------------ #
# Option parsing
# ------------------------------------------------------------------ #


def parse_filter_option(raw: str) -> FilterField:
    """Parse ``field=value`` or ``field:condition=value`` into a filter.

    Raises:
        InvalidUsageError: If there is no ``=`` or the condition is unknown.
    """
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise InvalidUsageError(
            f"Invalid filter '{raw}'. Expected FIELD=VALUE or FIELD:CONDITION=VALUE"
        )
    field, _, condition = key.partition(":")
    if not condition:
        return FilterField(field=field, value=value)
    try:
        return FilterField(field=field, condition=Condition(condition), value=value)
    except ValueError:
        valid = ", ".join(c.value for c in Condition)
        raise InvalidUsageError(
            f"Unknown filter condition '{condition}'. Valid conditions: {valid}"
        ) from None


def parse_sort_option(raw: str) -> SortClause:
    """``-field`` sorts descending, anything else ascending."""
    if raw.startswith("-") and len(raw) > 1:
        return SortField(field=raw[1:], reverse=True)
    return raw


def parse_param_option(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise InvalidUsageError(f"Invalid parameter '{raw}'. Expected KEY=VALUE")
    return key, value


def build_query(
    select: Optional[list[str]] = None,
    filters: Optional[list[str]] = None,
    sort: Optional[list[str]] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    site: Optional[str] = None,
    extra: Optional[list[str]] = None,
    max_depth: Optional[int] = None,
    tree: bool = False,
) -> Params:
    """Assemble the CLI query options into a ``Params`` (or ``TreeParams``).

    Dedicated options win over ``--param`` values for the same key.

    Raises:
        InvalidUsageError: If an option is malformed or a value is invalid.
    """
    values: dict[str, Any] = {}
    for raw in extra or []:
        key, value = parse_param_option(raw)
        values[key] = value

    options: dict[str, Any] = {
        "select": list(select) if select else None,
        "filter": [parse_filter_option(f) for f in filters] if filters else None,
        "sort": [parse_sort_option(s) for s in sort] if sort else None,
        "page": page,
        "limit": limit,
        "site": site,
    }
    if tree:
        options["max_depth"] = max_depth
    values.update({k: v for k, v in options.items() if v is not None})

    model = TreeParams if tree else Params
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid query parameters: {exc}") from exc


# ------------------------------------------------------------------ #
# Client resolution and execution
# ------------------------------------------------------------------ #


def client_from_context(ctx: typer.Context) -> Client:
    """Build a :class:`Client` from the root callback's settings.

    An ``httpx`` transport stored under ``ctx.obj["transport"]`` is passed
    through to the client.

    Raises:
        InvalidUsageError: If no API URL is configured.
    """
    obj = ctx.obj or {}
    _, profile = resolve_config(
        cli_profile=obj.get("profile"),
        cli_api_url=obj.get("api_url"),
        cli_site=obj.get("site"),
    )
    if profile is None:
        raise InvalidUsageError(
            "No Statamic API configured. Pass --api-url, set STATAMIC_API_URL, "
            "or create a profile with 'statamic-client profile add'."
        )
    return Client(
        profile.api_url,
        request_options=profile.request,
        default_site=profile.default_site,
        transport=obj.get("transport"),
    )


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report :class:`StatamicError` on stderr and exit with its exit code."""
    try:
        yield
    except StatamicError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [to_jsonable(item) for item in result]
    return result


def run_operation(ctx: typer.Context, operation: str, *args: str, params: Params) -> None:
    """Plan *operation*, then print its URL (dry run) or fetch and render it."""
    with cli_errors():
        client = client_from_context(ctx)
        call = client.plan(operation, *args, params=params)
        if (ctx.obj or {}).get("dry_run"):
            info(f"[dry-run] GET {client.build_url(call.path, call.params)}")
            return
        with client:
            result = client.execute(call)
        format_response(to_jsonable(result))


def _query(
    select: Optional[list[str]],
    filters: Optional[list[str]],
    sort: Optional[list[str]],
    page: Optional[int],
    limit: Optional[int],
    site: Optional[str],
    extra: Optional[list[str]],
    **tree: Any,
) -> Params:
    with cli_errors():
        return build_query(select, filters, sort, page, limit, site, extra, **tree)


# ------------------------------------------------------------------ #
# Shared option declarations
# ------------------------------------------------------------------ #


def _select_option() -> Any:
    return typer.Option(None, "--select", "-s", help="Field to return (repeatable).")


def _filter_option() -> Any:
    return typer.Option(
        None, "--filter", "-f", help="FIELD=VALUE or FIELD:CONDITION=VALUE (repeatable)."
    )


def _sort_option() -> Any:
    return typer.Option(None, "--sort", help="Field to sort by, '-field' for descending (repeatable).")


def _page_option() -> Any:
    return typer.Option(None, "--page", min=1, help="Page of results.")


def _limit_option() -> Any:
    return typer.Option(None, "--limit", min=1, help="Results per page.")


def _site_option() -> Any:
    return typer.Option(None, "--site", help="Multi-site handle.")


def _param_option() -> Any:
    return typer.Option(None, "--param", help="Extra query parameter KEY=VALUE (repeatable).")


def _max_depth_option() -> Any:
    return typer.Option(None, "--max-depth", min=0, help="Maximum tree depth.")


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


def entries_command(
    ctx: typer.Context,
    collection: str = typer.Argument(help="Collection handle."),
    select: Optional[list[str]] = _select_option(),
    filters: Optional[list[str]] = _filter_option(),
    sort: Optional[list[str]] = _sort_option(),
    page: Optional[int] = _page_option(),
    limit: Optional[int] = _limit_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List entries of a collection.

    Example::

        statamic-client entries blog -s title -f title:contains=news --sort -date
    """
    params = _query(select, filters, sort, page, limit, site, extra)
    run_operation(ctx, "entries", collection, params=params)


def entry_command(
    ctx: typer.Context,
    collection: str = typer.Argument(help="Collection handle."),
    id: str = typer.Argument(help="Entry ID."),
    select: Optional[list[str]] = _select_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single entry."""
    params = _query(select, None, None, None, None, site, extra)
    run_operation(ctx, "entry", collection, id, params=params)


def collection_tree_command(
    ctx: typer.Context,
    collection: str = typer.Argument(help="Collection handle."),
    max_depth: Optional[int] = _max_depth_option(),
    select: Optional[list[str]] = _select_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show the structure tree of a collection."""
    params = _query(select, None, None, None, None, site, extra, max_depth=max_depth, tree=True)
    run_operation(ctx, "collection_tree", collection, params=params)


def navigation_tree_command(
    ctx: typer.Context,
    navigation: str = typer.Argument(help="Navigation handle."),
    max_depth: Optional[int] = _max_depth_option(),
    select: Optional[list[str]] = _select_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show the tree of a navigation."""
    params = _query(select, None, None, None, None, site, extra, max_depth=max_depth, tree=True)
    run_operation(ctx, "navigation_tree", navigation, params=params)


def terms_command(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(help="Taxonomy handle."),
    select: Optional[list[str]] = _select_option(),
    filters: Optional[list[str]] = _filter_option(),
    sort: Optional[list[str]] = _sort_option(),
    page: Optional[int] = _page_option(),
    limit: Optional[int] = _limit_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List terms of a taxonomy."""
    params = _query(select, filters, sort, page, limit, site, extra)
    run_operation(ctx, "taxonomy_terms", taxonomy, params=params)


def term_command(
    ctx: typer.Context,
    taxonomy: str = typer.Argument(help="Taxonomy handle."),
    slug: str = typer.Argument(help="Term slug."),
    select: Optional[list[str]] = _select_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single taxonomy term."""
    params = _query(select, None, None, None, None, site, extra)
    run_operation(ctx, "taxonomy_term", taxonomy, slug, params=params)


def globals_command(
    ctx: typer.Context,
    select: Optional[list[str]] = _select_option(),
    filters: Optional[list[str]] = _filter_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List all global sets."""
    params = _query(select, filters, None, None, None, site, extra)
    run_operation(ctx, "globals", params=params)


def global_command(
    ctx: typer.Context,
    handle: str = typer.Argument(help="Global set handle."),
    select: Optional[list[str]] = _select_option(),
    site: Optional[str] = _site_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single global set."""
    params = _query(select, None, None, None, None, site, extra)
    run_operation(ctx, "global", handle, params=params)


def forms_command(
    ctx: typer.Context,
    select: Optional[list[str]] = _select_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List all forms."""
    params = _query(select, None, None, None, None, None, extra)
    run_operation(ctx, "forms", params=params)


def form_command(
    ctx: typer.Context,
    handle: str = typer.Argument(help="Form handle."),
    select: Optional[list[str]] = _select_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single form."""
    params = _query(select, None, None, None, None, None, extra)
    run_operation(ctx, "form", handle, params=params)


def users_command(
    ctx: typer.Context,
    select: Optional[list[str]] = _select_option(),
    filters: Optional[list[str]] = _filter_option(),
    sort: Optional[list[str]] = _sort_option(),
    page: Optional[int] = _page_option(),
    limit: Optional[int] = _limit_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List users."""
    params = _query(select, filters, sort, page, limit, None, extra)
    run_operation(ctx, "users", params=params)


def user_command(
    ctx: typer.Context,
    id: str = typer.Argument(help="User ID."),
    select: Optional[list[str]] = _select_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single user."""
    params = _query(select, None, None, None, None, None, extra)
    run_operation(ctx, "user", id, params=params)


def assets_command(
    ctx: typer.Context,
    container: str = typer.Argument(help="Asset container handle."),
    select: Optional[list[str]] = _select_option(),
    filters: Optional[list[str]] = _filter_option(),
    sort: Optional[list[str]] = _sort_option(),
    page: Optional[int] = _page_option(),
    limit: Optional[int] = _limit_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """List assets of a container."""
    params = _query(select, filters, sort, page, limit, None, extra)
    run_operation(ctx, "assets", container, params=params)


def asset_command(
    ctx: typer.Context,
    container: str = typer.Argument(help="Asset container handle."),
    path: str = typer.Argument(help="Asset path inside the container."),
    select: Optional[list[str]] = _select_option(),
    extra: Optional[list[str]] = _param_option(),
) -> None:
    """Show a single asset."""
    params = _query(select, None, None, None, None, None, extra)
    run_operation(ctx, "asset", container, path, params=params)


RESOURCE_COMMANDS = {
    "entries": entries_command,
    "entry": entry_command,
    "collection-tree": collection_tree_command,
    "nav-tree": navigation_tree_command,
    "terms": terms_command,
    "term": term_command,
    "globals": globals_command,
    "global": global_command,
    "forms": forms_command,
    "form": form_command,
    "users": users_command,
    "user": user_command,
    "assets": assets_command,
    "asset": asset_command,
}
