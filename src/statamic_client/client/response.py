"""Response shaping -- maps decoded API bodies to the models in :mod:`statamic_client.models`.

Single-record endpoints wrap their record in ``{"data": {...}}``; the
``parse_*`` functions for them unwrap ``data`` and validate the record.
Paginated endpoints (entries, terms, users, assets) keep the whole envelope
including ``links`` and ``meta``. Globals, forms and the two tree endpoints
are not paginated and are unwrapped to plain lists.

Every parser raises :class:`EnvelopeError` when the body is not an object
with a ``data`` member and :class:`pydantic.ValidationError` when the data
does not match the model. The clients turn both into
:class:`~statamic_client.exceptions.RequestError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from statamic_client.models import (
    Asset,
    Assets,
    CollectionTree,
    Entries,
    Entry,
    Form,
    Global,
    NavigationTree,
    Term,
    Terms,
    User,
    Users,
)

_collection_tree_adapter = TypeAdapter(CollectionTree)
_navigation_tree_adapter = TypeAdapter(NavigationTree)
_globals_adapter = TypeAdapter(list[Global])
_forms_adapter = TypeAdapter(list[Form])


class EnvelopeError(ValueError):
    """The response body is not a ``{"data": ...}`` envelope."""


def unwrap(body: Any) -> Any:
    """Return the ``data`` member of an envelope."""
    if not isinstance(body, dict) or "data" not in body:
        raise EnvelopeError(f"Expected a JSON object with a 'data' member, got: {_preview(body)}")
    return body["data"]


def _preview(body: Any) -> str:
    text = repr(body)
    return text if len(text) <= 80 else f"{text[:77]}..."


def parse_entry(body: Any) -> Entry:
    return Entry.model_validate(unwrap(body))


def parse_entries(body: Any) -> Entries:
    unwrap(body)
    return Entries.model_validate(body)


def parse_collection_tree(body: Any) -> CollectionTree:
    return _collection_tree_adapter.validate_python(unwrap(body))


def parse_navigation_tree(body: Any) -> NavigationTree:
    return _navigation_tree_adapter.validate_python(unwrap(body))


def parse_taxonomy_term(body: Any) -> Term:
    return Term.model_validate(unwrap(body))


def parse_taxonomy_terms(body: Any) -> Terms:
    unwrap(body)
    return Terms.model_validate(body)


def parse_global(body: Any) -> Global:
    return Global.model_validate(unwrap(body))


def parse_globals(body: Any) -> list[Global]:
    return _globals_adapter.validate_python(unwrap(body))


def parse_form(body: Any) -> Form:
    return Form.model_validate(unwrap(body))


def parse_forms(body: Any) -> list[Form]:
    return _forms_adapter.validate_python(unwrap(body))


def parse_user(body: Any) -> User:
    return User.model_validate(unwrap(body))


def parse_users(body: Any) -> Users:
    unwrap(body)
    return Users.model_validate(body)


def parse_asset(body: Any) -> Asset:
    return Asset.model_validate(unwrap(body))


def parse_assets(body: Any) -> Assets:
    unwrap(body)
    return Assets.model_validate(body)
