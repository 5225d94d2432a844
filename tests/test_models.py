"""Tests for the query, response and configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from statamic_client.exceptions import ConfigError
from statamic_client.models import (
    DEFAULT_HEADERS,
    Condition,
    Entry,
    FilterField,
    Form,
    Meta,
    Params,
    Profile,
    RequestOptions,
    TreeParams,
)


class TestParams:
    def test_frozen(self) -> None:
        params = Params(limit=1)
        with pytest.raises(ValidationError):
            params.limit = 2

    def test_extras_kept_in_order(self) -> None:
        params = Params(b="2", a="1")
        assert list(params.model_extra) == ["b", "a"]

    def test_coerce_none(self) -> None:
        assert Params.coerce(None) == Params()

    def test_coerce_mapping(self) -> None:
        params = Params.coerce({"select": "title", "filter": {"field": "a", "value": "1"}})
        assert params.select == "title"
        assert params.filter == FilterField(field="a", value="1")

    def test_coerce_instance_is_identity(self) -> None:
        params = Params(limit=3)
        assert Params.coerce(params) is params

    def test_coerce_tree_mapping(self) -> None:
        params = TreeParams.coerce({"max_depth": 2})
        assert isinstance(params, TreeParams)
        assert params.max_depth == 2

    def test_coerce_rejects_other_types(self) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            Params.coerce("limit=1")

    def test_condition_values(self) -> None:
        assert Condition("doesnt_contain") is Condition.DOES_NOT_CONTAIN
        assert Condition.IS_ALPHANUMERIC.value == "is_alpha_numeric"


class TestResponseModels:
    def test_entry_keeps_blueprint_fields(self) -> None:
        entry = Entry.model_validate({"id": "1", "title": "Home", "hero": {"src": "a.jpg"}})
        assert entry.id == "1"
        assert entry.model_extra == {"title": "Home", "hero": {"src": "a.jpg"}}

    def test_entry_requires_id(self) -> None:
        with pytest.raises(ValidationError):
            Entry.model_validate({"title": "No id"})

    def test_form_fields_default(self) -> None:
        assert Form(handle="contact").fields == []

    def test_meta_from_alias(self) -> None:
        meta = Meta.model_validate(
            {"current_page": 1, "from": 1, "last_page": 1, "per_page": 10, "total": 0}
        )
        assert meta.from_ == 1
        assert meta.model_dump(by_alias=True)["from"] == 1


class TestRequestOptions:
    def test_defaults(self) -> None:
        options = RequestOptions()
        assert options.timeout == 30.0
        assert options.verify_ssl is True

    def test_merged_over_defaults(self) -> None:
        options = RequestOptions(headers={"Authorization": "Bearer x", "Accept": "text/html"})
        merged = options.merged_over_defaults()
        assert merged.headers == {
            "Accept": "text/html",
            "Content-Type": "application/json",
            "Authorization": "Bearer x",
        }
        assert options.headers == {"Authorization": "Bearer x", "Accept": "text/html"}

    def test_defaults_not_shared(self) -> None:
        RequestOptions().merged_over_defaults().headers["X-Test"] = "1"
        assert "X-Test" not in DEFAULT_HEADERS


class TestProfile:
    def test_round_trip_json(self) -> None:
        profile = Profile(name="prod", api_url="https://example.com/api/", default_site="en")
        restored = Profile.model_validate_json(profile.model_dump_json())
        assert restored == profile
