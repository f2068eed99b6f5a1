"""Tests for the binding resolver."""

import pytest

from a2ui.protocol.dynamic import (
    DynamicBoolean,
    DynamicNumber,
    DynamicString,
    DynamicStringList,
)


@pytest.mark.unit
def test_resolve_root_returns_whole_model(resolver):
    """Test "/" resolves to the data model itself."""
    model = {"a": 1}
    assert resolver.resolve_path("/", model) == {"a": 1}


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,model,expected",
    [
        ("/a", {"a": 1}, 1),
        ("/a/0", {"a": [5, 6]}, 5),
        ("/missing", {}, None),
        ("/a~1b", {"a/b": 7}, 7),
        ("/a/9", {"a": [5]}, None),
        ("/a/b", {"a": "scalar"}, None),
    ],
)
def test_resolve_path(resolver, path, model, expected):
    """Test absolute path resolution."""
    assert resolver.resolve_path(path, model) == expected


@pytest.mark.unit
def test_relative_path_without_context_is_top_level_key(resolver):
    """Test a relative path names one key."""
    assert resolver.resolve_path("name", {"name": "Ann"}) == "Ann"
    assert resolver.resolve_path("a/b", {"a/b": 1, "a": {"b": 2}}) == 1


@pytest.mark.unit
def test_relative_path_with_context(resolver):
    """Test a relative path joins onto the context."""
    model = {"items": [{"name": "Ann"}, {"name": "Bea"}]}
    assert resolver.resolve_path("name", model, "/items/1") == "Bea"
    assert resolver.resolve_path("/items/0/name", model, "/items/1") == "Ann"


@pytest.mark.unit
def test_literals_short_circuit(resolver):
    """Test literals ignore the data model."""
    assert resolver.resolve_string(DynamicString.of("hi"), {}) == "hi"
    assert resolver.resolve_number(DynamicNumber.of(2), {}) == 2.0
    assert resolver.resolve_boolean(DynamicBoolean.of(True), {}) is True
    assert resolver.resolve_string_list(DynamicStringList.of(["a"]), {}) == ["a"]


@pytest.mark.unit
def test_misses_resolve_to_defaults(resolver):
    """Test missing paths never raise."""
    assert resolver.resolve_string(DynamicString.at("/x"), {}) == ""
    assert resolver.resolve_number(DynamicNumber.at("/x"), {}) == 0.0
    assert resolver.resolve_boolean(DynamicBoolean.at("/x"), {}) is False
    assert resolver.resolve_string_list(DynamicStringList.at("/x"), {}) == []


@pytest.mark.unit
def test_wrong_kind_resolves_to_default(resolver):
    """Test type mismatches are misses too."""
    model = {"n": 5, "s": "x", "b": True, "l": ["a", 1]}
    assert resolver.resolve_string(DynamicString.at("/n"), model) == ""
    assert resolver.resolve_number(DynamicNumber.at("/b"), model) == 0.0
    assert resolver.resolve_boolean(DynamicBoolean.at("/s"), model) is False
    assert resolver.resolve_string_list(DynamicStringList.at("/l"), model) == []


@pytest.mark.unit
def test_caller_defaults(resolver):
    """Test caller-specified defaults."""
    assert resolver.resolve_string(DynamicString.at("/x"), {}, default="n/a") == "n/a"
    assert resolver.resolve_number(DynamicNumber.at("/x"), {}, default=-1) == -1
    assert resolver.resolve_string_list(DynamicStringList.at("/x"), {}, default=["z"]) == ["z"]


@pytest.mark.unit
def test_resolved_values(resolver):
    """Test path hits of each type."""
    model = {"user": {"name": "Ann", "age": 40, "admin": True, "tags": ["a", "b"]}}
    assert resolver.resolve_string(DynamicString.at("/user/name"), model) == "Ann"
    assert resolver.resolve_number(DynamicNumber.at("/user/age"), model) == 40.0
    assert resolver.resolve_boolean(DynamicBoolean.at("/user/admin"), model) is True
    assert resolver.resolve_string_list(DynamicStringList.at("/user/tags"), model) == ["a", "b"]


@pytest.mark.unit
def test_resolve_value_is_untyped(resolver):
    """Test raw values for generic bindings."""
    model = {"cart": {"items": [1, 2]}}
    assert resolver.resolve_value(DynamicString.at("/cart"), model) == {"items": [1, 2]}
    assert resolver.resolve_value(DynamicNumber.of(3), model) == 3
    assert resolver.resolve_value(DynamicString.at("/nope"), model) is None


@pytest.mark.unit
def test_resolve_action_context(resolver):
    """Test every context entry resolves against one model."""
    model = {"items": [{"id": "a1"}], "email": "ann@example.com"}
    context = {
        "email": DynamicString.at("/email"),
        "item": DynamicString.at("id"),
        "source": DynamicString.of("web"),
    }
    assert resolver.resolve_action_context(context, model, "/items/0") == {
        "email": "ann@example.com",
        "item": "a1",
        "source": "web",
    }
    assert resolver.resolve_action_context(None, model) == {}
