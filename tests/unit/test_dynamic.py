"""Tests for dynamic (literal-or-path) values."""

import pytest
from hypothesis import given, strategies as st

from a2ui.core import MalformedDynamicValue
from a2ui.protocol.dynamic import (
    DynamicBoolean,
    DynamicNumber,
    DynamicString,
    DynamicStringList,
    decode_dynamic_value,
)


@pytest.mark.unit
def test_bare_string_is_literal():
    """Test canonical literal shape."""
    assert DynamicString.decode("hi") == DynamicString.of("hi")


@pytest.mark.unit
def test_path_object():
    """Test canonical path shape."""
    value = DynamicString.decode({"path": "/user/name"})
    assert value.is_path
    assert value.path == "/user/name"


@pytest.mark.unit
def test_legacy_literal_wrapper():
    """Test v0.8 literal wrappers."""
    assert DynamicString.decode({"literalString": "x"}) == DynamicString.of("x")
    assert DynamicNumber.decode({"literalNumber": 2}) == DynamicNumber.of(2)
    assert DynamicBoolean.decode({"literalBoolean": False}) == DynamicBoolean.of(False)
    assert DynamicStringList.decode({"literalStringList": ["a"]}) == DynamicStringList.of(["a"])


@pytest.mark.unit
def test_path_wins_over_legacy_literal():
    """Test path is tried before the legacy wrapper."""
    value = DynamicString.decode({"path": "/a", "literalString": "x"})
    assert value == DynamicString.at("/a")


@pytest.mark.unit
def test_empty_string_literal_is_valid():
    """Test the empty string is a literal, not a miss."""
    assert DynamicString.decode("").literal == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "cls,raw",
    [
        (DynamicString, 5),
        (DynamicString, {"path": 3}),
        (DynamicNumber, True),
        (DynamicNumber, "5"),
        (DynamicBoolean, 1),
        (DynamicStringList, ["a", 2]),
        (DynamicString, None),
    ],
)
def test_malformed_values(cls, raw):
    """Test shapes that match no variant."""
    with pytest.raises(MalformedDynamicValue) as exc_info:
        cls.decode(raw, "text")
    assert exc_info.value.field == "text"


@pytest.mark.unit
def test_needs_exactly_one_variant():
    """Test construction invariants."""
    with pytest.raises(ValueError):
        DynamicString()
    with pytest.raises(ValueError):
        DynamicString(literal="a", path="/a")


@pytest.mark.unit
def test_untyped_decode_order():
    """Test untyped bindings try string, number, boolean, then string list."""
    assert decode_dynamic_value("a") == DynamicString.of("a")
    assert decode_dynamic_value(3) == DynamicNumber.of(3)
    assert decode_dynamic_value(True) == DynamicBoolean.of(True)
    assert decode_dynamic_value(["a"]) == DynamicStringList.of(["a"])
    assert decode_dynamic_value({"path": "/p"}) == DynamicString.at("/p")


@pytest.mark.unit
def test_untyped_decode_rejects_objects():
    """Test untyped decode failure."""
    with pytest.raises(MalformedDynamicValue):
        decode_dynamic_value({"nope": 1})


@pytest.mark.unit
def test_string_list_is_hashable():
    """Test list literals still hash."""
    assert hash(DynamicStringList.of(["a", "b"])) == hash(DynamicStringList.of(["a", "b"]))


@given(st.text())
def test_string_literal_round_trip(text):
    """Property test: literal strings survive encode then decode."""
    value = DynamicString.of(text)
    assert DynamicString.decode(value.encode()) == value


@given(st.text())
def test_string_path_round_trip(path):
    """Property test: paths survive encode then decode."""
    value = DynamicString.at(path)
    assert DynamicString.decode(value.encode()) == value
