"""Tests for the wire JSON codec."""

import pytest
from hypothesis import given, strategies as st

from a2ui.core import JSONParseError, dumps, loads, validate_json_depth, validate_json_size

json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**63), max_value=2**63 - 1)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(),
    lambda children: st.lists(children) | st.dictionaries(st.text(), children),
    max_leaves=20,
)


@pytest.mark.unit
def test_loads_bytes_and_text():
    """Test both input forms."""
    assert loads(b'{"a": [1, 2.5]}') == {"a": [1, 2.5]}
    assert loads('"x"') == "x"


@pytest.mark.unit
def test_loads_invalid():
    """Test syntax errors."""
    with pytest.raises(JSONParseError) as exc_info:
        loads(b"{")
    assert exc_info.value.original is not None


@pytest.mark.unit
def test_loads_limits():
    """Test size and depth guards."""
    with pytest.raises(JSONParseError):
        loads(b'"' + b"x" * 100 + b'"', max_size=10)
    with pytest.raises(JSONParseError):
        loads(b"[" * 10 + b"]" * 10, max_depth=5)


@pytest.mark.unit
def test_loads_invalid_utf8():
    """Test undecodable bytes are a parse error."""
    with pytest.raises(JSONParseError) as exc_info:
        loads(b'{"surfaceId": "\xff"}')
    assert exc_info.value.original is not None


@pytest.mark.unit
def test_loads_lone_surrogate():
    """Test text that cannot be encoded as UTF-8."""
    with pytest.raises(JSONParseError) as exc_info:
        loads('{"surfaceId": "\ud800"}')
    assert isinstance(exc_info.value.original, UnicodeError)


@pytest.mark.unit
def test_dumps_keeps_integers():
    """Test integers are not widened."""
    assert dumps({"n": 1}) == b'{"n":1}'


@pytest.mark.unit
def test_dumps_big_integers():
    """Test integers beyond 64 bits still encode."""
    assert dumps(2**70) == str(2**70).encode()


@pytest.mark.unit
def test_dumps_rejects_non_json():
    """Test unserializable values."""
    with pytest.raises(JSONParseError):
        dumps({"a": object()})


@pytest.mark.unit
def test_validate_helpers():
    """Test standalone guards."""
    validate_json_size(b"abc", 10)
    with pytest.raises(JSONParseError):
        validate_json_size(b"abcdef", 3)
    validate_json_depth({"a": {"b": 1}}, max_depth=2)
    with pytest.raises(JSONParseError):
        validate_json_depth({"a": {"b": {"c": 1}}}, max_depth=2)


@given(json_values)
def test_round_trip(value):
    """Property test: encode then decode is the identity."""
    assert loads(dumps(value), max_depth=1000) == value
