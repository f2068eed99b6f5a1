"""Fast wire JSON decoding and encoding with size and depth guards."""

from typing import Any
import json

import msgspec
import orjson

from .errors import DecodeError

DEFAULT_MAX_SIZE = 1_048_576  # 1MB
DEFAULT_MAX_DEPTH = 64

_decoder = msgspec.json.Decoder()
_encoder = msgspec.json.Encoder()


class JSONParseError(DecodeError):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def loads(
    data: bytes | str,
    max_size: int = DEFAULT_MAX_SIZE,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """
    Decode one JSON document from the wire.

    Args:
        data: Raw payload (UTF-8 bytes or text)
        max_size: Maximum allowed size in bytes
        max_depth: Maximum allowed nesting depth

    Returns:
        Decoded value (dict, list, str, int, float, bool or None)

    Raises:
        JSONParseError: If the payload is too large, too deep or invalid
    """
    try:
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    except UnicodeError as e:
        raise JSONParseError(f"Invalid text: {e}", e) from e
    validate_json_size(raw, max_size)

    try:
        result = _decoder.decode(raw)
    except (msgspec.DecodeError, UnicodeError) as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    validate_json_depth(result, max_depth)
    return result


def dumps(obj: Any) -> bytes:
    """
    Encode a JSON value to compact UTF-8 bytes.

    Integers stay integers; floats keep their shortest round-trip form.

    Args:
        obj: Value to encode

    Returns:
        Encoded bytes
    """
    try:
        return orjson.dumps(obj)
    except TypeError:
        # orjson rejects integers outside the 64-bit range
        pass

    try:
        return _encoder.encode(obj)
    except (TypeError, ValueError, OverflowError):
        pass

    try:
        return json.dumps(obj, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise JSONParseError(f"Value is not JSON serializable: {e}", e) from e


def validate_json_size(data: bytes, max_size: int, name: str = "Message") -> None:
    """
    Validate payload size before decoding.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    """
    Validate JSON nesting depth without recursion.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    stack: list[tuple[Any, int]] = [(obj, 0)]
    while stack:
        current, depth = stack.pop()
        if depth > max_depth:
            raise JSONParseError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        if isinstance(current, dict):
            stack.extend((value, depth + 1) for value in current.values())
        elif isinstance(current, list):
            stack.extend((item, depth + 1) for item in current)
