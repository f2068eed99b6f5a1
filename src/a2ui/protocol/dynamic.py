"""Dynamic values: literal-or-path bindings.

Each dynamic type holds exactly one of ``literal`` or ``path``. Decoding walks
an ordered chain of wire shapes and the first match wins:

1. bare literal of the expected primitive type (v0.9)
2. ``{"path": "..."}`` reference (v0.8 and v0.9)
3. legacy wrapped literal, e.g. ``{"literalString": "..."}`` (v0.8)

Encoding always emits the canonical v0.9 shape.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Callable, ClassVar, Union

from pydantic import PlainSerializer, PlainValidator, ValidationInfo

from ..core.errors import MalformedDynamicValue
from .values import JSONValue


def _is_string(raw: Any) -> bool:
    return isinstance(raw, str)


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _is_boolean(raw: Any) -> bool:
    return isinstance(raw, bool)


def _is_string_list(raw: Any) -> bool:
    return isinstance(raw, list) and all(isinstance(item, str) for item in raw)


@dataclass(frozen=True)
class _Dynamic:
    """Shared literal-or-path behavior."""

    literal: Any = None
    path: str | None = None

    expected: ClassVar[str] = ""
    legacy_key: ClassVar[str] = ""
    accepts: ClassVar[Callable[[Any], bool]]

    def __post_init__(self) -> None:
        if (self.literal is None) == (self.path is None):
            raise ValueError(f"{type(self).__name__} needs exactly one of literal or path")
        if self.path is not None and not isinstance(self.path, str):
            raise ValueError(f"{type(self).__name__} path must be a string")
        if self.literal is not None and not type(self).accepts(self.literal):
            raise ValueError(f"{type(self).__name__} literal must be a {self.expected}")

    @classmethod
    def of(cls, value: Any):
        """Literal variant."""
        return cls(literal=value)

    @classmethod
    def at(cls, path: str):
        """Path variant."""
        return cls(path=path)

    @property
    def is_path(self) -> bool:
        return self.path is not None

    @classmethod
    def decode(cls, raw: Any, field: str = "value"):
        """
        Decode a wire value.

        Args:
            raw: Parsed JSON value
            field: Property name, carried into the error

        Raises:
            MalformedDynamicValue: If no shape matches
        """
        if isinstance(raw, cls):
            return raw
        if cls.accepts(raw):
            return cls(literal=list(raw) if isinstance(raw, list) else raw)
        if isinstance(raw, dict):
            path = raw.get("path")
            if isinstance(path, str):
                return cls(path=path)
            legacy = raw.get(cls.legacy_key)
            if legacy is not None and cls.accepts(legacy):
                return cls(literal=list(legacy) if isinstance(legacy, list) else legacy)
        raise MalformedDynamicValue(field, raw, cls.expected)

    def encode(self) -> JSONValue:
        """Canonical wire shape."""
        if self.path is not None:
            return {"path": self.path}
        return list(self.literal) if isinstance(self.literal, list) else self.literal


@dataclass(frozen=True)
class DynamicString(_Dynamic):
    literal: str | None = None

    expected: ClassVar[str] = "string"
    legacy_key: ClassVar[str] = "literalString"
    accepts: ClassVar[Callable[[Any], bool]] = staticmethod(_is_string)


@dataclass(frozen=True)
class DynamicNumber(_Dynamic):
    literal: int | float | None = None

    expected: ClassVar[str] = "number"
    legacy_key: ClassVar[str] = "literalNumber"
    accepts: ClassVar[Callable[[Any], bool]] = staticmethod(_is_number)


@dataclass(frozen=True)
class DynamicBoolean(_Dynamic):
    literal: bool | None = None

    expected: ClassVar[str] = "boolean"
    legacy_key: ClassVar[str] = "literalBoolean"
    accepts: ClassVar[Callable[[Any], bool]] = staticmethod(_is_boolean)


@dataclass(frozen=True)
class DynamicStringList(_Dynamic):
    literal: tuple[str, ...] | list[str] | None = None

    expected: ClassVar[str] = "string list"
    legacy_key: ClassVar[str] = "literalStringList"
    accepts: ClassVar[Callable[[Any], bool]] = staticmethod(_is_string_list)

    def __hash__(self) -> int:
        literal = tuple(self.literal) if self.literal is not None else None
        return hash((literal, self.path))


DynamicValue = Union[DynamicString, DynamicNumber, DynamicBoolean, DynamicStringList]

# Untyped bindings (action context) try each kind in this order
_VALUE_KINDS: tuple[type[_Dynamic], ...] = (
    DynamicString,
    DynamicNumber,
    DynamicBoolean,
    DynamicStringList,
)


def decode_dynamic_value(raw: Any, field: str = "value") -> DynamicValue:
    """
    Decode a binding of unknown primitive type.

    Raises:
        MalformedDynamicValue: If no kind accepts the value
    """
    if isinstance(raw, _VALUE_KINDS):
        return raw
    for kind in _VALUE_KINDS:
        try:
            return kind.decode(raw, field)
        except MalformedDynamicValue:
            continue
    raise MalformedDynamicValue(field, raw, "string, number, boolean or string list")


# ============================================================================
# Pydantic field types
# ============================================================================


def _validator(kind: type[_Dynamic]) -> PlainValidator:
    def validate(value: Any, info: ValidationInfo) -> _Dynamic:
        return kind.decode(value, info.field_name or kind.expected)

    return PlainValidator(validate)


def _encode(value: _Dynamic) -> JSONValue:
    return value.encode()


def _validate_any(value: Any, info: ValidationInfo) -> DynamicValue:
    return decode_dynamic_value(value, info.field_name or "value")


_SERIALIZER = PlainSerializer(_encode, return_type=Any)

StringBinding = Annotated[DynamicString, _validator(DynamicString), _SERIALIZER]
NumberBinding = Annotated[DynamicNumber, _validator(DynamicNumber), _SERIALIZER]
BooleanBinding = Annotated[DynamicBoolean, _validator(DynamicBoolean), _SERIALIZER]
StringListBinding = Annotated[DynamicStringList, _validator(DynamicStringList), _SERIALIZER]
ValueBinding = Annotated[DynamicValue, PlainValidator(_validate_any), _SERIALIZER]
