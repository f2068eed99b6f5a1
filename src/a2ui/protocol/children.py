"""Container children: explicit id lists or data-driven templates."""

from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import PlainSerializer, PlainValidator, ValidationInfo

from ..core.errors import MalformedChildList
from .values import JSONValue


@dataclass(frozen=True)
class TemplateDefinition:
    """Stamp ``component_id`` once per element of the array at ``path``."""

    component_id: str
    path: str

    def instance_id(self, index: int) -> str:
        return f"{self.component_id}_{index}"

    def encode(self) -> JSONValue:
        return {"componentId": self.component_id, "path": self.path}


@dataclass(frozen=True)
class ExplicitList:
    """Ordered component ids."""

    ids: tuple[str, ...]

    def encode(self) -> JSONValue:
        return list(self.ids)


@dataclass(frozen=True)
class Template:
    """Children generated from a template."""

    template: TemplateDefinition

    def encode(self) -> JSONValue:
        return self.template.encode()


ChildList = Union[ExplicitList, Template]


def explicit_list(ids: list[str] | tuple[str, ...]) -> ExplicitList:
    return ExplicitList(tuple(ids))


def template(component_id: str, path: str) -> Template:
    return Template(TemplateDefinition(component_id=component_id, path=path))


def _is_id_list(raw: Any) -> bool:
    return isinstance(raw, list) and all(isinstance(item, str) for item in raw)


def decode_template(raw: Any) -> TemplateDefinition | None:
    """Template object, accepting legacy ``dataBinding`` for ``path``."""
    if not isinstance(raw, dict):
        return None
    component_id = raw.get("componentId")
    if not isinstance(component_id, str):
        return None
    path = raw.get("path")
    if not isinstance(path, str):
        path = raw.get("dataBinding")
        # v0.8 sometimes wrapped the binding itself as {"path": ...}
        if isinstance(path, dict):
            path = path.get("path")
    if not isinstance(path, str):
        return None
    return TemplateDefinition(component_id=component_id, path=path)


def decode_child_list(raw: Any, field: str = "children") -> ChildList:
    """
    Decode children, trying each known wire shape in order.

    1. bare array of ids
    2. template object ``{componentId, path | dataBinding}``
    3. legacy wrappers ``{explicitList: [...]}`` / ``{template: {...}}``

    Raises:
        MalformedChildList: If no shape matches
    """
    if isinstance(raw, (ExplicitList, Template)):
        return raw

    if _is_id_list(raw):
        return ExplicitList(tuple(raw))

    if (definition := decode_template(raw)) is not None:
        return Template(definition)

    if isinstance(raw, dict):
        wrapped = raw.get("explicitList")
        if _is_id_list(wrapped):
            return ExplicitList(tuple(wrapped))
        if (definition := decode_template(raw.get("template"))) is not None:
            return Template(definition)

    raise MalformedChildList(field, raw)


def _validate(value: Any, info: ValidationInfo) -> ChildList:
    return decode_child_list(value, info.field_name or "children")


def _encode(value: ChildList) -> JSONValue:
    return value.encode()


ChildListField = Annotated[
    ChildList, PlainValidator(_validate), PlainSerializer(_encode, return_type=Any)
]
