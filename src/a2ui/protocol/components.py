"""Standard component catalog.

Thirteen property bundles selected by the ``component`` discriminator.
Two wire shapes are accepted without the caller knowing which is in use:

flat (v0.9)::

    {"id": "title", "weight": 1, "component": "Text", "text": "Hello"}

nested (v0.8)::

    {"id": "title", "weight": 1, "component": {"Text": {"text": {"literalString": "Hello"}}}}

Legacy v0.8 property names are accepted through validation aliases and
always re-encoded under their v0.9 names.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from ..core.errors import DecodeError, MalformedComponent, UnknownComponentType
from .children import ChildList, ChildListField
from .dynamic import BooleanBinding, StringBinding, ValueBinding
from .values import JSONValue


# ============================================================================
# Style enums
# ============================================================================


class Justify(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    SPACE_BETWEEN = "spaceBetween"
    SPACE_AROUND = "spaceAround"
    SPACE_EVENLY = "spaceEvenly"
    STRETCH = "stretch"


class Align(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"
    STRETCH = "stretch"


class TextAlign(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"


class TextVariant(str, Enum):
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    CAPTION = "caption"
    BODY = "body"


class ImageFit(str, Enum):
    CONTAIN = "contain"
    COVER = "cover"
    FILL = "fill"
    NONE = "none"
    SCALE_DOWN = "scale-down"


class ImageVariant(str, Enum):
    ICON = "icon"
    AVATAR = "avatar"
    SMALL_FEATURE = "smallFeature"
    MEDIUM_FEATURE = "mediumFeature"
    LARGE_FEATURE = "largeFeature"
    HEADER = "header"


class Axis(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ButtonVariant(str, Enum):
    PRIMARY = "primary"
    BORDERLESS = "borderless"


class TextFieldVariant(str, Enum):
    SHORT_TEXT = "shortText"
    LONG_TEXT = "longText"
    NUMBER = "number"
    OBSCURED = "obscured"


# ============================================================================
# Shared pieces
# ============================================================================


class CatalogModel(BaseModel):
    """Immutable catalog model; unknown properties are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Accessibility(CatalogModel):
    label: StringBinding | None = None
    description: StringBinding | None = None


class EventDefinition(CatalogModel):
    """Named event plus bindings resolved when the action fires."""

    name: StrictStr
    context: dict[str, ValueBinding] | None = None

    @field_validator("context", mode="before")
    @classmethod
    def normalize_context(cls, value: Any) -> Any:
        """Accept the v0.8 ``[{key, value}, ...]`` form."""
        if isinstance(value, list):
            entries: dict[str, Any] = {}
            for entry in value:
                if not isinstance(entry, dict) or not isinstance(entry.get("key"), str):
                    raise ValueError("context entries must be objects with a 'key'")
                entries[entry["key"]] = entry.get("value")
            return entries
        return value


class ActionDefinition(CatalogModel):
    """What a Button does. ``event`` is None for function-call actions."""

    event: EventDefinition | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_legacy(cls, data: Any) -> Any:
        """Wrap the v0.8 ``{name, context}`` shape as an event."""
        if isinstance(data, dict) and "event" not in data and "name" in data:
            return {"event": {"name": data["name"], "context": data.get("context")}}
        return data


class TabItem(CatalogModel):
    title: StringBinding
    child: StrictStr


class ComponentProperties(CatalogModel):
    """Base for every catalog entry."""

    tag: ClassVar[str] = ""
    is_container: ClassVar[bool] = False

    accessibility: Accessibility | None = None

    def child_list(self) -> ChildList | None:
        """ChildList for Row/Column/List, None otherwise."""
        return None

    def references(self) -> tuple[str, ...]:
        """Component ids referenced directly (not through a ChildList)."""
        return ()


# ============================================================================
# Layout components
# ============================================================================


class _ChildListProperties(ComponentProperties):
    is_container: ClassVar[bool] = True

    children: ChildListField

    def child_list(self) -> ChildList:
        return self.children


class RowProperties(_ChildListProperties):
    tag: ClassVar[str] = "Row"

    justify: Justify | None = Field(
        default=None, validation_alias=AliasChoices("justify", "distribution")
    )
    align: Align | None = Field(default=None, validation_alias=AliasChoices("align", "alignment"))


class ColumnProperties(_ChildListProperties):
    tag: ClassVar[str] = "Column"

    justify: Justify | None = Field(
        default=None, validation_alias=AliasChoices("justify", "distribution")
    )
    align: Align | None = Field(default=None, validation_alias=AliasChoices("align", "alignment"))


class ListProperties(_ChildListProperties):
    tag: ClassVar[str] = "List"

    direction: Axis | None = None
    align: Align | None = Field(default=None, validation_alias=AliasChoices("align", "alignment"))


# ============================================================================
# Display components
# ============================================================================


class TextProperties(ComponentProperties):
    tag: ClassVar[str] = "Text"

    text: StringBinding
    align: TextAlign | None = Field(
        default=None, validation_alias=AliasChoices("align", "alignment")
    )
    variant: TextVariant | None = Field(
        default=None, validation_alias=AliasChoices("variant", "usageHint")
    )


class ImageProperties(ComponentProperties):
    tag: ClassVar[str] = "Image"

    url: StringBinding
    fit: ImageFit | None = None
    variant: ImageVariant | None = Field(
        default=None, validation_alias=AliasChoices("variant", "usageHint")
    )


class IconProperties(ComponentProperties):
    tag: ClassVar[str] = "Icon"

    name: StringBinding


class DividerProperties(ComponentProperties):
    tag: ClassVar[str] = "Divider"

    axis: Axis | None = None


# ============================================================================
# Interactive components
# ============================================================================


class ButtonProperties(ComponentProperties):
    tag: ClassVar[str] = "Button"

    child: StrictStr
    action: ActionDefinition
    variant: ButtonVariant | None = None
    enabled: BooleanBinding | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_primary(cls, data: Any) -> Any:
        """Map v0.8 ``primary: true`` onto ``variant``."""
        if isinstance(data, dict) and "primary" in data:
            data = dict(data)
            primary = data.pop("primary")
            if primary is True and data.get("variant") is None:
                data["variant"] = ButtonVariant.PRIMARY.value
        return data

    def references(self) -> tuple[str, ...]:
        return (self.child,)


class TextFieldProperties(ComponentProperties):
    tag: ClassVar[str] = "TextField"

    label: StringBinding
    value: StringBinding | None = Field(
        default=None, validation_alias=AliasChoices("value", "text")
    )
    variant: TextFieldVariant | None = Field(
        default=None, validation_alias=AliasChoices("variant", "textFieldType")
    )
    enabled: BooleanBinding | None = None


class CheckBoxProperties(ComponentProperties):
    tag: ClassVar[str] = "CheckBox"

    label: StringBinding
    value: BooleanBinding | None = None
    enabled: BooleanBinding | None = None


# ============================================================================
# Container components (single or named children by id)
# ============================================================================


class CardProperties(ComponentProperties):
    tag: ClassVar[str] = "Card"

    content: StrictStr = Field(validation_alias=AliasChoices("content", "contentChild", "child"))

    def references(self) -> tuple[str, ...]:
        return (self.content,)


class ModalProperties(ComponentProperties):
    tag: ClassVar[str] = "Modal"

    trigger: StrictStr = Field(validation_alias=AliasChoices("trigger", "entryPointChild"))
    content: StrictStr = Field(validation_alias=AliasChoices("content", "contentChild"))

    def references(self) -> tuple[str, ...]:
        return (self.trigger, self.content)


class TabsProperties(ComponentProperties):
    tag: ClassVar[str] = "Tabs"

    tabs: list[TabItem] = Field(validation_alias=AliasChoices("tabs", "tabItems"))

    def references(self) -> tuple[str, ...]:
        return tuple(item.child for item in self.tabs)


Component = Union[
    RowProperties,
    ColumnProperties,
    ListProperties,
    TextProperties,
    ImageProperties,
    IconProperties,
    DividerProperties,
    ButtonProperties,
    TextFieldProperties,
    CheckBoxProperties,
    CardProperties,
    ModalProperties,
    TabsProperties,
]

CATALOG: dict[str, type[ComponentProperties]] = {
    cls.tag: cls
    for cls in (
        RowProperties,
        ColumnProperties,
        ListProperties,
        TextProperties,
        ImageProperties,
        IconProperties,
        DividerProperties,
        ButtonProperties,
        TextFieldProperties,
        CheckBoxProperties,
        CardProperties,
        ModalProperties,
        TabsProperties,
    )
}

STANDARD_CATALOG_ID = "standard"

_ENVELOPE_KEYS = frozenset({"id", "weight", "component"})


@dataclass(frozen=True)
class ComponentWrapper:
    """A component addressed by id within its surface."""

    id: str
    component: Component
    weight: int | float | None = None

    @property
    def tag(self) -> str:
        return self.component.tag


# ============================================================================
# Decoding
# ============================================================================


def _split_flat(raw: dict[str, Any]) -> tuple[str, dict[str, Any]] | None:
    tag = raw.get("component")
    if not isinstance(tag, str):
        return None
    return tag, {k: v for k, v in raw.items() if k not in _ENVELOPE_KEYS}


def _split_nested(raw: dict[str, Any]) -> tuple[str, dict[str, Any]] | None:
    nested = raw.get("component")
    if not isinstance(nested, dict) or len(nested) != 1:
        return None
    ((tag, props),) = nested.items()
    if not isinstance(props, dict):
        return None
    return tag, props


_SHAPES = (_split_flat, _split_nested)


def _unwrap(error: ValidationError, tag: str, component_id: str) -> DecodeError:
    """Surface the first engine decode error pydantic wrapped, if any."""
    problems = []
    for detail in error.errors():
        original = (detail.get("ctx") or {}).get("error")
        if isinstance(original, DecodeError):
            return original
        location = ".".join(str(part) for part in detail.get("loc", ()))
        problems.append(f"{location}: {detail.get('msg')}" if location else str(detail.get("msg")))
    return MalformedComponent(tag, component_id, "; ".join(problems))


def decode_component(raw: Any) -> ComponentWrapper:
    """
    Decode one component in flat or nested shape.

    Raises:
        UnknownComponentType: If the discriminator is outside the catalog
        MalformedComponent: If the envelope or properties are invalid
        MalformedDynamicValue / MalformedChildList: If a binding is invalid
    """
    if not isinstance(raw, dict):
        raise MalformedComponent(None, None, f"expected object, got {type(raw).__name__}")

    component_id = raw.get("id")
    if not isinstance(component_id, str) or not component_id:
        raise MalformedComponent(None, None, "missing 'id'")

    weight = raw.get("weight")
    if weight is not None and (isinstance(weight, bool) or not isinstance(weight, (int, float))):
        raise MalformedComponent(None, component_id, f"'weight' must be a number, got {weight!r}")

    for shape in _SHAPES:
        if (split := shape(raw)) is not None:
            tag, props = split
            break
    else:
        raise MalformedComponent(None, component_id, "missing 'component' discriminator")

    properties_cls = CATALOG.get(tag)
    if properties_cls is None:
        raise UnknownComponentType(tag, component_id)

    try:
        properties = properties_cls.model_validate(props)
    except ValidationError as e:
        raise _unwrap(e, tag, component_id) from e

    return ComponentWrapper(
        id=component_id,
        component=properties,
        weight=weight,
    )


def encode_component(wrapper: ComponentWrapper) -> dict[str, JSONValue]:
    """Canonical flat v0.9 shape."""
    properties = wrapper.component.model_dump(mode="json", exclude_none=True)
    result: dict[str, JSONValue] = {"id": wrapper.id, "component": wrapper.tag}
    if wrapper.weight is not None:
        result["weight"] = wrapper.weight
    result.update(properties)
    return result
