"""A2UI wire protocol: values, bindings, components and message envelopes."""

from .values import (
    JSONScalar,
    JSONValue,
    JSONObject,
    JSONArray,
    JSONKind,
    kind_of,
    decode_json_value,
    as_bool,
    as_number,
    as_string,
    as_array,
    as_object,
    as_string_list,
)
from .dynamic import (
    DynamicString,
    DynamicNumber,
    DynamicBoolean,
    DynamicStringList,
    DynamicValue,
    decode_dynamic_value,
    StringBinding,
    NumberBinding,
    BooleanBinding,
    StringListBinding,
    ValueBinding,
)
from .children import (
    TemplateDefinition,
    ExplicitList,
    Template,
    ChildList,
    explicit_list,
    template,
    decode_template,
    decode_child_list,
)
from .components import (
    CATALOG,
    STANDARD_CATALOG_ID,
    Component,
    ComponentProperties,
    ComponentWrapper,
    Accessibility,
    ActionDefinition,
    EventDefinition,
    TabItem,
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
    decode_component,
    encode_component,
)
from .messages import (
    PROTOCOL_VERSION,
    CreateSurface,
    UpdateComponents,
    UpdateDataModel,
    DeleteSurface,
    RejectedComponent,
    ServerMessage,
    ClientAction,
    ClientError,
    decode_envelope,
    decode_server_message,
    encode_server_message,
    serialize_server_message,
)
from .validate import lint_message, validate_message, validate_payload

__all__ = [
    # Values
    "JSONScalar",
    "JSONValue",
    "JSONObject",
    "JSONArray",
    "JSONKind",
    "kind_of",
    "decode_json_value",
    "as_bool",
    "as_number",
    "as_string",
    "as_array",
    "as_object",
    "as_string_list",
    # Dynamic values
    "DynamicString",
    "DynamicNumber",
    "DynamicBoolean",
    "DynamicStringList",
    "DynamicValue",
    "decode_dynamic_value",
    "StringBinding",
    "NumberBinding",
    "BooleanBinding",
    "StringListBinding",
    "ValueBinding",
    # Children
    "TemplateDefinition",
    "ExplicitList",
    "Template",
    "ChildList",
    "explicit_list",
    "template",
    "decode_template",
    "decode_child_list",
    # Components
    "CATALOG",
    "STANDARD_CATALOG_ID",
    "Component",
    "ComponentProperties",
    "ComponentWrapper",
    "Accessibility",
    "ActionDefinition",
    "EventDefinition",
    "TabItem",
    "RowProperties",
    "ColumnProperties",
    "ListProperties",
    "TextProperties",
    "ImageProperties",
    "IconProperties",
    "DividerProperties",
    "ButtonProperties",
    "TextFieldProperties",
    "CheckBoxProperties",
    "CardProperties",
    "ModalProperties",
    "TabsProperties",
    "decode_component",
    "encode_component",
    # Messages
    "PROTOCOL_VERSION",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "RejectedComponent",
    "ServerMessage",
    "ClientAction",
    "ClientError",
    "decode_envelope",
    "decode_server_message",
    "encode_server_message",
    "serialize_server_message",
    # Linting
    "lint_message",
    "validate_message",
    "validate_payload",
]
