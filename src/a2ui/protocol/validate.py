"""Payload linting against the canonical v0.9 wire shape.

Decoding accepts legacy v0.8 payloads; the linter reports what a producer
should change. It never blocks decoding.
"""

from typing import Any

from returns.result import Failure, Result, Success

from .messages import MESSAGE_DECODERS, PROTOCOL_VERSION

# tag -> {deprecated property: replacement}
DEPRECATED_PROPERTIES: dict[str, dict[str, str]] = {
    "Row": {"distribution": "justify", "alignment": "align"},
    "Column": {"distribution": "justify", "alignment": "align"},
    "List": {"distribution": "justify", "alignment": "align"},
    "Text": {"alignment": "align", "usageHint": "variant"},
    "Image": {"usageHint": "variant"},
    "TextField": {"text": "value", "textFieldType": "variant"},
    "Button": {"primary": "variant"},
    "Card": {"contentChild": "content", "child": "content"},
    "Modal": {"contentChild": "content", "entryPointChild": "trigger"},
    "Tabs": {"tabItems": "tabs"},
}

LEGACY_LITERAL_KEYS = frozenset(
    {"literalString", "literalNumber", "literalBoolean", "literalStringList"}
)

MESSAGE_KINDS = tuple(kind for kind, _ in MESSAGE_DECODERS)


def _valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _lint_component(index: int, raw: Any) -> list[str]:
    if not isinstance(raw, dict):
        return [f"Component at index {index}: must be an object"]

    component_id = raw.get("id")
    tag = raw.get("component")
    errors: list[str] = []

    if isinstance(tag, dict) and len(tag) == 1:
        tag, properties = next(iter(tag.items()))
        errors.append(
            f"Component {component_id}: nested component shape is deprecated, "
            f'use "component": "{tag}" with flat properties'
        )
        if not isinstance(properties, dict):
            properties = {}
    else:
        properties = raw

    if not _valid_id(component_id) or not isinstance(tag, str):
        errors.append(
            f'Component at index {index}: invalid component structure (missing "component" discriminator or "id")'
        )
        return errors

    for prop, replacement in DEPRECATED_PROPERTIES.get(tag, {}).items():
        if prop in properties:
            errors.append(f'Component {component_id}: "{prop}" is deprecated, use "{replacement}"')

    for prop, value in properties.items():
        if isinstance(value, dict) and LEGACY_LITERAL_KEYS & value.keys():
            errors.append(
                f'Component {component_id}: "{prop}" uses a deprecated literal wrapper, '
                "use a bare value"
            )

    action = properties.get("action")
    if tag == "Button" and isinstance(action, dict) and "name" in action:
        errors.append(
            f'Component {component_id}: action "name" is deprecated, use "event": {{"name": ...}}'
        )
    return errors


def lint_message(message: Any, version: str = PROTOCOL_VERSION) -> list[str]:
    """List every problem found in one message envelope."""
    if not isinstance(message, dict):
        return ["Message must be an object"]

    errors: list[str] = []
    if message.get("version") != version:
        errors.append(f'Missing or invalid "version" field (must be "{version}")')

    present = [kind for kind in MESSAGE_KINDS if kind in message]
    if not present:
        errors.append(f"Message must contain one of: {', '.join(MESSAGE_KINDS)}")
    elif len(present) > 1:
        errors.append(f"Message contains several kinds ({', '.join(present)}); only {present[0]} applies")

    for kind in present:
        payload = message[kind]
        if not isinstance(payload, dict) or not _valid_id(payload.get("surfaceId")):
            errors.append(f"{kind} must have a valid surfaceId")
            continue
        if kind == "createSurface" and not _valid_id(payload.get("catalogId")):
            errors.append("createSurface must have a valid catalogId")
        if kind == "updateComponents":
            components = payload.get("components")
            if not isinstance(components, list):
                errors.append("updateComponents must have a components array")
            else:
                for index, component in enumerate(components):
                    errors.extend(_lint_component(index, component))

    return errors


def validate_message(message: Any, version: str = PROTOCOL_VERSION) -> Result[None, list[str]]:
    """
    Lint one message (Result pattern version).

    Returns:
        Success(None) when clean, otherwise Failure with every problem found
    """
    errors = lint_message(message, version)
    return Failure(errors) if errors else Success(None)


def validate_payload(messages: Any, version: str = PROTOCOL_VERSION) -> Result[None, list[str]]:
    """Lint a list of messages; problems are prefixed with their message index."""
    if not isinstance(messages, list):
        return Failure(["Payload must be a list of messages"])

    errors = [
        f"Message {index}: {error}"
        for index, message in enumerate(messages)
        for error in lint_message(message, version)
    ]
    return Failure(errors) if errors else Success(None)
