"""
Protocol envelope for server-to-client and client-to-server messages.

Server messages carry an optional ``version`` and exactly one kind key.
Kinds are tried in a fixed order; the first key that is present with a
structurally valid payload decides the message, so an envelope holding both
``createSurface`` and ``updateComponents`` always decodes as ``createSurface``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Union

from returns.result import Failure, Result, Success

from ..core import json as wire
from ..core.config import Settings, get_settings
from ..core.errors import (
    DecodeError,
    MalformedMessage,
    UnrecognizedMessage,
    UnsupportedProtocolVersion,
)
from ..core.logging_config import get_logger
from .components import ComponentWrapper, decode_component, encode_component
from .values import JSONValue, decode_json_value

logger = get_logger(__name__)

PROTOCOL_VERSION = "v0.9"


# ============================================================================
# Server messages
# ============================================================================


@dataclass(frozen=True)
class CreateSurface:
    """Initialize a new, empty surface."""

    kind: ClassVar[str] = "createSurface"

    surface_id: str
    catalog_id: str | None = None
    theme: dict[str, JSONValue] | None = None
    send_data_model: bool | None = None


@dataclass(frozen=True)
class RejectedComponent:
    """A batch entry that failed to decode and was skipped."""

    index: int
    component_id: str | None
    error: DecodeError = field(compare=False)


@dataclass(frozen=True)
class UpdateComponents:
    """Upsert component definitions for a surface."""

    kind: ClassVar[str] = "updateComponents"

    surface_id: str
    components: tuple[ComponentWrapper, ...]
    rejected: tuple[RejectedComponent, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class UpdateDataModel:
    """Write ``value`` at ``path``; no path means the root, null means delete."""

    kind: ClassVar[str] = "updateDataModel"

    surface_id: str
    path: str | None = None
    value: JSONValue = None


@dataclass(frozen=True)
class DeleteSurface:
    """Remove a surface and all of its state."""

    kind: ClassVar[str] = "deleteSurface"

    surface_id: str


ServerMessage = Union[CreateSurface, UpdateComponents, UpdateDataModel, DeleteSurface]


# ============================================================================
# Client messages
# ============================================================================


@dataclass(frozen=True)
class ClientAction:
    """User action sent back to the server."""

    action: str
    surface_id: str
    context: dict[str, JSONValue] | None = None

    def encode(self) -> dict[str, JSONValue]:
        result: dict[str, JSONValue] = {"action": self.action, "surfaceId": self.surface_id}
        if self.context is not None:
            result["context"] = self.context
        return result

    def to_bytes(self) -> bytes:
        return wire.dumps(self.encode())

    @classmethod
    def decode(cls, raw: Any) -> "ClientAction":
        """
        Decode an outbound action (used by servers and test doubles).

        Raises:
            MalformedMessage: If required fields are missing
        """
        if not isinstance(raw, dict):
            raise MalformedMessage("action", "expected object")
        action = raw.get("action")
        surface_id = raw.get("surfaceId")
        if not isinstance(action, str) or not isinstance(surface_id, str):
            raise MalformedMessage("action", "requires string 'action' and 'surfaceId'")
        context = raw.get("context")
        if context is not None and not isinstance(context, dict):
            raise MalformedMessage("action", "'context' must be an object")
        return cls(
            action=action,
            surface_id=surface_id,
            context=decode_json_value(context) if context is not None else None,
        )


@dataclass(frozen=True)
class ClientError:
    """Client-side validation failure reported to the server."""

    surface_id: str
    path: str
    message: str
    code: str = "VALIDATION_FAILED"

    def encode(self, version: str = PROTOCOL_VERSION) -> dict[str, JSONValue]:
        return {
            "version": version,
            "error": {
                "code": self.code,
                "surfaceId": self.surface_id,
                "path": self.path,
                "message": self.message,
            },
        }


# ============================================================================
# Payload decoders (one per kind)
# ============================================================================


def _require_surface_id(kind: str, payload: Any) -> str:
    if not isinstance(payload, dict):
        raise MalformedMessage(kind, f"expected object, got {type(payload).__name__}")
    surface_id = payload.get("surfaceId")
    if not isinstance(surface_id, str) or not surface_id:
        raise MalformedMessage(kind, "missing 'surfaceId'")
    return surface_id


def _decode_create_surface(payload: Any) -> CreateSurface:
    surface_id = _require_surface_id(CreateSurface.kind, payload)

    catalog_id = payload.get("catalogId")
    if catalog_id is not None and not isinstance(catalog_id, str):
        raise MalformedMessage(CreateSurface.kind, "'catalogId' must be a string")
    theme = payload.get("theme")
    if theme is not None and not isinstance(theme, dict):
        raise MalformedMessage(CreateSurface.kind, "'theme' must be an object")
    send_data_model = payload.get("sendDataModel")
    if send_data_model is not None and not isinstance(send_data_model, bool):
        raise MalformedMessage(CreateSurface.kind, "'sendDataModel' must be a boolean")

    return CreateSurface(
        surface_id=surface_id,
        catalog_id=catalog_id,
        theme=decode_json_value(theme) if theme is not None else None,
        send_data_model=send_data_model,
    )


def _decode_update_components(payload: Any) -> UpdateComponents:
    surface_id = _require_surface_id(UpdateComponents.kind, payload)

    raw_components = payload.get("components")
    if not isinstance(raw_components, list):
        raise MalformedMessage(UpdateComponents.kind, "'components' must be a list")

    components: list[ComponentWrapper] = []
    rejected: list[RejectedComponent] = []
    for index, raw in enumerate(raw_components):
        try:
            components.append(decode_component(raw))
        except DecodeError as e:
            component_id = raw.get("id") if isinstance(raw, dict) else None
            if not isinstance(component_id, str):
                component_id = None
            rejected.append(RejectedComponent(index=index, component_id=component_id, error=e))
            logger.warning(
                "component_rejected",
                surface_id=surface_id,
                index=index,
                component_id=component_id,
                error=str(e),
            )

    return UpdateComponents(
        surface_id=surface_id,
        components=tuple(components),
        rejected=tuple(rejected),
    )


def _decode_update_data_model(payload: Any) -> UpdateDataModel:
    surface_id = _require_surface_id(UpdateDataModel.kind, payload)

    path = payload.get("path")
    if path is not None and not isinstance(path, str):
        raise MalformedMessage(UpdateDataModel.kind, "'path' must be a string")

    return UpdateDataModel(
        surface_id=surface_id,
        path=path,
        value=decode_json_value(payload.get("value")),
    )


def _decode_delete_surface(payload: Any) -> DeleteSurface:
    return DeleteSurface(surface_id=_require_surface_id(DeleteSurface.kind, payload))


# Fixed precedence: first present-and-valid kind wins
MESSAGE_DECODERS: tuple[tuple[str, Callable[[Any], ServerMessage]], ...] = (
    (CreateSurface.kind, _decode_create_surface),
    (UpdateComponents.kind, _decode_update_components),
    (UpdateDataModel.kind, _decode_update_data_model),
    (DeleteSurface.kind, _decode_delete_surface),
)


def decode_envelope(
    envelope: Any,
    expected_version: str = PROTOCOL_VERSION,
    require_version: bool = False,
) -> ServerMessage:
    """
    Decode a parsed envelope into a server message.

    Args:
        envelope: Parsed JSON object
        expected_version: Version the envelope must carry when present
        require_version: Treat a missing version as unsupported

    Raises:
        UnsupportedProtocolVersion: If the version does not match
        UnrecognizedMessage: If no kind key holds a valid payload
    """
    if not isinstance(envelope, dict):
        raise UnrecognizedMessage(frozenset())

    version = envelope.get("version")
    if version is None:
        if require_version:
            raise UnsupportedProtocolVersion(None, expected_version)
    elif version != expected_version:
        raise UnsupportedProtocolVersion(version, expected_version)

    attempts: dict[str, str] = {}
    for kind, decoder in MESSAGE_DECODERS:
        if kind not in envelope:
            continue
        try:
            return decoder(envelope[kind])
        except DecodeError as e:
            attempts[kind] = str(e)

    raise UnrecognizedMessage(frozenset(envelope.keys()), attempts)


def decode_server_message(
    raw: bytes | str | dict[str, Any],
    settings: Settings | None = None,
) -> Result[ServerMessage, DecodeError]:
    """
    Decode one server message from raw bytes, text or a parsed object.

    Returns:
        Success with the message, or Failure with the decode error
    """
    settings = settings or get_settings()
    try:
        envelope = raw
        if isinstance(raw, (bytes, bytearray, str)):
            envelope = wire.loads(
                raw, max_size=settings.max_message_size, max_depth=settings.max_json_depth
            )
        return Success(
            decode_envelope(
                envelope,
                expected_version=settings.protocol_version,
                require_version=settings.require_version,
            )
        )
    except DecodeError as e:
        logger.warning("message_decode_failed", error=str(e), error_type=type(e).__name__)
        return Failure(e)


# ============================================================================
# Encoding (always canonical v0.9)
# ============================================================================


def _encode_payload(message: ServerMessage) -> dict[str, JSONValue]:
    if isinstance(message, CreateSurface):
        payload: dict[str, JSONValue] = {"surfaceId": message.surface_id}
        if message.catalog_id is not None:
            payload["catalogId"] = message.catalog_id
        if message.theme is not None:
            payload["theme"] = message.theme
        if message.send_data_model is not None:
            payload["sendDataModel"] = message.send_data_model
        return payload
    if isinstance(message, UpdateComponents):
        return {
            "surfaceId": message.surface_id,
            "components": [encode_component(wrapper) for wrapper in message.components],
        }
    if isinstance(message, UpdateDataModel):
        payload = {"surfaceId": message.surface_id}
        if message.path is not None:
            payload["path"] = message.path
        payload["value"] = message.value
        return payload
    if isinstance(message, DeleteSurface):
        return {"surfaceId": message.surface_id}
    raise TypeError(f"Not a server message: {type(message).__name__}")


def encode_server_message(
    message: ServerMessage, version: str = PROTOCOL_VERSION
) -> dict[str, JSONValue]:
    """Version first, then exactly the one populated kind key."""
    return {"version": version, message.kind: _encode_payload(message)}


def serialize_server_message(message: ServerMessage, version: str = PROTOCOL_VERSION) -> bytes:
    """Encode to one NDJSON-ready line (without the newline)."""
    return wire.dumps(encode_server_message(message, version))
