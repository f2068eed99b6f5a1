"""Error taxonomy for the A2UI engine.

Decoders raise these; the public boundaries (message decoding, store
application, session dispatch) hand them back as ``returns`` Result values
so malformed input never escapes as an unhandled exception.
"""

from dataclasses import dataclass
from typing import Any


class A2UIError(Exception):
    """Base class for all engine errors."""

    def info(self) -> "ErrorInfo":
        """Flatten into a loggable value."""
        return ErrorInfo(code=type(self).__name__, message=str(self))


@dataclass(frozen=True)
class ErrorInfo:
    """Error details as a plain value (for logs and ClientError payloads)."""

    code: str
    message: str
    path: str | None = None


# ============================================================================
# Decode errors
# ============================================================================


class DecodeError(A2UIError, ValueError):
    """Wire data could not be decoded.

    Subclasses ``ValueError`` so it can be raised from pydantic validators
    and recovered from the resulting ``ValidationError``.
    """


class MalformedJSONValue(DecodeError):
    """A value is not representable as JSON."""

    def __init__(self, raw: Any, reason: str = "") -> None:
        self.raw = raw
        detail = f": {reason}" if reason else ""
        super().__init__(f"Not a JSON value ({type(raw).__name__}){detail}")


class MalformedDynamicValue(DecodeError):
    """No literal, path, or legacy wrapped shape matched."""

    def __init__(self, field: str, raw: Any, expected: str) -> None:
        self.field = field
        self.raw = raw
        self.expected = expected
        super().__init__(
            f"Field '{field}' must be a {expected} literal or an object with 'path', got {raw!r}"
        )


class MalformedChildList(DecodeError):
    """Children were neither an id list nor a template."""

    def __init__(self, field: str, raw: Any) -> None:
        self.field = field
        self.raw = raw
        super().__init__(
            f"Field '{field}' must be a list of ids or a template "
            f"{{componentId, path}}, got {raw!r}"
        )


class UnknownComponentType(DecodeError):
    """Discriminator names a type outside the catalog."""

    def __init__(self, tag: Any, component_id: str | None = None) -> None:
        self.tag = tag
        self.component_id = component_id
        super().__init__(f"Unknown component type: {tag!r} (id: {component_id})")


class MalformedComponent(DecodeError):
    """Component envelope or property bundle is invalid."""

    def __init__(self, tag: str | None, component_id: str | None, details: str) -> None:
        self.tag = tag
        self.component_id = component_id
        self.details = details
        super().__init__(f"Invalid {tag or 'component'} '{component_id}': {details}")


class MalformedMessage(DecodeError):
    """A message payload is structurally invalid for its kind."""

    def __init__(self, kind: str, details: str) -> None:
        self.kind = kind
        self.details = details
        super().__init__(f"Invalid {kind} payload: {details}")


class UnsupportedProtocolVersion(DecodeError):
    """Envelope version differs from the expected protocol version."""

    def __init__(self, version: Any, expected: str) -> None:
        self.version = version
        self.expected = expected
        super().__init__(f"Unsupported protocol version {version!r} (expected {expected!r})")


class UnrecognizedMessage(DecodeError):
    """Envelope held no structurally valid message kind."""

    def __init__(self, keys: frozenset[str], attempts: dict[str, str] | None = None) -> None:
        self.keys = keys
        self.attempts = attempts or {}
        listed = ", ".join(sorted(keys)) or "<none>"
        super().__init__(f"Unrecognized message with keys: {listed}")


# ============================================================================
# State errors
# ============================================================================


class StateError(A2UIError):
    """A message could not be applied to surface state."""


class SurfaceNotFound(StateError):
    """Referenced surface does not exist."""

    def __init__(self, surface_id: str) -> None:
        self.surface_id = surface_id
        super().__init__(f"Surface not found: {surface_id}")


class InvalidRootReplacement(StateError):
    """Root data model replaced with a non-object."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Root data model must be an object, got {kind}")


class InvalidDataModelPath(StateError):
    """Path could not be written in the data model."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write '{path}': {reason}")

    def info(self) -> ErrorInfo:
        return ErrorInfo(code=type(self).__name__, message=str(self), path=self.path)


# ============================================================================
# Transport / action errors
# ============================================================================


class TransportError(A2UIError):
    """Outbound payload could not be delivered."""


class ActionError(A2UIError):
    """User action could not be turned into an outbound message."""
