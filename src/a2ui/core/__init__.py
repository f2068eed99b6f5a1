"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    A2UIError,
    ErrorInfo,
    DecodeError,
    MalformedJSONValue,
    MalformedDynamicValue,
    MalformedChildList,
    UnknownComponentType,
    MalformedComponent,
    MalformedMessage,
    UnsupportedProtocolVersion,
    UnrecognizedMessage,
    StateError,
    SurfaceNotFound,
    InvalidRootReplacement,
    InvalidDataModelPath,
    TransportError,
    ActionError,
)
from .logging_config import configure_logging, get_logger, LogContext
from .stream import LineBuffer, StreamCounter
from .json import (
    JSONParseError,
    loads,
    dumps,
    validate_json_size,
    validate_json_depth,
)
from .metrics import EngineMetrics

MalformedJSON = JSONParseError


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "A2UIError",
    "ErrorInfo",
    "DecodeError",
    "MalformedJSON",
    "MalformedJSONValue",
    "MalformedDynamicValue",
    "MalformedChildList",
    "UnknownComponentType",
    "MalformedComponent",
    "MalformedMessage",
    "UnsupportedProtocolVersion",
    "UnrecognizedMessage",
    "StateError",
    "SurfaceNotFound",
    "InvalidRootReplacement",
    "InvalidDataModelPath",
    "TransportError",
    "ActionError",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # Streaming
    "LineBuffer",
    "StreamCounter",
    # JSON
    "JSONParseError",
    "loads",
    "dumps",
    "validate_json_size",
    "validate_json_depth",
    # Metrics
    "EngineMetrics",
    # DI
    "create_container",
]
