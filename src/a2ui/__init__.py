"""A2UI engine: protocol decoding, surface state and data binding."""

from .binding import BindingResolver, join_path
from .core import Settings, configure_logging, create_container, get_logger
from .core.metrics import EngineMetrics
from .protocol import (
    PROTOCOL_VERSION,
    ClientAction,
    ClientError,
    ComponentWrapper,
    CreateSurface,
    DeleteSurface,
    ServerMessage,
    UpdateComponents,
    UpdateDataModel,
    decode_server_message,
    encode_server_message,
)
from .session import Session, Transport
from .surface import SurfaceChange, SurfaceState, SurfaceStore, TemplateInstance

__version__ = "0.9.0"

__all__ = [
    "__version__",
    "PROTOCOL_VERSION",
    # Protocol
    "ServerMessage",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "ComponentWrapper",
    "ClientAction",
    "ClientError",
    "decode_server_message",
    "encode_server_message",
    # Engine
    "BindingResolver",
    "join_path",
    "SurfaceStore",
    "SurfaceState",
    "SurfaceChange",
    "TemplateInstance",
    "Session",
    "Transport",
    # Infrastructure
    "Settings",
    "EngineMetrics",
    "configure_logging",
    "get_logger",
    "create_container",
]
