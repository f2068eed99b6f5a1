"""
Session
Glue between a transport and the engine: inbound payloads are decoded and
applied to the store in delivery order; user actions are resolved and sent
back out.
"""

from typing import Any, Protocol

from returns.result import Failure, Result, Success

from .binding.resolver import BindingResolver
from .core import json as wire
from .core.config import Settings, get_settings
from .core.errors import A2UIError, ActionError, SurfaceNotFound, TransportError
from .core.logging_config import get_logger
from .core.metrics import EngineMetrics
from .core.stream import LineBuffer, StreamCounter
from .protocol.components import ButtonProperties
from .protocol.messages import (
    PROTOCOL_VERSION,
    ClientAction,
    ClientError,
    ServerMessage,
    decode_server_message,
)
from .surface.store import SurfaceStore

logger = get_logger(__name__)

MessageResult = Result[ServerMessage, A2UIError]


class Transport(Protocol):
    """Outbound half of a connection."""

    def send(self, encoded: bytes) -> Result[None, TransportError]: ...


class Session:
    """
    One server connection's view of the engine.

    Inbound handling never raises on malformed input: each message yields a
    Result, a failed message is dropped, and processing continues with the
    next one.
    """

    def __init__(
        self,
        store: SurfaceStore,
        transport: Transport | None = None,
        resolver: BindingResolver | None = None,
        settings: Settings | None = None,
        metrics: EngineMetrics | None = None,
    ) -> None:
        self.store = store
        self.transport = transport
        self.resolver = resolver or store.resolver
        self.settings = settings or get_settings()
        self.metrics = metrics if metrics is not None else store.metrics

        self._buffer = LineBuffer(max_line_size=self.settings.max_message_size)
        self.counter = StreamCounter()

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def on_message(self, raw: bytes | str | dict[str, Any]) -> MessageResult:
        """
        Decode and apply one server message.

        Returns:
            Success with the applied message, or Failure with the decode or state error
        """
        decoded = decode_server_message(raw, self.settings)
        if isinstance(decoded, Failure):
            if self.metrics:
                self.metrics.record_message("unknown", "decode_error")
            return decoded

        message = decoded.unwrap()
        return self.store.apply(message).map(lambda _revision: message)

    def on_payload(self, payload: bytes | str) -> list[MessageResult]:
        """
        Apply a whole payload: one object, a JSON array of messages, or NDJSON.

        Returns:
            One result per message, in order
        """
        raw = payload.encode("utf-8", "surrogatepass") if isinstance(payload, str) else bytes(payload)
        stripped = raw.strip()
        if not stripped:
            return []

        try:
            document = wire.loads(
                stripped,
                max_size=self.settings.max_message_size,
                max_depth=self.settings.max_json_depth,
            )
        except wire.JSONParseError:
            # Not one document; treat as newline-delimited messages
            return [self.on_message(line) for line in stripped.splitlines() if line.strip()]

        if isinstance(document, list):
            return [self.on_message(item) for item in document]
        return [self.on_message(document)]

    def feed(self, chunk: bytes | str) -> list[MessageResult]:
        """Apply every NDJSON line completed by a streamed chunk."""
        dropped = self._buffer.dropped
        results = [self._apply_line(line) for line in self._buffer.add(chunk)]
        if self._buffer.dropped > dropped:
            logger.warning(
                "stream_line_dropped",
                max_line_size=self._buffer.max_line_size,
                dropped=self._buffer.dropped,
            )
        return results

    def flush(self) -> list[MessageResult]:
        """Apply a trailing line left without a newline at end of stream."""
        line = self._buffer.flush()
        results = [self._apply_line(line)] if line else []
        count, size = self.counter.reset()
        logger.debug("stream_flushed", messages=count, bytes=size)
        return results

    def _apply_line(self, line: bytes) -> MessageResult:
        self.counter.track(line)
        return self.on_message(line)

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def build_action(
        self,
        surface_id: str,
        component_id: str,
        context_path: str | None = None,
    ) -> Result[ClientAction, A2UIError]:
        """
        Resolve a Button's action into an outbound ClientAction.

        The event context is resolved against a single data-model snapshot.
        """
        state = self.store.snapshot(surface_id)
        if state is None:
            return Failure(SurfaceNotFound(surface_id))

        wrapper = state.get_component(component_id)
        if wrapper is None:
            return Failure(ActionError(f"Component not found: {component_id}"))
        if not isinstance(wrapper.component, ButtonProperties):
            return Failure(ActionError(f"Component {component_id} ({wrapper.tag}) has no action"))

        event = wrapper.component.action.event
        if event is None:
            return Failure(ActionError(f"Button {component_id} has no event"))

        context = None
        if event.context is not None:
            context = self.resolver.resolve_action_context(
                event.context, state.data_model, context_path
            )
        return Success(ClientAction(action=event.name, surface_id=surface_id, context=context))

    def send_action(
        self,
        surface_id: str,
        component_id: str,
        context_path: str | None = None,
    ) -> Result[ClientAction, A2UIError]:
        """Resolve a Button's action and hand it to the transport."""
        built = self.build_action(surface_id, component_id, context_path)
        if isinstance(built, Failure):
            logger.warning(
                "action_unresolved",
                surface_id=surface_id,
                component_id=component_id,
                error=str(built.failure()),
            )
            self._record_action("unresolved")
            return built

        action = built.unwrap()
        sent = self._send(action.to_bytes())
        if isinstance(sent, Failure):
            logger.error(
                "action_send_failed",
                surface_id=surface_id,
                action=action.action,
                error=str(sent.failure()),
            )
            self._record_action("failed")
            return sent

        logger.info("action_sent", surface_id=surface_id, action=action.action)
        self._record_action("sent")
        return Success(action)

    def report_error(
        self, surface_id: str, path: str, message: str
    ) -> Result[None, A2UIError]:
        """Send a client-side validation failure to the server."""
        error = ClientError(surface_id=surface_id, path=path, message=message)
        version = self.settings.protocol_version or PROTOCOL_VERSION
        return self._send(wire.dumps(error.encode(version)))

    def _send(self, encoded: bytes) -> Result[None, A2UIError]:
        if self.transport is None:
            return Failure(TransportError("Session has no transport"))
        return self.transport.send(encoded)

    def _record_action(self, status: str) -> None:
        if self.metrics:
            self.metrics.record_action(status)
