"""
Surface State Store
Owns every surface's components, children index and data model.

Messages for one surface are applied serially under that surface's lock.
Each write builds a new immutable SurfaceState and swaps it in, so readers
(renderers, action resolution) never observe a half-applied update.
"""

import threading
from typing import Callable, Iterable

from returns.result import Failure, Result, Success

from ..binding import pointer
from ..binding.resolver import BindingResolver
from ..core.config import Settings, get_settings
from ..core.errors import InvalidRootReplacement, StateError, SurfaceNotFound
from ..core.logging_config import LogContext, get_logger
from ..core.metrics import EngineMetrics
from ..protocol.children import ChildList, ExplicitList, Template, TemplateDefinition
from ..protocol.components import ComponentWrapper
from ..protocol.dynamic import DynamicValue
from ..protocol.messages import (
    CreateSurface,
    DeleteSurface,
    ServerMessage,
    UpdateComponents,
    UpdateDataModel,
)
from ..protocol.values import JSONValue, as_array, decode_json_value, kind_of
from .state import ChangeKind, SurfaceChange, SurfaceState, TemplateInstance

logger = get_logger(__name__)

Listener = Callable[[SurfaceChange], None]


class SurfaceStore:
    """
    Per-surface state machine.

    Lifecycle:
    - createSurface allocates empty state (no-op when it already exists)
    - updateComponents upserts by id, last writer wins
    - updateDataModel writes at a path (root replacement must be an object)
    - deleteSurface drops everything (safe when absent)

    Successful writes bump a store-wide revision and notify subscribers.
    """

    def __init__(
        self,
        resolver: BindingResolver | None = None,
        settings: Settings | None = None,
        metrics: EngineMetrics | None = None,
    ) -> None:
        self.resolver = resolver or BindingResolver()
        self.settings = settings or get_settings()
        self.metrics = metrics

        self._surfaces: dict[str, SurfaceState] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._revision = 0

    # ------------------------------------------------------------------
    # Message application
    # ------------------------------------------------------------------

    def apply(self, message: ServerMessage) -> Result[int, StateError]:
        """
        Apply one decoded server message.

        Returns:
            Success with the store revision, or Failure with a localized state error
        """
        handlers: dict[type, Callable[[ServerMessage], Result[int, StateError]]] = {
            CreateSurface: self._apply_create,
            UpdateComponents: self._apply_components,
            UpdateDataModel: self._apply_data_model,
            DeleteSurface: self._apply_delete,
        }
        handler = handlers.get(type(message))
        if handler is None:
            raise TypeError(f"Not a server message: {type(message).__name__}")

        with LogContext(surface_id=message.surface_id, kind=message.kind):
            result = handler(message)

        if self.metrics:
            status = "applied" if isinstance(result, Success) else "failed"
            self.metrics.record_message(message.kind, status)
        return result

    def _apply_create(self, message: CreateSurface) -> Result[int, StateError]:
        self.create_surface(
            message.surface_id,
            catalog_id=message.catalog_id,
            theme=message.theme,
            send_data_model=message.send_data_model,
        )
        return Success(self.revision)

    def _apply_components(self, message: UpdateComponents) -> Result[int, StateError]:
        if self.metrics:
            self.metrics.record_rejected_components(len(message.rejected))
        return self.update_components(message.surface_id, message.components)

    def _apply_data_model(self, message: UpdateDataModel) -> Result[int, StateError]:
        return self.update_data_model(message.surface_id, message.path, message.value)

    def _apply_delete(self, message: DeleteSurface) -> Result[int, StateError]:
        self.delete_surface(message.surface_id)
        return Success(self.revision)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_surface(
        self,
        surface_id: str,
        catalog_id: str | None = None,
        theme: dict[str, JSONValue] | None = None,
        send_data_model: bool | None = None,
    ) -> SurfaceState:
        """Allocate an empty surface; an existing surface is returned untouched."""
        with self._lock_for(surface_id):
            existing = self._surfaces.get(surface_id)
            if existing is not None:
                logger.debug("surface_exists", surface_id=surface_id)
                return existing

            state = SurfaceState(
                surface_id=surface_id,
                catalog_id=catalog_id,
                theme=theme,
                send_data_model=bool(send_data_model),
            )
            self._surfaces[surface_id] = state
            revision = self._next_revision()

        logger.info("surface_created", surface_id=surface_id, catalog_id=catalog_id)
        self._publish_surface_count()
        self._notify(SurfaceChange(surface_id, ChangeKind.CREATED, revision))
        return state

    def update_components(
        self, surface_id: str, components: Iterable[ComponentWrapper]
    ) -> Result[int, StateError]:
        """Upsert component wrappers by id; containers also update the children index."""
        try:
            with self._lock_for(surface_id):
                state = self._require(surface_id)
                self._surfaces[surface_id] = state.with_components(tuple(components))
                revision = self._next_revision()
        except StateError as e:
            return self._fail(surface_id, e)

        self._notify(SurfaceChange(surface_id, ChangeKind.COMPONENTS, revision))
        return Success(revision)

    def update_data_model(
        self, surface_id: str, path: str | None, value: JSONValue
    ) -> Result[int, StateError]:
        """
        Write ``value`` at ``path`` in the surface's data model.

        A missing path or ``/`` replaces the root: an object replaces it,
        null clears it, anything else is InvalidRootReplacement. Deeper
        paths create intermediate objects; null deletes. A relative path
        names a single top-level key. The value is copied in, so later
        changes to the caller's containers do not reach the store.

        Raises:
            MalformedJSONValue: If ``value`` holds a non-JSON type
        """
        absolute = pointer.absolute(path) if path else pointer.ROOT
        value = decode_json_value(value)
        try:
            with self._lock_for(surface_id):
                state = self._require(surface_id)
                if not pointer.parse(absolute):
                    if value is None:
                        data_model = {}
                    elif isinstance(value, dict):
                        data_model = value
                    else:
                        raise InvalidRootReplacement(kind_of(value).value)
                else:
                    data_model = pointer.set_value(state.data_model, absolute, value)
                self._surfaces[surface_id] = state.with_data_model(data_model)
                revision = self._next_revision()
        except StateError as e:
            return self._fail(surface_id, e)

        logger.debug("data_model_updated", surface_id=surface_id, path=absolute)
        self._notify(SurfaceChange(surface_id, ChangeKind.DATA_MODEL, revision))
        return Success(revision)

    def write_binding(
        self,
        surface_id: str,
        binding: DynamicValue,
        value: JSONValue,
        context_path: str | None = None,
    ) -> Result[int, StateError]:
        """
        Write a user edit back through a two-way binding.

        Literal bindings have nowhere to write and leave state unchanged.
        """
        if binding.path is None:
            return Success(self.revision)
        return self.update_data_model(
            surface_id, pointer.absolute(binding.path, context_path), value
        )

    def delete_surface(self, surface_id: str) -> bool:
        """Remove a surface. Returns False when it did not exist."""
        with self._lock_for(surface_id):
            removed = self._surfaces.pop(surface_id, None)
            if removed is not None:
                revision = self._next_revision()

        if removed is None:
            logger.debug("surface_delete_ignored", surface_id=surface_id)
            return False

        logger.info("surface_deleted", surface_id=surface_id)
        self._publish_surface_count()
        self._notify(SurfaceChange(surface_id, ChangeKind.DELETED, revision))
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self, surface_id: str) -> SurfaceState | None:
        """Current consistent state of a surface."""
        return self._surfaces.get(surface_id)

    def has_surface(self, surface_id: str) -> bool:
        return surface_id in self._surfaces

    def surface_ids(self) -> list[str]:
        return list(self._surfaces)

    def get_component(self, component_id: str, surface_id: str) -> ComponentWrapper | None:
        state = self._surfaces.get(surface_id)
        return state.get_component(component_id) if state else None

    def list_component_ids(self, surface_id: str) -> list[str]:
        state = self._surfaces.get(surface_id)
        return list(state.components) if state else []

    def get_data_model(
        self, surface_id: str, path: str = pointer.ROOT, context_path: str | None = None
    ) -> JSONValue | None:
        """Copy of the value at ``path``; None when the surface or path is missing."""
        state = self._surfaces.get(surface_id)
        if state is None:
            return None
        value = self.resolver.resolve_path(path, state.data_model, context_path)
        return decode_json_value(value) if value is not None else None

    def resolve_children(
        self,
        children: ChildList,
        surface_id: str,
        context_path: str | None = None,
    ) -> list[str]:
        """
        Ordered child ids for a ChildList.

        Explicit lists come back verbatim. Templates yield one id per element
        of the bound array; a missing or non-array binding yields no children.
        """
        if isinstance(children, ExplicitList):
            return list(children.ids)
        if isinstance(children, Template):
            return [
                instance.id
                for instance in self.expand_template(children.template, surface_id, context_path)
            ]
        raise TypeError(f"Not a child list: {type(children).__name__}")

    def expand_template(
        self,
        template: TemplateDefinition,
        surface_id: str,
        context_path: str | None = None,
    ) -> list[TemplateInstance]:
        """
        Stamp a template once per array element.

        Each instance carries the absolute path of its element so nested
        templates and relative bindings inside it resolve per item.
        """
        state = self._surfaces.get(surface_id)
        if state is None:
            return []

        items = as_array(self.resolver.resolve_path(template.path, state.data_model, context_path))
        if items is None:
            return []

        base = pointer.absolute(template.path, context_path).rstrip("/")
        return [
            TemplateInstance(
                id=template.instance_id(index),
                component_id=template.component_id,
                index=index,
                context_path=f"{base}/{index}",
            )
            for index in range(len(items))
        ]

    def get_children(
        self,
        component_id: str,
        surface_id: str,
        context_path: str | None = None,
    ) -> list[str]:
        """Child ids of a component: its ChildList, or the ids it references directly."""
        state = self._surfaces.get(surface_id)
        if state is None:
            return []
        children = state.children_index.get(component_id)
        if children is not None:
            return self.resolve_children(children, surface_id, context_path)
        wrapper = state.get_component(component_id)
        return list(wrapper.component.references()) if wrapper else []

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Receive a SurfaceChange after every successful write."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def revision(self) -> int:
        return self._revision

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock_for(self, surface_id: str) -> threading.RLock:
        """One lock per surface id for the store's lifetime, surviving delete."""
        with self._registry_lock:
            lock = self._locks.get(surface_id)
            if lock is None:
                lock = self._locks[surface_id] = threading.RLock()
            return lock

    def _next_revision(self) -> int:
        with self._registry_lock:
            self._revision += 1
            return self._revision

    def _require(self, surface_id: str) -> SurfaceState:
        """Caller holds the surface lock."""
        state = self._surfaces.get(surface_id)
        if state is not None:
            return state
        if not self.settings.auto_create_surfaces:
            raise SurfaceNotFound(surface_id)

        state = SurfaceState(surface_id=surface_id)
        self._surfaces[surface_id] = state
        logger.info("surface_auto_created", surface_id=surface_id)
        self._publish_surface_count()
        return state

    def _fail(self, surface_id: str, error: StateError) -> Failure:
        info = error.info()
        logger.warning(
            "state_update_rejected",
            surface_id=surface_id,
            code=info.code,
            error=info.message,
            path=info.path,
        )
        return Failure(error)

    def _notify(self, change: SurfaceChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                logger.error(
                    "listener_failed",
                    surface_id=change.surface_id,
                    kind=change.kind.value,
                    error=str(e),
                    exc_info=True,
                )

    def _publish_surface_count(self) -> None:
        if self.metrics:
            self.metrics.set_active_surfaces(len(self._surfaces))
