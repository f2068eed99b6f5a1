"""Immutable per-surface snapshots."""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ..protocol.children import ChildList
from ..protocol.components import ComponentWrapper
from ..protocol.values import JSONObject, JSONValue


def _empty() -> Mapping:
    return MappingProxyType({})


class ChangeKind(str, Enum):
    """What a successful write touched."""

    CREATED = "created"
    COMPONENTS = "components"
    DATA_MODEL = "data_model"
    DELETED = "deleted"


@dataclass(frozen=True)
class SurfaceChange:
    """Notification sent to store subscribers after each applied write."""

    surface_id: str
    kind: ChangeKind
    revision: int


@dataclass(frozen=True)
class TemplateInstance:
    """One stamped child of a template.

    ``context_path`` is the absolute path of the array element; relative
    bindings inside the instance resolve against it.
    """

    id: str
    component_id: str
    index: int
    context_path: str


@dataclass(frozen=True)
class SurfaceState:
    """
    Consistent view of one surface.

    Writers never mutate a state; they build a new one and swap it in, so
    a reader holding a snapshot always sees a fully-applied update.
    ``data_model`` is shared with later states; treat it as read-only and
    use SurfaceStore.get_data_model for a private copy.
    """

    surface_id: str
    catalog_id: str | None = None
    theme: Mapping[str, JSONValue] | None = None
    send_data_model: bool = False
    components: Mapping[str, ComponentWrapper] = field(default_factory=_empty)
    children_index: Mapping[str, ChildList] = field(default_factory=_empty)
    data_model: JSONObject = field(default_factory=dict)
    revision: int = 0

    def get_component(self, component_id: str) -> ComponentWrapper | None:
        return self.components.get(component_id)

    def with_components(self, wrappers: tuple[ComponentWrapper, ...]) -> "SurfaceState":
        """Upsert wrappers by id; container children go to the index."""
        components = dict(self.components)
        children_index = dict(self.children_index)
        for wrapper in wrappers:
            components[wrapper.id] = wrapper
            child_list = wrapper.component.child_list()
            if child_list is not None:
                children_index[wrapper.id] = child_list
            else:
                # id may have been a container before this upsert
                children_index.pop(wrapper.id, None)
        return replace(
            self,
            components=MappingProxyType(components),
            children_index=MappingProxyType(children_index),
            revision=self.revision + 1,
        )

    def with_data_model(self, data_model: JSONObject) -> "SurfaceState":
        return replace(self, data_model=data_model, revision=self.revision + 1)
