"""Surface state: immutable snapshots and the per-surface store."""

from .state import ChangeKind, SurfaceChange, SurfaceState, TemplateInstance
from .store import SurfaceStore

__all__ = ["ChangeKind", "SurfaceChange", "SurfaceState", "TemplateInstance", "SurfaceStore"]
