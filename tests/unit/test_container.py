"""Dependency injection tests."""

import pytest

from a2ui.binding import BindingResolver
from a2ui.core import EngineMetrics
from a2ui.core.config import Settings
from a2ui.surface import SurfaceStore


@pytest.mark.unit
def test_container_provides_singletons(di_container, settings):
    """Test wiring and singleton scope."""
    store = di_container.get(SurfaceStore)

    assert store is di_container.get(SurfaceStore)
    assert store.resolver is di_container.get(BindingResolver)
    assert store.metrics is di_container.get(EngineMetrics)
    assert di_container.get(Settings) is settings


@pytest.mark.unit
def test_container_store_is_usable(di_container):
    """Test the wired store applies writes and records metrics."""
    store = di_container.get(SurfaceStore)
    store.create_surface("s1")
    assert store.get_data_model("s1") == {}
    assert di_container.get(EngineMetrics).sample("a2ui_surfaces_active") == 1
