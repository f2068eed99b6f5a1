"""Tests for engine metrics."""

import pytest

from a2ui.core import EngineMetrics


@pytest.mark.unit
def test_counters(metrics):
    """Test recording and sampling."""
    metrics.record_message("createSurface", "applied")
    metrics.record_message("createSurface", "applied")
    metrics.record_rejected_components(0)
    metrics.record_rejected_components(3)
    metrics.record_action("sent")
    metrics.set_active_surfaces(2)

    assert metrics.sample("a2ui_messages_total", kind="createSurface", status="applied") == 2
    assert metrics.sample("a2ui_components_rejected_total") == 3
    assert metrics.sample("a2ui_actions_total", status="sent") == 1
    assert metrics.sample("a2ui_surfaces_active") == 2
    assert metrics.sample("a2ui_actions_total", status="failed") == 0


@pytest.mark.unit
def test_instances_are_isolated():
    """Test separate registries never collide."""
    first, second = EngineMetrics(), EngineMetrics()
    first.record_action("sent")
    assert second.sample("a2ui_actions_total", status="sent") == 0


@pytest.mark.unit
def test_export():
    """Test Prometheus text output."""
    metrics = EngineMetrics()
    metrics.record_message("deleteSurface", "applied")
    assert b"a2ui_messages_total" in metrics.export()
