"""
Metrics Collection
Prometheus counters for message application and outbound actions
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest


class EngineMetrics:
    """
    Collects engine counters on an instance-owned registry.

    Each engine owns its registry, so several engines (or tests) can coexist
    in one process without duplicate-registration errors.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        self.messages_total = Counter(
            "a2ui_messages_total",
            "Server messages processed",
            ["kind", "status"],
            registry=self.registry,
        )
        self.components_rejected = Counter(
            "a2ui_components_rejected_total",
            "Components dropped from an updateComponents batch",
            registry=self.registry,
        )
        self.actions_total = Counter(
            "a2ui_actions_total",
            "Outbound client actions",
            ["status"],
            registry=self.registry,
        )
        self.surfaces_active = Gauge(
            "a2ui_surfaces_active",
            "Surfaces currently held in memory",
            registry=self.registry,
        )

    def record_message(self, kind: str, status: str) -> None:
        """Record a processed server message."""
        self.messages_total.labels(kind=kind, status=status).inc()

    def record_rejected_components(self, count: int) -> None:
        """Record components skipped during batch decoding."""
        if count > 0:
            self.components_rejected.inc(count)

    def record_action(self, status: str) -> None:
        """Record an outbound action attempt."""
        self.actions_total.labels(status=status).inc()

    def set_active_surfaces(self, count: int) -> None:
        """Publish current surface count."""
        self.surfaces_active.set(count)

    def sample(self, name: str, **labels: str) -> float:
        """Read a current sample value (0.0 when never recorded)."""
        value = self.registry.get_sample_value(name, labels or None)
        return value if value is not None else 0.0

    def export(self) -> bytes:
        """Render metrics in Prometheus text format."""
        return generate_latest(self.registry)
