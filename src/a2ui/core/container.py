"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..binding.resolver import BindingResolver
from ..surface.store import SurfaceStore
from .config import Settings, get_settings
from .logging_config import configure_logging
from .metrics import EngineMetrics


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide explicit settings, or the cached environment settings."""
        settings = self.settings or get_settings()
        configure_logging(settings.log_level, settings.json_logs)
        return settings

    @singleton
    @provider
    def provide_metrics(self) -> EngineMetrics:
        """Provide metrics on a private registry."""
        return EngineMetrics()

    @singleton
    @provider
    def provide_resolver(self) -> BindingResolver:
        """Provide the stateless binding resolver."""
        return BindingResolver()

    @singleton
    @provider
    def provide_store(
        self, resolver: BindingResolver, settings: Settings, metrics: EngineMetrics
    ) -> SurfaceStore:
        """Provide the surface store with all dependencies."""
        return SurfaceStore(resolver=resolver, settings=settings, metrics=metrics)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
