"""Pytest configuration and fixtures."""

import os

import pytest
from returns.result import Failure, Result, Success

from a2ui.binding import BindingResolver
from a2ui.core import EngineMetrics, TransportError, create_container
from a2ui.core.config import Settings
from a2ui.session import Session
from a2ui.surface import SurfaceStore


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['A2UI_LOG_LEVEL'] = 'DEBUG'
    os.environ['A2UI_AUTO_CREATE_SURFACES'] = 'false'


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (explicit, independent of the cached environment copy)."""
    return Settings()


@pytest.fixture
def metrics():
    """Metrics on a private registry."""
    return EngineMetrics()


@pytest.fixture
def resolver():
    """Binding resolver."""
    return BindingResolver()


@pytest.fixture
def store(resolver, settings, metrics):
    """Empty surface store."""
    return SurfaceStore(resolver=resolver, settings=settings, metrics=metrics)


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


# ============================================================================
# Transport Fixtures
# ============================================================================

class RecordingTransport:
    """Transport double that records every outbound payload."""

    def __init__(self, fail: bool = False):
        self.sent: list[bytes] = []
        self.fail = fail

    def send(self, encoded: bytes) -> Result[None, TransportError]:
        if self.fail:
            return Failure(TransportError("connection closed"))
        self.sent.append(encoded)
        return Success(None)


@pytest.fixture
def transport():
    """Recording transport."""
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    """Transport whose sends always fail."""
    return RecordingTransport(fail=True)


@pytest.fixture
def session(store, transport, settings):
    """Session wired to the store and a recording transport."""
    return Session(store, transport=transport, settings=settings)


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def contact_form_messages():
    """A v0.9 stream: surface, components with a template, then data."""
    return [
        {"version": "v0.9", "createSurface": {"surfaceId": "s1", "catalogId": "standard"}},
        {
            "version": "v0.9",
            "updateComponents": {
                "surfaceId": "s1",
                "components": [
                    {"id": "root", "component": "Column", "children": ["title", "list", "submit"]},
                    {"id": "title", "component": "Text", "text": {"path": "/form/title"}, "variant": "h1"},
                    {"id": "list", "component": "List", "children": {"componentId": "row", "path": "/contacts"}},
                    {"id": "row", "component": "Text", "text": {"path": "name"}},
                    {"id": "submit_label", "component": "Text", "text": "Send"},
                    {
                        "id": "submit",
                        "component": "Button",
                        "child": "submit_label",
                        "variant": "primary",
                        "action": {
                            "event": {
                                "name": "submit_form",
                                "context": {"email": {"path": "/form/email"}, "source": "web"},
                            }
                        },
                    },
                ],
            },
        },
        {
            "version": "v0.9",
            "updateDataModel": {
                "surfaceId": "s1",
                "path": "/",
                "value": {
                    "form": {"title": "Contacts", "email": "ann@example.com"},
                    "contacts": [{"name": "Ann"}, {"name": "Bea"}, {"name": "Cy"}],
                },
            },
        },
    ]


@pytest.fixture
def legacy_components():
    """The same component in v0.8 nested shape with legacy property names."""
    return [
        {
            "id": "heading",
            "component": {
                "Text": {
                    "text": {"literalString": "Welcome"},
                    "usageHint": "h2",
                    "alignment": "center",
                }
            },
        },
        {
            "id": "row",
            "component": {
                "Row": {
                    "children": {"explicitList": ["heading"]},
                    "distribution": "spaceBetween",
                    "alignment": "center",
                }
            },
        },
    ]
