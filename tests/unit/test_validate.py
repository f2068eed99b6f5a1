"""Payload linting tests."""

import pytest
from returns.result import Success

from a2ui.protocol.validate import lint_message, validate_message, validate_payload


@pytest.mark.unit
def test_clean_messages(contact_form_messages):
    """Test canonical v0.9 payloads pass."""
    assert validate_payload(contact_form_messages) == Success(None)


@pytest.mark.unit
def test_missing_version_and_surface():
    """Test structural problems."""
    errors = lint_message({"updateDataModel": {"value": 1}})
    assert 'Missing or invalid "version" field (must be "v0.9")' in errors
    assert "updateDataModel must have a valid surfaceId" in errors


@pytest.mark.unit
def test_no_kind():
    """Test envelopes without a message kind."""
    errors = lint_message({"version": "v0.9"})
    assert any("must contain one of" in error for error in errors)


@pytest.mark.unit
def test_deprecated_properties(legacy_components):
    """Test v0.8 names and shapes are reported."""
    errors = validate_message({
        "version": "v0.9",
        "updateComponents": {"surfaceId": "s1", "components": legacy_components},
    }).failure()

    assert 'Component heading: "usageHint" is deprecated, use "variant"' in errors
    assert 'Component row: "distribution" is deprecated, use "justify"' in errors
    assert any("nested component shape is deprecated" in error for error in errors)
    assert any("deprecated literal wrapper" in error for error in errors)


@pytest.mark.unit
def test_invalid_component_structure():
    """Test components without id or discriminator."""
    errors = lint_message({
        "version": "v0.9",
        "updateComponents": {"surfaceId": "s1", "components": [{"component": "Text"}, 3]},
    })
    assert any("index 0" in error for error in errors)
    assert "Component at index 1: must be an object" in errors


@pytest.mark.unit
def test_payload_prefixes_message_index():
    """Test payload-level reporting."""
    errors = validate_payload([
        {"version": "v0.9", "deleteSurface": {"surfaceId": "s1"}},
        {"version": "v0.8", "deleteSurface": {"surfaceId": "s1"}},
    ]).failure()
    assert errors == ['Message 1: Missing or invalid "version" field (must be "v0.9")']
