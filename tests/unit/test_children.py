"""Tests for child lists and templates."""

import pytest

from a2ui.core import MalformedChildList
from a2ui.protocol.children import (
    ExplicitList,
    Template,
    TemplateDefinition,
    decode_child_list,
    explicit_list,
    template,
)


@pytest.mark.unit
def test_bare_id_array():
    """Test canonical explicit list."""
    assert decode_child_list(["a", "b"]) == explicit_list(["a", "b"])


@pytest.mark.unit
def test_empty_array_is_explicit_list():
    """Test no children."""
    assert decode_child_list([]) == ExplicitList(())


@pytest.mark.unit
def test_template_object():
    """Test canonical template shape."""
    assert decode_child_list({"componentId": "item", "path": "/items"}) == template("item", "/items")


@pytest.mark.unit
def test_legacy_wrappers():
    """Test v0.8 explicitList / template / dataBinding shapes."""
    assert decode_child_list({"explicitList": ["x"]}) == explicit_list(["x"])
    assert decode_child_list(
        {"template": {"componentId": "item", "dataBinding": "/items"}}
    ) == template("item", "/items")
    assert decode_child_list(
        {"template": {"componentId": "item", "dataBinding": {"path": "/items"}}}
    ) == template("item", "/items")


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    ["a", ["a", 1], {"componentId": "x"}, {"path": "/x"}, {"explicitList": "a"}, None],
)
def test_malformed_child_lists(raw):
    """Test shapes that match nothing."""
    with pytest.raises(MalformedChildList):
        decode_child_list(raw, "children")


@pytest.mark.unit
def test_instance_ids():
    """Test template instance naming."""
    definition = TemplateDefinition(component_id="tmplId", path="/items")
    assert [definition.instance_id(i) for i in range(3)] == ["tmplId_0", "tmplId_1", "tmplId_2"]


@pytest.mark.unit
def test_encode_is_canonical():
    """Test both variants encode to v0.9 shapes."""
    assert explicit_list(["a"]).encode() == ["a"]
    assert Template(TemplateDefinition("c", "/p")).encode() == {"componentId": "c", "path": "/p"}
