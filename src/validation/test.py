"""Tests for layer tree validation."""

import pytest

from src.layer import ComponentLayer, TextLayer

from .lib import is_valid_tree, validate_tree


@pytest.mark.unit
def test_valid_tree_has_no_issues():
    tree = (
        ComponentLayer(id="a", type="Card", children=(TextLayer(id="b"),)),
        TextLayer(id="c"),
    )
    assert validate_tree(tree) == []
    assert is_valid_tree(tree)


@pytest.mark.unit
def test_empty_tree_is_valid():
    assert is_valid_tree(())


@pytest.mark.unit
def test_duplicate_ids_reported():
    tree = (
        ComponentLayer(id="a", type="Card", children=(TextLayer(id="x"),)),
        TextLayer(id="x", text="other"),
    )
    issues = validate_tree(tree)
    assert [(i.layer_id, i.error_type) for i in issues] == [("x", "duplicate_id")]
    assert "2 times" in issues[0].message


@pytest.mark.unit
def test_shared_node_reported():
    shared = TextLayer(id="s")
    tree = (
        ComponentLayer(id="a", type="Card", children=(shared,)),
        ComponentLayer(id="b", type="Card", children=(shared,)),
    )
    error_types = {i.error_type for i in validate_tree(tree)}
    assert error_types == {"duplicate_id", "shared_node"}


@pytest.mark.unit
def test_children_prop_reported():
    tree = (ComponentLayer(id="a", type="Card", props={"children": "text"}),)
    issues = validate_tree(tree)
    assert issues[0].error_type == "children_prop"
    assert not is_valid_tree(tree)
