"""End-to-end editing scenarios driven through the public tree operations.

Each test builds a tree the way an editor session would (starting from a
blank tree and applying add/update/remove/move) and checks the synthesized
document.
"""

from __future__ import annotations

from typing import Any

from json_field_tree import ErrorReason, FieldType, synthesize
from json_field_tree.tree import (
    add_field,
    find_by_id,
    move_field,
    new_tree,
    remove_field,
    update_field,
)


def test_single_string_field(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="name", type=FieldType.STRING, value="Ada")

    result = synthesize(tree)
    assert result.value == {"name": "Ada"}
    assert result.errors == {}


def test_nested_object_with_number(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="user", type=FieldType.OBJECT)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = update_field(tree, "f2", key="age", type=FieldType.NUMBER, value="36")

    assert synthesize(tree).value == {"user": {"age": 36}}


def test_array_children_and_removal(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="tags", type=FieldType.ARRAY)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = update_field(tree, "f2", value="x")
    tree = update_field(tree, "f3", value="y")
    assert synthesize(tree).value == {"tags": ["x", "y"]}

    tree = remove_field(tree, "f2")
    remaining = find_by_id(tree, "f3")
    assert remaining is not None
    assert remaining.key == "0"
    assert synthesize(tree).value == {"tags": ["y"]}


def test_duplicate_root_keys(ids: Any) -> None:
    tree = new_tree(ids)
    tree = add_field(tree, id_factory=ids)
    tree = update_field(tree, "f1", key="dup", value="one")
    tree = update_field(tree, "f2", key="dup", value="two")

    result = synthesize(tree)
    assert result.errors == {
        "f1": ErrorReason.DUPLICATE_KEY,
        "f2": ErrorReason.DUPLICATE_KEY,
    }
    assert "dup" not in result.value


def test_drop_ancestor_onto_descendant(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="outer", type=FieldType.OBJECT)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = update_field(tree, "f2", key="inner", type=FieldType.OBJECT)
    tree = add_field(tree, "f2", id_factory=ids)

    moved = move_field(tree, "f1", "f3", new_parent_id="f2")
    assert moved == tree


def test_invalid_number_is_recorded(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="age", type=FieldType.NUMBER, value="abc")
    tree = add_field(tree, id_factory=ids)
    tree = update_field(tree, "f2", key="name", value="Ada")

    result = synthesize(tree)
    assert result.value == {"name": "Ada"}
    assert result.errors == {"f1": ErrorReason.INVALID_NUMBER}


def test_retyping_a_populated_object_to_array(ids: Any) -> None:
    tree = new_tree(ids)
    tree = update_field(tree, "f1", key="items", type=FieldType.OBJECT)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = add_field(tree, "f1", id_factory=ids)
    tree = update_field(tree, "f2", key="a", value="first")
    tree = update_field(tree, "f3", key="b", value="second")
    assert synthesize(tree).value == {"items": {"a": "first", "b": "second"}}

    tree = update_field(tree, "f1", type=FieldType.ARRAY)
    assert synthesize(tree).value == {"items": ["first", "second"]}


def test_reorder_changes_output_order(ids: Any) -> None:
    tree = new_tree(ids)
    tree = add_field(tree, id_factory=ids)
    tree = update_field(tree, "f1", key="first", value="1")
    tree = update_field(tree, "f2", key="second", value="2")

    tree = move_field(tree, "f2", "f1")
    assert list(synthesize(tree).value) == ["second", "first"]
