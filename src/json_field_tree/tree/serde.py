"""Persistence form of a tree: plain JSON data and text.

Trees are stored as a list of field objects using the same property names as
the editor's saved state::

    [{"id": "k3x9", "key": "user", "value": "{}", "type": "object",
      "children": [...], "isCollapsed": false, "depth": 0, "parentId": null}]

Older saved states may lack ``children``, ``isCollapsed``, ``depth`` or
``parentId``; restoring fills them in (``depth``/``parentId`` are always
recomputed from position).  Round-trip fidelity is exact: restoring a
persisted tree and synthesizing it reproduces the original output.
"""

from __future__ import annotations

import json
from typing import Any

from json_field_tree.tree.mutator import iter_fields, reindex_tree
from json_field_tree.tree.nodes import Field, FieldType, Tree

__all__ = ["dumps", "loads", "tree_from_data", "tree_to_data"]


def _field_to_data(field: Field) -> dict[str, Any]:
    return {
        "id": field.id,
        "key": field.key,
        "value": field.value,
        "type": str(field.type),
        "children": [_field_to_data(c) for c in field.children],
        "isCollapsed": field.is_collapsed,
        "depth": field.depth,
        "parentId": field.parent_id,
    }


def tree_to_data(tree: Tree) -> list[dict[str, Any]]:
    """Convert a tree into a JSON-compatible list of dicts."""
    return [_field_to_data(field) for field in tree]


def _field_from_data(data: Any, path: str) -> Field:
    if not isinstance(data, dict):
        msg = f"{path}: expected an object, got {type(data).__name__}"
        raise ValueError(msg)

    field_id = data.get("id")
    if not isinstance(field_id, str) or not field_id:
        msg = f"{path}: missing or invalid 'id'"
        raise ValueError(msg)

    key = data.get("key", "")
    if not isinstance(key, str):
        msg = f"{path}: 'key' must be a string"
        raise ValueError(msg)

    value = data.get("value", "")
    if value is not None and not isinstance(value, (str, int, float, bool)):
        msg = f"{path}: 'value' must be a scalar"
        raise ValueError(msg)

    try:
        field_type = FieldType(data.get("type", FieldType.STRING))
    except ValueError as exc:
        msg = f"{path}: unknown type {data.get('type')!r}"
        raise ValueError(msg) from exc

    raw_children = data.get("children") or []
    if not isinstance(raw_children, list):
        msg = f"{path}: 'children' must be a list"
        raise ValueError(msg)

    return Field(
        id=field_id,
        key=key,
        value=value,
        type=field_type,
        children=tuple(
            _field_from_data(c, f"{path}/children/{i}")
            for i, c in enumerate(raw_children)
        ),
        is_collapsed=bool(data.get("isCollapsed", False)),
    )


def tree_from_data(data: Any) -> tuple[Field, ...]:
    """Rebuild a tree from the output of ``tree_to_data``.

    Raises:
        ValueError: If ``data`` is not a list of field objects, a field has a
            missing id or an unknown type, an id occurs twice, or the list
            is empty.
    """
    if not isinstance(data, list):
        msg = f"expected a list of fields, got {type(data).__name__}"
        raise ValueError(msg)

    if not data:
        msg = "a tree holds at least one field"
        raise ValueError(msg)

    tree = reindex_tree(
        tuple(_field_from_data(item, f"/{i}") for i, item in enumerate(data))
    )

    seen: set[str] = set()
    for field in iter_fields(tree):
        if field.id in seen:
            msg = f"duplicate field id {field.id!r}"
            raise ValueError(msg)
        seen.add(field.id)
    return tree


def dumps(tree: Tree) -> str:
    """Serialize a tree to JSON text."""
    return json.dumps(tree_to_data(tree), separators=(",", ":"), allow_nan=False)


def loads(text: str | bytes) -> tuple[Field, ...]:
    """Restore a tree from JSON text produced by ``dumps``.

    Raises:
        ValueError: If the text is not valid JSON or not a valid tree.
    """
    return tree_from_data(json.loads(text))
