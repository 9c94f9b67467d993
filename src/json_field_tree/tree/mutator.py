"""Pure tree operations: lookup, insertion, removal, update and collapse.

Every function takes a tree (an ordered sequence of root Fields) and returns a
new tuple; the input is never modified.  Only the Fields on the path from the
root to the edited node are rebuilt, every other subtree is shared with the
input tree.

Fields are addressed by id and found by depth-first search.  Operations given
an id that does not resolve are silent no-ops (logged at DEBUG): they return a
tree equal to the input rather than raising, because they are driven by UI
gestures that may race with other edits.

Children of ARRAY fields carry their zero-based position as their key.  Any
operation that inserts or removes array children renumbers the remaining
siblings so keys and positions never disagree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace
from typing import Any

from json_field_tree.protocols import IdGenerator
from json_field_tree.tree.nodes import Field, FieldType, Tree, default_value, new_field

__all__ = [
    "add_field",
    "build_index",
    "collapse_all",
    "detach_field",
    "expand_all",
    "find_by_id",
    "find_parent_of",
    "insert_field",
    "is_descendant",
    "iter_fields",
    "new_tree",
    "reindex_tree",
    "remove_field",
    "set_collapsed_all",
    "toggle_collapse",
    "update_field",
]

logger = logging.getLogger(__name__)

# Attributes callers may change through update_field.  Structure (children,
# depth, parent_id) only changes through insertion, removal and moves.
_UPDATABLE = frozenset({"key", "value", "type", "is_collapsed"})


# ----------------------------------------------------------------------
# Read-only helpers
# ----------------------------------------------------------------------


def iter_fields(tree: Iterable[Field]) -> Iterator[Field]:
    """Yield every Field of the tree in depth-first pre-order."""
    for field in tree:
        yield field
        yield from iter_fields(field.children)


def find_by_id(tree: Tree, field_id: str) -> Field | None:
    """Return the Field with ``field_id``, or None if it is not in the tree."""
    for field in iter_fields(tree):
        if field.id == field_id:
            return field
    return None


def find_parent_of(tree: Tree, field_id: str) -> Field | None:
    """Return the Field owning ``field_id``.

    Returns None both when the field sits in the root list and when it is not
    in the tree at all.
    """
    for field in iter_fields(tree):
        if any(child.id == field_id for child in field.children):
            return field
    return None


def build_index(tree: Tree) -> dict[str, Field]:
    """Return an ``id -> Field`` map of every Field in the tree."""
    return {field.id: field for field in iter_fields(tree)}


def is_descendant(field: Field, field_id: str) -> bool:
    """Return True if ``field_id`` appears anywhere below ``field``.

    A field is not its own descendant.
    """
    return any(
        child.id == field_id or is_descendant(child, field_id)
        for child in field.children
    )


# ----------------------------------------------------------------------
# Structural helpers
# ----------------------------------------------------------------------


def _renumber(children: tuple[Field, ...]) -> tuple[Field, ...]:
    """Set each child's key to its position, reusing already-correct children."""
    return tuple(
        child if child.key == str(i) else replace(child, key=str(i))
        for i, child in enumerate(children)
    )


def _with_children(parent: Field, children: tuple[Field, ...]) -> Field:
    if parent.type == FieldType.ARRAY:
        children = _renumber(children)
    return replace(parent, children=children)


def _rebase(field: Field, parent_id: str | None, depth: int) -> Field:
    """Return ``field`` with depth and parent_id recomputed over its subtree."""
    children = tuple(_rebase(c, field.id, depth + 1) for c in field.children)
    unchanged = (
        field.parent_id == parent_id
        and field.depth == depth
        and all(new is old for new, old in zip(children, field.children, strict=True))
    )
    if unchanged:
        return field
    return replace(field, parent_id=parent_id, depth=depth, children=children)


def reindex_tree(tree: Tree) -> tuple[Field, ...]:
    """Recompute ``depth`` and ``parent_id`` of every Field from its position."""
    return tuple(_rebase(field, None, 0) for field in tree)


def _map_field(
    siblings: tuple[Field, ...],
    field_id: str,
    fn: Callable[[Field], Field],
) -> tuple[tuple[Field, ...], bool]:
    """Replace the Field with ``field_id`` by ``fn(field)``.

    Returns the rebuilt sibling tuple and whether the id was found.  Parents
    on the path are rebuilt with ``replace`` so their own attributes survive.
    """
    for i, field in enumerate(siblings):
        if field.id == field_id:
            return siblings[:i] + (fn(field),) + siblings[i + 1 :], True
        if field.children:
            children, found = _map_field(field.children, field_id, fn)
            if found:
                parent = replace(field, children=children)
                return siblings[:i] + (parent,) + siblings[i + 1 :], True
    return siblings, False


def _insert_at(
    items: tuple[Field, ...], item: Field, index: int | None
) -> tuple[Field, ...]:
    result = list(items)
    if index is None:
        result.append(item)
    else:
        result.insert(index, item)
    return tuple(result)


# ----------------------------------------------------------------------
# Mutations
# ----------------------------------------------------------------------


def new_tree(id_factory: IdGenerator | None = None) -> tuple[Field, ...]:
    """Return a tree holding a single blank STRING field."""
    return (new_field(id_factory),)


def detach_field(tree: Tree, field_id: str) -> tuple[tuple[Field, ...], Field | None]:
    """Cut the Field with ``field_id`` (and its subtree) out of the tree.

    Unlike ``remove_field`` this never reinstates a blank root field, and it
    hands back the removed subtree so it can be inserted elsewhere.

    Returns:
        ``(new_tree, removed)``; ``removed`` is None (and the tree unchanged)
        when the id does not resolve.
    """

    def detach(
        siblings: tuple[Field, ...],
    ) -> tuple[tuple[Field, ...], Field | None]:
        for i, field in enumerate(siblings):
            if field.id == field_id:
                return siblings[:i] + siblings[i + 1 :], field
            if field.children:
                children, removed = detach(field.children)
                if removed is not None:
                    parent = _with_children(field, children)
                    return siblings[:i] + (parent,) + siblings[i + 1 :], removed
        return siblings, None

    return detach(tuple(tree))


def insert_field(
    tree: Tree,
    field: Field,
    parent_id: str | None = None,
    index: int | None = None,
) -> tuple[Field, ...]:
    """Insert ``field`` (with its subtree) at root or under ``parent_id``.

    The inserted subtree's ``depth`` and ``parent_id`` are recomputed.  ``index``
    follows ``list.insert`` semantics; None appends.

    No-op when ``parent_id`` does not resolve, resolves to a leaf-typed field,
    or when any id of the inserted subtree already exists in the tree.
    """
    current = tuple(tree)
    existing = build_index(current)
    if any(f.id in existing for f in iter_fields((field,))):
        logger.debug("insert_field: id of %r already present, ignoring", field.id)
        return current

    if parent_id is None:
        return _insert_at(current, _rebase(field, None, 0), index)

    parent = existing.get(parent_id)
    if parent is None or not parent.is_container:
        logger.debug("insert_field: no container with id %r, ignoring", parent_id)
        return current

    def attach(target: Field) -> Field:
        child = _rebase(field, target.id, target.depth + 1)
        return _with_children(target, _insert_at(target.children, child, index))

    updated, _ = _map_field(current, parent_id, attach)
    return updated


def add_field(
    tree: Tree,
    parent_id: str | None = None,
    index: int | None = None,
    *,
    field: Field | None = None,
    id_factory: IdGenerator | None = None,
) -> tuple[Field, ...]:
    """Add a new Field at root level or as a child of ``parent_id``.

    Args:
        tree:       The current tree.
        parent_id:  Owning field; None adds to the root list.
        index:      Position among the siblings; None appends.
        field:      Field to add.  Defaults to a blank STRING field.
        id_factory: Id generator for the blank field.  Ignored when ``field``
                    is given.

    Returns:
        The new tree.  Unchanged when ``parent_id`` does not resolve to an
        OBJECT or ARRAY field.
    """
    item = field if field is not None else new_field(id_factory)
    return insert_field(tree, item, parent_id, index)


def remove_field(
    tree: Tree,
    field_id: str,
    *,
    id_factory: IdGenerator | None = None,
) -> tuple[Field, ...]:
    """Delete the Field with ``field_id`` together with its whole subtree.

    Array children left behind are renumbered.  If the root list ends up
    empty, a single blank STRING field (from ``id_factory``) is put back so
    the tree is never empty.
    """
    updated, removed = detach_field(tree, field_id)
    if removed is None:
        logger.debug("remove_field: no field with id %r", field_id)
        return updated
    if not updated:
        return new_tree(id_factory)
    return updated


def update_field(tree: Tree, field_id: str, **updates: Any) -> tuple[Field, ...]:
    """Merge ``updates`` into the Field with ``field_id``.

    Accepted keywords: ``key``, ``value``, ``type``, ``is_collapsed``.

    Changing ``type`` (to a different type) also:
    - resets ``value`` to the new type's default unless ``value`` is given
      in the same call,
    - drops the children when the new type is a leaf type,
    - renumbers the children's keys when the new type is ARRAY.

    Raises:
        TypeError: If an unknown attribute name is passed.
        ValueError: If ``type`` is not a valid FieldType value.
    """
    unknown = set(updates) - _UPDATABLE
    if unknown:
        msg = f"update_field() got unexpected attribute(s): {sorted(unknown)}"
        raise TypeError(msg)
    if "type" in updates:
        updates["type"] = FieldType(updates["type"])

    def apply(field: Field) -> Field:
        changes = dict(updates)
        new_type = changes.get("type", field.type)
        if new_type != field.type:
            changes.setdefault("value", default_value(new_type))
            if not new_type.is_container:
                changes["children"] = ()
            elif new_type == FieldType.ARRAY:
                changes["children"] = _renumber(field.children)
        return replace(field, **changes)

    updated, found = _map_field(tuple(tree), field_id, apply)
    if not found:
        logger.debug("update_field: no field with id %r", field_id)
    return updated


def toggle_collapse(tree: Tree, field_id: str) -> tuple[Field, ...]:
    """Flip ``is_collapsed`` on the Field with ``field_id``.

    Leaf-typed fields have nothing to collapse and are left as they are.
    """

    def flip(field: Field) -> Field:
        if not field.is_container:
            return field
        return replace(field, is_collapsed=not field.is_collapsed)

    updated, found = _map_field(tuple(tree), field_id, flip)
    if not found:
        logger.debug("toggle_collapse: no field with id %r", field_id)
    return updated


def set_collapsed_all(tree: Tree, collapsed: bool) -> tuple[Field, ...]:
    """Set ``is_collapsed`` on every OBJECT and ARRAY field of the tree."""

    def visit(field: Field) -> Field:
        children = tuple(visit(c) for c in field.children)
        if field.is_container:
            return replace(field, is_collapsed=collapsed, children=children)
        return replace(field, children=children) if children else field

    return tuple(visit(field) for field in tree)


def collapse_all(tree: Tree) -> tuple[Field, ...]:
    return set_collapsed_all(tree, True)


def expand_all(tree: Tree) -> tuple[Field, ...]:
    return set_collapsed_all(tree, False)
