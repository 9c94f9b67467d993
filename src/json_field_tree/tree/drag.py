"""Drag-and-drop reordering and reparenting of Fields.

``move_field`` detaches the dragged subtree and reinserts it next to (or
inside) the drop target.  A drop that would make a field its own ancestor is
refused, as is any drop whose endpoints no longer exist.  Refusals are silent:
the original tree comes back unchanged and the reason is logged at DEBUG,
since a drag gesture is not something the user expects an error dialog for.
"""

from __future__ import annotations

import logging
from enum import StrEnum, auto

from json_field_tree.tree.mutator import (
    build_index,
    detach_field,
    insert_field,
    is_descendant,
)
from json_field_tree.tree.nodes import Field, Tree

__all__ = ["DropPosition", "DropZone", "can_drop", "drop_zone", "move_field"]

logger = logging.getLogger(__name__)


class DropPosition(StrEnum):
    """Where, relative to the drop target, the dragged field lands.

    - BEFORE: immediately before the target among its siblings.
    - AFTER:  immediately after the target among its siblings.
    - INSIDE: as the last child of the target (OBJECT/ARRAY targets only).
    """

    BEFORE = auto()
    AFTER = auto()
    INSIDE = auto()


class DropZone(StrEnum):
    """Feedback for a hovered drop location.

    - VALID:   dropping here would move the field.
    - INVALID: dropping here would be refused.
    - NONE:    there is no such target.
    """

    VALID = auto()
    INVALID = auto()
    NONE = auto()


def can_drop(tree: Tree, drag_id: str, target_id: str) -> bool:
    """Return False for a drop onto itself or onto one of its own descendants."""
    if drag_id == target_id:
        return False
    dragged = build_index(tree).get(drag_id)
    return not (dragged is not None and is_descendant(dragged, target_id))


def drop_zone(
    tree: Tree,
    drag_id: str,
    target_id: str,
    position: DropPosition,
) -> DropZone:
    """Classify a hovered drop location for visual feedback."""
    if not can_drop(tree, drag_id, target_id):
        return DropZone.INVALID
    target = build_index(tree).get(target_id)
    if target is None:
        return DropZone.NONE
    if position == DropPosition.INSIDE and not target.is_container:
        return DropZone.INVALID
    return DropZone.VALID


def move_field(
    tree: Tree,
    drag_id: str,
    target_id: str,
    new_parent_id: str | None = None,
    position: DropPosition = DropPosition.BEFORE,
) -> tuple[Field, ...]:
    """Move the Field ``drag_id`` next to, or into, the Field ``target_id``.

    Algorithm:
    1. Resolve both fields; a missing one leaves the tree unchanged.
    2. Refuse a drop onto itself or onto one of its descendants.
    3. For ``DropPosition.INSIDE`` the target becomes the new parent and the
       field is appended to its children.
    4. Refuse when the new parent does not resolve, is a leaf type, or lies
       inside the dragged subtree.
    5. Detach the dragged subtree and insert it before/after the target in
       the new parent's children (the root list when ``new_parent_id`` is
       None).  When the target is not among those siblings the field is
       appended.
    6. The moved subtree gets its new ``parent_id`` and ``depth``; array
       children are renumbered at both source and destination.

    Args:
        tree:          The current tree.
        drag_id:       Id of the field being dragged.
        target_id:     Id of the field it was released on.
        new_parent_id: Id of the field that will own the moved field; None for
                       the root list.  Ignored for ``DropPosition.INSIDE``.
        position:      Where to land relative to the target.

    Returns:
        The new tree, or a tuple equal to ``tree`` when the move is refused.
    """
    current = tuple(tree)
    index = build_index(current)
    dragged = index.get(drag_id)
    target = index.get(target_id)

    if dragged is None or target is None:
        logger.debug("move_field: unknown drag %r or target %r", drag_id, target_id)
        return current
    if drag_id == target_id or is_descendant(dragged, target_id):
        logger.debug("move_field: cannot drop %r onto itself or a descendant", drag_id)
        return current

    position = DropPosition(position)
    if position == DropPosition.INSIDE:
        new_parent_id = target_id

    if new_parent_id is not None:
        parent = index.get(new_parent_id)
        if (
            parent is None
            or not parent.is_container
            or new_parent_id == drag_id
            or is_descendant(dragged, new_parent_id)
        ):
            logger.debug("move_field: %r is not a valid new parent", new_parent_id)
            return current

    detached, moved = detach_field(current, drag_id)
    if moved is None:
        return current

    if new_parent_id is None:
        siblings = detached
    else:
        siblings = build_index(detached)[new_parent_id].children

    insert_at: int | None = None
    if position != DropPosition.INSIDE:
        for i, sibling in enumerate(siblings):
            if sibling.id == target_id:
                insert_at = i + 1 if position == DropPosition.AFTER else i
                break

    return insert_field(detached, moved, new_parent_id, insert_at)
