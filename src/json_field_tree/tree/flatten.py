"""Flattener: depth-ordered, collapse-aware list view of a tree.

Renderers draw the tree as a flat list of rows, indented by depth.  Children
of a collapsed field are hidden; the collapsed field itself is still shown.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from json_field_tree.tree.mutator import iter_fields
from json_field_tree.tree.nodes import Field, FieldType, Tree

__all__ = ["FieldStats", "FlatRow", "count_fields", "field_stats", "flatten"]


@dataclass(frozen=True, slots=True)
class FlatRow:
    """One visible row of the flattened tree.

    Attributes:
        field:          The Field shown on this row.
        depth:          Nesting level, 0 for root fields.
        index:          Position among its siblings.
        parent_id:      Id of the owning field; None at root level.
        is_array_child: True when the owner is an ARRAY field, in which case
                        ``index`` is shown instead of the key.
    """

    field: Field
    depth: int
    index: int
    parent_id: str | None = None
    is_array_child: bool = False


@dataclass(frozen=True, slots=True)
class FieldStats:
    """Counts shown in the editor's summary bar."""

    total: int
    with_keys: int
    valid: int


def flatten(tree: Tree) -> list[FlatRow]:
    """Return the visible rows of ``tree`` in depth-first pre-order."""
    rows: list[FlatRow] = []

    def visit(siblings: Tree, depth: int, parent: Field | None) -> None:
        for i, field in enumerate(siblings):
            rows.append(
                FlatRow(
                    field=field,
                    depth=depth,
                    index=i,
                    parent_id=parent.id if parent is not None else None,
                    is_array_child=parent is not None
                    and parent.type == FieldType.ARRAY,
                )
            )
            if field.children and not field.is_collapsed:
                visit(field.children, depth + 1, field)

    visit(tree, 0, None)
    return rows


def count_fields(tree: Tree) -> int:
    """Total number of Fields, collapsed or not."""
    return sum(1 for _ in iter_fields(tree))


def field_stats(tree: Tree, errors: Mapping[str, object]) -> FieldStats:
    """Count all fields, those with a non-blank key, and those also error-free."""
    fields = list(iter_fields(tree))
    keyed = [f for f in fields if f.key.strip()]
    return FieldStats(
        total=len(fields),
        with_keys=len(keyed),
        valid=sum(1 for f in keyed if f.id not in errors),
    )
