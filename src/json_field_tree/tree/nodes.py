"""Field dataclass and FieldType StrEnum for the editable document tree.

A document under construction is a *tree*: an ordered tuple of root Fields,
each of which may own further Fields through ``children``.  Fields are frozen,
so every mutation builds new Field objects along the path from the root to the
edited node and shares every untouched subtree with the previous tree.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum, auto

from json_field_tree.protocols import IdGenerator
from json_field_tree.tree.ids import random_id

__all__ = ["Field", "FieldType", "FieldValue", "Tree", "default_value", "new_field"]

# Scalar payload a Field may carry.  Container types may hold a manual JSON
# literal string here, used only when they have no children.
FieldValue = str | int | float | bool | None


class FieldType(StrEnum):
    """Enumeration of the six JSON types a Field can take.

    StrEnum values are the lowercased member names:
    - STRING  -> "string"
    - NUMBER  -> "number"
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    - OBJECT  -> "object"  : owns keyed children
    - ARRAY   -> "array"   : owns positional children
    """

    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    OBJECT = auto()
    ARRAY = auto()

    @property
    def is_container(self) -> bool:
        """True for the two types that may own children."""
        return self in (FieldType.OBJECT, FieldType.ARRAY)


_DEFAULT_VALUES: dict[FieldType, FieldValue] = {
    FieldType.STRING: "",
    FieldType.NUMBER: 0,
    FieldType.BOOLEAN: "false",
    FieldType.NULL: "",
    FieldType.OBJECT: "{}",
    FieldType.ARRAY: "[]",
}


def default_value(field_type: FieldType) -> FieldValue:
    """Return the value a Field is reset to when retyped to ``field_type``."""
    return _DEFAULT_VALUES[FieldType(field_type)]


@dataclass(frozen=True, slots=True)
class Field:
    """A node in the editable document tree.

    Attributes:
        id:           Opaque unique identifier, stable for the field's lifetime.
        key:          Object property name.  For children of an ARRAY field it
                      mirrors the zero-based position as a string and is not
                      used when synthesizing.
        value:        Scalar payload for leaf types; optional manual JSON
                      literal for OBJECT/ARRAY fields without children.
        type:         Which JSON type this field produces (see FieldType).
        children:     Owned child fields.  Non-empty only for containers.
        is_collapsed: Presentation flag; never affects synthesis.
        depth:        Distance from the root list, cached for display.
        parent_id:    Id of the owning field, or None at root level.  A lookup
                      key only: ownership flows through ``children``.
    """

    id: str
    key: str = ""
    value: FieldValue = ""
    type: FieldType = FieldType.STRING
    children: tuple[Field, ...] = ()
    is_collapsed: bool = False
    depth: int = 0
    parent_id: str | None = None

    def __post_init__(self) -> None:
        # Accept plain strings and lists from callers; store canonical forms.
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType(self.type))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_container(self) -> bool:
        return self.type.is_container


# An ordered root list of fields.  Operations return tuples; any sequence of
# Fields is accepted as input.
Tree = Sequence[Field]


def new_field(
    id_factory: IdGenerator | None = None,
    *,
    key: str = "",
    value: FieldValue = "",
    type: FieldType = FieldType.STRING,
    children: Sequence[Field] = (),
) -> Field:
    """Create a Field with a freshly generated id.

    With no arguments this is the blank field an "add field" action inserts:
    a STRING field with an empty key and value.

    Args:
        id_factory: Callable producing unique ids.  Defaults to ``random_id``.
        key:        Initial key.
        value:      Initial value.
        type:       Initial type.
        children:   Initial children (containers only).

    Returns:
        A new root-level Field (depth 0, no parent).
    """
    make_id = id_factory if id_factory is not None else random_id
    return Field(
        id=make_id(),
        key=key,
        value=value,
        type=FieldType(type),
        children=tuple(children),
    )
