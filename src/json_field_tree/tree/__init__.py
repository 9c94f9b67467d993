"""Tree subpackage: the field-tree document model and its pure operations.

Re-exports the public API for the tree module:
- Field, FieldType: the node dataclass and its type enum
- validator: key validation, duplicate detection and key sanitizing
- mutator: add/remove/update/toggle and lookup helpers
- drag: drag-and-drop moves with cycle prevention
- flatten: collapse-aware list view for renderers
- serde: persisted (plain JSON) form of a tree
"""

from json_field_tree.tree.drag import DropPosition, DropZone, can_drop, drop_zone, move_field
from json_field_tree.tree.flatten import (
    FieldStats,
    FlatRow,
    count_fields,
    field_stats,
    flatten,
)
from json_field_tree.tree.ids import random_id
from json_field_tree.tree.mutator import (
    add_field,
    build_index,
    collapse_all,
    detach_field,
    expand_all,
    find_by_id,
    find_parent_of,
    insert_field,
    is_descendant,
    iter_fields,
    new_tree,
    reindex_tree,
    remove_field,
    set_collapsed_all,
    toggle_collapse,
    update_field,
)
from json_field_tree.tree.nodes import Field, FieldType, FieldValue, Tree, default_value, new_field
from json_field_tree.tree.serde import dumps, loads, tree_from_data, tree_to_data
from json_field_tree.tree.validator import (
    KeyValidation,
    duplicate_key_ids,
    has_duplicate_sibling_keys,
    is_valid_key,
    sanitize_key,
    tree_has_duplicate_keys,
    validate_key,
)

__all__ = [
    "DropPosition",
    "DropZone",
    "Field",
    "FieldStats",
    "FieldType",
    "FieldValue",
    "FlatRow",
    "KeyValidation",
    "Tree",
    "add_field",
    "build_index",
    "can_drop",
    "collapse_all",
    "count_fields",
    "default_value",
    "detach_field",
    "drop_zone",
    "dumps",
    "duplicate_key_ids",
    "expand_all",
    "field_stats",
    "find_by_id",
    "find_parent_of",
    "flatten",
    "has_duplicate_sibling_keys",
    "insert_field",
    "is_descendant",
    "is_valid_key",
    "iter_fields",
    "loads",
    "move_field",
    "new_field",
    "new_tree",
    "random_id",
    "reindex_tree",
    "remove_field",
    "sanitize_key",
    "set_collapsed_all",
    "toggle_collapse",
    "tree_from_data",
    "tree_has_duplicate_keys",
    "tree_to_data",
    "update_field",
    "validate_key",
]
