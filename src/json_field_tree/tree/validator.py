"""Identifier validation for Field keys.

Checks applied to a key, in order:
1. Empty after trimming          -> ErrorReason.EMPTY_KEY
2. Contains a space character    -> ErrorReason.CONTAINS_SPACE
3. Not a JavaScript-style name   -> ErrorReason.INVALID_IDENTIFIER

A valid identifier starts with a letter, underscore or dollar sign and
continues with letters, digits, underscores or dollar signs (ASCII only).

Duplicate detection works per sibling group: two fields conflict only when
they share an immediate parent (or both sit in the root list).  Children of
ARRAY fields are identified by position, so their groups are never checked.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from json_field_tree.errors import ErrorReason
from json_field_tree.tree.nodes import Field, FieldType

__all__ = [
    "KeyValidation",
    "duplicate_key_ids",
    "has_duplicate_sibling_keys",
    "is_valid_key",
    "sanitize_key",
    "tree_has_duplicate_keys",
    "validate_key",
]

# Full identifier grammar (used with fullmatch)
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

# Every character that may not appear anywhere in an identifier
_INVALID_CHAR = re.compile(r"[^A-Za-z0-9_$]")


@dataclass(frozen=True, slots=True)
class KeyValidation:
    """Outcome of ``validate_key``.

    Truthy when the key is valid, so it can be used directly in conditions.

    Attributes:
        valid:  Whether the key is acceptable.
        reason: Why it is not; None when valid.
    """

    valid: bool
    reason: ErrorReason | None = None

    def __bool__(self) -> bool:
        return self.valid


_VALID = KeyValidation(valid=True)


def validate_key(key: str) -> KeyValidation:
    """Check whether ``key`` is acceptable as an object property name.

    Args:
        key: The raw key as typed by the user (not trimmed).

    Returns:
        A ``KeyValidation``; ``reason`` names the first rule the key breaks.
    """
    if not key.strip():
        return KeyValidation(valid=False, reason=ErrorReason.EMPTY_KEY)
    if " " in key:
        return KeyValidation(valid=False, reason=ErrorReason.CONTAINS_SPACE)
    if _IDENTIFIER.fullmatch(key) is None:
        return KeyValidation(valid=False, reason=ErrorReason.INVALID_IDENTIFIER)
    return _VALID


def is_valid_key(key: str) -> bool:
    """Shorthand for ``validate_key(key).valid``."""
    return validate_key(key).valid


def _duplicated_keys(fields: Iterable[Field]) -> set[str]:
    counts = Counter(f.key for f in fields if f.key.strip())
    return {key for key, count in counts.items() if count > 1}


def has_duplicate_sibling_keys(fields: Iterable[Field]) -> bool:
    """Return True if two or more fields in one sibling list share a key.

    Empty (or whitespace-only) keys never count as duplicates.  Only the
    given list is inspected; use ``tree_has_duplicate_keys`` to check every
    sibling group of a tree.
    """
    return bool(_duplicated_keys(fields))


def duplicate_key_ids(fields: Iterable[Field]) -> set[str]:
    """Return the ids of every field whose key is duplicated in the list.

    Example: keys ``["a", "b", "a"]`` yield the ids of the first and third
    fields.
    """
    siblings = list(fields)
    duplicated = _duplicated_keys(siblings)
    return {f.id for f in siblings if f.key in duplicated}


def tree_has_duplicate_keys(tree: Iterable[Field]) -> bool:
    """Return True if any keyed sibling group in the tree has a duplicate."""
    return _group_has_duplicates(list(tree), positional=False)


def _group_has_duplicates(siblings: list[Field], *, positional: bool) -> bool:
    if not positional and has_duplicate_sibling_keys(siblings):
        return True
    return any(
        _group_has_duplicates(
            list(f.children), positional=f.type == FieldType.ARRAY
        )
        for f in siblings
        if f.children
    )


def sanitize_key(raw: str) -> str:
    """Turn any string into a valid identifier.

    Every character outside ``[A-Za-z0-9_$]`` (spaces included) is replaced
    with ``_``; a leading digit gets a ``_`` prefix; the empty string becomes
    ``"_"``.  The result always passes ``validate_key``.

    Example::

        sanitize_key("user name")  # "user_name"
        sanitize_key("2fa-code")   # "_2fa_code"
    """
    s = _INVALID_CHAR.sub("_", raw)
    if not s:
        return "_"
    if s[0].isdigit():
        s = "_" + s
    return s
