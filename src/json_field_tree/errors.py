"""ErrorReason StrEnum: the per-field error taxonomy.

Every error in this package is local to one Field and recoverable.  Reasons
are reported in the error map of a synthesis result (keyed by field id) and
never raised.
"""

from __future__ import annotations

from enum import StrEnum, auto

__all__ = ["ErrorReason"]


class ErrorReason(StrEnum):
    """Why a Field could not be emitted into the synthesized document.

    Key-shape errors (from the identifier validator):
    - EMPTY_KEY:           key is empty after trimming.
    - CONTAINS_SPACE:      key contains a space character.
    - INVALID_IDENTIFIER:  key is not a valid identifier.

    Tree errors:
    - DUPLICATE_KEY:       a sibling has the same key.

    Value errors:
    - INVALID_NUMBER:       a NUMBER field's value does not parse.
    - INVALID_JSON_LITERAL: a manual OBJECT/ARRAY literal does not parse or
                            parses to the wrong JSON type.
    """

    EMPTY_KEY = auto()
    CONTAINS_SPACE = auto()
    INVALID_IDENTIFIER = auto()
    DUPLICATE_KEY = auto()
    INVALID_NUMBER = auto()
    INVALID_JSON_LITERAL = auto()

    @property
    def message(self) -> str:
        """Human-readable text suitable for showing next to the field."""
        return _MESSAGES[self]


_MESSAGES: dict[ErrorReason, str] = {
    ErrorReason.EMPTY_KEY: "Key cannot be empty",
    ErrorReason.CONTAINS_SPACE: "Key cannot contain spaces",
    ErrorReason.INVALID_IDENTIFIER: "Key must be a valid identifier",
    ErrorReason.DUPLICATE_KEY: "Duplicate key",
    ErrorReason.INVALID_NUMBER: "Invalid number",
    ErrorReason.INVALID_JSON_LITERAL: "Invalid JSON literal",
}
