"""Per-type coercion of Field values into JSON values.

Field values arrive mostly as text typed by the user, so each JSON type has a
coercion rule:

- number:  blank -> 0; otherwise the text must be a JSON-style number
           (an optional leading ``+`` is tolerated).  Non-finite results are
           rejected because JSON cannot represent them.
- boolean: ``"true"`` or ``True`` -> True; anything else -> False.
- string:  the value as text (``True``/``False`` -> ``"true"``/``"false"``,
           None -> ``""``).
- object / array literal: JSON text that must parse to the declared type,
  with every number finite.

Failures raise ``CoercionError`` carrying the ErrorReason to record.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from json_field_tree.errors import ErrorReason
from json_field_tree.tree.nodes import FieldValue

__all__ = [
    "CoercionError",
    "coerce_boolean",
    "coerce_number",
    "coerce_string",
    "parse_array_literal",
    "parse_object_literal",
]

# Integer literal: optional sign, digits only
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

# Any JSON-style number: 12, -1.5, .5, 3., 1e3, 2.5E-4
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Largest magnitude at which every integer is exactly representable as float
_MAX_SAFE_INTEGER = 2**53


class CoercionError(Exception):
    """A Field value cannot be converted to its declared JSON type."""

    def __init__(self, reason: ErrorReason) -> None:
        super().__init__(reason.message)
        self.reason = reason


def coerce_number(
    value: FieldValue, *, integral_floats_as_int: bool = True
) -> int | float:
    """Convert a NUMBER field's value.

    Args:
        value: Raw field value; text or an already-numeric value.
        integral_floats_as_int: Emit integral floats (``"36.0"``, ``"1e3"``)
            as ``int`` when they are within +/-2**53.

    Raises:
        CoercionError: With ``ErrorReason.INVALID_NUMBER`` when the value does
            not parse, is non-finite, or is a boolean.
    """
    if isinstance(value, bool):
        raise CoercionError(ErrorReason.INVALID_NUMBER)
    if isinstance(value, int):
        return value

    if value is None:
        return 0
    if isinstance(value, float):
        number = value
    else:
        text = value.strip()
        if not text:
            return 0
        if _INTEGER.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # Exceeds the interpreter's integer string conversion limit
                raise CoercionError(ErrorReason.INVALID_NUMBER) from None
        if _NUMBER.fullmatch(text) is None:
            raise CoercionError(ErrorReason.INVALID_NUMBER)
        number = float(text)

    if not math.isfinite(number):
        raise CoercionError(ErrorReason.INVALID_NUMBER)
    if (
        integral_floats_as_int
        and number.is_integer()
        and abs(number) <= _MAX_SAFE_INTEGER
    ):
        return int(number)
    return number


def coerce_boolean(value: FieldValue) -> bool:
    """Convert a BOOLEAN field's value: only ``"true"`` / ``True`` are true."""
    return value is True or value == "true"


def coerce_string(value: FieldValue) -> str:
    """Convert a STRING field's value to text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are not JSON
    msg = f"non-finite constant {name}"
    raise ValueError(msg)


def _finite_float(text: str) -> float:
    # 1e400 and friends overflow to inf
    number = float(text)
    if not math.isfinite(number):
        msg = f"number out of range {text}"
        raise ValueError(msg)
    return number


def _parse_literal(text: str) -> Any:
    try:
        return json.loads(
            text, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except (ValueError, RecursionError):
        raise CoercionError(ErrorReason.INVALID_JSON_LITERAL) from None


def parse_object_literal(text: str) -> dict[str, Any]:
    """Parse a manual OBJECT literal.

    Raises:
        CoercionError: With ``ErrorReason.INVALID_JSON_LITERAL`` when the text
            is not JSON or is JSON but not an object.
    """
    parsed = _parse_literal(text)
    if not isinstance(parsed, dict):
        raise CoercionError(ErrorReason.INVALID_JSON_LITERAL)
    return parsed


def parse_array_literal(text: str) -> list[Any]:
    """Parse a manual ARRAY literal.

    Raises:
        CoercionError: With ``ErrorReason.INVALID_JSON_LITERAL`` when the text
            is not JSON or is JSON but not an array.
    """
    parsed = _parse_literal(text)
    if not isinstance(parsed, list):
        raise CoercionError(ErrorReason.INVALID_JSON_LITERAL)
    return parsed
