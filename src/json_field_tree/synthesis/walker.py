"""JSON synthesis: recursive conversion of a Field tree into a JSON value.

The root list becomes a JSON object.  Within every keyed sibling group (the
root list and the children of OBJECT fields):

1. Fields sharing a non-empty key are all reported as DUPLICATE_KEY and left
   out, so the output never depends on which duplicate "wins".
2. Fields with a blank key are skipped without an error: they are rows the
   user has not filled in yet.
3. Remaining keys are validated; an invalid key is reported with the reason
   from the identifier validator and the field is left out.
4. The value is coerced according to the field's type; a coercion failure is
   reported and the field is left out.

Children of ARRAY fields are positional: their keys are neither checked nor
used, and each child's value is appended in order.  A child whose value fails
to coerce is reported and left out of the list.

Synthesis never raises for bad field content and is deterministic: the same
tree always yields an equal value and an equal error map.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from json_field_tree.errors import ErrorReason
from json_field_tree.result import SynthesisResult
from json_field_tree.synthesis.coercion import (
    CoercionError,
    coerce_boolean,
    coerce_number,
    coerce_string,
    parse_array_literal,
    parse_object_literal,
)
from json_field_tree.synthesis.config import SynthesisConfig
from json_field_tree.tree.nodes import Field, FieldType, Tree
from json_field_tree.tree.validator import duplicate_key_ids, validate_key

__all__ = ["TreeSynthesizer", "synthesize_tree"]


class TreeSynthesizer:
    """Walks a tree once, collecting the JSON value and per-field errors.

    Instances hold the error map of a single walk; create one per synthesis
    (``synthesize_tree`` does this for you).
    """

    def __init__(self, config: SynthesisConfig | None = None) -> None:
        self._config = config if config is not None else SynthesisConfig()
        self.errors: dict[str, ErrorReason] = {}

    def run(self, tree: Tree) -> SynthesisResult:
        value = self.build_object(tree)
        return SynthesisResult(value=value, errors=dict(self.errors))

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def build_object(self, siblings: Sequence[Field]) -> dict[str, Any]:
        """Build a JSON object from one keyed sibling group."""
        duplicates = duplicate_key_ids(siblings)
        result: dict[str, Any] = {}

        for field in siblings:
            if not field.key.strip():
                continue
            if field.id in duplicates:
                self.errors[field.id] = ErrorReason.DUPLICATE_KEY
                continue
            check = validate_key(field.key)
            if check.reason is not None:
                self.errors[field.id] = check.reason
                continue
            try:
                result[field.key] = self.value_of(field)
            except CoercionError as exc:
                self.errors[field.id] = exc.reason

        return result

    def build_array(self, children: Sequence[Field]) -> list[Any]:
        """Build a JSON array from positional children, ignoring their keys."""
        items: list[Any] = []
        for child in children:
            try:
                items.append(self.value_of(child))
            except CoercionError as exc:
                self.errors[child.id] = exc.reason
        return items

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def value_of(self, field: Field) -> Any:
        """Return the JSON value of a single field.

        Raises:
            CoercionError: When the field's own value cannot be converted.
                Errors of descendants are recorded, never raised.
        """
        if field.type == FieldType.NUMBER:
            return coerce_number(
                field.value,
                integral_floats_as_int=self._config.integral_floats_as_int,
            )
        if field.type == FieldType.BOOLEAN:
            return coerce_boolean(field.value)
        if field.type == FieldType.NULL:
            return None
        if field.type == FieldType.OBJECT:
            if field.children:
                return self.build_object(field.children)
            literal = self._literal(field)
            return parse_object_literal(literal) if literal is not None else {}
        if field.type == FieldType.ARRAY:
            if field.children:
                return self.build_array(field.children)
            literal = self._literal(field)
            return parse_array_literal(literal) if literal is not None else []
        return coerce_string(field.value)

    def _literal(self, field: Field) -> str | None:
        """Return the manual JSON literal of a childless container, if any."""
        if not self._config.allow_literal_fallback:
            return None
        if isinstance(field.value, str) and field.value.strip():
            return field.value
        return None


def synthesize_tree(
    tree: Tree, config: SynthesisConfig | None = None
) -> SynthesisResult:
    """Synthesize ``tree`` into a JSON object plus a per-field error map."""
    return TreeSynthesizer(config).run(tree)
