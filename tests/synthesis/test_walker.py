"""Tests for recursive tree-to-JSON synthesis.

Covers:
- Root list and OBJECT children become JSON objects, in sibling order
- ARRAY children become lists, keys ignored
- Blank keys skipped silently; invalid and duplicate keys reported
- Value errors reported and the field omitted
- Manual OBJECT/ARRAY literals on childless containers
- Error isolation: a bad field never affects its siblings
- Determinism
"""

from __future__ import annotations

import json

import pytest

from json_field_tree.errors import ErrorReason
from json_field_tree.synthesis import SynthesisConfig, TreeSynthesizer, synthesize_tree
from json_field_tree.tree.mutator import reindex_tree
from json_field_tree.tree.nodes import Field, FieldType


def leaf(fid: str, key: str, value: object = "", ftype: FieldType = FieldType.STRING) -> Field:
    return Field(id=fid, key=key, value=value, type=ftype)  # type: ignore[arg-type]


def obj(fid: str, key: str, *children: Field, value: str = "{}") -> Field:
    return Field(id=fid, key=key, value=value, type=FieldType.OBJECT, children=children)


def arr(fid: str, key: str, *children: Field, value: str = "[]") -> Field:
    return Field(id=fid, key=key, value=value, type=FieldType.ARRAY, children=children)


# ---------------------------------------------------------------------------
# Well-formed trees
# ---------------------------------------------------------------------------


class TestWellFormed:
    def test_empty_tree_is_empty_object(self) -> None:
        result = synthesize_tree(())
        assert result.value == {}
        assert result.is_valid

    def test_scalar_types(self) -> None:
        tree = (
            leaf("1", "name", "Ada"),
            leaf("2", "age", "36", FieldType.NUMBER),
            leaf("3", "active", "true", FieldType.BOOLEAN),
            leaf("4", "nickname", "ignored", FieldType.NULL),
        )
        result = synthesize_tree(tree)
        assert result.value == {"name": "Ada", "age": 36, "active": True, "nickname": None}
        assert result.errors == {}

    def test_key_order_follows_siblings(self) -> None:
        tree = (leaf("1", "z"), leaf("2", "a"), leaf("3", "m"))
        assert list(synthesize_tree(tree).value) == ["z", "a", "m"]

    def test_nested_object(self) -> None:
        tree = reindex_tree((obj("u", "user", leaf("n", "name", "Ada"), leaf("e", "email", "a@b.c")),))
        assert synthesize_tree(tree).value == {"user": {"name": "Ada", "email": "a@b.c"}}

    def test_array_ignores_child_keys(self) -> None:
        tree = (arr("t", "tags", leaf("a", "whatever", "x"), leaf("b", "", "y"), leaf("c", "0", "z")),)
        result = synthesize_tree(tree)
        assert result.value == {"tags": ["x", "y", "z"]}
        assert result.is_valid

    def test_array_of_objects(self) -> None:
        tree = (
            arr(
                "rows",
                "rows",
                obj("r0", "0", leaf("a", "id", "1", FieldType.NUMBER)),
                obj("r1", "1", leaf("b", "id", "2", FieldType.NUMBER)),
            ),
        )
        assert synthesize_tree(tree).value == {"rows": [{"id": 1}, {"id": 2}]}

    def test_nested_arrays(self) -> None:
        tree = (arr("g", "grid", arr("r", "0", leaf("c", "0", "1", FieldType.NUMBER))),)
        assert synthesize_tree(tree).value == {"grid": [[1]]}

    def test_collapse_state_does_not_matter(self) -> None:
        field = obj("u", "user", leaf("n", "name", "Ada"))
        collapsed = Field(
            id=field.id,
            key=field.key,
            value=field.value,
            type=field.type,
            children=field.children,
            is_collapsed=True,
        )
        assert synthesize_tree((collapsed,)).value == synthesize_tree((field,)).value


# ---------------------------------------------------------------------------
# Key errors
# ---------------------------------------------------------------------------


class TestKeyErrors:
    def test_blank_key_skipped_without_error(self) -> None:
        result = synthesize_tree((leaf("1", "", "x"), leaf("2", "   ", "y"), leaf("3", "ok", "z")))
        assert result.value == {"ok": "z"}
        assert result.errors == {}

    @pytest.mark.parametrize(
        ("key", "reason"),
        [
            ("user name", ErrorReason.CONTAINS_SPACE),
            ("2fa", ErrorReason.INVALID_IDENTIFIER),
            ("user-name", ErrorReason.INVALID_IDENTIFIER),
        ],
    )
    def test_invalid_key(self, key: str, reason: ErrorReason) -> None:
        result = synthesize_tree((leaf("bad", key, "x"), leaf("good", "ok", "y")))
        assert result.value == {"ok": "y"}
        assert result.errors == {"bad": reason}

    def test_duplicates_are_all_reported_and_omitted(self) -> None:
        tree = (leaf("1", "name", "Ada"), leaf("2", "name", "Grace"), leaf("3", "age", "1", FieldType.NUMBER))
        result = synthesize_tree(tree)
        assert result.value == {"age": 1}
        assert result.errors == {"1": ErrorReason.DUPLICATE_KEY, "2": ErrorReason.DUPLICATE_KEY}

    def test_duplicate_takes_precedence_over_invalid_key(self) -> None:
        result = synthesize_tree((leaf("1", "a b"), leaf("2", "a b")))
        assert set(result.errors.values()) == {ErrorReason.DUPLICATE_KEY}

    def test_duplicate_in_nested_object(self) -> None:
        tree = (obj("u", "user", leaf("1", "x"), leaf("2", "x"), leaf("3", "y", "ok")),)
        result = synthesize_tree(tree)
        assert result.value == {"user": {"y": "ok"}}
        assert set(result.errors) == {"1", "2"}

    def test_same_key_at_different_levels_is_fine(self) -> None:
        tree = (leaf("1", "id", "a"), obj("o", "child", leaf("2", "id", "b")))
        result = synthesize_tree(tree)
        assert result.value == {"id": "a", "child": {"id": "b"}}
        assert result.is_valid


# ---------------------------------------------------------------------------
# Value errors
# ---------------------------------------------------------------------------


class TestValueErrors:
    def test_bad_number_is_omitted(self) -> None:
        tree = (leaf("n", "age", "abc", FieldType.NUMBER), leaf("s", "name", "Ada"))
        result = synthesize_tree(tree)
        assert result.value == {"name": "Ada"}
        assert result.errors == {"n": ErrorReason.INVALID_NUMBER}

    def test_bad_array_child_is_left_out(self) -> None:
        tree = (
            arr(
                "a",
                "nums",
                leaf("1", "0", "1", FieldType.NUMBER),
                leaf("2", "1", "oops", FieldType.NUMBER),
                leaf("3", "2", "3", FieldType.NUMBER),
            ),
        )
        result = synthesize_tree(tree)
        assert result.value == {"nums": [1, 3]}
        assert result.errors == {"2": ErrorReason.INVALID_NUMBER}

    def test_error_deep_inside_keeps_parent(self) -> None:
        tree = (obj("u", "user", obj("p", "prefs", leaf("x", "size", "big", FieldType.NUMBER))),)
        result = synthesize_tree(tree)
        assert result.value == {"user": {"prefs": {}}}
        assert result.errors == {"x": ErrorReason.INVALID_NUMBER}

    def test_errors_collected_across_levels(self) -> None:
        tree = (
            leaf("a", "bad key", "x"),
            obj("o", "o", leaf("b", "n", "?", FieldType.NUMBER)),
            arr("l", "l", leaf("c", "0", "?", FieldType.NUMBER)),
        )
        result = synthesize_tree(tree)
        assert set(result.errors) == {"a", "b", "c"}
        assert result.value == {"o": {}, "l": []}


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


class TestLiteralFallback:
    def test_childless_object_uses_literal(self) -> None:
        result = synthesize_tree((obj("o", "meta", value='{"v": 1}'),))
        assert result.value == {"meta": {"v": 1}}

    def test_childless_array_uses_literal(self) -> None:
        result = synthesize_tree((arr("a", "list", value="[1, 2]"),))
        assert result.value == {"list": [1, 2]}

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_literal_is_empty_container(self, value: str) -> None:
        tree = (obj("o", "o", value=value), arr("a", "a", value=value))
        assert synthesize_tree(tree).value == {"o": {}, "a": []}

    def test_non_string_value_is_empty_container(self) -> None:
        tree = (Field(id="o", key="o", value=5, type=FieldType.OBJECT),)
        assert synthesize_tree(tree).value == {"o": {}}

    def test_invalid_literal_is_reported(self) -> None:
        result = synthesize_tree((obj("o", "meta", value="[1]"), leaf("s", "s", "ok")))
        assert result.value == {"s": "ok"}
        assert result.errors == {"o": ErrorReason.INVALID_JSON_LITERAL}

    def test_children_win_over_literal(self) -> None:
        tree = (obj("o", "meta", leaf("c", "a", "x"), value='{"ignored": true}'),)
        assert synthesize_tree(tree).value == {"meta": {"a": "x"}}

    @pytest.mark.parametrize(
        ("field", "literal"),
        [("a", "[1e400]"), ("o", '{"x": -1e999}')],
    )
    def test_overflowing_literal_is_reported(self, field: str, literal: str) -> None:
        make = arr if field == "a" else obj
        result = synthesize_tree((make(field, "big", value=literal), leaf("s", "s", "ok")))
        assert result.value == {"s": "ok"}
        assert result.errors == {field: ErrorReason.INVALID_JSON_LITERAL}
        json.dumps(result.value, allow_nan=False)

    def test_fallback_can_be_disabled(self) -> None:
        config = SynthesisConfig(allow_literal_fallback=False)
        tree = (obj("o", "meta", value='{"v": 1}'), arr("a", "list", value="not json"))
        result = synthesize_tree(tree, config)
        assert result.value == {"meta": {}, "list": []}
        assert result.is_valid


# ---------------------------------------------------------------------------
# Config and determinism
# ---------------------------------------------------------------------------


class TestConfigAndDeterminism:
    def test_integral_floats_kept_as_float(self) -> None:
        config = SynthesisConfig(integral_floats_as_int=False)
        value = synthesize_tree((leaf("n", "n", "2.0", FieldType.NUMBER),), config).value
        assert isinstance(value["n"], float)

    def test_same_tree_same_result(self) -> None:
        tree = (leaf("1", "a", "x"), leaf("2", "a", "y"), leaf("3", "b b"))
        assert synthesize_tree(tree) == synthesize_tree(tree)

    def test_synthesizer_exposes_errors_of_its_walk(self) -> None:
        synth = TreeSynthesizer()
        result = synth.run((leaf("1", "bad key"),))
        assert synth.errors == result.errors == {"1": ErrorReason.CONTAINS_SPACE}

    def test_result_errors_are_a_copy(self) -> None:
        synth = TreeSynthesizer()
        result = synth.run((leaf("1", "bad key"),))
        synth.errors.clear()
        assert result.errors

    def test_value_of_single_field(self) -> None:
        assert TreeSynthesizer().value_of(leaf("n", "n", "7", FieldType.NUMBER)) == 7
