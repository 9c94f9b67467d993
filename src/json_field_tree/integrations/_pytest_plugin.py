"""pytest plugin for json-field-tree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_field_tree import SynthesisConfig, synthesize
from json_field_tree.tree.nodes import Tree


@pytest.fixture(scope="session")
def assert_synthesizes() -> Any:
    """Fixture that returns a callable tree-synthesis asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to synthesize() which creates a fresh JSONGenerator per call).

    Usage in tests::

        def test_profile_form(assert_synthesizes):
            tree = build_profile_tree()
            assert_synthesizes(tree, {"name": "Ada", "age": 36})

        def test_partial_form(assert_synthesizes):
            assert_synthesizes(tree, {"name": "Ada"}, allow_errors=True)

    Returns:
        A callable ``_assert(tree, expected, config=None, allow_errors=False)
        -> None`` that raises ``AssertionError`` when the synthesized value
        differs from ``expected`` or, unless ``allow_errors``, when any field
        reported an error.
    """

    def _assert(
        tree: Tree,
        expected: Any,
        config: SynthesisConfig | None = None,
        allow_errors: bool = False,
    ) -> None:
        """Assert that ``tree`` synthesizes to ``expected``.

        Args:
            tree:         The field tree under test.
            expected:     The JSON value the tree must produce.
            config:       Optional SynthesisConfig.
            allow_errors: Accept per-field errors as long as the value matches.

        Raises:
            AssertionError: With the actual value and error map in the message.
        """
        result = synthesize(tree, config=config)
        errors = {fid: str(reason) for fid, reason in result.errors.items()}
        if result.value != expected or (errors and not allow_errors):
            raise AssertionError(
                f"Tree did not synthesize as expected\n"
                f"  actual:   {result.value}\n"
                f"  expected: {expected}\n"
                f"  errors:   {errors}"
            )

    return _assert
