"""synthesis subpackage: public API for tree-to-JSON synthesis.

Provides the recursive synthesizer, its configuration, and the per-type
coercion rules.  Import from this module (not from sub-modules directly) to
stay on the stable public interface.

Example::

    from json_field_tree.synthesis import SynthesisConfig, synthesize_tree
    from json_field_tree.tree import FieldType, new_field

    tree = (new_field(key="name", value="Ada"),)
    result = synthesize_tree(tree, SynthesisConfig())
    # result.value == {"name": "Ada"}, result.errors == {}
"""

from __future__ import annotations

from json_field_tree.synthesis.coercion import CoercionError
from json_field_tree.synthesis.config import SynthesisConfig
from json_field_tree.synthesis.walker import TreeSynthesizer, synthesize_tree

__all__ = ["CoercionError", "SynthesisConfig", "TreeSynthesizer", "synthesize_tree"]
