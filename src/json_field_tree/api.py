"""Public API functions for json-field-tree.

This module provides the user-facing functions synthesize, to_json and
is_valid.  Each call creates a fresh JSONGenerator to guarantee zero global
state mutation between calls; hold a ``JSONGenerator`` yourself to benefit
from its result cache.
"""

from __future__ import annotations

from json_field_tree.generator import JSONGenerator
from json_field_tree.result import SynthesisResult
from json_field_tree.synthesis.config import SynthesisConfig
from json_field_tree.tree.nodes import Tree

__all__ = ["is_valid", "synthesize", "to_json"]


def synthesize(tree: Tree, config: SynthesisConfig | None = None) -> SynthesisResult:
    """Synthesize a field tree into a JSON object plus a per-field error map.

    Args:
        tree:   Ordered root fields of the document.
        config: Synthesis options.  Defaults to ``SynthesisConfig()`` when None.

    Returns:
        A ``SynthesisResult``; ``errors`` maps field ids to ``ErrorReason``
        for every field left out of ``value``.
    """
    return JSONGenerator(config=config, max_cache_size=0).synthesize(tree)


def to_json(tree: Tree, config: SynthesisConfig | None = None) -> str:
    """Return the synthesized document of ``tree`` as formatted JSON text.

    Args:
        tree:   Ordered root fields of the document.
        config: Synthesis options; ``config.indent`` controls formatting.

    Returns:
        JSON text.  Fields with errors are omitted.
    """
    return JSONGenerator(config=config, max_cache_size=0).to_json(tree)


def is_valid(tree: Tree, config: SynthesisConfig | None = None) -> bool:
    """Return True if every field of ``tree`` synthesizes without error.

    A document is considered invalid (not ready for export) as soon as any
    field reports an error, even though synthesis still produces a value.
    """
    return synthesize(tree, config=config).is_valid
