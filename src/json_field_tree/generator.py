"""JSONGenerator: orchestrator that wires the synthesizer, cache and export.

This is the central wiring layer between the recursive synthesizer and the
public API.  It holds one ``SynthesisConfig`` and one per-instance
``SynthesisCache``, and adds JSON text export on top of synthesis.

Architecture:
- synthesize() looks the tree up in the LRU cache and runs a fresh
  ``TreeSynthesizer`` walk on a miss.  Results handed out are copies, so the
  caller owns them.
- to_json() synthesizes and formats the value with ``json.dumps`` using the
  configured indentation.  Output is always strict JSON (no NaN/Infinity).
- Two separate ``JSONGenerator`` instances never share cache state.
"""

from __future__ import annotations

import json

from json_field_tree.cache import SynthesisCache
from json_field_tree.result import SynthesisResult
from json_field_tree.synthesis.config import SynthesisConfig
from json_field_tree.synthesis.walker import synthesize_tree
from json_field_tree.tree.nodes import Tree

__all__ = ["JSONGenerator"]


class JSONGenerator:
    """Turns field trees into JSON values and JSON text.

    Example::

        from json_field_tree import JSONGenerator
        from json_field_tree.tree import new_field

        gen = JSONGenerator()
        tree = (new_field(key="name", value="Ada"),)
        print(gen.to_json(tree))
        # {
        #   "name": "Ada"
        # }
    """

    def __init__(
        self,
        config: SynthesisConfig | None = None,
        max_cache_size: int = 128,
    ) -> None:
        """Initialise the generator.

        Args:
            config: Synthesis options.  Defaults to ``SynthesisConfig()``.
            max_cache_size: Number of tree snapshots whose results are kept
                in the per-instance LRU cache.  0 disables caching.  This is
                an infrastructure parameter, not part of ``SynthesisConfig``
                (which governs output only).
        """
        self._config: SynthesisConfig = (
            config if config is not None else SynthesisConfig()
        )
        self._cache = SynthesisCache(max_size=max_cache_size)

    @property
    def config(self) -> SynthesisConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def synthesize(self, tree: Tree) -> SynthesisResult:
        """Synthesize ``tree`` into a JSON object and a per-field error map.

        Calling this twice with the same tree yields equal results whether or
        not the second call is served from the cache.
        """
        return self._cache.get_or_compute(tree, self._compute)

    def to_json(self, tree: Tree) -> str:
        """Return the synthesized document as JSON text.

        Fields with errors are left out, exactly as in ``synthesize``; check
        ``is_valid`` first when a partial document is not acceptable.
        """
        value = self.synthesize(tree).value
        return json.dumps(
            value,
            indent=self._config.indent,
            ensure_ascii=False,
            allow_nan=False,
        )

    def is_valid(self, tree: Tree) -> bool:
        """True when every field of ``tree`` synthesizes without error."""
        return self.synthesize(tree).is_valid

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compute(self, tree: Tree) -> SynthesisResult:
        return synthesize_tree(tree, self._config)
