"""SynthesisCache: LRU-backed memo of synthesis results per tree snapshot.

Editors re-synthesize on every keystroke, and most of those calls see a tree
they have already synthesized (undo, focus changes, re-renders).  The cache
keys results on the canonical persisted form of the tree, so two trees that
would serialize identically share one entry regardless of object identity.
LRU eviction occurs silently when ``max_size`` is exceeded.

Cached results are never handed out directly: every hit returns a deep copy
of the value and error map, so a caller mutating its result cannot corrupt
later hits.

Each ``SynthesisCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    from json_field_tree.cache import SynthesisCache
    from json_field_tree.synthesis import synthesize_tree

    cache = SynthesisCache(max_size=64)
    result = cache.get_or_compute(tree, synthesize_tree)   # computed
    again = cache.get_or_compute(tree, synthesize_tree)    # served from memory
"""

from __future__ import annotations

import copy
from collections.abc import Callable

from cachetools import LRUCache

from json_field_tree.result import SynthesisResult
from json_field_tree.tree.nodes import Tree
from json_field_tree.tree.serde import dumps

__all__ = ["SynthesisCache"]


def _copy_result(result: SynthesisResult) -> SynthesisResult:
    return SynthesisResult(
        value=copy.deepcopy(result.value),
        errors=dict(result.errors),
    )


class SynthesisCache:
    """LRU-backed memo of ``SynthesisResult`` objects.

    Args:
        max_size: Maximum number of tree snapshots to remember.  Defaults to
            128.  0 disables caching: every call computes.

    Raises:
        ValueError: If ``max_size`` is negative.
    """

    def __init__(self, max_size: int = 128) -> None:
        if max_size < 0:
            msg = f"max_size must be >= 0, got {max_size}"
            raise ValueError(msg)
        self._max_size = max_size
        self._cache: LRUCache[str, SynthesisResult] | None = (
            LRUCache(maxsize=max_size) if max_size > 0 else None
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return self._max_size

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize) if self._cache is not None else 0

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_or_compute(
        self,
        tree: Tree,
        compute: Callable[[Tree], SynthesisResult],
    ) -> SynthesisResult:
        """Return the result for ``tree``, calling ``compute`` only on a miss.

        Args:
            tree:    The tree to synthesize.
            compute: Function producing a fresh result for ``tree``.

        Returns:
            A result owned by the caller (a copy of the cached entry).
        """
        if self._cache is None:
            return compute(tree)

        try:
            key = dumps(tree)
        except ValueError:
            # Non-finite float values have no canonical form; skip the cache.
            return compute(tree)
        cached = self._cache.get(key)
        if cached is None:
            cached = compute(tree)
            self._cache[key] = cached
        return _copy_result(cached)

    def clear(self) -> None:
        """Drop every cached entry."""
        if self._cache is not None:
            self._cache.clear()
