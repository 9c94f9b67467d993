"""IdGenerator Protocol for the json-field-tree id extension point.

Every operation that creates Fields accepts an ``id_factory``.  Any callable
taking no arguments and returning a fresh string satisfies the protocol at
runtime, no inheritance required.

Example::

    import itertools
    from json_field_tree.protocols import IdGenerator

    class SequentialIds:
        def __init__(self) -> None:
            self._counter = itertools.count(1)

        def __call__(self) -> str:
            return f"f{next(self._counter)}"

    assert isinstance(SequentialIds(), IdGenerator)  # True, structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdGenerator(Protocol):
    """Structural protocol for Field id factories.

    ``__call__`` must return a string that has never been returned before by
    the same generator.  Collision resistance is the generator's concern;
    ``insert_field`` ignores a field whose id is already in the tree.
    """

    def __call__(self) -> str: ...
