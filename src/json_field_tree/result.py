"""SynthesisResult dataclass for tree-to-JSON synthesis output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_field_tree.errors import ErrorReason

__all__ = ["SynthesisResult"]


@dataclass(frozen=True, slots=True)
class SynthesisResult:
    """Outcome of synthesizing a tree.

    Synthesis always completes: fields that could not be emitted are left out
    of ``value`` and listed in ``errors`` instead.

    Attributes:
        value:  The synthesized JSON object (root fields become its members).
        errors: Field id -> reason for every field that was left out.  Empty
            when the whole tree synthesized cleanly.
    """

    value: dict[str, Any]
    errors: dict[str, ErrorReason]

    @property
    def is_valid(self) -> bool:
        """True when no field reported an error."""
        return not self.errors
