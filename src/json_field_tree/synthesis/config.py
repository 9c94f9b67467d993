"""SynthesisConfig: options controlling tree-to-JSON synthesis and export.

SynthesisConfig is a frozen (immutable) dataclass; invalid values are
rejected at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SynthesisConfig:
    """Immutable configuration for the JSON synthesizer.

    Attributes:
        allow_literal_fallback: When True, an OBJECT/ARRAY field without
            children may supply its content as a manual JSON literal in its
            ``value``.  When False such fields always synthesize to ``{}`` /
            ``[]``.  Default True.
        integral_floats_as_int: When True, numbers such as ``"36.0"`` or
            ``"1e3"`` that hold an integral value (within +/-2**53) are emitted
            as ``int`` so the output reads the way a JavaScript engine would
            print it.  Default True.
        indent: Indentation used when exporting JSON text.  None produces
            compact single-line output.  Default 2.
    """

    allow_literal_fallback: bool = True
    integral_floats_as_int: bool = True
    indent: int | None = 2

    def __post_init__(self) -> None:
        if self.indent is not None and self.indent < 0:
            msg = f"indent must be >= 0 or None, got {self.indent}"
            raise ValueError(msg)
