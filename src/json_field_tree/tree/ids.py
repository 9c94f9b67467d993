"""Default Field id generator: short random base-36 strings."""

from __future__ import annotations

import secrets

__all__ = ["random_id"]

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def random_id(length: int = 9) -> str:
    """Return a random base-36 identifier of ``length`` characters.

    Nine characters give 36**9 (about 10**14) possibilities, plenty for the
    number of fields a single document holds.

    Raises:
        ValueError: If ``length`` is not positive.
    """
    if length <= 0:
        msg = f"length must be > 0, got {length}"
        raise ValueError(msg)
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
