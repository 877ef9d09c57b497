"""Collision-free palette id allocation."""

from __future__ import annotations

import secrets
import string
from collections.abc import Collection

NUMERIC_IDS: tuple[str, ...] = tuple(str(n) for n in range(1, 100))
LETTER_IDS: tuple[str, ...] = tuple(string.ascii_uppercase)

RANDOM_ID_LENGTH = 6
RANDOM_ID_ALPHABET = string.ascii_lowercase + string.digits


def random_id(length: int = RANDOM_ID_LENGTH) -> str:
    """Short random alphanumeric token."""
    return "".join(secrets.choice(RANDOM_ID_ALPHABET) for _ in range(length))


def allocate_id(existing: Collection[str]) -> str:
    """Pick the next free palette id.

    Tries "1".."99" in order, then "A".."Z", returning the first id not in
    ``existing``. Both tiers search until free. Once all 125 are taken a
    random token is returned; a collision there is an accepted, rare risk.

    Example:
        >>> allocate_id({"1", "2"})
        '3'
        >>> allocate_id({"2"})
        '1'
    """
    used = set(existing)
    for candidate in NUMERIC_IDS:
        if candidate not in used:
            return candidate
    for candidate in LETTER_IDS:
        if candidate not in used:
            return candidate
    return random_id()
