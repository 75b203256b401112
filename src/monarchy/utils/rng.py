"""Seeded random draws for Monarchy combat.

Combat only needs one uniform draw per attack: the land-gain variance factor.
Live requests use the process RNG, but a caller may pass an explicit seed so a
battle can be replayed exactly.  Seeds are plain strings built from the
participants and a context label, hashed into a stable integer.

Examples:
    >>> seed = generate_seed("k-1", "k-2", context="land_variance", nonce="replay-7")
    >>> seed
    'k-1:k-2:land_variance:replay-7'
    >>> result = random_fraction(seed)
    >>> 0.0 <= result["value"] < 1.0
    True
"""

import hashlib
import random
from typing import Any


def generate_seed(attacker_id: str, defender_id: str, *, context: str, nonce: str) -> str:
    """Generate a deterministic seed string for one combat draw.

    Format: "attacker_id:defender_id:context:nonce"

    Args:
        attacker_id: Attacking kingdom ID
        defender_id: Defending kingdom ID
        context: What the draw is for (e.g., 'land_variance')
        nonce: Caller-supplied replay token

    Returns:
        Seed string

    Raises:
        ValueError: If either kingdom ID or the nonce is empty
    """
    if not attacker_id or not defender_id:
        raise ValueError("attacker_id and defender_id must be non-empty")
    if not nonce:
        raise ValueError("nonce must be non-empty")

    return f"{attacker_id}:{defender_id}:{context}:{nonce}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random()."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def seeded_random(seed: str) -> random.Random:
    """Return a ``random.Random`` instance fixed to ``seed``."""
    return random.Random(_seed_to_int(seed))


def random_fraction(seed: str) -> dict[str, Any]:
    """Draw a uniform float in ``[0, 1)`` with a deterministic seed.

    Args:
        seed: Deterministic seed string (from generate_seed)

    Returns:
        Dictionary containing:
            - value: The random float
            - seed: The seed used
    """
    value = seeded_random(seed).random()
    return {"value": value, "seed": seed}
