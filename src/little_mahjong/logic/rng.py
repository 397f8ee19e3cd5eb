"""
Random number generation for deck shuffling.

1. Generate a cryptographic seed (32 bytes / 256 bits) via the secrets module
2. Derive a deck RNG via SHA512 with domain separation (versioned prefix)
3. Apply a Fisher-Yates shuffle for an unbiased permutation

41! is about 2^163, so a 256-bit seed covers every deck order. The stdlib
Mersenne Twister is enough for a classroom deck; what matters is that the
permutation algorithm itself is unbiased and that a seed replays a game.
"""

import hashlib
import random
import secrets
from collections.abc import Sequence
from typing import TypeVar

SEED_BYTES = 32
_DOMAIN_PREFIX = b"little-mahjong-deck-v1:"  # domain separator for deck shuffles
_CELEBRATION_DOMAIN_PREFIX = b"little-mahjong-celebration-v1:"

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is the correct hex format.

    Enforces exact length (64 hex chars = 32 bytes) and valid hex characters.
    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a cryptographic seed as a hex string (64 chars / 256 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def _derive_rng(domain_prefix: bytes, seed_hex: str) -> random.Random:
    validate_seed_hex(seed_hex)
    derived = hashlib.sha512(domain_prefix + bytes.fromhex(seed_hex)).digest()
    return random.Random(int.from_bytes(derived, byteorder="little"))  # noqa: S311


def create_deck_rng(seed_hex: str) -> random.Random:
    """Create the RNG that shuffles the deck for a given game seed."""
    return _derive_rng(_DOMAIN_PREFIX, seed_hex)


def create_celebration_rng(seed_hex: str | None) -> random.Random:
    """
    Create the RNG for celebration burst positions.

    Cosmetic only; an unseeded RNG is used when no seed is given.
    """
    if seed_hex is None:
        return random.Random()  # noqa: S311
    return _derive_rng(_CELEBRATION_DOMAIN_PREFIX, seed_hex)


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Return a shuffled copy of items using the Fisher-Yates (Knuth) algorithm.

    For i in 0..n-2: swap items[i] with items[i + randrange(n - i)].
    randrange uses rejection sampling, so every permutation is equally likely.
    """
    result = list(items)
    n = len(result)
    for i in range(n - 1):
        j = i + rng.randrange(n - i)
        result[i], result[j] = result[j], result[i]
    return result
