"""
Python implementation of the Alea PRNG used as the generation random stream.

Based on Johannes Baagøe's Alea algorithm. Every draw is plain float
arithmetic, so a given seed reproduces the same heightmap bit for bit.
Each generation call owns its own instance built by :func:`create_prng`;
nothing here is global.
"""

import secrets
from typing import Optional

from .exceptions import InvalidParameterError

# Seed value meaning "pick an arbitrary, non-reproducible seed"
RANDOM_SEED = 0

_MAX_SEED = 2**31 - 1


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _mash_factory():
    """Build a fresh Mash hash function with its own running state."""
    state = 0xEFC8249D

    def mash(data):
        nonlocal state
        for char in str(data):
            state += ord(char)
            h = 0.02519603282416938 * state
            state = _uint32(h)
            h -= state
            h *= state
            state = _uint32(h)
            h -= state
            state += h * 0x100000000  # 2^32
        return _uint32(state) * 2.3283064365386963e-10  # 2^-32

    return mash


class AleaPRNG:
    """
    Seeded uniform random stream.

    All stochastic decisions of the terrain algorithms go through
    :meth:`sample`, so two streams built from the same seed yield
    identical heightmaps.
    """

    def __init__(self, seed: int):
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        """Reset the stream state from an integer seed."""
        self.seed = seed
        self.call_count = 0

        mash = _mash_factory()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def sample(self, min_val: float, max_val: float) -> float:
        """Uniform sample in [min_val, max_val)."""
        if min_val > max_val:
            raise InvalidParameterError(
                f"Random range minimum {min_val} exceeds maximum {max_val}"
            )
        return min_val + (max_val - min_val) * self.random()


def resolve_seed(seed: Optional[int] = RANDOM_SEED) -> int:
    """
    Turn a caller seed into the concrete seed used for generation.

    Args:
        seed: Integer seed, or 0/None for a fresh OS-provided seed

    Returns:
        A non-zero integer seed
    """
    if seed is None or seed == RANDOM_SEED:
        return secrets.randbelow(_MAX_SEED) + 1
    return int(seed)


def create_prng(seed: Optional[int] = RANDOM_SEED) -> AleaPRNG:
    """
    Create an independent random stream for one generation call.

    The resolved seed is available as ``prng.seed`` so a run drawn from the
    sentinel seed can still be replayed.
    """
    return AleaPRNG(resolve_seed(seed))
