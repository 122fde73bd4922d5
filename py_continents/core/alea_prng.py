"""
Alea pseudorandom stream shared by every generation phase.

Based on Johannes Baagøe's Alea algorithm. One instance is created per
generator and handed to each phase in turn, so the order of draws is
what makes a map reproducible: the same seed and the same sequence of
calls always yield the same values.
"""

from typing import Sequence, TypeVar, Union

T = TypeVar("T")

SeedType = Union[int, str]

_TWO_POW_NEG_32 = 2.3283064365386963e-10  # 2^-32


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def _make_mash():
    """Build Alea's string hashing function with its own running state."""
    mash_n = 0xEFC8249D

    def mash(data) -> float:
        nonlocal mash_n
        for char in str(data):
            mash_n = mash_n + ord(char)
            h = 0.02519603282416938 * mash_n
            mash_n = _uint32(h)
            h -= mash_n
            h *= mash_n
            mash_n = _uint32(h)
            h -= mash_n
            mash_n += h * 0x100000000  # 2^32
        return _uint32(mash_n) * _TWO_POW_NEG_32

    return mash


class AleaPRNG:
    """
    Deterministic stream of floats in [0, 1).

    Integer and string seeds are both accepted; integers are hashed through
    their decimal representation, so ``AleaPRNG(7)`` and ``AleaPRNG("7")``
    produce the same stream.
    """

    def __init__(self, seed: SeedType):
        if seed is None:
            raise ValueError("A seed is required for reproducible generation")

        self.seed = seed
        self.call_count = 0

        mash = _make_mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        key = str(seed)
        self.s0 -= mash(key)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(key)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(key)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high) using one draw."""
        return low + self.random() * (high - low)

    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high] inclusive using one draw."""
        if high < low:
            raise ValueError(f"Empty integer range [{low}, {high}]")
        return low + int(self.random() * (high - low + 1))

    def chance(self, probability: float) -> bool:
        """
        Return True with the given probability.

        Always consumes exactly one draw, even for probabilities of 0 or 1,
        so tuning a probability never shifts the rest of the stream.
        """
        return self.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def state(self):
        """Snapshot of the internal state, useful for comparing streams."""
        return (self.s0, self.s1, self.s2, self.c, self.call_count)
