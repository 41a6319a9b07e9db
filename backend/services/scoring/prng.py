"""Seedable Mulberry32 stream used to draw synthetic training data."""

from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Mulberry32:
    """Deterministic generator of floats in [0, 1).

    The same seed always reproduces the same sequence.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def __call__(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296.0

    def below(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        return int(self() * n)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.below(len(seq))]


def create(seed: int) -> Mulberry32:
    return Mulberry32(seed)
