"""
Date-stable daily selection.

The book of the day must not change between calls on the same calendar
day. Selection therefore avoids the process-wide random source entirely and
shuffles with a linear-congruential generator seeded by the ordinal day of
the year:

    state_{n+1} = (state_n * 1103515245 + 12345) mod 2**64

The same seed always produces the same sequence, so the same day and the
same candidate list always produce the same pick. A different day usually
(not necessarily) produces a different one.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

_T = TypeVar("_T")

_MULTIPLIER = 1103515245
_INCREMENT = 12345
_MASK = (1 << 64) - 1


class SeededGenerator:
    """64-bit linear-congruential generator.

    Only the high 32 bits of each state are used for bounded draws; the low
    bits of an LCG with a power-of-two modulus cycle with short periods.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def next(self) -> int:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MASK
        return self._state

    def below(self, n: int) -> int:
        """Return an integer in ``[0, n)``."""
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}.")
        return (self.next() >> 32) % n


def seeded_shuffle(items: Sequence[_T], seed: int) -> list[_T]:
    """Return a Fisher–Yates shuffled copy of ``items`` driven by ``seed``."""
    shuffled = list(items)
    gen = SeededGenerator(seed)
    for i in range(len(shuffled) - 1):
        j = i + gen.below(len(shuffled) - i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def select_of_the_day(candidates: Sequence[_T], day_of_year: int) -> Optional[_T]:
    """First element of the day-seeded shuffle, or ``None`` when empty."""
    if not candidates:
        return None
    return seeded_shuffle(candidates, day_of_year)[0]


def insight_of_the_day(insights: Sequence[_T], day_of_year: int) -> Optional[_T]:
    """Rotate through ``insights`` by day of year, or ``None`` when empty."""
    if not insights:
        return None
    return insights[day_of_year % len(insights)]
