"""Seeded 32-bit Mersenne-Twister style generator.

Every random draw made while building a map goes through a single instance of
:class:`MersenneTwister`, so a map is a pure function of its seed and
parameters. The state refresh (``twist``) only mixes neighbouring words and is
therefore *not* interchangeable with :mod:`random` (MT19937); stored seeds are
only reproducible with this exact sequence.

``range`` reduces with a plain modulo. It is slightly biased for spans that
do not divide 2**32, and must stay that way for seed compatibility.
"""
from __future__ import annotations

from typing import List

from .errors import GenerationError

STATE_SIZE = 624
MASK_32 = 0xFFFFFFFF
INIT_MULTIPLIER = 0x6C078965
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7FFFFFFF
TWIST_XOR = 0x9908B0DF
TEMPER_B = 0x9D2C5680
TEMPER_C = 0xEFC60000


def temper(value: int) -> int:
    value ^= value >> 11
    value ^= (value << 7) & TEMPER_B
    value ^= (value << 15) & TEMPER_C
    value ^= value >> 18
    return value & MASK_32


class MersenneTwister:
    __slots__ = ("state", "index")

    def __init__(self, seed: int):
        if not (0 <= seed <= MASK_32):
            raise GenerationError(f"seed {seed} is not an unsigned 32-bit value")
        state: List[int] = [0] * STATE_SIZE
        state[0] = seed
        for i in range(1, STATE_SIZE):
            prev = state[i - 1]
            state[i] = ((prev ^ (prev >> 30)) * INIT_MULTIPLIER + i) & MASK_32
        self.state = state
        self.index = 0

    def twist(self) -> None:
        state = self.state
        for i in range(STATE_SIZE):
            x = (state[i] & UPPER_MASK) + (state[(i + 1) % STATE_SIZE] & LOWER_MASK)
            x_a = x >> 1
            if x % 2 != 0:
                x_a ^= TWIST_XOR
            state[i] = x_a & MASK_32

    def next(self) -> int:
        if self.index == 0:
            self.twist()
        value = temper(self.state[self.index])
        self.index = (self.index + 1) % STATE_SIZE
        return value

    def range(self, low: int, high: int) -> int:
        """Inclusive draw in [low, high]."""
        if high < low:
            raise GenerationError(f"range({low}, {high}): upper bound below lower bound")
        return low + self.next() % (high - low + 1)

    def __repr__(self):
        return f"<MersenneTwister index={self.index}>"


__all__ = ["MersenneTwister", "temper", "STATE_SIZE"]
