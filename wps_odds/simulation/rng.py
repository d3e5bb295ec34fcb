"""
Deterministic 32-bit random number generation.

Xorshift128 drives every random decision inside a race; SplitMix32 derives
one well-mixed seed per race from a running accumulator. Both are bit-exact:
all arithmetic wraps at 32 bits so a given master seed always replays the
same races.
"""

from typing import Iterable

MASK32 = 0xFFFFFFFF

GOLDEN_GAMMA = 0x9E3779B9
MIX_MULT_1 = 0x85EBCA6B
MIX_MULT_2 = 0xC2B2AE35
MIX_MULT_3 = 0x27D4EB2F

WARMUP_ROUNDS = 20

# Fallback words for seeds that would zero out a state word
DEFAULT_STATE = (0x12345678, 0x9ABCDEF0, 0xDEADBEEF, 0xCAFEBABE)


class Xorshift128:
    """
    Xorshift128 generator over four 32-bit words.

    Seeded from a single 32-bit integer through three multiplicative mixes
    (distinct odd multipliers), then advanced WARMUP_ROUNDS times.
    """

    __slots__ = ('s0', 's1', 's2', 's3')

    def __init__(self, seed: int):
        seed &= MASK32
        self.s0 = seed or DEFAULT_STATE[0]
        self.s1 = (seed * MIX_MULT_1) & MASK32 or DEFAULT_STATE[1]
        self.s2 = (seed * MIX_MULT_2) & MASK32 or DEFAULT_STATE[2]
        self.s3 = (seed * MIX_MULT_3) & MASK32 or DEFAULT_STATE[3]
        for _ in range(WARMUP_ROUNDS):
            self.next()

    def next(self) -> int:
        """Advance the state and return the next unsigned 32-bit value."""
        t = self.s3
        s = self.s0
        self.s3 = self.s2
        self.s2 = self.s1
        self.s1 = s
        t ^= (t << 11) & MASK32
        t ^= t >> 8
        self.s0 = t ^ s ^ (s >> 19)
        return self.s0

    def roll(self, n: int) -> int:
        """Uniform-ish value in [0, n) by modulo; 0 when n <= 1."""
        if n <= 1:
            return 0
        return self.next() % n


class SplitMix32:
    """
    Seed sequencer: a single 32-bit accumulator with a SplitMix-style output mix.

    Must be advanced sequentially; every call consumes one step of the stream.
    """

    __slots__ = ('state',)

    def __init__(self, state: int):
        self.state = state & MASK32

    def next(self) -> int:
        """Advance the accumulator and return the avalanched 32-bit output."""
        self.state = (self.state + GOLDEN_GAMMA) & MASK32
        z = self.state
        z = ((z ^ (z >> 16)) * MIX_MULT_1) & MASK32
        z = ((z ^ (z >> 13)) * MIX_MULT_2) & MASK32
        return z ^ (z >> 16)

    def mix(self, value: int) -> None:
        """Fold a value into the accumulator and advance once, discarding output."""
        self.state ^= (value * MIX_MULT_1) & MASK32
        self.next()


def init_seed_sequencer(salt: int, scores: Iterable[int]) -> SplitMix32:
    """
    Build the seed sequencer for one aggregation run.

    Args:
        salt: Master seed
        scores: Clamped lane scores, mixed in lane order

    Returns:
        SplitMix32 positioned just before the first race seed
    """
    state = (int(salt) * GOLDEN_GAMMA) & MASK32 or DEFAULT_STATE[0]
    sequencer = SplitMix32(state)
    for score in scores:
        sequencer.mix(score)
    return sequencer
