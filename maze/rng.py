"""
Deterministic randomness for maze generation

Lcg is a 64-bit linear congruential generator; SeedSource hands out distinct
seeds from caller-owned entropy plus a monotonic counter.
"""

import secrets

from utils.constants import LCG_INCREMENT, LCG_MASK, LCG_MULTIPLIER

# SplitMix64 finaliser constants
_MIX_GAMMA = 0x9E3779B97F4A7C15
_MIX_C1 = 0xBF58476D1CE4E5B9
_MIX_C2 = 0x94D049BB133111EB


def mix64(value):
    """Scramble a 64-bit integer so nearby inputs give unrelated seeds"""
    z = (value + _MIX_GAMMA) & LCG_MASK
    z = ((z ^ (z >> 30)) * _MIX_C1) & LCG_MASK
    z = ((z ^ (z >> 27)) * _MIX_C2) & LCG_MASK
    return z ^ (z >> 31)


class Lcg:
    """
    Linear congruential generator, state wraps at 2**64
    """

    def __init__(self, seed):
        self.state = int(seed) & LCG_MASK

    def next_u64(self):
        """Advance and return the raw 64-bit state"""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return self.state

    def below(self, n):
        """Uniform-ish integer in [0, n) drawn from the high bits"""
        if n <= 0:
            raise ValueError(f"below() needs a positive bound, got {n}")
        # Low bits of a power-of-two LCG cycle with tiny periods
        return (self.next_u64() >> 32) % n

    def choice(self, items):
        """Pick one element of a non-empty sequence"""
        return items[self.below(len(items))]


class SeedSource:
    """
    Seed capability owned by a session: entropy + monotonic counter

    Two sources built from the same entropy hand out the same seed sequence,
    so sessions are reproducible when the caller pins the entropy.
    """

    def __init__(self, entropy=None):
        if entropy is None:
            entropy = secrets.randbits(64)
        self.entropy = int(entropy) & LCG_MASK
        self.counter = 0

    def next_seed(self):
        """Return a fresh 64-bit seed and bump the counter"""
        self.counter += 1
        return mix64(self.entropy ^ mix64(self.counter))


def resolve_seed(seed):
    """Turn an int, a SeedSource, or None into a concrete 64-bit seed"""
    if seed is None:
        return SeedSource().next_seed()
    if isinstance(seed, SeedSource):
        return seed.next_seed()
    return int(seed) & LCG_MASK
