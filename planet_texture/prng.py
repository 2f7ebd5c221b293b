# planet_texture/prng.py

"""
================================================================================
SEEDED PSEUDO-RANDOM NUMBER GENERATOR
================================================================================
A small, self-contained generator used to shuffle the noise permutation table.
It never touches an external entropy source, so a planet is fully described
by its integer seed.

The algorithm is Alea: three fractional state words and an integer carry are
advanced by a multiply-with-carry step. The state is initialised by the Mash
string hash applied to the decimal text of the seed.

Data Contract:
---------------
- Inputs: seed (int).
- Outputs: next() -> float in [0, 1).
- Side Effects: Advances the generator's own state only.
- Invariants: Two generators built from the same seed yield identical,
  unbounded sequences.
================================================================================
"""

# 2^-32 and 2^32, used to move between 32-bit integers and [0, 1) fractions.
_TWO_POW_NEG_32 = 2.3283064365386963e-10
_TWO_POW_32 = 0x100000000
_UINT32_MASK = 0xFFFFFFFF

_MASH_SEED = 0xefc8249d
_MASH_MULTIPLIER = 0.02519603282416938
_ALEA_MULTIPLIER = 2091639


class Mash:
    """A stateful string hash that maps text onto fractions in [0, 1)."""

    def __init__(self):
        self._n = _MASH_SEED

    def __call__(self, data) -> float:
        n = self._n
        for char in str(data):
            n += ord(char)
            h = _MASH_MULTIPLIER * n
            n = int(h) & _UINT32_MASK
            h -= n
            h *= n
            n = int(h) & _UINT32_MASK
            h -= n
            n += h * _TWO_POW_32
        self._n = n
        return (int(n) & _UINT32_MASK) * _TWO_POW_NEG_32


class SeededRandom:
    """Deterministic stream of floats in [0, 1) derived from an integer seed."""

    def __init__(self, seed: int):
        self.seed = seed
        mash = Mash()
        self._s0 = mash(' ')
        self._s1 = mash(' ')
        self._s2 = mash(' ')
        self._c = 1

        self._s0 -= mash(seed)
        if self._s0 < 0:
            self._s0 += 1
        self._s1 -= mash(seed)
        if self._s1 < 0:
            self._s1 += 1
        self._s2 -= mash(seed)
        if self._s2 < 0:
            self._s2 += 1

    def next(self) -> float:
        t = _ALEA_MULTIPLIER * self._s0 + self._c * _TWO_POW_NEG_32
        self._s0 = self._s1
        self._s1 = self._s2
        # t is always below 2^31, so int() matches a 32-bit truncation.
        self._c = int(t)
        self._s2 = t - self._c
        return self._s2

    def __call__(self) -> float:
        return self.next()

    def __iter__(self):
        while True:
            yield self.next()
