# planet_texture/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 2D simplex gradient noise. The field itself is a pure,
immutable value: the permutation and gradient tables are built once from a
SeededRandom and never modified, so one NoiseField can be shared by any
number of threads.

Data Contract:
---------------
- Inputs:
    - perm: A 512-entry permutation table (int array, 0..255 repeated twice).
    - grad_x, grad_y: Per-entry gradient components looked up through perm.
    - x, y: Real coordinates (scalars or NumPy arrays of equal shape).
- Outputs:
    - Noise values in the range [-1, 1].
- Side Effects: None.
- Invariants: The same seed always yields the same field. Lattice indices wrap
  at 256, so the statistics do not drift with coordinate magnitude.
================================================================================
"""

import math

import numpy as np
from numba import njit

from .prng import SeededRandom

TABLE_SIZE = 512
_HALF_TABLE = TABLE_SIZE // 2

# Skewing factors between the square grid and the simplex (triangle) grid.
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0

# Scales the summed corner contributions to roughly [-1, 1].
NOISE_SCALE = 70.0

# Twelve gradient directions: the diagonals, then the axes (each twice).
_GRADIENTS_2D = np.array([
    [1, 1], [-1, 1], [1, -1], [-1, -1],
    [1, 0], [-1, 0], [1, 0], [-1, 0],
    [0, 1], [0, -1], [0, 1], [0, -1],
], dtype=np.float64)


def build_permutation_table(random) -> np.ndarray:
    """
    Shuffles 0..255 with the given random() callable and repeats the result
    so that lookups of the form perm[i + perm[j]] never need wrapping.
    """
    p = np.zeros(TABLE_SIZE, dtype=np.int64)
    p[:_HALF_TABLE] = np.arange(_HALF_TABLE)
    for i in range(_HALF_TABLE - 1):
        r = i + int(random() * (_HALF_TABLE - i))
        p[i], p[r] = p[r], p[i]
    p[_HALF_TABLE:] = p[:_HALF_TABLE]
    return p


@njit(nogil=True)
def _simplex_2d(perm, grad_x, grad_y, x, y):
    """Evaluates one point of 2D simplex noise. Numba-compiled."""
    # Skew the input space to find the containing simplex cell.
    s = (x + y) * F2
    i = int(np.floor(x + s))
    j = int(np.floor(y + s))
    t = (i + j) * G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    # Lower or upper triangle of the cell.
    if x0 > y0:
        i1 = 1
        j1 = 0
    else:
        i1 = 0
        j1 = 1

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1.0 + 2.0 * G2
    y2 = y0 - 1.0 + 2.0 * G2

    ii = i & 255
    jj = j & 255

    n0 = 0.0
    t0 = 0.5 - x0 * x0 - y0 * y0
    if t0 >= 0:
        gi0 = ii + perm[jj]
        t0 *= t0
        n0 = t0 * t0 * (grad_x[gi0] * x0 + grad_y[gi0] * y0)

    n1 = 0.0
    t1 = 0.5 - x1 * x1 - y1 * y1
    if t1 >= 0:
        gi1 = ii + i1 + perm[jj + j1]
        t1 *= t1
        n1 = t1 * t1 * (grad_x[gi1] * x1 + grad_y[gi1] * y1)

    n2 = 0.0
    t2 = 0.5 - x2 * x2 - y2 * y2
    if t2 >= 0:
        gi2 = ii + 1 + perm[jj + 1]
        t2 *= t2
        n2 = t2 * t2 * (grad_x[gi2] * x2 + grad_y[gi2] * y2)

    return NOISE_SCALE * (n0 + n1 + n2)


@njit(nogil=True)
def simplex_noise_2d(perm, grad_x, grad_y, x, y):
    """Evaluates simplex noise over 2D coordinate arrays of equal shape."""
    rows, cols = x.shape
    out = np.empty((rows, cols))
    for r in range(rows):
        for c in range(cols):
            out[r, c] = _simplex_2d(perm, grad_x, grad_y, x[r, c], y[r, c])
    return out


class NoiseField:
    """
    A seeded 2D gradient noise function. Build one per generation call and
    treat it as read-only.
    """

    def __init__(self, perm: np.ndarray):
        if perm.shape != (TABLE_SIZE,):
            raise ValueError(f"Permutation table must have {TABLE_SIZE} entries, got {perm.shape}")
        # Copy so that freezing the table never affects the caller's array.
        self.perm = np.array(perm, dtype=np.int64)
        gradient_index = self.perm % len(_GRADIENTS_2D)
        self.grad_x = np.ascontiguousarray(_GRADIENTS_2D[gradient_index, 0])
        self.grad_y = np.ascontiguousarray(_GRADIENTS_2D[gradient_index, 1])
        for table in (self.perm, self.grad_x, self.grad_y):
            table.flags.writeable = False

    @classmethod
    def from_seed(cls, seed: int) -> "NoiseField":
        return cls(build_permutation_table(SeededRandom(seed)))

    def sample(self, x: float, y: float) -> float:
        """Noise value in [-1, 1] at a single point."""
        return float(_simplex_2d(self.perm, self.grad_x, self.grad_y, float(x), float(y)))

    def sample_grid(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Noise values for 2D coordinate grids (e.g. from np.meshgrid)."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if x.shape != y.shape or x.ndim != 2:
            raise ValueError("x and y must be 2D arrays of the same shape")
        return simplex_noise_2d(self.perm, self.grad_x, self.grad_y, x, y)
