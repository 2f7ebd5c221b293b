# planet_texture/fractal.py

"""
================================================================================
FRACTAL BROWNIAN MOTION (fBm)
================================================================================
Stacks several octaves of simplex noise into a single elevation value per
texture coordinate.

Data Contract:
---------------
- Inputs:
    - A NoiseField (its read-only tables are passed into the kernels).
    - u, v: Normalized texture coordinates, nominally [0, 1).
    - octaves, persistence, lacunarity, scale: Standard fBm parameters.
    - width, height: Texture dimensions, which stretch u and v so one noise
      period spans `scale` pixels on both axes.
- Outputs:
    - Elevation in [0, 1].
- Side Effects: None.
- Invariants: The raw sum is divided by 2 - 2^(1 - octaves) before being
  remapped and clamped. Every biome threshold is calibrated against that
  constant, so it must not change.
================================================================================
"""

import numpy as np
from numba import njit

from .noise import NoiseField, _simplex_2d


@njit(nogil=True)
def normalization_factor(octaves):
    """Theoretical maximum absolute fBm sum under geometric falloff."""
    return 2.0 - 2.0 ** (1 - octaves)


@njit(nogil=True)
def _fbm_point(perm, grad_x, grad_y, u, v, octaves, persistence, lacunarity, scale, width, height):
    amplitude = 1.0
    frequency = 1.0
    noise_val = 0.0

    for _ in range(octaves):
        # Flat 2D sampling of the equirectangular map; the poles are stretched.
        nx = u * frequency * (width / scale)
        ny = v * frequency * (height / scale)
        noise_val += _simplex_2d(perm, grad_x, grad_y, nx, ny) * amplitude
        amplitude *= persistence
        frequency *= lacunarity

    normalized = noise_val / normalization_factor(octaves)
    normalized = normalized * 0.5 + 0.5
    return min(1.0, max(0.0, normalized))


@njit(nogil=True)
def fbm_rows(perm, grad_x, grad_y, row_start, row_stop, width, height, octaves, persistence, lacunarity, scale):
    """
    Computes elevations for image rows [row_start, row_stop) of a
    width x height texture. Each pixel depends only on its own coordinates,
    so disjoint row ranges can be evaluated concurrently.
    """
    out = np.empty((row_stop - row_start, width))
    for y in range(row_start, row_stop):
        v = y / height
        for x in range(width):
            u = x / width
            out[y - row_start, x] = _fbm_point(
                perm, grad_x, grad_y, u, v,
                octaves, persistence, lacunarity, scale, width, height
            )
    return out


def elevation(noise: NoiseField, u: float, v: float, octaves: int, persistence: float,
              lacunarity: float, scale: float, width: int, height: int) -> float:
    """Normalized, clamped fBm elevation at a single texture coordinate."""
    return float(_fbm_point(
        noise.perm, noise.grad_x, noise.grad_y, float(u), float(v),
        int(octaves), float(persistence), float(lacunarity), float(scale), int(width), int(height)
    ))


def elevation_rows(noise: NoiseField, params, row_start: int, row_stop: int) -> np.ndarray:
    """Elevation block for rows [row_start, row_stop) of the texture described by params."""
    return fbm_rows(
        noise.perm, noise.grad_x, noise.grad_y,
        int(row_start), int(row_stop), params.width, params.height,
        params.octaves, params.persistence, params.lacunarity, params.scale
    )
