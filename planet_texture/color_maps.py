# planet_texture/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the biome classification rules for converting normalized
elevation into terrain colors and relief intensities.

Palette colors are 8-bit sRGB. Gradients (deep to shallow water, rock to snow)
are blended in linear light and encoded back to sRGB before rounding.

It is designed to be a pure, stateless utility with no dependencies on Pygame,
so it can be used both by the rasterizer and by tools that only need colors.
================================================================================
"""

import numpy as np

# --- Biome Band IDs ---
# One integer per elevation band, in ascending elevation order.
BIOME_ID_WATER = 0
BIOME_ID_SAND = 1
BIOME_ID_GRASS = 2
BIOME_ID_ROCK = 3


def _water_ratio(elevation, water_level):
    # A zero-width water band never matches, but keep the ratio defined.
    if water_level == 0:
        return 1.0
    return elevation / water_level


def _rock_ratio(elevation, grass_level):
    if grass_level == 1:
        return 0.0
    ratio = min(1.0, (elevation - grass_level) / (1.0 - grass_level))
    # Squared so the snow cap only takes over near the peaks.
    return ratio * ratio


def srgb_to_linear(channel):
    """Decodes sRGB-encoded channel values in [0, 1] to linear light."""
    channel = np.asarray(channel, dtype=np.float64)
    return np.where(channel < 0.04045,
                    channel * 0.0773993808,
                    np.power(channel * 0.9478672986 + 0.0521327014, 2.4))


def linear_to_srgb(channel):
    """Encodes linear-light channel values in [0, 1] back to sRGB."""
    channel = np.asarray(channel, dtype=np.float64)
    return np.where(channel < 0.0031308,
                    channel * 12.92,
                    1.055 * np.power(channel, 0.41666) - 0.055)


def _lerp_color_array(start, end, ratio) -> np.ndarray:
    """
    Blends two 8-bit sRGB colors in linear light, re-encodes the result to
    sRGB and rounds half-up to 8 bits. The ratio may be a scalar or an array;
    the result gains a trailing channel axis.
    """
    start = srgb_to_linear(np.array(start, dtype=np.float64) / 255.0)
    end = srgb_to_linear(np.array(end, dtype=np.float64) / 255.0)
    ratio = np.asarray(ratio, dtype=np.float64)[..., np.newaxis]
    values = linear_to_srgb(start + (end - start) * ratio) * 255.0
    return np.floor(np.clip(values, 0, 255) + 0.5)


def _lerp_color(start, end, ratio):
    return tuple(int(c) for c in _lerp_color_array(start, end, ratio))


def color_for(elevation: float, params) -> tuple[int, int, int]:
    """
    Maps a single elevation value onto an (r, g, b) terrain color.
    Bands are tested in ascending order and the first match wins.
    """
    if elevation < params.water_level:
        return _lerp_color(params.deep_water_color, params.shallow_water_color,
                           _water_ratio(elevation, params.water_level))
    elif elevation < params.sand_level:
        return params.sand_color
    elif elevation < params.grass_level:
        return params.grass_color
    return _lerp_color(params.rock_color, params.snow_color, _rock_ratio(elevation, params.grass_level))


def biome_for(elevation: float, params) -> int:
    """The band ID that color_for() would use for this elevation."""
    if elevation < params.water_level:
        return BIOME_ID_WATER
    elif elevation < params.sand_level:
        return BIOME_ID_SAND
    elif elevation < params.grass_level:
        return BIOME_ID_GRASS
    return BIOME_ID_ROCK


# --- Biome & Color Array Generation Functions ---
def calculate_biome_map(elevation_values: np.ndarray, params) -> np.ndarray:
    """Classifies every elevation into a band ID (uint8 array of the same shape)."""
    elevation_values = np.asarray(elevation_values, dtype=np.float64)
    conditions = [
        elevation_values < params.water_level,
        elevation_values < params.sand_level,
        elevation_values < params.grass_level,
    ]
    choices = [BIOME_ID_WATER, BIOME_ID_SAND, BIOME_ID_GRASS]
    return np.select(conditions, choices, default=BIOME_ID_ROCK).astype(np.uint8)


def get_terrain_color_array(elevation_values: np.ndarray, params) -> np.ndarray:
    """
    Converts normalized elevation data [0, 1] into an RGB uint8 array with a
    trailing channel axis. Produces exactly the colors color_for() would.
    """
    elevation_values = np.asarray(elevation_values, dtype=np.float64)
    biome_map = calculate_biome_map(elevation_values, params)

    if params.water_level == 0:
        water_ratio = np.ones_like(elevation_values)
    else:
        water_ratio = elevation_values / params.water_level

    if params.grass_level == 1:
        rock_ratio = np.zeros_like(elevation_values)
    else:
        rock_ratio = np.minimum(1.0, (elevation_values - params.grass_level) / (1.0 - params.grass_level))
        rock_ratio = rock_ratio * rock_ratio

    # Ratios outside [0, 1] only occur for pixels of other bands, which are overwritten below.
    water_ratio = np.clip(water_ratio, 0.0, 1.0)
    rock_ratio = np.clip(rock_ratio, 0.0, 1.0)

    water_colors = _lerp_color_array(params.deep_water_color, params.shallow_water_color, water_ratio)
    rock_colors = _lerp_color_array(params.rock_color, params.snow_color, rock_ratio)

    # Start from the rock/snow gradient and overwrite the lower bands.
    colors = rock_colors
    colors[biome_map == BIOME_ID_GRASS] = params.grass_color
    colors[biome_map == BIOME_ID_SAND] = params.sand_color
    water_mask = biome_map == BIOME_ID_WATER
    colors[water_mask] = water_colors[water_mask]
    return colors.astype(np.uint8)


def get_relief_array(elevation_values: np.ndarray) -> np.ndarray:
    """Converts normalized elevation data [0, 1] into 8-bit relief intensities."""
    scaled = np.floor(np.asarray(elevation_values, dtype=np.float64) * 255)
    return np.clip(scaled, 0, 255).astype(np.uint8)
