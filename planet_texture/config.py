# planet_texture/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
texture generator. These values are used if they are not explicitly provided
by the caller's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PLANET.
Instead, pass a configuration dictionary to TextureGenerationParams.from_config.
================================================================================
"""

# --- Texture Dimensions ---
# Width of the equirectangular texture in pixels. Height is always width // 2
# so the map wraps a sphere at a 2:1 aspect ratio.
DEFAULT_RESOLUTION = 512

# --- Noise Generation ---
# Spatial period of the base noise layer. A larger number means larger
# continents.
DEFAULT_SCALE = 50.0
DEFAULT_OCTAVES = 4
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0

# --- Terrain Levels (Normalized 0.0 to 1.0) ---
# Anything above the grass level is rock, fading to snow at the peaks.
DEFAULT_WATER_LEVEL = 0.3
DEFAULT_SAND_LEVEL = 0.4
DEFAULT_GRASS_LEVEL = 0.6

# --- Default Color Mappings ---
COLOR_MAP_TERRAIN = {
    "deep_water": (0, 0, 77),        # #00004d
    "shallow_water": (0, 31, 126),   # #001f7e
    "sand": (194, 178, 128),         # #c2b280
    "grass": (34, 139, 34),          # #228b22
    "rock": (128, 128, 128),         # #808080
    "snow": (255, 255, 255),         # #ffffff
}

# --- Rasterization & Performance ---
# Number of image rows evaluated per work unit. Cancellation is checked
# between blocks, so smaller blocks react faster at a small scheduling cost.
DEFAULT_ROW_BLOCK_SIZE = 32
DEFAULT_WORKERS = 1

# --- Caller-side Caching ---
DEFAULT_CACHE_ENTRIES = 16
