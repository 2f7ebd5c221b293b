# planet_texture/__init__.py

# This file makes the 'planet_texture' directory a Python package.
# It also defines the public API of the package.

import logging

from .cache import TextureCache
from .errors import GenerationCancelled, InvalidParameter, ResourceUnavailable, TextureGenerationError
from .generator import PlanetTextureGenerator, SurfaceMaps, generate_surface_maps
from .noise import NoiseField
from .params import TextureGenerationParams
from .prng import SeededRandom
from .textures import ColorSpace, PlanetTextures, SurfaceTexture, assemble_textures


def generate_planet_texture(params, logger: logging.Logger = None, **generate_kwargs) -> PlanetTextures:
    """
    Generates the color map and bump map of one planet.

    Accepts a TextureGenerationParams or a config dict; extra keyword
    arguments (workers, timeout, cancel_event, ...) go to
    PlanetTextureGenerator.generate().
    """
    maps = generate_surface_maps(params, logger=logger, **generate_kwargs)
    return assemble_textures(maps)


__all__ = [
    "ColorSpace",
    "GenerationCancelled",
    "InvalidParameter",
    "NoiseField",
    "PlanetTextureGenerator",
    "PlanetTextures",
    "ResourceUnavailable",
    "SeededRandom",
    "SurfaceMaps",
    "SurfaceTexture",
    "TextureCache",
    "TextureGenerationError",
    "TextureGenerationParams",
    "assemble_textures",
    "generate_planet_texture",
    "generate_surface_maps",
]
