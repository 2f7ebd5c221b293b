# planet_texture/textures.py

"""
================================================================================
TEXTURE ASSEMBLY
================================================================================
Wraps the raw raster buffers into objects a Pygame-based renderer can use
directly. The color map is tagged as perceptual (sRGB) data, the relief map
as linear intensity, so the renderer knows which one to linearise.

This module requires Pygame, as it is the hand-off to the rendering side.
================================================================================
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pygame
from PIL import Image, ImageCms

from .errors import ResourceUnavailable
from .generator import SurfaceMaps


class ColorSpace(Enum):
    SRGB = "srgb"
    LINEAR = "linear"


def _srgb_icc_profile() -> bytes:
    return ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()


@dataclass(frozen=True)
class SurfaceTexture:
    """A renderer surface plus the pixel data and color space it was built from."""
    surface: pygame.Surface
    pixels: np.ndarray
    color_space: ColorSpace

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def to_image(self) -> Image.Image:
        """Returns a Pillow image ('RGB' for color data, 'L' for relief)."""
        # uint8 (H, W, 3) arrays map to 'RGB', uint8 (H, W) arrays to 'L'.
        return Image.fromarray(np.ascontiguousarray(self.pixels, dtype=np.uint8))

    def save(self, path: str):
        """Writes a PNG. sRGB textures carry an embedded sRGB ICC profile."""
        img = self.to_image()
        if self.color_space is ColorSpace.SRGB:
            img.save(path, 'PNG', icc_profile=_srgb_icc_profile())
        else:
            img.save(path, 'PNG')


@dataclass(frozen=True)
class PlanetTextures:
    """The finished texture pair for one planet."""
    color_map: SurfaceTexture
    bump_map: SurfaceTexture


def make_surface(pixels_hwc: np.ndarray) -> pygame.Surface:
    """
    Creates a pygame.Surface from a (height, width, 3) array. Pygame indexes
    surfaces as (x, y), so the array is transposed to (width, height, 3).
    """
    try:
        return pygame.surfarray.make_surface(np.transpose(pixels_hwc, (1, 0, 2)))
    except pygame.error as e:
        height, width = pixels_hwc.shape[:2]
        raise ResourceUnavailable(f"Could not create a {width}x{height} surface: {e}") from e


def assemble_textures(maps: SurfaceMaps) -> PlanetTextures:
    """Packages the color and relief buffers as tagged renderer textures."""
    # The relief surface is an equal-valued grey triple per pixel.
    relief_rgb = np.repeat(maps.relief_map[..., np.newaxis], 3, axis=-1)

    color_texture = SurfaceTexture(
        surface=make_surface(maps.color_map),
        pixels=maps.color_map,
        color_space=ColorSpace.SRGB,
    )
    bump_texture = SurfaceTexture(
        surface=make_surface(relief_rgb),
        pixels=maps.relief_map,
        color_space=ColorSpace.LINEAR,
    )
    return PlanetTextures(color_map=color_texture, bump_map=bump_texture)
