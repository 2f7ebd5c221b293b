import numpy as np
import pygame
import pytest
from PIL import Image

from planet_texture import (
    ColorSpace,
    ResourceUnavailable,
    TextureGenerationParams,
    assemble_textures,
    generate_planet_texture,
    generate_surface_maps,
)
from planet_texture import textures


@pytest.fixture
def maps():
    return generate_surface_maps(TextureGenerationParams(seed=42, resolution=16, scale=4.0))


def test_textures_are_tagged_with_color_spaces(maps) -> None:
    result = assemble_textures(maps)
    assert result.color_map.color_space is ColorSpace.SRGB
    assert result.bump_map.color_space is ColorSpace.LINEAR


def test_surfaces_match_buffers(maps) -> None:
    result = assemble_textures(maps)
    assert result.color_map.size == (16, 8)
    assert result.bump_map.size == (16, 8)
    for x, y in [(0, 0), (15, 0), (0, 7), (9, 4)]:
        assert tuple(result.color_map.surface.get_at((x, y)))[:3] == tuple(int(c) for c in maps.color_map[y, x])
        grey = int(maps.relief_map[y, x])
        assert tuple(result.bump_map.surface.get_at((x, y)))[:3] == (grey, grey, grey)


def test_images_use_rgb_and_grayscale_modes(maps) -> None:
    result = assemble_textures(maps)
    color_image = result.color_map.to_image()
    bump_image = result.bump_map.to_image()
    assert color_image.mode == "RGB"
    assert bump_image.mode == "L"
    assert color_image.size == bump_image.size == (16, 8)
    assert np.array_equal(np.asarray(bump_image), maps.relief_map)


def test_saved_color_map_embeds_srgb_profile(maps, tmp_path) -> None:
    result = assemble_textures(maps)
    color_path = tmp_path / "map.png"
    bump_path = tmp_path / "bump.png"
    result.color_map.save(str(color_path))
    result.bump_map.save(str(bump_path))

    with Image.open(color_path) as img:
        assert img.info.get("icc_profile")
        assert np.array_equal(np.asarray(img.convert("RGB")), maps.color_map)
    with Image.open(bump_path) as img:
        assert "icc_profile" not in img.info
        assert np.array_equal(np.asarray(img), maps.relief_map)


def test_generate_planet_texture_runs_whole_pipeline() -> None:
    result = generate_planet_texture({"seed": 42, "resolution": 4, "octaves": 1})
    assert result.color_map.size == (4, 2)
    assert result.bump_map.pixels.shape == (2, 4)


def test_surface_failure_is_resource_unavailable(maps, monkeypatch) -> None:
    def fail(array):
        raise pygame.error("out of video memory")

    monkeypatch.setattr(textures.pygame.surfarray, "make_surface", fail)
    with pytest.raises(ResourceUnavailable):
        assemble_textures(maps)
