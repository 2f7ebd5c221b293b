import numpy as np
import pytest

from planet_texture import TextureGenerationParams
from planet_texture import color_maps
from planet_texture.color_maps import (
    BIOME_ID_GRASS,
    BIOME_ID_ROCK,
    BIOME_ID_SAND,
    BIOME_ID_WATER,
    biome_for,
    calculate_biome_map,
    color_for,
    get_relief_array,
    get_terrain_color_array,
)


@pytest.fixture
def params():
    return TextureGenerationParams(seed=1)


def test_band_boundaries(params) -> None:
    assert color_for(0.0, params) == params.deep_water_color
    assert color_for(0.3, params) == params.sand_color
    assert color_for(0.39, params) == params.sand_color
    assert color_for(0.4, params) == params.grass_color
    assert color_for(0.59, params) == params.grass_color
    assert color_for(0.6, params) == params.rock_color
    assert color_for(1.0, params) == params.snow_color


def test_water_is_blended_in_linear_light(params) -> None:
    # Halfway through the water band: deep (0, 0, 77) -> shallow (0, 31, 126).
    # A plain byte average would give (0, 16, 102).
    assert color_for(0.15, params) == (0, 20, 105)


def test_snow_is_eased_quadratically(params) -> None:
    # Halfway between grass level and 1.0 the ratio is 0.5 ** 2 = 0.25,
    # blended in linear light rather than giving the byte value 160.
    assert color_for(0.8, params) == (172, 172, 172)


def test_vectorised_gradients_use_linear_light(params) -> None:
    colors = get_terrain_color_array(np.array([0.15, 0.8]), params)
    assert colors.tolist() == [[0, 20, 105], [172, 172, 172]]


def test_srgb_transfer_functions_round_trip_every_byte() -> None:
    values = np.arange(256) / 255.0
    round_trip = np.floor(color_maps.linear_to_srgb(color_maps.srgb_to_linear(values)) * 255 + 0.5)
    assert round_trip.astype(int).tolist() == list(range(256))
    assert color_maps.srgb_to_linear(1.0) == pytest.approx(1.0)
    assert color_maps.srgb_to_linear(0.5) == pytest.approx(0.214, abs=1e-3)


def test_zero_water_level_never_divides_by_zero() -> None:
    params = TextureGenerationParams(seed=1, water_level=0.0)
    assert color_for(0.0, params) == params.sand_color
    elevations = np.linspace(0.0, 1.0, 101)
    assert BIOME_ID_WATER not in calculate_biome_map(elevations, params)
    colors = get_terrain_color_array(elevations, params)
    assert tuple(colors[0]) == params.sand_color


def test_grass_level_of_one_keeps_rock_color() -> None:
    params = TextureGenerationParams(seed=1, grass_level=1.0)
    assert color_for(1.0, params) == params.rock_color
    assert tuple(get_terrain_color_array(np.array([1.0]), params)[0]) == params.rock_color


def test_sweep_visits_each_band_once_in_order(params) -> None:
    elevations = np.linspace(0.0, 1.0, 1001)
    bands = calculate_biome_map(elevations, params)
    assert np.all(np.diff(bands.astype(int)) >= 0)
    assert set(bands.tolist()) == {BIOME_ID_WATER, BIOME_ID_SAND, BIOME_ID_GRASS, BIOME_ID_ROCK}

    colors = [color_for(e, params) for e in elevations]
    assert colors[0] == params.deep_water_color
    assert colors[-1] == params.snow_color
    water_end = [c for e, c in zip(elevations, colors) if e < params.water_level][-1]
    assert water_end[2] > params.deep_water_color[2]


def test_out_of_order_thresholds_take_first_match() -> None:
    params = TextureGenerationParams(seed=1, water_level=0.5, sand_level=0.2, grass_level=0.4)
    assert biome_for(0.3, params) == BIOME_ID_WATER
    assert biome_for(0.45, params) == BIOME_ID_WATER
    assert biome_for(0.55, params) == BIOME_ID_ROCK
    assert calculate_biome_map(np.array([0.3, 0.55]), params).tolist() == [BIOME_ID_WATER, BIOME_ID_ROCK]


def test_vectorised_colors_match_scalar_colors(params) -> None:
    elevations = np.linspace(0.0, 1.0, 257)
    colors = get_terrain_color_array(elevations, params)
    assert colors.dtype == np.uint8
    assert colors.shape == (257, 3)
    for e, rgb in zip(elevations, colors):
        assert tuple(int(c) for c in rgb) == color_for(float(e), params)


def test_biome_for_agrees_with_biome_map(params) -> None:
    elevations = np.linspace(0.0, 1.0, 64)
    bands = calculate_biome_map(elevations, params)
    assert [biome_for(float(e), params) for e in elevations] == bands.tolist()


def test_custom_colors_are_used() -> None:
    params = TextureGenerationParams(seed=1, sand_color="#ff0000", grass_color=(1, 2, 3))
    assert color_for(0.35, params) == (255, 0, 0)
    assert color_for(0.5, params) == (1, 2, 3)


def test_relief_is_floored_intensity() -> None:
    relief = get_relief_array(np.array([[0.0, 0.5], [0.999, 1.0]]))
    assert relief.dtype == np.uint8
    assert relief.tolist() == [[0, 127], [254, 255]]


def test_module_exposes_band_ids_in_ascending_order() -> None:
    assert color_maps.BIOME_ID_WATER < color_maps.BIOME_ID_SAND < color_maps.BIOME_ID_GRASS < color_maps.BIOME_ID_ROCK
