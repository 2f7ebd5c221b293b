import pytest

from planet_texture import TextureCache, TextureGenerationParams


def test_same_params_are_generated_once() -> None:
    cache = TextureCache()
    calls = []

    def generate(params):
        calls.append(params.seed)
        return f"textures-{params.seed}"

    first = cache.get_or_generate(TextureGenerationParams(seed=1), generate)
    second = cache.get_or_generate(TextureGenerationParams(seed=1), generate)
    assert first == second == "textures-1"
    assert calls == [1]
    assert (cache.hits, cache.misses) == (1, 1)


def test_changed_shape_parameters_regenerate() -> None:
    cache = TextureCache()
    cache.get_or_generate(TextureGenerationParams(seed=1), lambda p: "a")
    result = cache.get_or_generate(TextureGenerationParams(seed=1, octaves=6), lambda p: "b")
    assert result == "b"
    assert cache.misses == 2
    assert len(cache) == 2


def test_least_recently_used_entry_is_evicted() -> None:
    cache = TextureCache(max_entries=2)
    a, b, c = (TextureGenerationParams(seed=s) for s in (1, 2, 3))
    cache.put(a, "a")
    cache.put(b, "b")
    assert cache.get(a) == "a"
    cache.put(c, "c")
    assert a in cache
    assert b not in cache
    assert cache.get(c) == "c"


def test_clear_resets_entries_and_counters() -> None:
    cache = TextureCache()
    params = TextureGenerationParams(seed=5)
    cache.get_or_generate(params, lambda p: "x")
    cache.clear()
    assert len(cache) == 0
    assert cache.get(params) is None
    assert (cache.hits, cache.misses) == (0, 0)


def test_rejects_empty_capacity() -> None:
    with pytest.raises(ValueError):
        TextureCache(max_entries=0)
