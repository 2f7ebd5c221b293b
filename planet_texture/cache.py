# planet_texture/cache.py

"""
Caller-owned memoisation of finished texture pairs.

Generation is a pure function of its parameters, so a scene that asks for the
same planet twice only needs to pay for it once. The generator itself never
caches; whoever owns a TextureCache decides how long results live.
"""

import logging
from collections import OrderedDict

from . import config as DEFAULTS


class TextureCache:
    """A small LRU cache keyed by TextureGenerationParams.cache_key()."""

    def __init__(self, max_entries: int = DEFAULTS.DEFAULT_CACHE_ENTRIES, logger: logging.Logger = None):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self.logger = logger or logging.getLogger(__name__)
        self._entries = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, params) -> bool:
        return params.cache_key() in self._entries

    def get(self, params):
        key = params.cache_key()
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, params, value):
        key = params.cache_key()
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            self.logger.debug(f"Evicted cached texture {evicted_key[:12]}.")

    def get_or_generate(self, params, generate):
        """
        Returns the cached result for params, or calls generate(params),
        stores its result and returns it.
        """
        cached = self.get(params)
        if cached is not None:
            self.hits += 1
            self.logger.debug(f"Texture cache hit for seed {params.seed}.")
            return cached

        self.misses += 1
        value = generate(params)
        self.put(params, value)
        return value

    def clear(self):
        self._entries.clear()
        self.hits = 0
        self.misses = 0
