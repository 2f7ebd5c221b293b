# planet_texture/generator.py

"""
================================================================================
CORE SURFACE RASTERIZER
================================================================================
This module contains the PlanetTextureGenerator class, responsible for turning
a parameter block into the raw color and relief buffers of one planet.

Data Contract:
---------------
- Inputs (on initialization):
    - params (TextureGenerationParams | dict): The planet's parameters. A dict
      is merged with the internal defaults.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from generate()):
    - SurfaceMaps: an RGB uint8 (height, width, 3) color buffer and a uint8
      (height, width) relief buffer, both row-major top-to-bottom.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same parameters, the output is byte-identical,
  regardless of the number of workers or the row block size.
================================================================================
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from . import color_maps
from . import config as DEFAULTS
from . import fractal
from .errors import GenerationCancelled, InvalidParameter, ResourceUnavailable
from .noise import NoiseField
from .params import TextureGenerationParams


@dataclass(frozen=True)
class SurfaceMaps:
    """The two raw raster buffers of a planet. Owned by the caller once returned."""
    color_map: np.ndarray
    relief_map: np.ndarray

    @property
    def width(self) -> int:
        return self.color_map.shape[1]

    @property
    def height(self) -> int:
        return self.color_map.shape[0]


class PlanetTextureGenerator:
    """
    Rasterizes a planet's surface. The noise field is built once per instance
    and only read afterwards, so row blocks can be evaluated in parallel.
    """
    def __init__(self, params, logger: logging.Logger = None, permutation_table: np.ndarray = None):
        """
        Initializes the generator.

        Args:
            params (TextureGenerationParams | dict): Parameters, or a config
                dictionary that overrides the defaults.
            logger (logging.Logger, optional): The logger instance for all output.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table. If None, one will be generated from the seed.
        """
        self.logger = logger or logging.getLogger(__name__)
        if isinstance(params, dict):
            params = TextureGenerationParams.from_config(params)
        elif not isinstance(params, TextureGenerationParams):
            raise InvalidParameter(f"Expected TextureGenerationParams or dict, got {type(params).__name__}")
        self.params = params

        if permutation_table is not None:
            self.noise = NoiseField(np.asarray(permutation_table))
            self.logger.debug("Initialized with injected permutation table.")
        else:
            self.logger.debug("No permutation table provided, generating new one from seed.")
            self.noise = NoiseField.from_seed(params.seed)

        # Expose the permutation table so callers can reuse it.
        self.permutation_table = self.noise.perm

    def _allocate_buffers(self):
        width, height = self.params.width, self.params.height
        try:
            color_buffer = np.empty((height, width, 3), dtype=np.uint8)
            relief_buffer = np.empty((height, width), dtype=np.uint8)
        except MemoryError as e:
            raise ResourceUnavailable(
                f"Could not allocate {width}x{height} raster buffers for seed {self.params.seed}"
            ) from e
        return color_buffer, relief_buffer

    def _rasterize_block(self, color_buffer: np.ndarray, relief_buffer: np.ndarray, row_start: int, row_stop: int):
        """Fills rows [row_start, row_stop) of both buffers. Blocks never overlap."""
        elevation = fractal.elevation_rows(self.noise, self.params, row_start, row_stop)
        color_buffer[row_start:row_stop] = color_maps.get_terrain_color_array(elevation, self.params)
        relief_buffer[row_start:row_stop] = color_maps.get_relief_array(elevation)

    def _row_blocks(self, row_block_size: int) -> list[tuple[int, int]]:
        height = self.params.height
        return [(start, min(start + row_block_size, height)) for start in range(0, height, row_block_size)]

    def generate(
        self,
        workers: int = DEFAULTS.DEFAULT_WORKERS,
        row_block_size: int = DEFAULTS.DEFAULT_ROW_BLOCK_SIZE,
        cancel_event: threading.Event = None,
        timeout: float = None,
        show_progress: bool = False,
    ) -> SurfaceMaps:
        """
        Runs the pixel loop and returns both buffers.

        Args:
            workers (int): Number of threads evaluating row blocks. 1 runs
                everything on the calling thread.
            row_block_size (int): Rows per work unit.
            cancel_event (threading.Event, optional): Checked between blocks.
            timeout (float, optional): Seconds before generation is abandoned.
            show_progress (bool): Display a tqdm progress bar.

        Raises:
            GenerationCancelled: The cancel event was set or the timeout elapsed.
            ResourceUnavailable: The buffers could not be allocated.
        """
        if workers < 1:
            raise InvalidParameter(f"workers must be >= 1, got {workers}")
        if row_block_size < 1:
            raise InvalidParameter(f"row_block_size must be >= 1, got {row_block_size}")

        start_time = time.perf_counter()
        deadline = start_time + timeout if timeout is not None else None
        width, height = self.params.width, self.params.height
        self.logger.info(f"Generating {width}x{height} planet texture for seed {self.params.seed}...")

        color_buffer, relief_buffer = self._allocate_buffers()
        blocks = self._row_blocks(row_block_size)
        self.logger.debug(f"Scheduling {len(blocks)} row blocks on {workers} worker(s).")

        def check_cancelled():
            if cancel_event is not None and cancel_event.is_set():
                raise GenerationCancelled(f"Generation for seed {self.params.seed} was cancelled.")
            if deadline is not None and time.perf_counter() > deadline:
                raise GenerationCancelled(
                    f"Generation for seed {self.params.seed} exceeded its {timeout:.2f}s timeout."
                )

        check_cancelled()
        with tqdm(total=len(blocks), desc="Rasterizing rows", disable=not show_progress) as progress:
            if workers == 1:
                for row_start, row_stop in blocks:
                    check_cancelled()
                    self._rasterize_block(color_buffer, relief_buffer, row_start, row_stop)
                    progress.update(1)
            else:
                executor = ThreadPoolExecutor(max_workers=workers)
                try:
                    futures = [
                        executor.submit(self._rasterize_block, color_buffer, relief_buffer, row_start, row_stop)
                        for row_start, row_stop in blocks
                    ]
                    for future in as_completed(futures):
                        future.result()
                        progress.update(1)
                        check_cancelled()
                finally:
                    # Drop queued blocks if we are leaving early.
                    executor.shutdown(wait=True, cancel_futures=True)

        elapsed = time.perf_counter() - start_time
        self.logger.info(f"Planet texture for seed {self.params.seed} generated in {elapsed:.3f} seconds.")
        return SurfaceMaps(color_map=color_buffer, relief_map=relief_buffer)


def generate_surface_maps(params, logger: logging.Logger = None, **generate_kwargs) -> SurfaceMaps:
    """Convenience wrapper: builds a generator and runs it once."""
    return PlanetTextureGenerator(params, logger=logger).generate(**generate_kwargs)
