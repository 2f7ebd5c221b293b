# planet_texture/params.py

"""
================================================================================
TEXTURE GENERATION PARAMETERS
================================================================================
The immutable parameter block consumed by every stage of the pipeline.

Data Contract:
---------------
- Inputs:
    - seed (int): The only required field.
    - Every other field is optional and falls back to planet_texture.config.
    - Colors may be RGB tuples/lists, '#rrggbb' strings or color names.
- Outputs:
    - A frozen, hashable value. Colors are always stored as (r, g, b) ints.
- Side Effects: None.
- Invariants: An instance that exists has passed validate(). Thresholds are
  NOT required to be ordered; the classifier resolves overlaps by taking the
  first matching band.
================================================================================
"""

import dataclasses
import hashlib
import json
import math
import numbers
from dataclasses import dataclass, field

from PIL import ImageColor

from . import config as DEFAULTS
from .errors import InvalidParameter

Color = tuple[int, int, int]

COLOR_FIELDS = (
    "deep_water_color",
    "shallow_water_color",
    "sand_color",
    "grass_color",
    "rock_color",
    "snow_color",
)

THRESHOLD_FIELDS = ("water_level", "sand_level", "grass_level")


def parse_color(value, name: str = "color") -> Color:
    """Converts a user supplied color into an (r, g, b) tuple of 0-255 ints."""
    if isinstance(value, str):
        try:
            return ImageColor.getcolor(value, "RGB")
        except ValueError as e:
            raise InvalidParameter(f"{name}: unrecognised color {value!r}") from e

    if isinstance(value, (tuple, list)) and len(value) == 3:
        channels = []
        for channel in value:
            if not _is_int(channel) or not 0 <= channel <= 255:
                raise InvalidParameter(f"{name}: channels must be integers in [0, 255], got {value!r}")
            channels.append(int(channel))
        return tuple(channels)

    raise InvalidParameter(f"{name}: expected an RGB triple or a color string, got {value!r}")


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class TextureGenerationParams:
    """Everything needed to reproduce one planet's color and relief maps."""
    seed: int
    resolution: int = DEFAULTS.DEFAULT_RESOLUTION
    scale: float = DEFAULTS.DEFAULT_SCALE
    octaves: int = DEFAULTS.DEFAULT_OCTAVES
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE
    lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY
    water_level: float = DEFAULTS.DEFAULT_WATER_LEVEL
    sand_level: float = DEFAULTS.DEFAULT_SAND_LEVEL
    grass_level: float = DEFAULTS.DEFAULT_GRASS_LEVEL
    deep_water_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["deep_water"])
    shallow_water_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["shallow_water"])
    sand_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["sand"])
    grass_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["grass"])
    rock_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["rock"])
    snow_color: Color = field(default=DEFAULTS.COLOR_MAP_TERRAIN["snow"])

    def __post_init__(self):
        # Normalise colors first so that validation and hashing see one form.
        for name in COLOR_FIELDS:
            object.__setattr__(self, name, parse_color(getattr(self, name), name))
        self.validate()

        # Coerce numpy scalars and int-valued floats so equal blocks hash equally.
        for name in ("seed", "resolution", "octaves"):
            object.__setattr__(self, name, int(getattr(self, name)))
        for name in ("scale", "persistence", "lacunarity") + THRESHOLD_FIELDS:
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def from_config(cls, config: dict) -> "TextureGenerationParams":
        """
        Builds a parameter block from a plain dictionary (e.g. loaded from
        JSON), falling back to the internal defaults for every missing key.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise InvalidParameter(f"Unknown texture parameter(s): {', '.join(unknown)}")
        if 'seed' not in config:
            raise InvalidParameter("A 'seed' is required to generate a planet texture.")

        return cls(
            seed=config['seed'],
            resolution=config.get('resolution', DEFAULTS.DEFAULT_RESOLUTION),
            scale=config.get('scale', DEFAULTS.DEFAULT_SCALE),
            octaves=config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            persistence=config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
            lacunarity=config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
            water_level=config.get('water_level', DEFAULTS.DEFAULT_WATER_LEVEL),
            sand_level=config.get('sand_level', DEFAULTS.DEFAULT_SAND_LEVEL),
            grass_level=config.get('grass_level', DEFAULTS.DEFAULT_GRASS_LEVEL),
            deep_water_color=config.get('deep_water_color', DEFAULTS.COLOR_MAP_TERRAIN["deep_water"]),
            shallow_water_color=config.get('shallow_water_color', DEFAULTS.COLOR_MAP_TERRAIN["shallow_water"]),
            sand_color=config.get('sand_color', DEFAULTS.COLOR_MAP_TERRAIN["sand"]),
            grass_color=config.get('grass_color', DEFAULTS.COLOR_MAP_TERRAIN["grass"]),
            rock_color=config.get('rock_color', DEFAULTS.COLOR_MAP_TERRAIN["rock"]),
            snow_color=config.get('snow_color', DEFAULTS.COLOR_MAP_TERRAIN["snow"]),
        )

    def validate(self):
        """Raises InvalidParameter for any value the generator cannot honour."""
        if not _is_int(self.seed):
            raise InvalidParameter(f"seed must be an integer, got {self.seed!r}")
        if not _is_int(self.resolution) or self.resolution < 2:
            raise InvalidParameter(f"resolution must be an integer >= 2, got {self.resolution!r}")
        if not _is_real(self.scale) or self.scale <= 0:
            raise InvalidParameter(f"scale must be > 0, got {self.scale!r}")
        if not _is_int(self.octaves) or self.octaves < 1:
            raise InvalidParameter(f"octaves must be an integer >= 1, got {self.octaves!r}")
        if not _is_real(self.persistence) or self.persistence <= 0:
            raise InvalidParameter(f"persistence must be > 0, got {self.persistence!r}")
        if not _is_real(self.lacunarity) or self.lacunarity < 1:
            raise InvalidParameter(f"lacunarity must be >= 1, got {self.lacunarity!r}")
        for name in THRESHOLD_FIELDS:
            value = getattr(self, name)
            if not _is_real(value) or not 0.0 <= value <= 1.0:
                raise InvalidParameter(f"{name} must be within [0, 1], got {value!r}")

    @property
    def width(self) -> int:
        return self.resolution

    @property
    def height(self) -> int:
        return self.resolution // 2

    def to_dict(self) -> dict:
        """A JSON-serialisable view; colors become '#rrggbb' strings."""
        data = dataclasses.asdict(self)
        for name in COLOR_FIELDS:
            data[name] = "#{:02x}{:02x}{:02x}".format(*data[name])
        return data

    def cache_key(self) -> str:
        """A structural hash, stable across processes, for caller-side memoisation."""
        canonical = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    def replace(self, **changes) -> "TextureGenerationParams":
        return dataclasses.replace(self, **changes)
