# bake_textures.py

"""
================================================================================
OFFLINE PLANET TEXTURE BAKER
================================================================================
This script is a command-line tool for pre-rendering the color and bump maps
of a list of planets to PNG files ("baking"), so a scene can load them instead
of generating them at startup.

Usage:
    python bake_textures.py --config path/to/planets.json --output baked_textures

Config format:
    {
        "texture_defaults": {"resolution": 512, "octaves": 5},
        "planets": [
            {"name": "terra", "seed": 42},
            {"name": "dune", "seed": 7, "water_level": 0.05}
        ]
    }
================================================================================
"""
import argparse
import hashlib
import json
import logging
import os
import sys
import time

from tqdm import tqdm

from planet_texture import (
    InvalidParameter,
    TextureCache,
    TextureGenerationError,
    TextureGenerationParams,
    generate_planet_texture,
)


def bake_textures(config_path: str, output_dir: str, workers: int = 1, logger: logging.Logger = None) -> bool:
    """
    Loads a planet list, generates every planet's textures and saves them as
    content-addressed PNGs with a manifest.json.

    Returns:
        bool: True if every planet was baked.
    """
    logger = logger or logging.getLogger("Baker")

    # 1. --- Load Configuration ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return False

    texture_defaults = config.get('texture_defaults', {})
    planets = config.get('planets', [])
    if not planets:
        logger.warning("No planets listed in the configuration; nothing to bake.")

    # 2. --- Prepare Output Directories ---
    textures_dir = os.path.join(output_dir, "textures")
    os.makedirs(textures_dir, exist_ok=True)
    logger.info(f"Output directory set to '{output_dir}'")

    # 3. --- Main Baking Loop ---
    # Identical parameter sets are generated once thanks to the cache.
    cache = TextureCache(max_entries=max(1, len(planets)), logger=logger)
    manifest = {"planets": {}}
    generation_config = {}
    saved_hashes = set()
    seen_names = set()
    failures = 0
    start_time = time.perf_counter()

    for index, planet in enumerate(tqdm(planets, desc="Baking Planets")):
        name = planet.get('name', f"planet-{index}")
        if name in seen_names:
            logger.error(f"Skipping planet '{name}': the name is already used by an earlier planet.")
            failures += 1
            continue
        seen_names.add(name)

        planet_config = dict(texture_defaults)
        planet_config.update({key: value for key, value in planet.items() if key != 'name'})

        try:
            params = TextureGenerationParams.from_config(planet_config)
        except InvalidParameter as e:
            logger.error(f"Skipping planet '{name}': {e}")
            failures += 1
            continue

        try:
            textures = cache.get_or_generate(
                params,
                lambda p: generate_planet_texture(p, logger=logger, workers=workers)
            )
        except TextureGenerationError as e:
            logger.error(f"Failed to generate planet '{name}': {e}")
            failures += 1
            continue

        entry = {
            "width": params.width,
            "height": params.height,
            "cache_key": params.cache_key(),
        }
        for kind, texture in (("map", textures.color_map), ("bump_map", textures.bump_map)):
            file_hash = hashlib.sha256(texture.pixels.tobytes()).hexdigest()
            filename = f"{file_hash}.png"
            if file_hash not in saved_hashes:
                saved_hashes.add(file_hash)
                texture.save(os.path.join(textures_dir, filename))
            entry[kind] = os.path.join("textures", filename)
            entry[f"{kind}_color_space"] = texture.color_space.value

        manifest["planets"][name] = entry
        generation_config[name] = params.to_dict()

    # 4. --- Finalization ---
    manifest_path = os.path.join(output_dir, "manifest.json")
    with open(manifest_path, 'w') as f:
        json.dump(manifest, f, indent=2)

    # The "birth certificate": every resolved parameter, defaults included.
    gen_config_path = os.path.join(output_dir, "generation_config.json")
    with open(gen_config_path, 'w') as f:
        json.dump(generation_config, f, indent=4)

    end_time = time.perf_counter()
    logger.info("--- Bake Complete ---")
    logger.info(f"Planets baked: {len(manifest['planets'])}/{len(planets)} ({failures} failed)")
    logger.info(f"Unique images saved: {len(saved_hashes)} (cache hits: {cache.hits})")
    logger.info(f"Total time: {end_time - start_time:.2f} seconds.")
    return failures == 0


# --- Command-Line Interface ---
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Offline texture baker for procedurally generated planets.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON file listing the planets to bake."
    )
    parser.add_argument(
        "--output",
        type=str,
        default="baked_textures",
        help="Directory that will receive the PNGs and manifest.json."
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=max(1, (os.cpu_count() or 2) - 1),
        help="Threads used to rasterize each planet."
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Baker")

    return 0 if bake_textures(args.config, args.output, workers=args.workers, logger=logger) else 1


if __name__ == "__main__":
    sys.exit(main())
