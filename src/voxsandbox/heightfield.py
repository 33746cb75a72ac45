from __future__ import annotations

import math
from typing import Callable

import noise

from . import config

HeightField = Callable[[int, int], int]


def round_half_up(value: float) -> int:
    # Builtin round() is banker's rounding; terrain wants .5 to go up.
    return int(math.floor(value + 0.5))


def wave_height(x: float, z: float) -> int:
    return round_half_up(
        math.sin(x * config.WAVE_FREQUENCY)
        * math.cos(z * config.WAVE_FREQUENCY)
        * config.WAVE_AMPLITUDE
    )


def perlin_height(x: float, z: float) -> int:
    """Rolling hills from 2D Perlin noise.

    ``pnoise2`` is a pure function of its inputs, so this is as reproducible
    as ``wave_height``; it only trades the visible tiling for a rougher look.
    """
    n = noise.pnoise2(
        x * config.NOISE_SCALE,
        z * config.NOISE_SCALE,
        octaves=config.NOISE_OCTAVES,
        persistence=config.NOISE_PERSISTENCE,
        lacunarity=config.NOISE_LACUNARITY,
        repeatx=1024,
        repeaty=1024,
        base=config.NOISE_BASE,
    )
    return round_half_up(n * config.NOISE_AMPLITUDE)


HEIGHT_FIELDS: dict[str, HeightField] = {
    "wave": wave_height,
    "perlin": perlin_height,
}
