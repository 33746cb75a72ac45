from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional

import numpy as np

from . import config
from .heightfield import HeightField, round_half_up, wave_height

logger = logging.getLogger(__name__)

Coord = tuple[int, int, int]
Decorator = Callable[[int, int, int, random.Random], Optional[dict]]


class WorldGenerationError(RuntimeError):
    """Terrain could not be generated; the occupancy index is unusable."""


def _as_cell(cell) -> Coord:
    """Normalize ``cell`` to an int triple; integral floats are accepted, fractions are not."""
    try:
        x, y, z = cell
        ints = (int(x), int(y), int(z))
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"not a voxel coordinate: {cell!r}") from e
    if ints != (x, y, z):
        raise ValueError(f"voxel coordinate must be integral: {cell!r}")
    return ints


class OccupancyIndex:
    """Set of occupied voxel cells, keyed by integer ``(x, y, z)`` tuples."""

    def __init__(self, cells: Iterable[Coord] = ()):
        self._cells: set[Coord] = set()
        for cell in cells:
            self.add(cell)

    def add(self, cell: Coord) -> None:
        self._cells.add(_as_cell(cell))

    def populate(self, cells: Iterable[Coord]) -> None:
        # Replaces, never appends: regenerating must not leave stale cells.
        checked = [_as_cell(cell) for cell in cells]
        self._cells.clear()
        self._cells.update(checked)

    def clear(self) -> None:
        self._cells.clear()

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._cells)

    def to_array(self) -> np.ndarray:
        """Cells as an ``(N, 3)`` int32 array in lexicographic order."""
        if not self._cells:
            return np.zeros((0, 3), dtype=np.int32)
        return np.array(sorted(self._cells), dtype=np.int32)


@dataclass
class World:
    chunk_size: int
    world_radius: int
    occupancy: OccupancyIndex
    decorations: list[dict] = field(default_factory=list)
    decoration_error: Optional[BaseException] = None


@dataclass(frozen=True)
class GenerationReport:
    ok: bool
    cells: int = 0
    decorations: int = 0
    error: Optional[BaseException] = None
    decoration_error: Optional[BaseException] = None


def grass_decoration(x: int, y: int, z: int, rng: random.Random) -> Optional[dict]:
    if rng.random() >= 0.25:
        return None
    blades = []
    for _ in range(config.GRASS_BLADES):
        length_mult = rng.uniform(0.75, 1.25)
        tip_offset = rng.uniform(-1, 1)
        blades.append((length_mult, tip_offset))
    color_offset = (
        rng.randint(-10, 10),
        rng.randint(-10, 10),
        rng.randint(-10, 10),
    )
    return {
        "type": "grass",
        "pos": (x, y + 1, z),
        "blades": blades,
        "color_offset": color_offset,
    }


def iter_columns(chunk_size: int, world_radius: int) -> Iterator[tuple[int, int]]:
    for cx in range(-world_radius, world_radius):
        for cz in range(-world_radius, world_radius):
            x0 = cx * chunk_size
            z0 = cz * chunk_size
            for lx in range(chunk_size):
                for lz in range(chunk_size):
                    yield x0 + lx, z0 + lz


def terrain_cells(chunk_size: int, world_radius: int, height: HeightField = wave_height) -> list[Coord]:
    cells: list[Coord] = []
    for wx, wz in iter_columns(chunk_size, world_radius):
        h = height(wx, wz)
        cells.append((wx, round_half_up(h), wz))
    return cells


def _decorate(cells: list[Coord], decorate: Decorator, seed: int) -> list[dict]:
    rng = random.Random(seed)
    decorations = []
    for x, y, z in cells:
        item = decorate(x, y, z, rng)
        if item is not None:
            decorations.append(item)
    return decorations


def generate_world(
    chunk_size: int = config.CHUNK_SIZE,
    world_radius: int = config.WORLD_RADIUS,
    height: HeightField = wave_height,
    decorate: Optional[Decorator] = grass_decoration,
    seed: int = config.GRASS_SEED,
    occupancy: Optional[OccupancyIndex] = None,
) -> World:
    """Place one voxel per column over chunks ``[-R, R)`` on both axes.

    When ``occupancy`` is given it is cleared and refilled, so calling this
    twice on the same index never double-inserts. Decoration failures are
    logged and kept on ``World.decoration_error``; the terrain survives them.
    A failing height field raises ``WorldGenerationError``.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if world_radius < 0:
        raise ValueError(f"world_radius must be non-negative, got {world_radius}")

    try:
        cells = terrain_cells(chunk_size, world_radius, height)
    except Exception as e:
        raise WorldGenerationError(f"height field failed: {e}") from e

    if occupancy is None:
        occupancy = OccupancyIndex()
    occupancy.populate(cells)
    world = World(chunk_size=chunk_size, world_radius=world_radius, occupancy=occupancy)
    logger.info("generated %d voxels (chunk_size=%d, radius=%d)", len(occupancy), chunk_size, world_radius)

    if decorate is not None:
        try:
            world.decorations = _decorate(cells, decorate, seed)
        except Exception as e:
            logger.warning("decorations unavailable, continuing with bare terrain: %s", e, exc_info=True)
            world.decoration_error = e
    return world
