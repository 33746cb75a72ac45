from __future__ import annotations

from typing import NamedTuple

from .heightfield import round_half_up
from .player import PlayerState
from .world import OccupancyIndex

_NEIGHBORHOOD = tuple(
    (dx, dy, dz)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dz in (-1, 0, 1)
)


class AxisResult(NamedTuple):
    blocked_x: bool
    blocked_z: bool


def collides(
    pos: tuple[float, float, float],
    occupancy: OccupancyIndex,
    radius: float,
    height: float,
) -> bool:
    """Box overlap of the player envelope against voxels near ``pos``.

    Only the 3x3x3 cells around the rounded position are looked at, so the
    test is exact for envelopes up to about one cell in each half-extent.
    """
    px, py, pz = pos
    rx = round_half_up(px)
    ry = round_half_up(py)
    rz = round_half_up(pz)
    reach_xz = radius + 0.5
    reach_y = height + 0.5
    for ox, oy, oz in _NEIGHBORHOOD:
        cell = (rx + ox, ry + oy, rz + oz)
        if cell not in occupancy:
            continue
        if (
            abs(px - cell[0]) < reach_xz
            and abs(py - cell[1]) < reach_y
            and abs(pz - cell[2]) < reach_xz
        ):
            return True
    return False


def resolve_move(
    player: PlayerState,
    occupancy: OccupancyIndex,
    move_x: float,
    move_z: float,
) -> AxisResult:
    """Apply ``move_x`` then ``move_z``, each only if its own endpoint is clear.

    The Z candidate uses the X already committed this step, which is what lets
    the player slide along a wall. A blocked axis loses its velocity.
    """
    pos = player.pos
    trial = (pos[0] + move_x, pos[1], pos[2])
    blocked_x = collides(trial, occupancy, player.radius, player.height)
    if blocked_x:
        player.vel[0] = 0.0
    else:
        pos[0] = trial[0]

    trial = (pos[0], pos[1], pos[2] + move_z)
    blocked_z = collides(trial, occupancy, player.radius, player.height)
    if blocked_z:
        player.vel[2] = 0.0
    else:
        pos[2] = trial[2]

    return AxisResult(blocked_x, blocked_z)
