from __future__ import annotations

import math
from dataclasses import dataclass, field

from . import config


@dataclass(frozen=True)
class Intents:
    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False


@dataclass
class PlayerState:
    pos: list[float] = field(default_factory=lambda: list(config.SPAWN_POS))
    # Only x and z are integrated; there is no vertical physics.
    vel: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    radius: float = config.PLAYER_RADIUS
    height: float = config.PLAYER_HEIGHT
    yaw: float = 0.0
    pitch: float = 0.0

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.pos[0], self.pos[1], self.pos[2])

    @property
    def speed(self) -> float:
        return math.hypot(self.vel[0], self.vel[2])


def intent_direction(intents: Intents) -> tuple[float, float]:
    dir_x = float(intents.right) - float(intents.left)
    dir_z = float(intents.forward) - float(intents.backward)
    mag = math.sqrt(dir_x**2 + dir_z**2)
    if mag > 0:
        return dir_x / mag, dir_z / mag
    return 0.0, 0.0


def integrate(
    player: PlayerState,
    dt: float,
    intents: Intents,
    damping: float = config.DAMPING,
    acceleration: float = config.ACCELERATION,
    yaw: float = 0.0,
) -> tuple[float, float]:
    """Advance velocity by one step and return the proposed world ``(move_x, move_z)``.

    Damping is applied before acceleration, and acceleration only on an axis
    with a pressed key, so a released axis coasts down to zero. Intents are
    relative to ``yaw`` (forward is ``(sin yaw, cos yaw)`` on x/z); velocity
    stays on world axes so collision can zero one axis at a time.
    """
    vel = player.vel
    vel[0] -= vel[0] * damping * dt
    vel[2] -= vel[2] * damping * dt

    dir_x, dir_z = intent_direction(intents)
    push_x = dir_x * acceleration * dt if (intents.left or intents.right) else 0.0
    push_z = dir_z * acceleration * dt if (intents.forward or intents.backward) else 0.0
    cos_y = math.cos(yaw)
    sin_y = math.sin(yaw)
    vel[0] -= push_x * cos_y + push_z * sin_y
    vel[2] -= push_z * cos_y - push_x * sin_y

    return -vel[0] * dt, -vel[2] * dt


def look(player: PlayerState, dx: float, dy: float, sensitivity: float = config.MOUSE_SENSITIVITY) -> None:
    player.yaw += dx * sensitivity
    player.pitch -= dy * sensitivity
    player.pitch = max(
        -math.pi / 2 + 0.01,
        min(math.pi / 2 - 0.01, player.pitch),
    )
