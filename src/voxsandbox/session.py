from __future__ import annotations

import logging
import math
from typing import Optional

from . import config
from .heightfield import HeightField, wave_height
from .modes import Mode, ModeMachine
from .physics import AxisResult, resolve_move
from .player import Intents, PlayerState, integrate, look
from .world import (
    Decorator,
    GenerationReport,
    OccupancyIndex,
    World,
    WorldGenerationError,
    generate_world,
    grass_decoration,
)

logger = logging.getLogger(__name__)


def sanitize_dt(dt: float, max_dt: float = config.MAX_DT) -> Optional[float]:
    """Clamp a frame delta, or return None when it must not be applied."""
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(dt) or dt <= 0.0:
        return None
    return min(dt, max_dt)


class Session:
    """Everything one play session owns: world, player and mode state.

    The host calls ``start`` once from the title screen, then ``step`` once per
    frame. Nothing here touches pygame; the host translates devices into
    intents and capture events.
    """

    def __init__(
        self,
        chunk_size: int = config.CHUNK_SIZE,
        world_radius: int = config.WORLD_RADIUS,
        height: HeightField = wave_height,
        decorate: Optional[Decorator] = grass_decoration,
        damping: float = config.DAMPING,
        acceleration: float = config.ACCELERATION,
        max_dt: float = config.MAX_DT,
    ):
        self.chunk_size = chunk_size
        self.world_radius = world_radius
        self.height = height
        self.decorate = decorate
        self.damping = damping
        self.acceleration = acceleration
        self.max_dt = max_dt

        self.modes = ModeMachine()
        self.occupancy = OccupancyIndex()
        self.world: Optional[World] = None
        self.player: Optional[PlayerState] = None
        self.last_axes = AxisResult(False, False)

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    @property
    def inventory_open(self) -> bool:
        return self.modes.inventory_open

    @property
    def captured(self) -> bool:
        return self.modes.captured

    def generate(self) -> GenerationReport:
        if self.world is not None:
            return self._report()
        try:
            self.world = generate_world(
                self.chunk_size,
                self.world_radius,
                height=self.height,
                decorate=self.decorate,
                occupancy=self.occupancy,
            )
        except WorldGenerationError as e:
            logger.error("world generation failed: %s", e)
            self.occupancy.clear()
            return GenerationReport(ok=False, error=e)
        return self._report()

    def _report(self) -> GenerationReport:
        world = self.world
        return GenerationReport(
            ok=True,
            cells=len(world.occupancy),
            decorations=len(world.decorations),
            decoration_error=world.decoration_error,
        )

    def start(self) -> Optional[GenerationReport]:
        """Title -> Playing. Terrain is generated first; on failure stay on the title.

        Returns None when not on the title screen, since nothing was attempted.
        """
        if self.mode is not Mode.TITLE:
            logger.debug("start ignored in mode %s", self.mode.value)
            return None
        report = self.generate()
        if not report.ok:
            return report
        self.player = PlayerState()
        self.modes.start()
        logger.info("session started at %s", self.player.position)
        return report

    def set_mode(self, command: str) -> bool:
        """Apply a screen command; True only when the mode actually changed."""
        if command == "start":
            report = self.start()
            return report is not None and report.ok and self.mode is Mode.PLAYING
        changed = self.modes.set_mode(command)
        if changed and self.mode is Mode.TITLE:
            self.player = None
        return changed

    def toggle_inventory(self) -> bool:
        return self.modes.toggle_inventory()

    def on_capture_acquired(self) -> None:
        self.modes.on_capture_acquired()

    def on_capture_released(self) -> None:
        self.modes.on_capture_released()

    def look(self, dx: float, dy: float) -> None:
        if self.modes.simulating:
            look(self.player, dx, dy)

    def step(self, dt: float, intents: Intents = Intents()) -> Optional[tuple[float, float, float]]:
        """Run one frame of movement and collision, returning the player position.

        Outside of captured play nothing moves. A non-finite or non-positive
        ``dt`` skips the frame; an oversized one is clamped to ``max_dt``.
        """
        if self.player is None:
            return None
        if not self.modes.simulating:
            return self.player.position
        safe_dt = sanitize_dt(dt, self.max_dt)
        if safe_dt is None:
            logger.debug("rejected frame delta %r", dt)
            return self.player.position

        move_x, move_z = integrate(
            self.player,
            safe_dt,
            intents,
            damping=self.damping,
            acceleration=self.acceleration,
            yaw=self.player.yaw,
        )
        self.last_axes = resolve_move(self.player, self.occupancy, move_x, move_z)
        return self.player.position
