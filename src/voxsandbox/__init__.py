from .heightfield import HEIGHT_FIELDS, perlin_height, round_half_up, wave_height
from .modes import Mode, ModeMachine
from .physics import AxisResult, collides, resolve_move
from .player import Intents, PlayerState, integrate
from .session import Session, sanitize_dt
from .world import (
    GenerationReport,
    OccupancyIndex,
    World,
    WorldGenerationError,
    generate_world,
    grass_decoration,
)

__all__ = [
    "HEIGHT_FIELDS",
    "AxisResult",
    "GenerationReport",
    "Intents",
    "Mode",
    "ModeMachine",
    "OccupancyIndex",
    "PlayerState",
    "Session",
    "World",
    "WorldGenerationError",
    "collides",
    "generate_world",
    "grass_decoration",
    "integrate",
    "perlin_height",
    "resolve_move",
    "round_half_up",
    "sanitize_dt",
    "wave_height",
]
