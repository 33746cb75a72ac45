from __future__ import annotations

# ---- Display ----
WIDTH = 960
HEIGHT = 640
FPS_LIMIT = 60
FOV = 75.0
SKY_COLOR = (139, 183, 218)
BLOCK_COLOR = (86, 160, 62)
GRASS_COLOR = (60, 200, 60)
TEXT_COLOR = (255, 255, 255)
BLOCK_MAX_DIST = 40.0

# ---- World generation ----
CHUNK_SIZE = 16
WORLD_RADIUS = 2  # chunks in each direction, i.e. [-R, R)
WAVE_FREQUENCY = 0.1
WAVE_AMPLITUDE = 2.0

NOISE_SCALE = 0.05
NOISE_OCTAVES = 4
NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0
NOISE_AMPLITUDE = 4.0
NOISE_BASE = 0

GRASS_SEED = 1337
GRASS_BLADES = 3

# ---- Player ----
PLAYER_RADIUS = 0.3
PLAYER_HEIGHT = 1.8
SPAWN_POS = (0.0, 2.0, 0.0)
MOUSE_SENSITIVITY = 0.003

# ---- Movement ----
# Fraction of velocity removed per second (explicit Euler).
DAMPING = 10.0
ACCELERATION = 15.0
# Upper bound on a single step; larger values can tunnel through a voxel.
MAX_DT = 0.1

# ---- Overlays ----
INVENTORY_ROWS = 4
INVENTORY_COLS = 9
