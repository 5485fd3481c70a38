"""Constants shared by the engine, the frame driver and the renderers."""

from __future__ import annotations

from typing import Dict, Tuple


# Dimensions of the playfield in cells.
WIDTH = 10
HEIGHT = 22

# Column at which freshly spawned pieces are anchored.
SPAWN_COLUMN = 3

# Milliseconds between unforced downward moves.
GRAVITY_INTERVAL_MS = 1000

# Number of rendered frames a cleared row keeps flashing.
ROW_CLEAR_ANIMATION_FRAMES = 30

# Length of the preview queue.
NEXT_QUEUE_SIZE = 3

PINK = "#cd00cd"
RED = "#ff0000"
YELLOW = "#ffff0e"
GREEN = "#00ff00"
ORANGE = "#ff7800"
LIGHT_BLUE = "#00ffff"
DARK_BLUE = "#0000ac"

COLORS: Tuple[str, ...] = (PINK, RED, YELLOW, GREEN, ORANGE, LIGHT_BLUE, DARK_BLUE)

# Points per batch of rows cleared in a single tick, before the level multiplier.
LINE_SCORES: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}
