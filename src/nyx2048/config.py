"""
game constants and runtime settings
"""
import os
from pathlib import Path

# board
GRID_SIZE = 4
WIN_VALUE = 2048

# spawner: 90% chance for 2 and 10% chance for 4
SPAWN_VALUES = (2, 4)
SPAWN_WEIGHTS = (0.9, 0.1)
START_TILES = 2

# persistence keys (one entry each in the key-value store)
GAME_KEY = 'nyx-2048-game'
BEST_KEY = 'nyx-2048-best'

# front-end
SPAWN_DELAY_MS = 150
SWIPE_THRESHOLD = 50
FPS = 60


def storage_dir():
    """directory holding the saved game, NYX2048_HOME overrides ~/.nyx2048"""
    home = os.environ.get('NYX2048_HOME')
    if home:
        return Path(home)
    return Path.home() / '.nyx2048'


def spawn_delay_ms():
    """spawn delay for the front-end, NYX2048_SPAWN_DELAY_MS overrides the default"""
    raw = os.environ.get('NYX2048_SPAWN_DELAY_MS')
    if raw is None:
        return SPAWN_DELAY_MS
    try:
        return max(0, int(raw))
    except ValueError:
        return SPAWN_DELAY_MS
