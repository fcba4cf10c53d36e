"""
spawner: drop a new 2 or 4 into a random empty cell
"""
import random

from nyx2048.board import Tile, empty_cells, new_tile_id, place_tile
from nyx2048.config import SPAWN_VALUES, SPAWN_WEIGHTS


def spawn_value(rng=None):
    """90% chance for 2 and 10% chance for 4"""
    if rng is None:
        rng = random
    return SPAWN_VALUES[0] if rng.random() < SPAWN_WEIGHTS[0] else SPAWN_VALUES[1]


def spawn(board, rng=None):
    """
    add one tile to a uniformly chosen empty cell

    rng is anything with choice() and random() (the random module or a
    seeded random.Random). a full board comes back unchanged
    """
    if rng is None:
        rng = random

    # sorted so a seeded rng always picks the same cell
    cells = sorted(empty_cells(board))
    if not cells:
        return board

    row, col = rng.choice(cells)
    tile = Tile(new_tile_id(), spawn_value(rng), row, col, is_new=True)
    return place_tile(board, tile)
