"""
board model: numbered tiles on a fixed 4x4 grid

a board is a tuple of 4 rows, each a tuple of 4 cells holding a Tile or None.
boards are never mutated, every change builds a new one
"""
import uuid
from dataclasses import dataclass, replace

import numpy as np

from nyx2048.config import GRID_SIZE


def new_tile_id(prefix='tile'):
    """unique id for a freshly created tile"""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Tile:
    """
    a single tile on the board

    is_new and is_merged only tell the renderer what happened this turn,
    game logic never reads them
    """
    id: str
    value: int
    row: int
    col: int
    is_new: bool = False
    is_merged: bool = False

    def moved_to(self, row, col):
        """same tile (same id) at another cell, with the turn flags cleared"""
        return replace(self, row=row, col=col, is_new=False, is_merged=False)

    def to_dict(self):
        return {'id': self.id, 'value': self.value, 'row': self.row, 'col': self.col}


def empty_board():
    return tuple((None,) * GRID_SIZE for _ in range(GRID_SIZE))


def board_from_tiles(tiles):
    """build a board with every tile placed at its own row/col"""
    grid = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]
    for tile in tiles:
        assert grid[tile.row][tile.col] is None, f"two tiles at ({tile.row}, {tile.col})"
        grid[tile.row][tile.col] = tile
    return tuple(tuple(row) for row in grid)


def board_from_values(rows):
    """
    build a board from plain numbers (0 or None = empty)

    missing rows and columns are treated as empty, so [[2, 2]] is a board
    with two tiles in the top-left corner
    """
    tiles = []
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            if value:
                tiles.append(Tile(new_tile_id(), int(value), i, j))
    return board_from_tiles(tiles)


def place_tile(board, tile):
    """new board with tile added to its (empty) cell"""
    assert board[tile.row][tile.col] is None, f"cell ({tile.row}, {tile.col}) is taken"
    grid = [list(row) for row in board]
    grid[tile.row][tile.col] = tile
    return tuple(tuple(row) for row in grid)


def tiles_of(board):
    """all tiles in row-major order"""
    return [tile for row in board for tile in row if tile is not None]


def empty_cells(board):
    """coordinates of every cell without a tile"""
    return {
        (i, j)
        for i in range(GRID_SIZE)
        for j in range(GRID_SIZE)
        if board[i][j] is None
    }


def board_values(board):
    """board as lists of ints, 0 for empty cells"""
    return [[tile.value if tile is not None else 0 for tile in row] for row in board]


def to_array(board):
    return np.array(board_values(board), dtype=np.int32)


def max_tile(board):
    return max((tile.value for tile in tiles_of(board)), default=0)


def has_adjacent_pair(board):
    """check for two horizontally or vertically neighbouring tiles of equal value"""
    grid = to_array(board)
    horizontal = (grid[:, :-1] == grid[:, 1:]) & (grid[:, :-1] != 0)
    vertical = (grid[:-1, :] == grid[1:, :]) & (grid[:-1, :] != 0)
    return bool(horizontal.any() or vertical.any())


def has_moves(board):
    """a board can still move if it has an empty cell or a mergeable pair"""
    if empty_cells(board):
        return True
    return has_adjacent_pair(board)


def is_consistent(board):
    """every tile sits at the cell it records and no id appears twice"""
    seen = set()
    for i, row in enumerate(board):
        for j, tile in enumerate(row):
            if tile is None:
                continue
            if (tile.row, tile.col) != (i, j) or tile.id in seen:
                return False
            seen.add(tile.id)
    return len(board) == GRID_SIZE and all(len(row) == GRID_SIZE for row in board)
