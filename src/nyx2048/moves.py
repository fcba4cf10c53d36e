"""
move resolver: slide every line toward one edge and merge equal neighbours
"""
from dataclasses import dataclass
from enum import Enum

from nyx2048.board import Tile, board_from_tiles, new_tile_id
from nyx2048.config import GRID_SIZE


class Direction(str, Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'


def parse_direction(direction):
    """
    turn user input into a Direction

    returns None for anything that is not one of the four directions,
    callers treat that as a no-op
    """
    if isinstance(direction, Direction):
        return direction
    if not isinstance(direction, str):
        return None
    try:
        return Direction(direction.strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class MoveResult:
    board: tuple
    score_delta: int = 0
    moved: bool = False
    merged: tuple = ()

    @property
    def max_merged(self):
        return max((tile.value for tile in self.merged), default=0)


def line_cells(direction, index):
    """cells of one row/column, ordered from the edge the tiles move toward"""
    last = GRID_SIZE - 1
    if direction is Direction.LEFT:
        return [(index, k) for k in range(GRID_SIZE)]
    if direction is Direction.RIGHT:
        return [(index, last - k) for k in range(GRID_SIZE)]
    if direction is Direction.UP:
        return [(k, index) for k in range(GRID_SIZE)]
    return [(last - k, index) for k in range(GRID_SIZE)]


def slide_line(tiles, cells):
    """
    slide one compacted line into cells and merge equal pairs

    tiles are the non-empty tiles of the line in scan order. pairs merge
    strictly in that order and a merged tile cannot merge again in the same
    move, so [2, 2, 4] gives [4, 4] and not [8].

    returns (placed tiles, points, merged tiles, moved)
    """
    placed = []
    merged = []
    points = 0
    moved = False

    i = 0
    while i < len(tiles):
        row, col = cells[len(placed)]
        current = tiles[i]
        if i + 1 < len(tiles) and tiles[i + 1].value == current.value:
            tile = Tile(new_tile_id('merged'), current.value * 2, row, col, is_merged=True)
            merged.append(tile)
            points += tile.value
            # the far tile of a pair always leaves its cell
            moved = True
            i += 2
        else:
            tile = current.moved_to(row, col)
            if (current.row, current.col) != (row, col):
                moved = True
            i += 1
        placed.append(tile)

    return placed, points, merged, moved


def resolve_move(board, direction):
    """
    compute the board after moving in direction

    an unknown direction, or a move that leaves every tile where it was,
    returns the original board with moved=False
    """
    direction = parse_direction(direction)
    if direction is None:
        return MoveResult(board)

    new_tiles = []
    all_merged = []
    score_delta = 0
    moved = False

    for index in range(GRID_SIZE):
        cells = line_cells(direction, index)
        line = [board[r][c] for r, c in cells if board[r][c] is not None]
        placed, points, merged, line_moved = slide_line(line, cells)
        new_tiles.extend(placed)
        all_merged.extend(merged)
        score_delta += points
        moved = moved or line_moved

    if not moved:
        return MoveResult(board)

    return MoveResult(board_from_tiles(new_tiles), score_delta, True, tuple(all_merged))


def can_move(board, direction):
    return resolve_move(board, direction).moved


def valid_moves(board):
    """directions that would change the board"""
    return [direction for direction in Direction if can_move(board, direction)]
