"""
Nyx 2048: tile-merging puzzle engine
"""
from nyx2048.board import Tile, empty_cells
from nyx2048.game import Game2048
from nyx2048.moves import Direction, MoveResult, parse_direction, resolve_move
from nyx2048.persistence import GamePersistence, JsonFileStore, MemoryStore
from nyx2048.spawner import spawn
from nyx2048.state import GameState, Status, apply_move, new_game, restart, undo

__all__ = [
    "Direction",
    "Game2048",
    "GamePersistence",
    "GameState",
    "JsonFileStore",
    "MemoryStore",
    "MoveResult",
    "Status",
    "Tile",
    "apply_move",
    "empty_cells",
    "new_game",
    "parse_direction",
    "resolve_move",
    "restart",
    "spawn",
    "undo",
]
