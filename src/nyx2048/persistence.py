"""
save and restore a game in a key-value store

two independent entries: the game snapshot and the best score. loading never
raises, missing or broken data just means there is nothing to restore
"""
import json
import logging
import os
from pathlib import Path

from nyx2048.board import Tile, board_from_tiles, board_values, has_moves, max_tile
from nyx2048.config import BEST_KEY, GAME_KEY, GRID_SIZE, WIN_VALUE, storage_dir
from nyx2048.state import GameState

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """saved game data that cannot be turned back into a GameState"""


class KeyValueStore:
    """string values under string keys"""

    def get(self, key):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """one <key>.json file per key inside a directory"""

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, key):
        return self.directory / f"{key}.json"

    def get(self, key):
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def set(self, key, value):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        # write then rename so a crash never leaves half a file behind
        tmp = path.with_suffix('.tmp')
        tmp.write_text(value, encoding='utf-8')
        os.replace(tmp, path)


def encode_state(state):
    """GameState -> plain dict in the saved layout"""
    return {
        'board': [[tile.to_dict() if tile is not None else None for tile in row]
                  for row in state.board],
        'score': state.score,
        'tiles': [tile.to_dict() for tile in state.tiles],
        'moveCount': state.move_count,
        'isWon': state.is_won,
        'isGameOver': state.is_game_over,
    }


def _int(data, key, minimum=0):
    value = data.get(key) if isinstance(data, dict) else None
    # bool is an int subclass, but True is not a score
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotError(f"{key!r} must be an integer")
    if value < minimum:
        raise SnapshotError(f"{key!r} must be >= {minimum}")
    return value


def _decode_tile(data):
    if not isinstance(data, dict) or not isinstance(data.get('id'), str):
        raise SnapshotError(f"bad tile: {data!r}")
    value = _int(data, 'value', minimum=2)
    if value & (value - 1):
        raise SnapshotError(f"tile value {value} is not a power of two")
    row = _int(data, 'row')
    col = _int(data, 'col')
    if row >= GRID_SIZE or col >= GRID_SIZE:
        raise SnapshotError(f"tile outside the board at ({row}, {col})")
    return Tile(data['id'], value, row, col)


def decode_state(data, best_score=0):
    """
    plain dict -> GameState

    the tile list and the board matrix must describe the same tiles,
    anything else raises SnapshotError. the undo snapshot is not saved, so a
    restored game cannot undo
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot is not an object")

    raw_tiles = data.get('tiles')
    if not isinstance(raw_tiles, list):
        raise SnapshotError("'tiles' must be a list")
    tiles = [_decode_tile(item) for item in raw_tiles]

    ids = [tile.id for tile in tiles]
    if len(set(ids)) != len(ids):
        raise SnapshotError("duplicate tile ids")
    cells = [(tile.row, tile.col) for tile in tiles]
    if len(set(cells)) != len(cells):
        raise SnapshotError("two tiles in one cell")
    board = board_from_tiles(tiles)

    raw_board = data.get('board')
    if raw_board is not None:
        if (not isinstance(raw_board, list) or len(raw_board) != GRID_SIZE
                or any(not isinstance(row, list) or len(row) != GRID_SIZE for row in raw_board)):
            raise SnapshotError("'board' must be a 4x4 matrix")
        for i, row in enumerate(raw_board):
            for j, cell in enumerate(row):
                tile = board[i][j]
                if cell is None and tile is None:
                    continue
                if cell is None or tile is None or not isinstance(cell, dict) \
                        or cell.get('id') != tile.id or cell.get('value') != tile.value:
                    raise SnapshotError(f"board and tile list disagree at ({i}, {j})")

    score = _int(data, 'score')
    return GameState(
        board=board,
        score=score,
        best_score=max(best_score, score),
        move_count=_int(data, 'moveCount'),
        is_game_over=not has_moves(board),
        is_won=bool(data.get('isWon')) or max_tile(board) >= WIN_VALUE,
    )


class GamePersistence:
    """reads and writes the saved game and best score"""

    def __init__(self, store, game_key=GAME_KEY, best_key=BEST_KEY):
        self.store = store
        self.game_key = game_key
        self.best_key = best_key

    def save(self, state):
        """write the snapshot, and the best score when it went up. errors are logged"""
        try:
            self.store.set(self.game_key, json.dumps(encode_state(state)))
            if state.best_score > self.load_best_score():
                self.store.set(self.best_key, str(state.best_score))
        except OSError as e:
            logger.warning("could not save game: %s", e)

    def load_best_score(self):
        try:
            raw = self.store.get(self.best_key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("could not read best score: %s", e)
            return 0
        if raw is None:
            return 0
        try:
            best = json.loads(raw)
        except (ValueError, RecursionError):
            best = None
        # bool is an int subclass, floats like 1e999 are not scores either
        if isinstance(best, bool) or not isinstance(best, int):
            logger.warning("ignoring unreadable best score %r", raw[:40])
            return 0
        return max(best, 0)

    def load(self):
        """saved GameState, or None when there is nothing usable"""
        try:
            raw = self.store.get(self.game_key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("could not read saved game: %s", e)
            return None
        if raw is None:
            logger.debug("no saved game under %r", self.game_key)
            return None

        try:
            state = decode_state(json.loads(raw), best_score=self.load_best_score())
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError and SnapshotError are both ValueErrors,
            # deeply nested arrays overflow the json decoder
            logger.warning("discarding corrupt saved game: %s", e)
            return None

        logger.debug("restored game: score %d, board %s", state.score, board_values(state.board))
        return state


def default_persistence():
    """persistence backed by files in the configured storage directory"""
    return GamePersistence(JsonFileStore(storage_dir()))
