"""
game state and its transitions

every transition takes a GameState and returns a new one, the old value is
left untouched. undo keeps the previous value around instead of copying a
mutable board
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from nyx2048.board import empty_board, has_moves, is_consistent, max_tile, tiles_of
from nyx2048.config import START_TILES, WIN_VALUE
from nyx2048.moves import MoveResult, resolve_move
from nyx2048.spawner import spawn

logger = logging.getLogger(__name__)


class Status(str, Enum):
    PLAYING = 'playing'
    WON = 'won'
    LOST = 'lost'


@dataclass(frozen=True)
class Snapshot:
    """what undo restores"""
    board: tuple
    score: int
    move_count: int


@dataclass(frozen=True)
class GameState:
    board: tuple
    score: int = 0
    best_score: int = 0
    move_count: int = 0
    is_game_over: bool = False
    is_won: bool = False
    previous: Optional[Snapshot] = None

    @property
    def tiles(self):
        return tiles_of(self.board)

    @property
    def max_tile(self):
        return max_tile(self.board)

    @property
    def can_undo(self):
        return self.previous is not None

    @property
    def status(self):
        # lost wins over won, it is the state that blocks input
        if self.is_game_over:
            return Status.LOST
        if self.is_won:
            return Status.WON
        return Status.PLAYING


def new_game(best_score=0, rng=None):
    """empty board with the two starting tiles"""
    board = empty_board()
    for _ in range(START_TILES):
        board = spawn(board, rng)
    return GameState(board=board, best_score=best_score)


def slide(state, direction):
    """
    first half of a move: resolve, score and take the undo snapshot

    returns (state, MoveResult). the returned state has no spawned tile yet,
    settle() finishes the move. when the game is lost, the direction is
    invalid or nothing moves, the very same state comes back
    """
    if state.is_game_over:
        return state, MoveResult(state.board)

    result = resolve_move(state.board, direction)
    if not result.moved:
        return state, result

    score = state.score + result.score_delta
    moved = replace(
        state,
        board=result.board,
        score=score,
        best_score=max(state.best_score, score),
        move_count=state.move_count + 1,
        is_won=state.is_won or result.max_merged >= WIN_VALUE,
        previous=Snapshot(state.board, state.score, state.move_count),
    )
    assert is_consistent(moved.board), "tile coordinates out of sync with the board"

    if moved.is_won and not state.is_won:
        logger.info("reached %d after %d moves", WIN_VALUE, moved.move_count)
    return moved, result


def settle(state, rng=None):
    """second half of a move: spawn a tile, then check for a lost game"""
    board = spawn(state.board, rng)
    assert is_consistent(board), "tile coordinates out of sync with the board"
    settled = replace(state, board=board, is_game_over=not has_moves(board))
    if settled.is_game_over:
        logger.info("game over: score %d, max tile %d", settled.score, settled.max_tile)
    return settled


def apply_move(state, direction, rng=None):
    """full move: resolve, spawn and check terminal states"""
    moved, result = slide(state, direction)
    if not result.moved:
        return state
    return settle(moved, rng)


def undo(state):
    """
    step back one move

    best score and the win flag are kept. the snapshot is used up, so a
    second undo in a row does nothing
    """
    snapshot = state.previous
    if snapshot is None:
        return state
    return replace(
        state,
        board=snapshot.board,
        score=snapshot.score,
        move_count=snapshot.move_count,
        is_game_over=not has_moves(snapshot.board),
        previous=None,
    )


def restart(state, rng=None):
    """fresh game that keeps only the best score"""
    return new_game(best_score=state.best_score, rng=rng)
