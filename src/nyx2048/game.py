"""
core game logic and mechanics
"""
import logging
import random

from nyx2048.board import board_values
from nyx2048.config import GRID_SIZE
from nyx2048.state import new_game, restart, settle, slide, undo

logger = logging.getLogger(__name__)


class Game2048:
    """
    one 2048 session

    owns the current GameState and replaces it on every move, undo or
    restart. with a GamePersistence attached the saved game is restored on
    start and every change is written back
    """

    def __init__(self, rng=None, persistence=None):
        """initialize 4x4 2048 game"""
        self.size = GRID_SIZE
        self.rng = rng if rng is not None else random.Random()
        self.persistence = persistence

        # set between begin_move() and finish_move()
        self.pending = False

        self.state = None
        if persistence is not None:
            self.state = persistence.load()
        if self.state is None:
            best_score = persistence.load_best_score() if persistence is not None else 0
            self.state = new_game(best_score=best_score, rng=self.rng)
            self.save()

    # -- state ---------------------------------------------------------------

    @property
    def board(self):
        """board as lists of ints, 0 for empty cells"""
        return board_values(self.state.board)

    @property
    def tiles(self):
        return self.state.tiles

    @property
    def score(self):
        return self.state.score

    @property
    def best_score(self):
        return self.state.best_score

    @property
    def move_count(self):
        return self.state.move_count

    @property
    def game_over(self):
        return self.state.is_game_over

    @property
    def won(self):
        return self.state.is_won

    @property
    def status(self):
        return self.state.status

    @property
    def can_undo(self):
        return self.state.can_undo

    @property
    def max_tile(self):
        return self.state.max_tile

    @property
    def is_new_best(self):
        """game ended on a score that is (or ties) the best score"""
        return self.game_over and self.score > 0 and self.score >= self.best_score

    # -- commands ------------------------------------------------------------

    def make_move(self, direction):
        """
        make a move in the specified direction

        returns (moved, points). invalid directions, moves that change
        nothing and moves after game over all return (False, 0)
        """
        moved, points = self.begin_move(direction)
        if moved:
            self.finish_move()
        return moved, points

    def begin_move(self, direction):
        """slide and merge without spawning, finish_move() completes the move"""
        if self.pending:
            self.finish_move()

        state, result = slide(self.state, direction)
        if not result.moved:
            return False, 0

        self.state = state
        self.pending = True
        return True, result.score_delta

    def finish_move(self):
        """spawn the new tile for a begun move"""
        if not self.pending:
            return False
        self.state = settle(self.state, self.rng)
        self.pending = False
        self.save()
        return True

    def undo(self):
        """take back the last move (one level only)"""
        if not self.state.can_undo:
            return False
        self.state = undo(self.state)
        self.pending = False
        self.save()
        logger.debug("undo to move %d", self.state.move_count)
        return True

    def reset(self):
        """reset the game, keeping the best score"""
        self.state = restart(self.state, self.rng)
        self.pending = False
        self.save()

    def save(self):
        if self.persistence is not None:
            self.persistence.save(self.state)

    # -- output --------------------------------------------------------------

    def format_board(self):
        """ascii board with score and status lines"""
        lines = [f"Score: {self.score}  Best: {self.best_score}  Moves: {self.move_count}"]
        lines.append("+" + "------+" * self.size)
        for row in self.board:
            cells = "".join(f"{cell:^6}|" if cell else "      |" for cell in row)
            lines.append("|" + cells)
            lines.append("+" + "------+" * self.size)
        if self.game_over:
            lines.append("GAME OVER!")
        elif self.won:
            lines.append("YOU WIN! (You can keep playing)")
        return "\n".join(lines)

    def print_board(self):
        """print the board to console"""
        print(self.format_board())
        print()
