import random

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from nyx2048.board import max_tile, to_array
from nyx2048.game import Game2048
from nyx2048.moves import Direction, resolve_move


class Game2048Env(gym.Env):
    """
    gymnasium environment for 2048 game

    afterstate framework:
    - observation is the board after the random tile
    - info['afterstate'] is the board after the move, before the random tile
    - reward is the merge points of the move
    """

    metadata = {'render_modes': ['human', 'ansi']}

    def __init__(self, render_mode=None):
        super().__init__()

        self.render_mode = render_mode
        self.game = Game2048()

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # raw tile values, not log2
        self.observation_space = spaces.Box(
            low=0,
            high=131072,
            shape=(4, 4),
            dtype=np.int32
        )

        self.action_to_direction = {
            0: Direction.UP,
            1: Direction.DOWN,
            2: Direction.LEFT,
            3: Direction.RIGHT
        }

        # track afterstate (board after move, before random tile)
        self.last_afterstate = None

    def _get_observation(self):
        return to_array(self.game.state.board)

    def get_afterstate(self, action):
        """
        board after the move but before the random tile

        returns:
            afterstate_board: board after the move, None if the move is invalid
            reward: points earned from merging
            valid: if the move changes the board
        """
        if self.game.game_over:
            return None, 0, False
        result = resolve_move(self.game.state.board, self.action_to_direction[int(action)])
        if not result.moved:
            return None, 0, False
        return to_array(result.board), result.score_delta, True

    def action_mask(self):
        """1 for actions that would move a tile"""
        return np.array([self.get_afterstate(a)[2] for a in range(4)], dtype=np.int8)

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        # a seeded reset replays the same spawns
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()
        self.last_afterstate = None

        info = {"score": self.game.score}
        return self._get_observation(), info

    def step(self, action):
        """take one step in the environment"""
        direction = self.action_to_direction[int(action)]

        # the slid state is the afterstate, finish_move() adds the random tile
        moved, points = self.game.begin_move(direction)
        afterstate = None
        if moved:
            afterstate = to_array(self.game.state.board)
            self.last_afterstate = afterstate
            self.game.finish_move()

        reward = float(points) if moved else 0.0
        observation = self._get_observation()
        terminated = self.game.game_over
        truncated = False

        info = {
            "score": self.game.score,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate,
            "max_tile": max_tile(self.game.state.board),
            "won": self.game.won,
            "move_count": self.game.move_count,
        }

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        if self.render_mode == "ansi":
            return self.game.format_board()
        self.game.print_board()

    def close(self):
        pass
