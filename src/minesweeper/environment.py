"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over a Game, with reveal, flag and
chord actions.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .game import Game
from .grid import Tile
from .session import GameConfig, GameState


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
FLAG = 1
CHORD = 2
ACTION_KINDS = 3

WIN_REWARD = 10.0
MINE_REWARD = -10.0
SAFE_REWARD = 1.0
FLAG_REWARD = 0.0
NO_OP_REWARD = -0.1

RENDER_SYMBOLS = {
    Tile.UNKNOWN: ".",
    Tile.FLAG: "F",
    Tile.MINE: "*",
    0: " ",
}


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of the player grid:
        - -3 = flagged cell
        - -2 = unknown cell
        - -1 = revealed mine (episode over)
        - 0-8 = revealed cell with adjacent mine count

    Actions:
        Discrete action space of size 3 * size * size. Action i applies
        kind i // cells (0 reveal, 1 flag, 2 chord) to cell i % cells,
        where cell k is (k // size, k % size).

    Rewards:
        - +1 for a reveal or chord that uncovered safe cells
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.cells = self.config.size * self.config.size

        self.observation_space = spaces.Box(
            low=int(Tile.FLAG),
            high=8,
            shape=(self.config.size, self.config.size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(ACTION_KINDS * self.cells)

        self.game = self._new_game()
        self.state = GameState.PLAYING
        self._steps = 0

    def _new_game(self) -> Game:
        """Create a game whose layout follows the environment's seed."""
        seed = int(self.np_random.integers(2**32))
        return Game(self.config.num_mines, self.config.size, rng=random.Random(seed))

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if self.game is not None:
            self.game.dispose()
        self.game = self._new_game()
        self.state = GameState.PLAYING
        self._steps = 0

        return self.game.player_grid.to_array(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded action (kind * cells + row * size + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = self.decode_action(action)
        self._steps += 1

        if self.state == GameState.PLAYING:
            reward = self._apply(kind, row, col)
        else:
            reward = NO_OP_REWARD

        observation = self.game.player_grid.to_array()
        terminated = self.state != GameState.PLAYING

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert a flat action index to (kind, row, col)."""
        kind, cell = divmod(int(action), self.cells)
        row, col = divmod(cell, self.config.size)
        return kind, row, col

    def encode_action(self, kind: int, row: int, col: int) -> int:
        """Convert (kind, row, col) to a flat action index."""
        return kind * self.cells + row * self.config.size + col

    # ========================================================================
    # Action Handling
    # ========================================================================

    def _apply(self, kind: int, row: int, col: int) -> float:
        """
        Apply an action to the game and score it.

        Returns:
            Reward value.
        """
        grid = self.game.player_grid
        before = (grid.flag_count, grid.unknown_count)

        if kind == FLAG:
            self.game.flag(row, col)
            safe = True
        elif kind == CHORD:
            safe = self.game.chord_reveal(row, col)
        else:
            safe = self.game.reveal(row, col)

        if not safe:
            self.state = GameState.LOST
            return MINE_REWARD

        if self._all_safe_revealed() or (grid.completed() and self.game.validate()):
            self.state = GameState.WON
            return WIN_REWARD
        if grid.completed():
            self.state = GameState.LOST
            return MINE_REWARD

        if (grid.flag_count, grid.unknown_count) == before:
            return NO_OP_REWARD
        if kind == FLAG:
            return FLAG_REWARD
        return SAFE_REWARD

    def _all_safe_revealed(self) -> bool:
        """Check if every non-mine cell has been revealed."""
        solution = self.game.solution_grid
        return self.game.player_grid.revealed_count == solution.size - solution.placed_mines

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        grid = self.game.player_grid
        solution = self.game.solution_grid
        return {
            "steps": self._steps,
            "revealed": grid.revealed_count,
            "flags": grid.flag_count,
            "total_safe": solution.size - solution.placed_mines,
            "game_state": self.state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.state != GameState.PLAYING:
            return mask

        grid = self.game.player_grid

        def mark(row: int, col: int, tile: int) -> None:
            if tile == Tile.UNKNOWN or tile == Tile.FLAG:
                mask[self.encode_action(REVEAL, row, col)] = True
                mask[self.encode_action(FLAG, row, col)] = True
            elif (
                tile > 0
                and grid.count_neighbors(row, col, Tile.FLAG) >= tile
                and grid.count_neighbors(row, col, Tile.UNKNOWN) > 0
            ):
                mask[self.encode_action(CHORD, row, col)] = True

        grid.for_each_cell(mark)
        return mask

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        lines = []
        obs = self.game.player_grid.to_array()

        for row in range(self.config.size):
            row_str = ""
            for col in range(self.config.size):
                val = int(obs[row, col])
                row_str += RENDER_SYMBOLS.get(val, str(val)) + " "
            lines.append(row_str)

        return "\n".join(lines)

    def close(self) -> None:
        """Release the running game."""
        if self.game is not None:
            self.game.dispose()
            self.game = None
