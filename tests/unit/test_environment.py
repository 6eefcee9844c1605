"""
Unit tests for MinesweeperEnv.

Tests spaces, action encoding, rewards, termination and seeding.
"""
import numpy as np
import pytest
from minesweeper import Game, GameConfig, MinesweeperEnv, SolutionGrid, Tile
from minesweeper.environment import CHORD, FLAG, REVEAL


@pytest.fixture
def wall_env() -> MinesweeperEnv:
    """5x5 environment playing the wall-of-mines layout."""
    env = MinesweeperEnv(config=GameConfig(size=5, num_mines=5), render_mode="ansi")
    env.reset(seed=0)
    env.game.dispose()
    mines = [(row, 2) for row in range(5)]
    env.game = Game.from_solution_grid(SolutionGrid.from_mine_positions(mines, 5))
    return env


class TestEnvironmentSpaces:
    """Test observation and action spaces."""

    def test_reset_observation(self, small_config: GameConfig) -> None:
        """Reset should return an all-unknown board."""
        env = MinesweeperEnv(config=small_config)
        obs, info = env.reset(seed=1)
        assert obs.shape == (5, 5)
        assert obs.dtype == np.int8
        assert np.all(obs == Tile.UNKNOWN)
        assert info["game_state"] == "PLAYING"
        assert info["total_safe"] == 22
        assert env.observation_space.contains(obs)

    def test_action_space_covers_three_kinds(self, small_config: GameConfig) -> None:
        """There should be one action per kind per cell."""
        env = MinesweeperEnv(config=small_config)
        assert env.action_space.n == 75

    def test_action_encoding(self, small_config: GameConfig) -> None:
        """Encoded actions should decode to the same parts."""
        env = MinesweeperEnv(config=small_config)
        action = env.encode_action(CHORD, 3, 1)
        assert action == 2 * 25 + 3 * 5 + 1
        assert env.decode_action(action) == (CHORD, 3, 1)

    def test_same_seed_same_layout(self, small_config: GameConfig) -> None:
        """Seeding reset should reproduce the mine layout."""
        first = MinesweeperEnv(config=small_config)
        second = MinesweeperEnv(config=small_config)
        first.reset(seed=42)
        second.reset(seed=42)
        assert np.array_equal(
            first.game.solution_grid.to_array(),
            second.game.solution_grid.to_array(),
        )


class TestEnvironmentStep:
    """Test rewards and termination."""

    def test_safe_reveal_reward(self, wall_env: MinesweeperEnv) -> None:
        """Revealing safe cells should give +1."""
        obs, reward, terminated, truncated, info = wall_env.step(
            wall_env.encode_action(REVEAL, 2, 0)
        )
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[2, 1] == 3
        assert info["revealed"] == 10

    def test_repeat_reveal_is_penalized(self, wall_env: MinesweeperEnv) -> None:
        """An action that changes nothing should cost a little."""
        action = wall_env.encode_action(REVEAL, 2, 0)
        wall_env.step(action)
        _, reward, terminated, _, _ = wall_env.step(action)
        assert reward == pytest.approx(-0.1)
        assert terminated is False

    def test_flag_reward(self, wall_env: MinesweeperEnv) -> None:
        """Toggling a flag should be neutral."""
        obs, reward, _, _, info = wall_env.step(wall_env.encode_action(FLAG, 0, 2))
        assert reward == 0.0
        assert obs[0, 2] == Tile.FLAG
        assert info["flags"] == 1

    def test_mine_ends_episode(self, wall_env: MinesweeperEnv) -> None:
        """Revealing a mine should lose."""
        obs, reward, terminated, _, info = wall_env.step(
            wall_env.encode_action(REVEAL, 0, 2)
        )
        assert reward == -10.0
        assert terminated is True
        assert obs[0, 2] == Tile.MINE
        assert info["game_state"] == "LOST"

    def test_revealing_all_safe_cells_wins(self, wall_env: MinesweeperEnv) -> None:
        """Uncovering every safe cell should win."""
        wall_env.step(wall_env.encode_action(REVEAL, 2, 0))
        _, reward, terminated, _, info = wall_env.step(
            wall_env.encode_action(REVEAL, 2, 4)
        )
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_chord_reveal_step(self, wall_env: MinesweeperEnv) -> None:
        """Chording a satisfied number should uncover its neighbors."""
        wall_env.step(wall_env.encode_action(REVEAL, 0, 1))
        wall_env.step(wall_env.encode_action(FLAG, 0, 2))
        wall_env.step(wall_env.encode_action(FLAG, 1, 2))
        obs, reward, _, _, _ = wall_env.step(wall_env.encode_action(CHORD, 0, 1))
        assert reward == 1.0
        assert obs[0, 0] == 0

    def test_steps_after_end_do_nothing(self, wall_env: MinesweeperEnv) -> None:
        """Once terminated, further actions should be ignored."""
        wall_env.step(wall_env.encode_action(REVEAL, 0, 2))
        obs, reward, terminated, _, _ = wall_env.step(
            wall_env.encode_action(REVEAL, 2, 0)
        )
        assert reward == pytest.approx(-0.1)
        assert terminated is True
        assert obs[2, 0] == Tile.UNKNOWN


class TestActionMask:
    """Test valid action enumeration."""

    def test_new_board_mask(self, wall_env: MinesweeperEnv) -> None:
        """Every cell can be revealed or flagged; nothing can be chorded."""
        mask = wall_env.get_action_mask()
        assert mask[:25].all()
        assert mask[25:50].all()
        assert not mask[50:].any()

    def test_chord_becomes_valid(self, wall_env: MinesweeperEnv) -> None:
        """A satisfied number with unknown neighbors can be chorded."""
        wall_env.step(wall_env.encode_action(REVEAL, 0, 1))
        wall_env.step(wall_env.encode_action(FLAG, 0, 2))
        assert not wall_env.get_action_mask()[wall_env.encode_action(CHORD, 0, 1)]
        wall_env.step(wall_env.encode_action(FLAG, 1, 2))
        mask = wall_env.get_action_mask()
        assert mask[wall_env.encode_action(CHORD, 0, 1)]
        assert not mask[wall_env.encode_action(REVEAL, 0, 1)]

    def test_mask_empty_after_end(self, wall_env: MinesweeperEnv) -> None:
        """No actions are valid once the episode is over."""
        wall_env.step(wall_env.encode_action(REVEAL, 0, 2))
        assert not wall_env.get_action_mask().any()


class TestRender:
    """Test text rendering."""

    def test_ansi_render(self, wall_env: MinesweeperEnv) -> None:
        """ANSI mode should return the board as text."""
        wall_env.step(wall_env.encode_action(FLAG, 0, 2))
        wall_env.step(wall_env.encode_action(REVEAL, 0, 1))
        lines = wall_env.render().split("\n")
        assert len(lines) == 5
        assert lines[0] == ". 2 F . . "

    def test_close_releases_game(self, wall_env: MinesweeperEnv) -> None:
        """Closing should drop the running game."""
        wall_env.close()
        assert wall_env.game is None
