"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Game, GameConfig, Grid, PlayerGrid, SolutionGrid


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def numbered_grid() -> Grid:
    """Create a 3x4 grid holding 0..11 in row-major order."""
    grid = Grid(3, 4)
    grid.for_each_cell(lambda row, col, _: grid.set(row, col, row * 4 + col))
    return grid


@pytest.fixture
def player_grid() -> PlayerGrid:
    """Create a fresh 4x4 player grid."""
    return PlayerGrid(4)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def center_mine_game() -> Game:
    """
    3x3 game with a single mine in the middle.

    Every other cell shows 1.
    """
    return Game.from_solution_grid(SolutionGrid.from_mine_positions([(1, 1)], 3))


@pytest.fixture
def corner_mine_game() -> Game:
    """
    5x5 game with one mine at (0, 0).

    Revealing anywhere in the zero region opens everything but the mine.
    """
    return Game.from_solution_grid(SolutionGrid.from_mine_positions([(0, 0)], 5))


@pytest.fixture
def wall_game() -> Game:
    """
    5x5 game with a wall of mines down column 2.

    Layout (M = mine):
        0 2 M 2 0
        0 3 M 3 0
        0 3 M 3 0
        0 3 M 3 0
        0 2 M 2 0
    """
    mines = [(row, 2) for row in range(5)]
    return Game.from_solution_grid(SolutionGrid.from_mine_positions(mines, 5))


@pytest.fixture
def small_config() -> GameConfig:
    """Small 5x5 configuration with 3 mines."""
    return GameConfig(size=5, num_mines=3)
