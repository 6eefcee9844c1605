"""
Minesweeper game module.

Provides the solution and player grids, the game that mediates actions
between them, a headless session controller and a Gymnasium environment.
"""
from .grid import Grid, Tile
from .solution_grid import SolutionGrid
from .player_grid import PlayerGrid
from .game import Game
from .session import (
    Session,
    GameConfig,
    GameState,
    parse_command,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .environment import MinesweeperEnv

__all__ = [
    "Grid",
    "Tile",
    "SolutionGrid",
    "PlayerGrid",
    "Game",
    "Session",
    "GameConfig",
    "GameState",
    "parse_command",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperEnv",
]
