"""
Session module for Minesweeper.

Turns clicks into game actions, decides when a game is won or lost and
keeps the player's tool settings between games.
"""
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from .game import Game


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameConfig:
    """
    Configuration for a square Minesweeper board.

    Values are passed to the game as is; out-of-range mine counts
    saturate instead of raising.

    Attributes:
        size: Number of rows and columns.
        num_mines: Total mines to place.
    """

    size: int = 8
    num_mines: int = 10


# Preset difficulty levels
BEGINNER = GameConfig(8, 10)
INTERMEDIATE = GameConfig(16, 40)
EXPERT = GameConfig(24, 99)

COMMANDS = {
    "r": 2,
    "f": 2,
    "tool": 0,
    "cheat": 0,
    "end": 0,
    "new": (0, 2),
    "quit": 0,
}


# ============================================================================
# Command Parsing
# ============================================================================

def parse_command(line: str) -> Tuple[str, List[int]]:
    """
    Parse a text command such as "r 3 4" or "new 16 40".

    Args:
        line: Raw input line.

    Returns:
        Tuple of (command name, integer arguments).

    Raises:
        ValueError: If the command is unknown or has bad arguments.
    """
    parts = line.split()
    if not parts:
        raise ValueError("Empty command")

    name, raw_args = parts[0].lower(), parts[1:]
    if name not in COMMANDS:
        raise ValueError(f"Unknown command: {name}")

    arity = COMMANDS[name]
    allowed = arity if isinstance(arity, tuple) else (arity,)
    if len(raw_args) not in allowed:
        expected = " or ".join(str(n) for n in allowed)
        raise ValueError(f"{name} takes {expected} arguments")

    try:
        args = [int(arg) for arg in raw_args]
    except ValueError:
        raise ValueError(f"Arguments must be integers: {' '.join(raw_args)}") from None
    return name, args


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    Plays a sequence of games with shared settings.

    Attributes:
        config: Board configuration used for new games.
        game: The running game, or None once it has ended.
        state: Outcome of the current game.
        flag_tool: When set, primary clicks flag and secondary clicks reveal.
        cheat_mode: When set, render() shows the mine layout.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create a session and start its first game.

        Args:
            config: Board configuration (default: 8x8 with 10 mines).
            rng: Random source shared by every game in the session.
        """
        self.config = config or GameConfig()
        self.rng = rng
        self.flag_tool = False
        self.cheat_mode = False
        self.game: Optional[Game] = None
        self.state = GameState.PLAYING
        self._final_board = ""
        self.new_game()

    def new_game(self, config: Optional[GameConfig] = None) -> None:
        """Replace the running game with a fresh one."""
        if config is not None:
            self.config = config
        if self.game is not None:
            self.game.dispose()
        self.game = Game(self.config.num_mines, self.config.size, rng=self.rng)
        self.state = GameState.PLAYING
        self._final_board = ""

    def toggle_flag_tool(self) -> bool:
        """Switch the flag tool on or off and return the new setting."""
        self.flag_tool = not self.flag_tool
        return self.flag_tool

    def toggle_cheat_mode(self) -> bool:
        """Switch cheat mode on or off and return the new setting."""
        self.cheat_mode = not self.cheat_mode
        return self.cheat_mode

    # ========================================================================
    # Player Input
    # ========================================================================

    def _check_position(self, row: int, col: int) -> None:
        size = self.config.size
        if not (0 <= row < size and 0 <= col < size):
            raise ValueError(f"Cell ({row}, {col}) is outside the {size}x{size} board")

    def click(self, row: int, col: int, secondary: bool = False) -> GameState:
        """
        Apply a click on a cell.

        A secondary click on a revealed number chords. Otherwise the click
        flags when exactly one of flag_tool and secondary is set, and
        reveals when neither or both are.

        Args:
            row: Row index clicked.
            col: Column index clicked.
            secondary: Whether this is a right click (or ctrl-click).

        Returns:
            State of the game after the click.

        Raises:
            ValueError: If the cell is outside the board.
        """
        self._check_position(row, col)
        if self.game is None:
            return self.state

        tile = self.game.player_grid.get(row, col)
        if secondary and tile >= 0:
            safe = self.game.chord_reveal(row, col)
        elif self.flag_tool != secondary:
            self.game.flag(row, col)
            safe = True
        else:
            safe = self.game.reveal(row, col)

        if not safe:
            return self._finish(GameState.LOST)
        if self.game.player_grid.completed():
            return self.end()
        return self.state

    def end(self) -> GameState:
        """Declare the board finished and score it."""
        if self.game is None:
            return self.state
        won = self.game.validate()
        return self._finish(GameState.WON if won else GameState.LOST)

    def _finish(self, state: GameState) -> GameState:
        self._final_board = self.game.cheat()
        self.game.dispose()
        self.game = None
        self.state = state
        return state

    # ========================================================================
    # Rendering
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        """Check if a game is still in progress."""
        return self.state == GameState.PLAYING

    def render(self) -> str:
        """
        Render the board for display.

        Returns:
            The player grid while playing, the solution grid in cheat mode
            or once the game has ended.
        """
        if self.game is None:
            return self._final_board
        if self.cheat_mode:
            return self.game.cheat()
        return str(self.game)
