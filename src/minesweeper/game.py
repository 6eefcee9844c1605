"""
Game module for Minesweeper.

Mediates player actions between the hidden solution grid and the
player's grid: reveal with flood-fill, chord reveal, flag and validate.
"""
import random
from typing import Iterator, List, Optional, Tuple

from .grid import Tile
from .player_grid import PlayerGrid
from .solution_grid import SolutionGrid


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    A single Minesweeper game.

    There is no stored status: a lost game is signalled by reveal() or
    chord_reveal() returning False, and a finished board by
    player_grid.completed() followed by validate().

    Attributes:
        solution_grid: Mine layout, read-only after construction.
        player_grid: What the player has revealed or flagged so far.
    """

    def __init__(
        self,
        mine_count: int,
        size: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Start a game on a square board.

        Args:
            mine_count: Number of mines. Not validated; see SolutionGrid.
            size: Number of rows and columns.
            rng: Random source for mine placement.
        """
        self._attach(SolutionGrid(mine_count, size, rng=rng))

    @classmethod
    def from_solution_grid(cls, solution_grid: SolutionGrid) -> "Game":
        """Start a game on an existing mine layout."""
        game = cls.__new__(cls)
        game._attach(solution_grid)
        return game

    def _attach(self, solution_grid: SolutionGrid) -> None:
        self.solution_grid = solution_grid
        self.player_grid = PlayerGrid(solution_grid.rows, solution_grid.cols)

    # ========================================================================
    # Reveal (Low-level)
    # ========================================================================

    def _uncover(self, row: int, col: int) -> Optional[int]:
        """
        Copy a solution cell onto the player grid if not yet revealed.

        Returns:
            The uncovered value, or None if the cell was already revealed.
        """
        current = self.player_grid.get(row, col)
        if current != Tile.UNKNOWN and current != Tile.FLAG:
            return None
        tile = self.solution_grid.get(row, col)
        self.player_grid.set(row, col, tile)
        return tile

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell, flooding outwards from zero-count cells.

        Flagged cells are revealed too. Already revealed cells are left
        alone, which bounds the flood-fill to the zero region plus its
        ring of numbered cells.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            False if a mine was revealed, True otherwise.
        """
        tile = self._uncover(row, col)
        if tile == Tile.MINE:
            return False
        if tile != 0:
            return True

        # Depth-first over lazy neighbor generators, in recursion order.
        pending: List[Iterator[Tuple[int, int]]] = [
            self.player_grid.neighbors(row, col)
        ]
        while pending:
            for r, c in pending[-1]:
                tile = self._uncover(r, c)
                if tile == Tile.MINE:
                    return False
                if tile == 0:
                    pending.append(self.player_grid.neighbors(r, c))
                    break
            else:
                pending.pop()
        return True

    def chord_reveal(self, row: int, col: int) -> bool:
        """
        Reveal all unknown neighbors of a revealed number.

        Only acts once at least as many neighbors are flagged as the
        number shown. Neighbors revealed before a mine is hit stay
        revealed.

        Args:
            row: Row index of a revealed cell.
            col: Column index of a revealed cell.

        Returns:
            False if a mine was revealed, True otherwise (including no-ops).
        """
        tile = self.player_grid.get(row, col)
        if tile < 0:
            return True

        if tile > self.player_grid.count_neighbors(row, col, Tile.FLAG):
            return True

        def reveal_unknown(r: int, c: int, neighbor: int) -> Optional[bool]:
            if neighbor == Tile.UNKNOWN:
                return self.reveal(r, c)
            return None

        return self.player_grid.for_each_neighbor(row, col, reveal_unknown)

    def flag(self, row: int, col: int) -> None:
        """Toggle a cell between UNKNOWN and FLAG; revealed cells are left as is."""
        tile = self.player_grid.get(row, col)
        if tile == Tile.UNKNOWN:
            self.player_grid.set(row, col, Tile.FLAG)
        elif tile == Tile.FLAG:
            self.player_grid.set(row, col, Tile.UNKNOWN)

    def validate(self) -> bool:
        """
        Check that the flags mark exactly the mines.

        Returns:
            True if the flag count equals the mine count and every cell
            is either both a mine and flagged, or neither.
        """
        if self.player_grid.flag_count != self.solution_grid.mine_count:
            return False

        def flagged_iff_mine(row: int, col: int, tile: int) -> Optional[bool]:
            is_mine = tile == Tile.MINE
            is_flagged = self.player_grid.get(row, col) == Tile.FLAG
            if is_mine or is_flagged:
                return is_mine and is_flagged
            return None

        return self.solution_grid.for_each_cell(flagged_iff_mine)

    # ========================================================================
    # Debug Output
    # ========================================================================

    def cheat(self) -> str:
        """Render the solution grid."""
        return str(self.solution_grid)

    def __str__(self) -> str:
        """Render the player grid."""
        return str(self.player_grid)

    def dispose(self) -> None:
        """Release both grids. The game must not be used afterwards."""
        self.solution_grid.dispose()
        self.player_grid.dispose()
        self.solution_grid = None
        self.player_grid = None
