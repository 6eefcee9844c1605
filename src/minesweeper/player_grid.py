"""
Player grid module for Minesweeper.

Tracks what the player currently knows about each cell, keeping running
counts of flagged and unknown cells in step with every write.
"""
import random
from typing import Optional

from .grid import Grid, Tile


class PlayerGrid(Grid):
    """
    Grid of the player's knowledge, starting fully UNKNOWN.

    Attributes:
        flag_count: Number of cells currently FLAG.
        unknown_count: Number of cells currently UNKNOWN.
    """

    def __init__(
        self,
        rows: int,
        cols: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(rows, cols, rng)
        self.flag_count = 0
        self.unknown_count = 0
        self.for_each_cell(
            lambda row, col, _tile: self.set(row, col, Tile.UNKNOWN)
        )

    def set(self, row: int, col: int, value: int) -> None:
        """Set a cell, moving it between the flag and unknown tallies."""
        self._uncount(self.get(row, col))
        super().set(row, col, value)
        self._count(self.get(row, col))

    def _uncount(self, tile: int) -> None:
        if tile == Tile.FLAG:
            self.flag_count -= 1
        elif tile == Tile.UNKNOWN:
            self.unknown_count -= 1

    def _count(self, tile: int) -> None:
        if tile == Tile.FLAG:
            self.flag_count += 1
        elif tile == Tile.UNKNOWN:
            self.unknown_count += 1

    @property
    def revealed_count(self) -> int:
        """Number of cells neither flagged nor unknown."""
        return self.size - self.flag_count - self.unknown_count

    def completed(self) -> bool:
        """Check if every cell has been revealed or flagged."""
        return self.unknown_count == 0
