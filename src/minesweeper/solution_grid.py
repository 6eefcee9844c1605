"""
Solution grid module for Minesweeper.

Generates the hidden mine layout and the adjacent mine count of every
safe cell. The layout is fixed once construction finishes.
"""
import random
from typing import Iterable, Optional, Tuple

from .grid import Grid, Tile


# ============================================================================
# Solution Grid Class
# ============================================================================

class SolutionGrid(Grid):
    """
    Grid holding mines and adjacent mine counts.

    Attributes:
        mine_count: Requested number of mines. Values outside
            [0, rows * cols] are accepted and saturate.
    """

    def __init__(
        self,
        mine_count: int,
        rows: int,
        cols: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create a grid with randomly placed mines.

        Args:
            mine_count: Number of mines to place.
            rows: Number of rows.
            cols: Number of columns. Defaults to rows.
            rng: Random source for mine placement.
        """
        super().__init__(rows, cols, rng)
        self.mine_count = mine_count
        self._lay_mines(mine_count)

    @classmethod
    def from_mine_positions(
        cls,
        positions: Iterable[Tuple[int, int]],
        rows: int,
        cols: Optional[int] = None,
    ) -> "SolutionGrid":
        """
        Create a grid with mines at exactly the given positions.

        Args:
            positions: (row, col) mine positions. Duplicates collapse.
            rows: Number of rows.
            cols: Number of columns. Defaults to rows.

        Returns:
            Solution grid whose mine_count is the number of distinct positions.
        """
        mines = set(positions)
        grid = cls(0, rows, cols)
        for row, col in mines:
            grid.set(row, col, Tile.MINE)
        grid.mine_count = len(mines)
        grid._count_adjacent_mines()
        return grid

    @property
    def placed_mines(self) -> int:
        """Number of cells actually holding a mine."""
        return min(max(self.mine_count, 0), self.size)

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def _lay_mines(self, mine_count: int) -> None:
        """Fill the first mine_count cells with mines, shuffle, then count."""
        remaining = mine_count

        def clear(row: int, col: int, _tile: int) -> None:
            nonlocal remaining
            if remaining > 0:
                remaining -= 1
                self.set(row, col, Tile.MINE)
            else:
                self.set(row, col, 0)

        self.for_each_cell(clear)
        self.shuffle()
        self._count_adjacent_mines()

    def _count_adjacent_mines(self) -> None:
        """Increment the count of every safe neighbor of every mine."""
        def visit(row: int, col: int, tile: int) -> None:
            if tile == Tile.MINE:
                self._increment_neighbors(row, col)

        self.for_each_cell(visit)

    def _increment_neighbors(self, row: int, col: int) -> None:
        """Add one to each neighbor that is not itself a mine."""
        def increment(r: int, c: int, tile: int) -> None:
            if tile >= 0:
                self.set(r, c, tile + 1)

        self.for_each_neighbor(row, col, increment)

    def is_mine(self, row: int, col: int) -> bool:
        """Check if a cell holds a mine."""
        return self.get(row, col) == Tile.MINE
