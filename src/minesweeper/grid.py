"""
Grid module for Minesweeper.

Provides the fixed-size rectangular cell container shared by the solution
and player boards, along with the iteration primitives every higher-level
algorithm is built from.
"""
import random
from enum import IntEnum
from typing import Callable, Iterator, Optional, Tuple

import numpy as np


# ============================================================================
# Constants
# ============================================================================

class Tile(IntEnum):
    """
    Special cell values.

    Any value >= 0 is a revealed, safe cell holding its adjacent mine count.
    """

    MINE = -1
    UNKNOWN = -2
    FLAG = -3


TILE_SYMBOLS = {
    Tile.MINE: "M",
    Tile.UNKNOWN: "U",
    Tile.FLAG: "F",
}

CellCallback = Callable[[int, int, int], object]


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Dense row-major grid of integer cell values.

    Indexed access does no bounds checking; callers must stay within
    0 <= row < rows and 0 <= col < cols.

    Attributes:
        rows: Number of rows, fixed for the grid's lifetime.
        cols: Number of columns, fixed for the grid's lifetime.
    """

    def __init__(
        self,
        rows: int,
        cols: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Allocate a grid of rows * cols cells.

        Args:
            rows: Number of rows.
            cols: Number of columns. Defaults to rows.
            rng: Random source for shuffle(). Defaults to a fresh generator.
        """
        self.rows = rows
        self.cols = cols if cols is not None else rows
        self._rng = rng or random.Random()
        self._cells = np.zeros(self.rows * self.cols, dtype=np.int8)

    # ========================================================================
    # Indexed Access (Low-level)
    # ========================================================================

    def _index(self, row: int, col: int) -> int:
        """Convert a position to its offset in the row-major storage."""
        return row * self.cols + col

    def get(self, row: int, col: int) -> int:
        """Get the value at a position."""
        return int(self._cells[self._index(row, col)])

    def set(self, row: int, col: int, value: int) -> None:
        """Set the value at a position."""
        self._cells[self._index(row, col)] = value

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    # ========================================================================
    # Iteration
    # ========================================================================

    def for_each_cell(self, callback: CellCallback) -> bool:
        """
        Call callback(row, col, value) for every cell in row-major order.

        Iteration ends early only when a callback returns the literal False;
        None, 0 and any other value keep it going.

        Args:
            callback: Function receiving the row, column and current value.

        Returns:
            False if a callback stopped the iteration, True otherwise.
        """
        for row in range(self.rows):
            for col in range(self.cols):
                if callback(row, col, self.get(row, col)) is False:
                    return False
        return True

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Yield the in-range neighbors of a cell in row-major order.

        The 3x3 block around (row, col) is clipped to the grid edges and
        the center cell is skipped.
        """
        for r in range(max(row - 1, 0), min(row + 2, self.rows)):
            for c in range(max(col - 1, 0), min(col + 2, self.cols)):
                if r != row or c != col:
                    yield r, c

    def for_each_neighbor(
        self, row: int, col: int, callback: CellCallback
    ) -> bool:
        """
        Call callback(row, col, value) for each neighbor of a cell.

        Same early-exit contract as for_each_cell(). Values are read at
        visit time, so writes made by earlier callbacks are observed.

        Returns:
            False if a callback stopped the iteration, True otherwise.
        """
        for r, c in self.neighbors(row, col):
            if callback(r, c, self.get(r, c)) is False:
                return False
        return True

    def count_neighbors(self, row: int, col: int, value: int) -> int:
        """Count the neighbors of a cell currently holding value."""
        return sum(
            1 for r, c in self.neighbors(row, col) if self.get(r, c) == value
        )

    # ========================================================================
    # Bulk Operations
    # ========================================================================

    def shuffle(self) -> bool:
        """
        Randomly permute all cell values in place (Fisher-Yates).

        Returns:
            False on an empty grid, True otherwise.
        """
        cells = self._cells
        if len(cells) == 0:
            return False
        for i in range(len(cells) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cells[i], cells[j] = cells[j], cells[i]
        return True

    def to_array(self) -> np.ndarray:
        """
        Get a copy of the grid as a 2D array.

        Returns:
            int8 array of shape (rows, cols).
        """
        return self._cells.reshape(self.rows, self.cols).copy()

    def dispose(self) -> None:
        """Release the cell storage. The grid must not be used afterwards."""
        self._cells = None

    def __str__(self) -> str:
        """Render the grid as a bordered debug table."""
        rule = "-" * (self.cols * 4 + 1)
        lines = [rule]
        for row in range(self.rows):
            row_str = "|"
            for col in range(self.cols):
                value = self.get(row, col)
                row_str += f" {TILE_SYMBOLS.get(value, str(value))} |"
            lines.append(row_str)
            lines.append(rule)
        return "\n".join(lines)
