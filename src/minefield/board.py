"""
Board module for the minefield.

Implements the grid of cells and the neighbor queries the game rules are
built on. The board knows nothing about reveal or win rules.
"""
from dataclasses import dataclass
from typing import Callable, Iterator, List, Tuple

import numpy as np

from .cell import Cell, Visibility
from .errors import ConfigurationError, OutOfBoundsError


Position = Tuple[int, int]
CellPredicate = Callable[[Cell], bool]


# ============================================================================
# Configuration
# ============================================================================

def safe_region_size(rows: int, cols: int) -> int:
    """Largest number of cells a first click can protect on this board."""
    return min(3, rows) * min(3, cols)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 8
    cols: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values can make a playable game."""
        _check_dimensions(self.rows, self.cols, self.num_mines)
        max_mines = self.rows * self.cols - safe_region_size(
            self.rows, self.cols
        )
        if self.num_mines > max_mines:
            raise ConfigurationError(
                f"Too many mines to keep the first click safe (max {max_mines})"
            )

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


def _check_dimensions(rows: int, cols: int, num_mines: int) -> None:
    if rows < 1 or cols < 1:
        raise ConfigurationError("Board dimensions must be positive")
    if num_mines < 1:
        raise ConfigurationError("Number of mines must be positive")
    if num_mines >= rows * cols:
        raise ConfigurationError(
            f"Too many mines (max {rows * cols - 1})"
        )


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)


# ============================================================================
# Neighbor Predicates
# ============================================================================

def is_mine(cell: Cell) -> bool:
    """Match cells holding a mine."""
    return cell.is_mine


def has_digit(digit: int) -> CellPredicate:
    """Match cells whose adjacent mine count equals ``digit``."""
    return lambda cell: cell.adjacent_mines == digit


def in_state(visibility: Visibility) -> CellPredicate:
    """Match cells in the given visibility state."""
    return lambda cell: cell.visibility == visibility


def digit_in_state(digit: int, visibility: Visibility) -> CellPredicate:
    """Match cells with both the given count and visibility."""
    return lambda cell: (
        cell.adjacent_mines == digit and cell.visibility == visibility
    )


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Fixed-size grid of cells.

    Dimensions and mine count are fixed at construction. Cells start hidden
    with no mines; placement is done by ``minefield.placement``.
    """

    def __init__(self, rows: int, cols: int, mine_count: int) -> None:
        _check_dimensions(rows, cols, mine_count)
        self._rows = rows
        self._cols = cols
        self._mine_count = mine_count
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(cols)] for _ in range(rows)
        ]

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        """Build an empty board sized by ``config``."""
        return cls(config.rows, config.cols, config.num_mines)

    def __repr__(self) -> str:
        return (
            f"Board(rows={self._rows}, cols={self._cols}, "
            f"mine_count={self._mine_count})"
        )

    # ========================================================================
    # Dimensions
    # ========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def mine_count(self) -> int:
        return self._mine_count

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    # ========================================================================
    # Cell Access
    # ========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self._rows and 0 <= col < self._cols

    def check_bounds(self, row: int, col: int) -> None:
        """Raise OutOfBoundsError unless the position is on the board."""
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self._rows, self._cols)

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            OutOfBoundsError: If the position is off the board.
        """
        self.check_bounds(row, col)
        return self._grid[row][col]

    def positions(self) -> Iterator[Position]:
        """Iterate every position in row-major order."""
        for row in range(self._rows):
            for col in range(self._cols):
                yield row, col

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Iterate ``(row, col, cell)`` in row-major order."""
        for row, cells in enumerate(self._grid):
            for col, cell in enumerate(cells):
                yield row, col, cell

    # ========================================================================
    # Neighbor Queries
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get the in-bounds positions around a cell.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Up to 8 (row, col) tuples in row-major order; the center cell is
            never included.
        """
        self.check_bounds(row, col)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def orthogonal_neighbors(self, row: int, col: int) -> List[Position]:
        """In-bounds neighbors below, above, right and left, in that order."""
        self.check_bounds(row, col)
        candidates = (
            (row + 1, col),
            (row - 1, col),
            (row, col + 1),
            (row, col - 1),
        )
        return [pos for pos in candidates if self.in_bounds(*pos)]

    def count_neighbors(
        self, row: int, col: int, predicate: CellPredicate
    ) -> int:
        """
        Count neighbors matching a predicate.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.
            predicate: Called with each in-bounds neighboring Cell.

        Returns:
            Number of neighbors (0-8) for which ``predicate`` is true.
        """
        return sum(
            1
            for neighbor_row, neighbor_col in self.neighbors(row, col)
            if predicate(self._grid[neighbor_row][neighbor_col])
        )

    # ========================================================================
    # Whole-board Queries
    # ========================================================================

    def count_cells(self, predicate: CellPredicate) -> int:
        """Count cells on the whole board matching a predicate."""
        return sum(1 for _, _, cell in self.cells() if predicate(cell))

    def mine_positions(self) -> List[Position]:
        """Positions of all placed mines, row-major."""
        return [(row, col) for row, col, cell in self.cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = exploded or shown mine
        """
        obs = np.zeros(self.shape, dtype=np.int8)
        for row, col, cell in self.cells():
            obs[row, col] = cell.to_observation()
        return obs
