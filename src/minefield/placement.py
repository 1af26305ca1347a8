"""
Mine placement and neighbor-count derivation.

Both functions run once per game, right after the first click, before any
cell is revealed.
"""
import logging
import random
from typing import Optional

from .board import Board, is_mine
from .errors import ConfigurationError


logger = logging.getLogger(__name__)


def place_mines(
    board: Board,
    safe_row: int,
    safe_col: int,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Place ``board.mine_count`` mines, keeping the first click safe.

    The clicked cell and every in-bounds neighbor stay mine-free. Cells are
    scanned once in row-major order; each unprotected cell takes a mine with
    probability ``mines_left / empty_squares_left``, where
    ``empty_squares_left`` counts the unprotected cells not yet visited. This
    selects a uniformly random set of cells outside the protected area.

    Args:
        board: Freshly constructed board with no mines.
        safe_row: Row of the first click.
        safe_col: Column of the first click.
        rng: Source of randomness with a ``randrange`` method. Defaults to
            the ``random`` module.

    Raises:
        OutOfBoundsError: If the safe cell is off the board.
        ConfigurationError: If the mines do not fit outside the safe area.
    """
    rng = rng or random
    protected_neighbors = len(board.neighbors(safe_row, safe_col))
    empty_squares_left = board.rows * board.cols - 1 - protected_neighbors
    mines_left = board.mine_count

    if mines_left > empty_squares_left:
        raise ConfigurationError(
            f"Cannot place {mines_left} mines outside the safe area around "
            f"({safe_row}, {safe_col}); only {empty_squares_left} cells remain"
        )

    for row, col, cell in board.cells():
        if mines_left == 0:
            break
        if abs(row - safe_row) <= 1 and abs(col - safe_col) <= 1:
            continue
        # mines_left <= empty_squares_left holds, so the range is never empty
        if rng.randrange(empty_squares_left) < mines_left:
            cell.is_mine = True
            mines_left -= 1
        empty_squares_left -= 1

    logger.debug(
        "Placed %d mines on %dx%d board avoiding (%d, %d)",
        board.mine_count, board.rows, board.cols, safe_row, safe_col,
    )


def compute_adjacent_counts(board: Board) -> None:
    """Set every cell's adjacent mine count from the placed mines."""
    for row, col, cell in board.cells():
        cell.adjacent_mines = board.count_neighbors(row, col, is_mine)
