"""
Game engine for the minefield.

Owns the board for the current game together with the game-level state
(flags left, elapsed time, loss flag) and implements every rule: deferred
mine placement, reveal, chord, flood fill, flagging and win/loss checks.
"""
import logging
import random
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from .board import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    Board,
    BoardConfig,
    digit_in_state,
    in_state,
)
from .cell import Visibility
from .errors import NotInitializedError
from .placement import compute_adjacent_counts, place_mines


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Difficulty(Enum):
    """The three fixed board presets."""

    BEGINNER = BEGINNER
    INTERMEDIATE = INTERMEDIATE
    EXPERT = EXPERT

    @property
    def config(self) -> BoardConfig:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look up a preset by name, ignoring case."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(member.name.lower() for member in cls)
            raise ValueError(
                f"Unknown difficulty {name!r} (choose from {choices})"
            ) from None


class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


_is_flagged = in_state(Visibility.FLAGGED)
_is_revealed_zero = digit_in_state(0, Visibility.REVEALED)


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Rules and state for one game at a time.

    The engine is created once and restarted with ``start_new_game``; every
    restart discards the previous board. Mines are placed on the first
    reveal so that the first click is never a mine.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        Initialize an engine with no game running.

        Args:
            rng: Random source for mine placement (default: ``random``).
        """
        self._rng = rng
        self._board: Optional[Board] = None
        self._difficulty: Optional[Difficulty] = None
        self._flags_remaining = 0
        self._elapsed_seconds = 0
        self._lost = False
        self._has_generated = False

    # ========================================================================
    # Game Lifecycle
    # ========================================================================

    def start_new_game(self, difficulty: Difficulty) -> None:
        """
        Reset all state and allocate a fresh board for a preset.

        Mine placement is deferred until the first reveal.
        """
        config = difficulty.config
        self._board = Board.from_config(config)
        self._difficulty = difficulty
        self._flags_remaining = config.num_mines
        self._elapsed_seconds = 0
        self._lost = False
        self._has_generated = False
        logger.info(
            "New %s game: %dx%d with %d mines",
            difficulty.name.lower(), config.rows, config.cols, config.num_mines,
        )

    def first_reveal(self, row: int, col: int) -> None:
        """
        Place mines around a safe first click, then reveal it.

        Once mines exist this behaves exactly like ``reveal``.
        """
        board = self._require_board()
        if not self._has_generated:
            place_mines(board, row, col, self._rng)
            compute_adjacent_counts(board)
            self._has_generated = True
        self.reveal(row, col)

    def _require_board(self) -> Board:
        if self._board is None:
            raise NotInitializedError("No game started; call start_new_game()")
        return self._board

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> None:
        """
        Reveal a cell, or chord a satisfied digit cell.

        Flagged cells are left alone. A revealed digit whose flagged
        neighbors match its count reveals every remaining hidden neighbor;
        the flags are trusted, not checked.

        Raises:
            NotInitializedError: If no game was started.
            OutOfBoundsError: If the position is off the board.
        """
        board = self._require_board()
        if not self._has_generated:
            self.first_reveal(row, col)
            return

        cell = board.cell_at(row, col)
        if cell.visibility == Visibility.HIDDEN:
            self._reveal_one(row, col)
        elif cell.visibility == Visibility.REVEALED and cell.adjacent_mines > 0:
            flags = board.count_neighbors(row, col, _is_flagged)
            if flags == cell.adjacent_mines:
                self._reveal_surrounding(row, col)

    def toggle_flag(self, row: int, col: int) -> None:
        """
        Flag a hidden cell or unflag a flagged one.

        The flag counter follows every toggle and may go negative.
        """
        cell = self._require_board().cell_at(row, col)
        if cell.visibility == Visibility.HIDDEN:
            cell.toggle_flag()
            self._flags_remaining -= 1
        elif cell.visibility == Visibility.FLAGGED:
            cell.toggle_flag()
            self._flags_remaining += 1

    def add_time(self, seconds: int) -> None:
        """Advance the game clock."""
        self._require_board()
        self._elapsed_seconds += seconds

    def reveal_all_mines(self) -> None:
        """Show every mine on the board. Safe to call repeatedly."""
        for _, _, cell in self._require_board().cells():
            if cell.is_mine:
                cell.explode()

    # ========================================================================
    # Reveal Rules (Low-level)
    # ========================================================================

    def _reveal_one(self, row: int, col: int) -> None:
        """Open a single hidden cell. Only reached once a board exists."""
        board = self._board
        cell = board.cell_at(row, col)
        if cell.is_mine:
            cell.explode()
            if not self._lost:
                logger.info("Mine hit at (%d, %d)", row, col)
            self._lost = True
        elif cell.adjacent_mines > 0:
            cell.reveal()
        else:
            self._flood_reveal(row, col)

    def _reveal_surrounding(self, row: int, col: int) -> None:
        """Open every hidden neighbor of a cell."""
        board = self._board
        for neighbor_row, neighbor_col in board.neighbors(row, col):
            if board.cell_at(neighbor_row, neighbor_col).is_hidden:
                self._reveal_one(neighbor_row, neighbor_col)

    def _flood_reveal(self, row: int, col: int) -> None:
        """
        Reveal the blank region around a cell and its ring of digits.

        A digit cell joins the flood only if it already touches a revealed
        blank cell. Mines never do. Flags are ignored. The work list is
        LIFO and neighbors are pushed in reverse so cells are visited in the
        same depth-first order as a recursive below/above/right/left walk.
        """
        board = self._board
        stack = [(row, col)]
        opened = 0
        while stack:
            current_row, current_col = stack.pop()
            cell = board.cell_at(current_row, current_col)
            if cell.visibility == Visibility.REVEALED:
                continue
            if cell.is_mine or (
                cell.adjacent_mines > 0
                and board.count_neighbors(
                    current_row, current_col, _is_revealed_zero
                ) == 0
            ):
                continue
            cell.reveal()
            opened += 1
            stack.extend(
                reversed(board.orthogonal_neighbors(current_row, current_col))
            )
        logger.debug("Flood from (%d, %d) opened %d cells", row, col, opened)

    # ========================================================================
    # State Accessors
    # ========================================================================

    def status(self) -> GameStatus:
        """
        Evaluate the game.

        A loss is permanent until the next game. A win is recomputed from
        the board on every call: every non-mine cell must be revealed.
        """
        board = self._require_board()
        if self._lost:
            return GameStatus.LOST
        if self._has_generated and all(
            cell.is_mine or cell.is_revealed for _, _, cell in board.cells()
        ):
            return GameStatus.WON
        return GameStatus.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        """Check if the game reached a terminal status."""
        return self.status() != GameStatus.IN_PROGRESS

    @property
    def difficulty(self) -> Difficulty:
        self._require_board()
        return self._difficulty

    @property
    def rows(self) -> int:
        return self._require_board().rows

    @property
    def cols(self) -> int:
        return self._require_board().cols

    @property
    def mine_count(self) -> int:
        return self._require_board().mine_count

    @property
    def flags_remaining(self) -> int:
        self._require_board()
        return self._flags_remaining

    @property
    def elapsed_seconds(self) -> int:
        self._require_board()
        return self._elapsed_seconds

    @property
    def lost(self) -> bool:
        self._require_board()
        return self._lost

    @property
    def has_generated(self) -> bool:
        """Check if mines have been placed for the current game."""
        self._require_board()
        return self._has_generated

    def visibility_at(self, row: int, col: int) -> Visibility:
        return self._require_board().cell_at(row, col).visibility

    def adjacent_mines_at(self, row: int, col: int) -> int:
        return self._require_board().cell_at(row, col).adjacent_mines

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array (see ``Cell.to_observation``)."""
        return self._require_board().get_observation()

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """
        Get positions that can still be revealed.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        return [
            (row, col)
            for row, col, cell in self._require_board().cells()
            if cell.is_hidden
        ]
