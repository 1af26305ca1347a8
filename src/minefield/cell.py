"""
Cell module for the minefield.

Represents individual cells on the game board with their visibility
(hidden/revealed/flagged/exploded) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class Visibility(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    EXPLODED_MINE = auto()


# Observation codes shared with the environment and renderer
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    Attributes:
        is_mine: Whether this cell contains a mine. Set once by placement.
        adjacent_mines: Count of mines in neighboring cells (0-8). Only
            meaningful once placement has finished for the whole board.
        visibility: Current visual state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    visibility: Visibility = Visibility.HIDDEN

    def reveal(self) -> bool:
        """
        Show the cell's number.

        Flagged cells are revealed too; the engine decides when that is
        allowed.

        Returns:
            True if the visibility changed, False if the cell was already
            revealed or exploded.
        """
        if self.visibility in (Visibility.REVEALED, Visibility.EXPLODED_MINE):
            return False
        self.visibility = Visibility.REVEALED
        return True

    def explode(self) -> bool:
        """Mark this mine as shown. Returns False if it already was."""
        if self.visibility == Visibility.EXPLODED_MINE:
            return False
        self.visibility = Visibility.EXPLODED_MINE
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed or exploded.
        """
        if self.visibility == Visibility.HIDDEN:
            self.visibility = Visibility.FLAGGED
        elif self.visibility == Visibility.FLAGGED:
            self.visibility = Visibility.HIDDEN
        else:
            return False
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.visibility == Visibility.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.visibility == Visibility.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.visibility == Visibility.FLAGGED

    @property
    def is_exploded(self) -> bool:
        """Check if cell is a shown mine."""
        return self.visibility == Visibility.EXPLODED_MINE

    def to_observation(self) -> int:
        """
        Convert cell to its numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Exploded or shown mine
        """
        if self.visibility == Visibility.HIDDEN:
            return HIDDEN_CODE
        if self.visibility == Visibility.FLAGGED:
            return FLAGGED_CODE
        if self.visibility == Visibility.EXPLODED_MINE:
            return MINE_CODE
        return self.adjacent_mines
