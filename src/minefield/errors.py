"""
Exceptions raised by the minefield engine.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class OutOfBoundsError(MinefieldError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col


class ConfigurationError(MinefieldError, ValueError):
    """Board dimensions or mine count cannot make a playable game."""


class NotInitializedError(MinefieldError, RuntimeError):
    """A game operation was issued before a game was started."""
