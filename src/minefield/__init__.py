"""
Minefield game module.

Provides the board, mine placement and the game engine, plus a Gymnasium
environment and text rendering built on top of the engine.
"""
from .cell import Cell, Visibility
from .board import (
    Board,
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    is_mine,
    has_digit,
    in_state,
    digit_in_state,
)
from .errors import (
    MinefieldError,
    OutOfBoundsError,
    ConfigurationError,
    NotInitializedError,
)
from .placement import place_mines, compute_adjacent_counts
from .engine import Difficulty, GameEngine, GameStatus
from .render import format_counter, render_board, render_frame
from .environment import MinesweeperEnv, make_vec_env

__version__ = "1.0.0"

__all__ = [
    "Cell",
    "Visibility",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "is_mine",
    "has_digit",
    "in_state",
    "digit_in_state",
    "MinefieldError",
    "OutOfBoundsError",
    "ConfigurationError",
    "NotInitializedError",
    "place_mines",
    "compute_adjacent_counts",
    "Difficulty",
    "GameEngine",
    "GameStatus",
    "format_counter",
    "render_board",
    "render_frame",
    "MinesweeperEnv",
    "make_vec_env",
]
