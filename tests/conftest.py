"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    Board,
    BoardConfig,
    Cell,
    Difficulty,
    GameEngine,
    compute_adjacent_counts,
)


Layout = Callable[..., GameEngine]


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine() -> GameEngine:
    """Create an engine with a seeded random source and no game."""
    return GameEngine(rng=random.Random(1234))


@pytest.fixture
def beginner_engine(engine: GameEngine) -> GameEngine:
    """Create an engine with a beginner game started, mines not placed."""
    engine.start_new_game(Difficulty.BEGINNER)
    return engine


@pytest.fixture
def layout(engine: GameEngine) -> Layout:
    """
    Build an engine whose board holds an explicit mine layout.

    Usage: ``layout([(0, 4), (1, 4)])`` starts a beginner game and places
    exactly those mines, as if the first click had already happened.
    """
    def build(
        mines: Iterable[Tuple[int, int]],
        difficulty: Difficulty = Difficulty.BEGINNER,
    ) -> GameEngine:
        engine.start_new_game(difficulty)
        board = engine._board
        for row, col in mines:
            board.cell_at(row, col).is_mine = True
        compute_adjacent_counts(board)
        engine._has_generated = True
        return engine

    return build


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine, nothing placed."""
    return Board(3, 3, 1)


@pytest.fixture
def beginner_board() -> Board:
    """Create an empty beginner-sized board."""
    return Board.from_config(Difficulty.BEGINNER.config)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for placement."""
    return random.Random(42)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 10)
