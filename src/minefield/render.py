"""
ASCII rendering of a game frame.
"""
from .cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from .engine import GameEngine


COUNTER_MIN = -99
COUNTER_MAX = 999

_SYMBOLS = {
    HIDDEN_CODE: ".",
    FLAGGED_CODE: "F",
    MINE_CODE: "*",
    0: " ",
}


def format_counter(value: int) -> str:
    """Format a flag or time counter as a three-character display."""
    value = max(COUNTER_MIN, min(COUNTER_MAX, value))
    return f"{value:03d}"


def render_board(engine: GameEngine, headers: bool = False) -> str:
    """
    Render the board as text.

    Args:
        engine: Engine with a game in progress.
        headers: Prefix rows and columns with their indices.

    Returns:
        One line per row; ``.`` hidden, ``F`` flagged, ``*`` mine,
        blank for zero, otherwise the adjacent count.
    """
    obs = engine.get_observation()
    width = len(str(engine.rows - 1))
    col_width = len(str(engine.cols - 1))
    lines = []

    if headers:
        labels = " ".join(f"{col:>{col_width}}" for col in range(engine.cols))
        lines.append(" " * (width + 1) + labels)

    for row in range(engine.rows):
        cells = " ".join(
            f"{_SYMBOLS.get(int(value), str(value)):>{col_width}}"
            for value in obs[row]
        )
        lines.append(f"{row:>{width}} {cells}" if headers else cells)

    return "\n".join(lines)


def render_frame(engine: GameEngine) -> str:
    """Render the flag counter, timer and board with headers."""
    header = (
        f"Flags: {format_counter(engine.flags_remaining)}  "
        f"Time: {format_counter(engine.elapsed_seconds)}"
    )
    return header + "\n" + render_board(engine, headers=True)
