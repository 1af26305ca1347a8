"""
Minefield command line.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}] [--seed N]
    python main.py demo [--difficulty {beginner,intermediate,expert}]
                        [--games N] [--seed N] [--delay S]
"""
import argparse
import logging
import random
import sys
import time
from typing import Callable, List, Optional, Tuple

import numpy as np

from .engine import Difficulty, GameEngine, GameStatus
from .environment import MinesweeperEnv
from .errors import OutOfBoundsError
from .render import render_frame


HELP_TEXT = """Commands:
  r ROW COL   reveal a cell (or chord a satisfied number)
  f ROW COL   toggle a flag
  n           new game
  q           quit"""


# ============================================================================
# Interactive Play
# ============================================================================

def parse_command(line: str) -> Tuple[str, Optional[Tuple[int, int]]]:
    """
    Parse one line of player input.

    Returns:
        (action, position) where action is one of "r", "f", "n", "q" and
        position is set for "r" and "f".

    Raises:
        ValueError: If the line is not a valid command.
    """
    parts = line.split()
    if not parts:
        raise ValueError("Empty command")
    action = parts[0].lower()
    if action in ("n", "q") and len(parts) == 1:
        return action, None
    if action in ("r", "f") and len(parts) == 3:
        return action, (int(parts[1]), int(parts[2]))
    raise ValueError(f"Unrecognised command: {line.strip()!r}")


class GameClock:
    """Feeds whole elapsed wall-clock seconds into the engine."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None

    def start(self) -> None:
        self._started_at = self._clock()

    def stop(self) -> None:
        self._started_at = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def tick(self, engine: GameEngine) -> None:
        """Bring the engine's clock up to date."""
        if self._started_at is None:
            return
        elapsed = int(self._clock() - self._started_at)
        if elapsed > engine.elapsed_seconds:
            engine.add_time(elapsed - engine.elapsed_seconds)


def play(
    difficulty: Difficulty,
    seed: Optional[int] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """
    Run an interactive game until the player quits.

    The clock starts on the first reveal. When a game ends all mines are
    shown and only "n" or "q" are accepted.
    """
    engine = GameEngine(rng=random.Random(seed))
    game_clock = GameClock(clock)
    engine.start_new_game(difficulty)
    output_fn(HELP_TEXT)
    output_fn(render_frame(engine))

    while True:
        try:
            line = input_fn("> ")
        except EOFError:
            break

        try:
            action, position = parse_command(line)
        except ValueError as exc:
            output_fn(str(exc))
            output_fn(HELP_TEXT)
            continue

        if action == "q":
            break
        if action == "n":
            engine.start_new_game(difficulty)
            game_clock.stop()
            output_fn(render_frame(engine))
            continue
        if engine.is_over:
            output_fn("Game over. Type 'n' for a new game or 'q' to quit.")
            continue

        row, col = position
        try:
            if action == "r":
                if not engine.has_generated:
                    engine.first_reveal(row, col)
                    game_clock.start()
                else:
                    engine.reveal(row, col)
            else:
                engine.toggle_flag(row, col)
        except OutOfBoundsError as exc:
            output_fn(str(exc))
            continue

        game_clock.tick(engine)
        status = engine.status()
        if status != GameStatus.IN_PROGRESS:
            game_clock.stop()
            engine.reveal_all_mines()
        output_fn(render_frame(engine))
        if status == GameStatus.WON:
            output_fn(f"You won in {engine.elapsed_seconds} seconds!")
        elif status == GameStatus.LOST:
            output_fn("Boom! You hit a mine.")


# ============================================================================
# Random Demo
# ============================================================================

def demo(
    difficulty: Difficulty,
    games: int = 5,
    seed: Optional[int] = None,
    delay: float = 0.0,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Play games by revealing random hidden cells.

    Returns:
        Number of games won.
    """
    env = MinesweeperEnv(difficulty=difficulty, render_mode="ansi")
    rng = np.random.default_rng(seed)
    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)
        done = False
        step = 0
        info = {}

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1
            if delay:
                time.sleep(delay)

        if info.get("game_state") == GameStatus.WON.name:
            wins += 1
        env.engine.reveal_all_mines()
        output_fn(f"=== Game {game + 1}/{games} | {info.get('game_state')} "
                  f"after {step} moves ===")
        output_fn(env.render())

    output_fn(f"\n=== Final: {wins}/{games} wins ===")
    return wins


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Minefield - a grid deduction game"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    difficulty_names = [member.name.lower() for member in Difficulty]

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty", choices=difficulty_names, default="beginner",
        help="Board preset",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    demo_parser = subparsers.add_parser(
        "demo", help="Watch random moves play out"
    )
    demo_parser.add_argument(
        "--difficulty", choices=difficulty_names, default="beginner",
        help="Board preset",
    )
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for layouts and moves"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(Difficulty.from_name(args.difficulty), seed=args.seed)
    elif args.command == "demo":
        demo(
            Difficulty.from_name(args.difficulty),
            games=args.games,
            seed=args.seed,
            delay=args.delay,
        )
    else:
        parser.print_help()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
