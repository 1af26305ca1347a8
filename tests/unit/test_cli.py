"""
Unit tests for the command line.

Interactive play is driven with scripted input and captured output.
"""
from typing import Iterable, List

import pytest
from minefield import Difficulty, GameEngine, cli
from minefield.cli import GameClock, build_parser, demo, main, parse_command, play


def _script(lines: Iterable[str]):
    """Feed lines to ``play`` as if typed, then signal end of input."""
    remaining = list(lines)

    def fake_input(prompt: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return fake_input


def _play(lines: Iterable[str], seed: int = 3) -> List[str]:
    output: List[str] = []
    play(
        Difficulty.BEGINNER,
        seed=seed,
        input_fn=_script(lines),
        output_fn=output.append,
        clock=lambda: 0.0,
    )
    return output


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test player input parsing."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("r 1 2", ("r", (1, 2))),
            ("F 0 7", ("f", (0, 7))),
            ("  n ", ("n", None)),
            ("q", ("q", None)),
        ],
    )
    def test_valid(self, line: str, expected) -> None:
        assert parse_command(line) == expected

    @pytest.mark.parametrize("line", ["", "r 1", "x 1 2", "r a b", "q now"])
    def test_invalid(self, line: str) -> None:
        with pytest.raises(ValueError):
            parse_command(line)


# ============================================================================
# Clock Tests
# ============================================================================

class TestGameClock:
    """Test wall-clock to engine time conversion."""

    def test_tick_adds_whole_seconds(self, beginner_engine: GameEngine) -> None:
        times = iter([100.0, 100.4, 102.9, 103.0])
        clock = GameClock(lambda: next(times))
        clock.start()
        clock.tick(beginner_engine)
        assert beginner_engine.elapsed_seconds == 0
        clock.tick(beginner_engine)
        assert beginner_engine.elapsed_seconds == 2
        clock.tick(beginner_engine)
        assert beginner_engine.elapsed_seconds == 3

    def test_stopped_clock_does_nothing(self, beginner_engine: GameEngine) -> None:
        clock = GameClock(lambda: 50.0)
        assert clock.running is False
        clock.tick(beginner_engine)
        clock.start()
        clock.stop()
        clock.tick(beginner_engine)
        assert beginner_engine.elapsed_seconds == 0


# ============================================================================
# Interactive Play Tests
# ============================================================================

class TestPlay:
    """Test the interactive loop."""

    def test_quit_immediately(self) -> None:
        output = _play(["q"])
        assert output[0].startswith("Commands:")
        assert output[1].startswith("Flags: 010  Time: 000")
        assert len(output) == 2

    def test_end_of_input_stops(self) -> None:
        assert len(_play([])) == 2

    def test_flag_updates_counter(self) -> None:
        output = _play(["f 0 0", "f 1 1", "f 0 0", "q"])
        assert output[2].startswith("Flags: 009")
        assert output[3].startswith("Flags: 008")
        assert output[4].startswith("Flags: 009")

    def test_first_reveal_is_safe(self) -> None:
        output = _play(["r 4 4", "q"])
        assert not any("Boom" in line for line in output)
        assert output[2].startswith("Flags: 010")

    def test_invalid_command_reprompts(self) -> None:
        output = _play(["jump", "q"])
        assert "Unrecognised command" in output[2]
        assert output[3].startswith("Commands:")

    def test_out_of_bounds_is_reported(self) -> None:
        output = _play(["r 9 9", "q"])
        assert "outside" in output[2]

    def test_game_over_blocks_moves(self, monkeypatch) -> None:
        def lose(self, row: int, col: int) -> None:
            self._lost = True

        monkeypatch.setattr(GameEngine, "first_reveal", lose)
        output = _play(["r 0 0", "f 1 1", "n", "q"])
        assert any("Boom" in line for line in output)
        assert any("Game over" in line for line in output)
        assert output[-1].startswith("Flags: 010")


# ============================================================================
# Demo and Entry Point Tests
# ============================================================================

class TestDemo:
    """Test random-play demo."""

    def test_demo_plays_requested_games(self) -> None:
        output: List[str] = []
        wins = demo(Difficulty.BEGINNER, games=3, seed=2, output_fn=output.append)
        assert 0 <= wins <= 3
        assert sum(1 for line in output if line.startswith("=== Game")) == 3
        assert output[-1] == f"\n=== Final: {wins}/3 wins ==="


class TestMain:
    """Test argument parsing and dispatch."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args(["play"])
        assert args.difficulty == "beginner"
        assert args.seed is None

    def test_rejects_unknown_difficulty(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["play", "--difficulty", "nightmare"])

    @pytest.mark.parametrize(
        "command, options",
        [
            ("play", ["--difficulty", "--seed"]),
            ("demo", ["--difficulty", "--games", "--seed", "--delay"]),
        ],
    )
    def test_module_usage_lists_options(self, command: str, options) -> None:
        lines = cli.__doc__.split("\n")
        start = next(
            i for i, line in enumerate(lines) if f"main.py {command}" in line
        )
        usage = lines[start] + lines[start + 1]
        for option in options:
            assert option in usage

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_demo_command(self, capsys) -> None:
        assert main(["demo", "--games", "1", "--seed", "4"]) == 0
        assert "Final" in capsys.readouterr().out
