"""
Tests for main.py - game aggregate, board sizing and the CLI.
"""

import random
from collections import deque
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

import termsnake.main as main_module
from termsnake.config import Settings
from termsnake.domain.constants import UP, DOWN, LEFT, RIGHT, QUIT
from termsnake.domain.game_state import GameState
from termsnake.domain.snake import Snake
from termsnake.main import SnakeGame, main, resolve_board_size, run_game
from termsnake.players import Player, RandomPlayer


class ScriptedPlayer(Player):
    """Hands out one pre-set batch of commands per tick."""

    def __init__(self, batches=None):
        self.batches = list(batches or [])
        self.seen_states = []

    def drain_commands(self, game_state):
        self.seen_states.append(game_state)
        if self.batches:
            return self.batches.pop(0)
        return []


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_head_is_last_position(self):
        snake = Snake([(0, 0), (0, 1), (0, 2)])
        assert snake.head == (0, 2)
        assert snake.positions[0] == (0, 0)

    def test_snake_positions_is_deque(self):
        snake = Snake([(5, 5)])
        assert isinstance(snake.positions, deque)

    def test_initial_snake(self):
        snake = Snake.initial(5)
        assert list(snake) == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]

    def test_duplicate_cells_rejected(self):
        with pytest.raises(ValueError):
            Snake([(0, 0), (0, 1), (0, 0)])

    def test_empty_snake_rejected(self):
        with pytest.raises(ValueError):
            Snake([])


class TestGameState:
    """Tests for the GameState class."""

    def test_print_board(self):
        state = GameState(
            tick=0,
            snake_positions=[(0, 0), (0, 1), (0, 2)],
            apple=(1, 3),
            heading=RIGHT,
            rows=2,
            cols=4,
        )
        assert state.print_board() == "SSH.\n...A"

    def test_print_board_without_apple(self):
        state = GameState(0, [(0, 0)], None, RIGHT, rows=1, cols=2)
        assert state.print_board() == "H."

    def test_gamestate_repr(self):
        state = GameState(3, [(0, 0), (0, 1)], (2, 2), UP, rows=5, cols=5, score=1)
        repr_str = repr(state)
        assert "tick=3" in repr_str
        assert "score=1" in repr_str


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_avoids_walls_in_corner(self):
        """Heading RIGHT at the top-right corner, only DOWN is safe."""
        player = RandomPlayer(random.Random(0))
        state = GameState(0, [(0, 2), (0, 3), (0, 4)], (3, 3), RIGHT, rows=5, cols=5)

        for _ in range(20):
            assert player.drain_commands(state) == [DOWN]

    def test_never_reverses_or_bites(self):
        player = RandomPlayer(random.Random(1))
        # Heading UP with the body trailing below the head
        state = GameState(0, [(3, 1), (3, 2), (2, 2)], (0, 0), UP, rows=5, cols=5)

        for _ in range(50):
            (move,) = player.drain_commands(state)
            assert move in {UP, LEFT, RIGHT}

    def test_no_safe_move_keeps_going(self):
        player = RandomPlayer(random.Random(2))
        state = GameState(0, [(0, 0), (0, 1)], None, RIGHT, rows=1, cols=2)
        assert player.drain_commands(state) == []

    def test_interrupt_quit_wins(self):
        interrupt = ScriptedPlayer([[UP, QUIT]])
        player = RandomPlayer(random.Random(3), interrupt=interrupt)
        state = GameState(0, [(2, 2)], None, RIGHT, rows=5, cols=5)

        assert player.drain_commands(state) == [QUIT]
        assert player.drain_commands(state) != [QUIT]


class TestSnakeGame:
    """Tests for the SnakeGame class."""

    def test_game_initialization(self):
        game = SnakeGame(20, 40, ScriptedPlayer(), rng=random.Random(0))

        assert list(game.snake) == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
        assert game.heading == RIGHT
        assert game.tick == 0
        assert game.score == 0
        assert game.game_over is False
        assert game.apple is not None
        assert game.apple not in game.snake
        assert game.previous_state.snake_positions == list(game.snake)

    def test_narrow_board_raises(self):
        with pytest.raises(ValueError):
            SnakeGame(5, 4, ScriptedPlayer())

    def test_no_input_runs_off_the_board(self):
        """5x5 board, heading right from column 4: out of bounds on the first tick."""
        game = SnakeGame(5, 5, ScriptedPlayer(), apple=(2, 2))
        game.run_tick()

        assert game.game_over is True
        assert game.end_reason == "wall"
        assert list(game.snake) == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]

    def test_turn_down_onto_apple_grows(self):
        game = SnakeGame(5, 5, ScriptedPlayer(), apple=(1, 4), rng=random.Random(5))
        game.heading = DOWN
        game.run_tick()

        assert game.game_over is False
        assert len(game.snake) == 6
        assert game.snake.head == (1, 4)
        assert game.apple != (1, 4)
        assert game.score == 1
        assert game.tick == 1

    def test_queued_down_turn_avoids_the_wall(self):
        game = SnakeGame(5, 5, ScriptedPlayer([[DOWN]]), apple=(4, 0))
        game.run_tick()

        assert game.game_over is False
        assert game.snake.head == (1, 4)
        assert game.heading == DOWN

    def test_double_turn_moves_once_then_faces_second(self):
        snake = Snake([(5, 1), (5, 2), (5, 3)])
        game = SnakeGame(10, 10, ScriptedPlayer([[UP, LEFT], []]), snake=snake, apple=(9, 9))

        game.run_tick()
        assert game.snake.head == (4, 3)
        assert game.heading == LEFT

        game.run_tick()
        assert game.snake.head == (4, 2)
        assert game.heading == LEFT

    def test_reversal_is_ignored(self):
        snake = Snake([(5, 1), (5, 2), (5, 3)])
        game = SnakeGame(10, 10, ScriptedPlayer([[LEFT]]), snake=snake, apple=(9, 9))
        game.run_tick()

        assert game.snake.head == (5, 4)
        assert game.heading == RIGHT

    def test_quit_ends_without_moving(self):
        game = SnakeGame(10, 10, ScriptedPlayer([[DOWN, QUIT]]), apple=(9, 9))
        game.run_tick()

        assert game.game_over is True
        assert game.end_reason == "quit"
        assert game.snake.head == (0, 4)

    def test_biting_itself_ends_game(self):
        snake = Snake([(0, 0), (0, 1), (0, 2), (1, 2), (1, 1)])
        game = SnakeGame(5, 5, ScriptedPlayer([[UP]]), snake=snake, heading=LEFT, apple=(4, 4))
        game.run_tick()

        assert game.game_over is True
        assert game.end_reason == "self"

    def test_no_ticks_after_game_over(self):
        player = ScriptedPlayer()
        game = SnakeGame(5, 5, player, apple=(2, 2))
        game.run_tick()
        game.run_tick()

        assert len(player.seen_states) == 1

    def test_player_sees_current_state(self):
        player = ScriptedPlayer()
        game = SnakeGame(10, 10, player, apple=(9, 9))
        game.run_tick()

        state = player.seen_states[0]
        assert state.head == (0, 4)
        assert state.heading == RIGHT
        assert (state.rows, state.cols) == (10, 10)

    def test_render_passes_previous_frame_and_remembers_current(self):
        game = SnakeGame(10, 10, ScriptedPlayer(), apple=(9, 9))
        renderer = MagicMock()
        first = game.previous_state

        game.run_tick()
        game.render(renderer)

        previous, current = renderer.render.call_args[0]
        assert previous is first
        assert current.head == (0, 5)
        assert game.previous_state is current


class TestResolveBoardSize:
    """Tests for resolve_board_size()."""

    def test_explicit_size_skips_terminal(self):
        query = MagicMock()
        assert resolve_board_size(Settings(rows=8, cols=12), query) == (8, 12)
        query.assert_not_called()

    def test_partial_override(self):
        assert resolve_board_size(Settings(rows=8), lambda: (30, 90)) == (8, 90)

    def test_terminal_size_used_by_default(self):
        assert resolve_board_size(Settings(), lambda: (30, 90)) == (30, 90)


class FakeSession:
    """Terminal session stand-in whose input stream is already closed."""

    def __init__(self):
        self.screen = MagicMock()
        self.snake_attr = 0
        self.apple_attr = 0
        self.exited = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited = True

    def read_key(self):
        return None


class TestRunGame:
    """Tests for run_game() with a fake terminal."""

    def test_game_ends_and_terminal_is_released(self):
        session = FakeSession()
        settings = Settings(tick_rate=50.0, render_rate=100.0, rows=5, cols=10, seed=1)

        game = run_game(settings, session_factory=lambda: session)

        assert game.game_over is True
        assert game.end_reason in {"quit", "wall"}
        assert session.exited is True
        session.screen.refresh.assert_called()

    def test_demo_mode_can_be_quit(self):
        session = FakeSession()
        settings = Settings(tick_rate=50.0, render_rate=100.0, rows=5, cols=10, seed=2, demo=True)

        game = run_game(settings, session_factory=lambda: session)

        assert game.game_over is True
        assert isinstance(game.player, RandomPlayer)


class TestMain:
    """Tests for the command line entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("TERMSNAKE_TICK_RATE", "TERMSNAKE_RENDER_RATE", "TERMSNAKE_ROWS",
                     "TERMSNAKE_COLS", "TERMSNAKE_SEED", "TERMSNAKE_LOG_FILE",
                     "TERMSNAKE_LOG_LEVEL", "TERMSNAKE_MAX_FRAME_TIME"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(main_module, "load_dotenv", lambda: None)

    def test_flags_reach_settings(self, capsys):
        captured = {}

        def fake_run(settings):
            captured["settings"] = settings
            return SimpleNamespace(end_reason="quit", score=2)

        code = main(["--rows", "10", "--cols", "20", "--seed", "3", "--tick-rate", "4", "--demo"],
                    run=fake_run)

        settings = captured["settings"]
        assert code == 0
        assert (settings.rows, settings.cols, settings.seed) == (10, 20, 3)
        assert settings.tick_rate == 4.0
        assert settings.demo is True
        assert "Game Over: quit. Apples eaten: 2" in capsys.readouterr().out

    def test_environment_is_read(self, monkeypatch):
        monkeypatch.setenv("TERMSNAKE_TICK_RATE", "3.5")
        captured = {}

        def fake_run(settings):
            captured["settings"] = settings
            return SimpleNamespace(end_reason="wall", score=0)

        main([], run=fake_run)
        assert captured["settings"].tick_rate == 3.5

    def test_bad_environment_is_a_usage_error(self, monkeypatch):
        monkeypatch.setenv("TERMSNAKE_TICK_RATE", "fast")

        with pytest.raises(SystemExit) as excinfo:
            main([], run=MagicMock())
        assert excinfo.value.code == 2

    def test_zero_tick_rate_flag_is_a_usage_error(self):
        with pytest.raises(SystemExit):
            main(["--tick-rate", "0"], run=MagicMock())

    def test_startup_error_returns_1(self, capsys):
        def fake_run(settings):
            raise ValueError("Board is too narrow")

        assert main([], run=fake_run) == 1
        assert "Board is too narrow" in capsys.readouterr().err

    def test_module_is_documented(self):
        assert main_module.__doc__
        assert "entry point" in main_module.__doc__
