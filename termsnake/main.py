"""
Terminal Snake entry point.

SnakeGame ties the board, the player and the renderer together; run_game
drives it inside a terminal session and main() is the command line.
"""

import argparse
import logging
import random
import sys
from typing import Callable, Optional, Tuple

from dotenv import load_dotenv

from termsnake.config import Settings, configure_logging, load_settings
from termsnake.domain.board import Board
from termsnake.domain.constants import INITIAL_HEADING, INITIAL_LENGTH
from termsnake.domain.errors import GameOver
from termsnake.domain.game_state import GameState
from termsnake.domain.snake import Snake
from termsnake.domain.step_resolver import resolve_step, split_commands
from termsnake.players import KeyboardPlayer, Player, RandomPlayer
from termsnake.services.game_loop import run_game_loop
from termsnake.services.renderer import Renderer
from termsnake.services.terminal import TerminalSession, board_size_from_terminal

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board (rows, cols), snake and apple
      - Current heading
      - The player feeding commands
      - The last rendered frame, for incremental drawing
      - Score and end-of-game bookkeeping
    """
    def __init__(
        self,
        rows: int,
        cols: int,
        player: Player,
        rng: Optional[random.Random] = None,
        snake: Optional[Snake] = None,
        apple: Optional[Tuple[int, int]] = None,
        heading: str = INITIAL_HEADING,
    ):
        if snake is None:
            if cols < INITIAL_LENGTH:
                raise ValueError(
                    f"Board is too narrow: need at least {INITIAL_LENGTH} columns, got {cols}."
                )
            snake = Snake.initial(INITIAL_LENGTH)

        self.board = Board(rows, cols, snake, apple=apple, rng=rng)
        self.player = player
        self.heading = heading
        self.tick = 0
        self.score = 0
        self.game_over = False
        self.end_reason: Optional[str] = None

        self.previous_state = self.get_current_state()
        logger.info(f"New game on a {rows}x{cols} board, apple at {self.board.apple}")

    @property
    def snake(self) -> Snake:
        return self.board.snake

    @property
    def apple(self) -> Optional[Tuple[int, int]]:
        return self.board.apple

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick,
            snake_positions=list(self.board.snake.positions),
            apple=self.board.apple,
            heading=self.heading,
            rows=self.board.rows,
            cols=self.board.cols,
            score=self.score,
        )

    def run_tick(self):
        """
        Execute one tick:
          1) If game is over, do nothing
          2) Drain the commands that arrived since the last tick
          3) Stop on quit
          4) Reduce the turns to a single step
          5) Advance the snake, ending the game on a collision
        """
        if self.game_over:
            logger.warning("Game is already over. No more ticks.")
            return

        commands = self.player.drain_commands(self.get_current_state())
        turns, quit_requested = split_commands(commands)
        if quit_requested:
            self.end_game("quit")
            return

        step = resolve_step(self.heading, turns)
        try:
            ate_apple = self.board.advance(step.move_heading)
        except GameOver as e:
            logger.info(f"Collision on tick {self.tick}: {e}")
            self.end_game(e.reason)
            return

        self.heading = step.final_heading
        self.tick += 1
        if ate_apple:
            self.score += 1
            logger.info(f"Apple eaten on tick {self.tick}, score {self.score}")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Tick {self.tick}: turns={turns} step={step}\n"
                f"{self.get_current_state().print_board()}"
            )

    def render(self, renderer: Renderer):
        """Draw the changes since the last render, then remember this frame."""
        current = self.get_current_state()
        renderer.render(self.previous_state, current)
        self.previous_state = current

    def end_game(self, reason: str):
        self.game_over = True
        self.end_reason = reason
        logger.info(f"Game Over: {reason} after {self.tick} ticks, score {self.score}")


def resolve_board_size(
    settings: Settings,
    query: Callable[[], Tuple[int, int]] = board_size_from_terminal,
) -> Tuple[int, int]:
    """Explicit rows/cols win; anything missing comes from the terminal."""
    if settings.rows is not None and settings.cols is not None:
        return (settings.rows, settings.cols)
    rows, cols = query()
    return (
        settings.rows if settings.rows is not None else rows,
        settings.cols if settings.cols is not None else cols,
    )


def run_game(settings: Settings, session_factory=TerminalSession) -> SnakeGame:
    """
    Play one game in the terminal and return it once it is over.

    The terminal is restored before this returns, including when the game
    raises.
    """
    rng = random.Random(settings.seed)
    rows, cols = resolve_board_size(settings)

    with session_factory() as terminal:
        keyboard = KeyboardPlayer(terminal.read_key)
        player: Player = RandomPlayer(rng, interrupt=keyboard) if settings.demo else keyboard

        game = SnakeGame(rows, cols, player, rng=rng)
        renderer = Renderer(
            terminal.screen, rows, cols,
            snake_attr=terminal.snake_attr,
            apple_attr=terminal.apple_attr,
        )
        renderer.draw_board()
        game.render(renderer)
        player.start()

        run_game_loop(
            game,
            settings.tick_rate,
            update=lambda g: g.run_tick(),
            render=lambda g: g.render(renderer),
            render_per_second=settings.render_rate,
            max_frame_time=settings.max_frame_time,
        )

    return game


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Snake in the terminal. Steer with w/a/s/d or the arrow keys, q quits."
    )
    parser.add_argument("--rows", type=int, default=None,
                        help="Board height (default: terminal height minus the border)")
    parser.add_argument("--cols", type=int, default=None,
                        help="Board width (default: terminal width minus the border)")
    parser.add_argument("--tick-rate", type=float, default=None,
                        help="Snake moves per second")
    parser.add_argument("--render-rate", type=float, default=None,
                        help="Screen refreshes per second")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for apple placement")
    parser.add_argument("--demo", action="store_true",
                        help="Let a random player steer the snake")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Write logs to this file")
    return parser


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Overlay command line flags on top of environment settings."""
    for field in ("rows", "cols", "tick_rate", "render_rate", "seed", "log_file"):
        value = getattr(args, field)
        if value is not None:
            setattr(settings, field, value)
    if args.demo:
        settings.demo = True
    if settings.tick_rate <= 0 or settings.render_rate <= 0:
        raise ValueError("Tick and render rates must be positive.")
    return settings


def main(argv=None, run=run_game) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = apply_args(load_settings(), args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(settings)

    try:
        game = run(settings)
    except ValueError as e:
        logger.error(f"Could not start the game: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Game Over: {game.end_reason}. Apples eaten: {game.score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
