"""
Terminal session handling.

Takes over the screen through curses (alternate screen, raw input, hidden
cursor) and always gives it back on exit. Keys are read straight from the
stdin file descriptor so the input thread never calls into curses, which
is not thread-safe.
"""

import curses
import logging
import os
import select
import sys
from typing import Callable, Optional, Tuple

from termsnake.domain.constants import BORDER, DEFAULT_COLS, DEFAULT_ROWS, INITIAL_LENGTH

logger = logging.getLogger(__name__)

ESC = 0x1b
# How long to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05
# Range of bytes that end a CSI or SS3 sequence
FINAL_BYTES = (0x40, 0x7e)
# Returned for escape sequences with no binding
UNKNOWN_KEY = "KEY_UNKNOWN"

ARROW_KEYS = {
    "A": "KEY_UP",
    "B": "KEY_DOWN",
    "C": "KEY_RIGHT",
    "D": "KEY_LEFT",
}

SNAKE_PAIR = 1
APPLE_PAIR = 2


def _read_byte(fd: int, timeout: Optional[float] = None) -> Optional[int]:
    """Read one byte from fd. Returns None on end of stream or timeout."""
    if timeout is not None:
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
    data = os.read(fd, 1)
    if not data:
        return None
    return data[0]


def read_key(fd: int) -> Optional[str]:
    """
    Block until a key is pressed and return its name.

    Plain keys come back as their character ("w", "q", ...). Arrow keys,
    sent by the terminal as ESC [ A..D or ESC O A..D, come back as
    "KEY_UP", "KEY_DOWN", "KEY_LEFT" or "KEY_RIGHT". A lone ESC is
    returned as "\\x1b". Any other escape sequence (modified arrows,
    function keys, Alt+key) is read to its end and returned as
    UNKNOWN_KEY. Returns None once stdin is closed.

    Raises OSError if the descriptor cannot be read.
    """
    byte = _read_byte(fd)
    if byte is None:
        return None
    if byte != ESC:
        return chr(byte)

    prefix = _read_byte(fd, ESCAPE_TIMEOUT)
    if prefix is None:
        return chr(ESC)
    if chr(prefix) not in ("[", "O"):
        return UNKNOWN_KEY

    # Parameter and intermediate bytes run until a final byte in @..~
    body = []
    while True:
        next_byte = _read_byte(fd, ESCAPE_TIMEOUT)
        if next_byte is None:
            return UNKNOWN_KEY
        if FINAL_BYTES[0] <= next_byte <= FINAL_BYTES[1]:
            break
        body.append(next_byte)

    if body:
        return UNKNOWN_KEY
    return ARROW_KEYS.get(chr(next_byte), UNKNOWN_KEY)


def board_size_from_terminal(
    get_size: Callable[[], os.terminal_size] = os.get_terminal_size,
) -> Tuple[int, int]:
    """
    Return (rows, cols) of the playable board for the current terminal.

    The border takes one cell on each side. Falls back to the default board
    when the terminal size cannot be queried, or when it leaves less than
    one row or fewer columns than the starting snake needs.
    """
    try:
        size = get_size()
    except (OSError, ValueError) as e:
        logger.warning(f"Could not query terminal size ({e}), using {DEFAULT_ROWS}x{DEFAULT_COLS}")
        return (DEFAULT_ROWS, DEFAULT_COLS)
    rows, cols = size.lines - BORDER, size.columns - BORDER
    if rows < 1 or cols < INITIAL_LENGTH:
        logger.warning(f"Terminal too small for a {rows}x{cols} board, using {DEFAULT_ROWS}x{DEFAULT_COLS}")
        return (DEFAULT_ROWS, DEFAULT_COLS)
    return (rows, cols)


class TerminalSession:
    """
    Context manager owning the terminal for the duration of a game.

    Attributes:
        screen: the curses window covering the terminal
        snake_attr, apple_attr: curses attributes for the snake and apple
            glyphs (plain when the terminal has no colours)
    """

    def __init__(self, input_fd: Optional[int] = None):
        self.input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        self.screen = None
        self.snake_attr = 0
        self.apple_attr = 0

    def __enter__(self) -> "TerminalSession":
        self.screen = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            self.screen.keypad(True)
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self._init_colors()
        except Exception:
            self._restore()
            raise
        logger.info("Terminal session started")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()
        logger.info("Terminal session restored")

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(SNAKE_PAIR, curses.COLOR_GREEN, background)
        curses.init_pair(APPLE_PAIR, curses.COLOR_RED, background)
        self.snake_attr = curses.color_pair(SNAKE_PAIR)
        self.apple_attr = curses.color_pair(APPLE_PAIR)

    def _restore(self) -> None:
        if self.screen is None:
            return
        try:
            self.screen.keypad(False)
            curses.noraw()
            curses.echo()
            try:
                curses.curs_set(1)
            except curses.error:
                pass
        finally:
            curses.endwin()
            self.screen = None

    def read_key(self) -> Optional[str]:
        return read_key(self.input_fd)
