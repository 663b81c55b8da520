"""
Incremental curses renderer.

Only the cells that changed between two frames are touched: cells the
snake or apple left are blanked, then the current snake and apple are
drawn on top. Board coordinates are shifted by one for the border.
"""

import curses
import logging
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from termsnake.domain.game_state import GameState

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

SNAKE_GLYPH = "S"
APPLE_GLYPH = "A"
BLANK = " "


@dataclass(frozen=True)
class FrameDiff:
    """
    Draw operations needed to go from one frame to the next.

    Attributes:
        erase: cells to blank
        snake: cells to draw as snake
        apple: cell to draw as apple, if any
    """

    erase: Set[Cell]
    snake: Tuple[Cell, ...]
    apple: Optional[Cell]


def diff_frames(previous: GameState, current: GameState) -> FrameDiff:
    """Compute the minimal erase set and the cells to draw for `current`."""
    current_cells = set(current.snake_positions)
    if current.apple is not None:
        current_cells.add(current.apple)

    stale = set(previous.snake_positions)
    if previous.apple is not None:
        stale.add(previous.apple)

    return FrameDiff(
        erase=stale - current_cells,
        snake=tuple(current.snake_positions),
        apple=current.apple,
    )


class Renderer:
    """Draws GameState frames into a curses window."""

    def __init__(self, window, rows: int, cols: int, snake_attr: int = 0, apple_attr: int = 0):
        self.window = window
        self.rows = rows
        self.cols = cols
        self.snake_attr = snake_attr
        self.apple_attr = apple_attr

    def _put(self, screen_row: int, screen_col: int, text: str, attr: int = 0) -> None:
        # Writing the bottom-right cell makes curses try to scroll and raise
        try:
            self.window.addstr(screen_row, screen_col, text, attr)
        except curses.error:
            pass

    def _put_cell(self, cell: Cell, text: str, attr: int = 0) -> None:
        row, col = cell
        self._put(row + 1, col + 1, text, attr)

    def draw_board(self) -> None:
        """Clear the screen and draw the border around the board."""
        self.window.clear()
        horizontal = "-" * (self.cols + 2)
        self._put(0, 0, horizontal)
        for row in range(1, self.rows + 1):
            self._put(row, 0, "|")
            self._put(row, self.cols + 1, "|")
        self._put(self.rows + 1, 0, horizontal)
        self.window.refresh()

    def render(self, previous: GameState, current: GameState) -> FrameDiff:
        """Bring the screen from `previous` to `current`."""
        diff = diff_frames(previous, current)

        for cell in diff.erase:
            self._put_cell(cell, BLANK)
        for cell in diff.snake:
            self._put_cell(cell, SNAKE_GLYPH, self.snake_attr)
        if diff.apple is not None:
            self._put_cell(diff.apple, APPLE_GLYPH, self.apple_attr)

        # Park the cursor in the bottom-right corner, out of the way
        try:
            self.window.move(self.rows + 1, self.cols + 1)
        except curses.error:
            pass
        self.window.refresh()
        return diff
