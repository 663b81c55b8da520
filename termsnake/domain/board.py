"""
Board and collision engine.

Owns the grid dimensions, the snake body and the apple. A single call to
advance() moves the snake one cell and either grows it, translates it, or
raises one of the GameOver conditions.
"""

import logging
import random
from typing import Optional

from .constants import APPLE, DELTAS, EMPTY
from .errors import OutOfBounds, SnakeBite
from .snake import Cell, Snake

logger = logging.getLogger(__name__)


class Board:
    """
    Manages:
      - Board dimensions (rows, cols), fixed at construction
      - The snake body
      - The apple (None once the snake fills every cell)
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        snake: Snake,
        apple: Optional[Cell] = None,
        rng: Optional[random.Random] = None,
    ):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.snake = snake
        self.rng = rng or random.Random()

        for cell in self.snake:
            if not self.in_bounds(cell):
                raise ValueError(f"Snake cell out of bounds at {cell}.")

        if apple is None:
            self.apple: Optional[Cell] = None
            self.place_apple()
        else:
            if not self.in_bounds(apple):
                raise ValueError(f"Apple out of bounds at {apple}.")
            self.apple = apple

    def in_bounds(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def next_cell(self, head: Cell, heading: str) -> Cell:
        """
        Return the cell one step from `head` in `heading`.

        Raises OutOfBounds when the step would leave the board. The lower
        edge is checked before any subtraction happens.
        """
        row, col = head
        d_row, d_col = DELTAS[heading]

        if (d_row < 0 and row == 0) or (d_col < 0 and col == 0):
            raise OutOfBounds((row + d_row, col + d_col))

        row += d_row
        col += d_col
        if row >= self.rows or col >= self.cols:
            raise OutOfBounds((row, col))
        return (row, col)

    def classify(self, cell: Cell) -> str:
        """
        Return APPLE or EMPTY for an in-bounds cell.

        A cell occupied by the snake raises SnakeBite instead.
        """
        if cell in self.snake:
            raise SnakeBite(cell)
        if cell == self.apple:
            return APPLE
        return EMPTY

    def advance(self, heading: str) -> bool:
        """
        Move the snake one cell in `heading`.

        Returns True when the apple was eaten (the snake grew by one).
        Raises OutOfBounds or SnakeBite when the move ends the game; the
        snake is left untouched in that case.
        """
        cell = self.next_cell(self.snake.head, heading)
        state = self.classify(cell)

        if state == EMPTY:
            self.snake.pop_tail()
        self.snake.push_head(cell)

        if state == APPLE:
            self.place_apple()
            return True
        return False

    def place_apple(self) -> Optional[Cell]:
        """
        Put the apple on a random cell not occupied by the snake.

        Row and column are drawn independently and uniformly; occupied cells
        are re-rolled. When the snake covers the whole board the apple is
        removed.
        """
        if len(self.snake) >= self.rows * self.cols:
            logger.info("Board is full, no room left for an apple")
            self.apple = None
            return None

        while True:
            row = self.rng.randrange(self.rows)
            col = self.rng.randrange(self.cols)
            if (row, col) not in self.snake:
                self.apple = (row, col)
                logger.debug(f"Apple placed at {self.apple}")
                return self.apple

    def __repr__(self):
        return f"<Board {self.rows}x{self.cols} snake={self.snake!r} apple={self.apple}>"
