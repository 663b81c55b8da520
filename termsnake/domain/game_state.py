"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Optional, Tuple


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick: how many ticks have been applied (0-based)
        snake_positions: list of (row, col) from tail to head
        apple: (row, col) of the apple, or None when the board is full
        heading: current heading of the snake
        rows, cols: board dimensions
        score: apples eaten so far
    """

    def __init__(
        self,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        apple: Optional[Tuple[int, int]],
        heading: str,
        rows: int,
        cols: int,
        score: int = 0,
    ):
        self.tick = tick
        self.snake_positions = snake_positions
        self.apple = apple
        self.heading = heading
        self.rows = rows
        self.cols = cols
        self.score = score

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[-1]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        S = snake body
        H = snake head
        Row 0 is the top line, matching the screen.
        """
        board = [['.' for _ in range(self.cols)] for _ in range(self.rows)]

        if self.apple is not None:
            ar, ac = self.apple
            board[ar][ac] = 'A'

        for row, col in self.snake_positions:
            board[row][col] = 'S'
        if self.snake_positions:
            hr, hc = self.head
            board[hr][hc] = 'H'

        return "\n".join(''.join(line) for line in board)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, heading={self.heading}, "
            f"apple={self.apple}, length={len(self.snake_positions)}, score={self.score}>"
        )
