"""
Game-ending conditions raised by the board.

These are normal terminal states of a run rather than faults. SnakeGame
catches them and records the reason, the same way a dead snake used to
carry a death_reason.
"""


class GameOver(Exception):
    """Base class for every condition that ends the game."""

    reason = "game_over"

    def __init__(self, cell=None):
        self.cell = cell
        message = self.reason if cell is None else f"{self.reason} at {cell}"
        super().__init__(message)


class OutOfBounds(GameOver):
    """The head would leave the board."""

    reason = "wall"


class SnakeBite(GameOver):
    """The head would enter a cell already occupied by the snake."""

    reason = "self"
