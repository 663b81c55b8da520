"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Tuple

Cell = Tuple[int, int]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (row, col) from tail at index 0 to head at the end
    """

    def __init__(self, positions: Iterable[Cell]):
        self.positions = deque(positions)
        if not self.positions:
            raise ValueError("A snake needs at least one cell.")
        if len(set(self.positions)) != len(self.positions):
            raise ValueError("Snake cells must be distinct.")

    @property
    def head(self) -> Cell:
        """Return the head position (last element)."""
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self.positions

    def __iter__(self):
        return iter(self.positions)

    def push_head(self, cell: Cell) -> None:
        self.positions.append(cell)

    def pop_tail(self) -> Cell:
        return self.positions.popleft()

    @classmethod
    def initial(cls, length: int, row: int = 0) -> "Snake":
        """A straight snake along `row`, tail at column 0, head facing right."""
        return cls((row, col) for col in range(length))

    def __repr__(self):
        return f"<Snake length={len(self)} head={self.head}>"
