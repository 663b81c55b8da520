"""
Step resolver: turns the commands received between two ticks into at most
one motion for this tick.

Only the last two queued turns matter. A valid pair moves one cell along
the first and leaves the snake facing the second, so a quick double turn
around a corner does not cost an extra tick.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .constants import QUIT
from .turns import is_valid_turn


@dataclass(frozen=True)
class Step:
    """
    The effective action of one tick.

    Attributes:
        move_heading: heading used for this tick's single cell advance
        final_heading: heading the snake keeps for the following ticks
    """

    move_heading: str
    final_heading: str


def split_commands(commands: Iterable[str]) -> Tuple[List[str], bool]:
    """
    Separate headings from a quit request.

    Stops reading at the first QUIT; anything after it is irrelevant
    because the game is over.
    """
    turns: List[str] = []
    for command in commands:
        if command == QUIT:
            return turns, True
        turns.append(command)
    return turns, False


def resolve_step(current: str, turns: List[str]) -> Step:
    """Reduce the queued turns to a single Step given the current heading."""
    if not turns:
        return Step(current, current)

    if len(turns) == 1:
        turn = turns[0]
        if is_valid_turn(current, turn):
            return Step(turn, turn)
        return Step(current, current)

    first, second = turns[-2], turns[-1]
    if is_valid_turn(current, first) and is_valid_turn(first, second):
        return Step(first, second)

    return Step(current, current)
