"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from termsnake.domain.constants import DELTAS, QUIT, UP, DOWN, LEFT, RIGHT
from termsnake.domain.game_state import GameState
from termsnake.domain.turns import is_valid_turn
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.

    Used by the --demo flag so the game can play itself. An optional
    `interrupt` player (usually the keyboard) is polled first so the demo
    can still be quit.
    """

    def __init__(self, rng: Optional[random.Random] = None, interrupt: Optional[Player] = None):
        self.rng = rng or random.Random()
        self.interrupt = interrupt

    def start(self) -> None:
        if self.interrupt is not None:
            self.interrupt.start()

    def drain_commands(self, game_state: GameState) -> List[str]:
        if self.interrupt is not None:
            if QUIT in self.interrupt.drain_commands(game_state):
                return [QUIT]

        head_row, head_col = game_state.head
        body = game_state.snake_positions

        # Filter out moves that:
        # 1. Reverse the snake
        # 2. Hit walls
        # 3. Hit the body (the tail still counts, it has not moved yet)
        valid_moves: List[str] = []
        for move in (UP, DOWN, LEFT, RIGHT):
            if not is_valid_turn(game_state.heading, move):
                continue

            d_row, d_col = DELTAS[move]
            new_row, new_col = head_row + d_row, head_col + d_col
            if (new_row < 0 or new_row >= game_state.rows or
                    new_col < 0 or new_col >= game_state.cols):
                continue

            if (new_row, new_col) in body:
                continue

            valid_moves.append(move)

        # No safe move: keep going, we'll die anyway
        if not valid_moves:
            return []

        return [self.rng.choice(valid_moves)]
