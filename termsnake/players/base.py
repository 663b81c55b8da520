"""
Base player interface for the game engine.
"""

from typing import List

from termsnake.domain.game_state import GameState


class Player:
    """
    Base class/interface for whatever steers the snake.

    Once per tick the game asks the player for every command that arrived
    since the previous tick.
    """

    def start(self) -> None:
        """Begin producing commands. Default players need no setup."""

    def drain_commands(self, game_state: GameState) -> List[str]:
        """
        Return the commands received since the last call, oldest first.

        Args:
            game_state: Current state of the game

        Returns:
            A list of "UP", "DOWN", "LEFT", "RIGHT" or "QUIT"; empty when
            nothing arrived. Must never block.
        """
        raise NotImplementedError
