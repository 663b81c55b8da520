"""
Domain entities for the termsnake game engine.

This module contains the core game logic that is independent of the
terminal (turn validation, step resolution, board and collisions).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, QUIT, APPLE, EMPTY
from .errors import GameOver, OutOfBounds, SnakeBite
from .turns import is_valid_turn, opposite
from .snake import Snake
from .board import Board
from .step_resolver import Step, resolve_step, split_commands
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'QUIT', 'APPLE', 'EMPTY',
    'GameOver', 'OutOfBounds', 'SnakeBite',
    'is_valid_turn', 'opposite',
    'Snake',
    'Board',
    'Step', 'resolve_step', 'split_commands',
    'GameState',
]
