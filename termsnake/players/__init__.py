"""
Player implementations for termsnake.

A player is the source of commands for the snake: the keyboard during a
normal game, or a random self-playing AI in demo mode.
"""

from .base import Player
from .keyboard_player import KeyboardPlayer, key_to_command
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'KeyboardPlayer',
    'key_to_command',
    'RandomPlayer',
]
