"""
Keyboard player - a background listener feeding key presses to the game.

A daemon thread blocks on the terminal, maps raw keys to commands and puts
them on an unbounded FIFO queue. The game drains that queue once per tick
without blocking; the thread never touches game state.
"""

import logging
import queue
import threading
from typing import Callable, List, Optional

from termsnake.domain.constants import KEY_BINDINGS, QUIT
from termsnake.domain.game_state import GameState
from .base import Player

logger = logging.getLogger(__name__)


def key_to_command(key: Optional[str]) -> Optional[str]:
    """Map a raw key name to a command, or None for keys we ignore."""
    if key is None:
        return None
    return KEY_BINDINGS.get(key)


class KeyboardPlayer(Player):
    """
    Player driven by key presses read on a separate thread.

    Args:
        read_key: blocking callable returning the next key name, or None
            once the input stream is closed
    """

    def __init__(self, read_key: Callable[[], Optional[str]]):
        self.read_key = read_key
        self.commands: "queue.Queue[str]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._listen, name="termsnake-input", daemon=True
        )
        self._thread.start()
        logger.info("Keyboard listener started")

    def _listen(self) -> None:
        while True:
            try:
                key = self.read_key()
            except OSError as e:
                logger.error(f"Failed to read key from terminal: {e}")
                self.commands.put(QUIT)
                return

            if key is None:
                logger.warning("Input stream closed, requesting quit")
                self.commands.put(QUIT)
                return

            command = key_to_command(key)
            if command is not None:
                self.commands.put(command)

    def drain_commands(self, game_state: GameState) -> List[str]:
        drained: List[str] = []
        while True:
            try:
                drained.append(self.commands.get_nowait())
            except queue.Empty:
                return drained

    @property
    def is_listening(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
