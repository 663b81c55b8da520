"""
Fixed-timestep game loop.

update() runs at a fixed logical rate no matter how fast frames are drawn;
render() runs once per loop iteration at its own cadence. Both run on the
calling thread, which owns the game state.
"""

import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


def run_game_loop(
    game: Any,
    updates_per_second: float,
    update: Callable[[Any], None],
    render: Callable[[Any], None],
    render_per_second: float = 10.0,
    max_frame_time: float = 0.25,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """
    Drive `game` until its game_over flag is set.

    Args:
        game: object with a boolean `game_over` attribute
        updates_per_second: logical tick rate
        update: called once per tick
        render: called once per frame
        render_per_second: frame rate
        max_frame_time: cap on real time credited per frame, so a stall
            does not trigger a burst of catch-up ticks. Never less than
            one frame, so slow frames keep the tick rate
        clock, sleep: time sources, replaceable in tests

    Returns:
        The game, after the loop stopped.
    """
    if updates_per_second <= 0 or render_per_second <= 0:
        raise ValueError("Update and render rates must be positive.")

    tick_length = 1.0 / updates_per_second
    frame_length = 1.0 / render_per_second
    max_credit = max(max_frame_time, frame_length)
    logger.info(
        f"Game loop starting: {updates_per_second} updates/s, {render_per_second} frames/s"
    )

    previous = clock()
    accumulator = 0.0
    while not game.game_over:
        frame_start = clock()
        accumulator += min(frame_start - previous, max_credit)
        previous = frame_start

        while accumulator >= tick_length:
            update(game)
            accumulator -= tick_length
            if game.game_over:
                break
        if game.game_over:
            break

        render(game)

        remaining = frame_length - (clock() - frame_start)
        if remaining > 0:
            sleep(remaining)

    logger.info("Game loop stopped")
    return game
