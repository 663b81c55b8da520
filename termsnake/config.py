"""
Runtime settings read from the environment.

Call load_dotenv() before load_settings() to pick up a local .env file.
Command line flags in main.py override whatever is found here.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TICK_RATE = 2.0
DEFAULT_RENDER_RATE = 10.0
DEFAULT_MAX_FRAME_TIME = 0.25
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class Settings:
    tick_rate: float = DEFAULT_TICK_RATE
    render_rate: float = DEFAULT_RENDER_RATE
    max_frame_time: float = DEFAULT_MAX_FRAME_TIME
    rows: Optional[int] = None
    cols: Optional[int] = None
    seed: Optional[int] = None
    demo: bool = False
    log_file: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _get_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _get(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _get_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = _get(environ, name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from TERMSNAKE_* environment variables."""
    if environ is None:
        environ = os.environ

    log_level = (_get(environ, "TERMSNAKE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"TERMSNAKE_LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(
        tick_rate=_get_float(environ, "TERMSNAKE_TICK_RATE", DEFAULT_TICK_RATE),
        render_rate=_get_float(environ, "TERMSNAKE_RENDER_RATE", DEFAULT_RENDER_RATE),
        max_frame_time=_get_float(environ, "TERMSNAKE_MAX_FRAME_TIME", DEFAULT_MAX_FRAME_TIME),
        rows=_get_int(environ, "TERMSNAKE_ROWS"),
        cols=_get_int(environ, "TERMSNAKE_COLS"),
        seed=_get_int(environ, "TERMSNAKE_SEED"),
        log_file=_get(environ, "TERMSNAKE_LOG_FILE"),
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    """
    Send logs to TERMSNAKE_LOG_FILE, or nowhere.

    The terminal belongs to the game while it runs, so without a log file
    the root logger only gets a NullHandler (this also keeps Python's
    last-resort stderr handler quiet).
    """
    if settings.log_file:
        logging.basicConfig(
            filename=settings.log_file,
            level=settings.log_level,
            format=LOG_FORMAT,
        )
    else:
        logging.getLogger().addHandler(logging.NullHandler())
