"""
runtime settings read from environment variables
"""
import logging
import os
import tempfile
from pathlib import Path

from .game_logic import SUPPORTED_SIZES

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 3          # board size for a first game
DEFAULT_CHANNEL = "moves"  # session key for the current snapshot


def env_flag(name, default=False):
    """
    boolean flag from the environment

    1/true/yes/on and 0/false/no/off, anything else (or unset) -> default
    """
    value = os.getenv(name)
    if value is None:
        return default
    normalised = value.strip().lower()
    if normalised in {"1", "true", "yes", "on"}:
        return True
    if normalised in {"0", "false", "no", "off"}:
        return False
    return default


def env_size(name, default=DEFAULT_SIZE):
    """
    supported board size from the environment, default when unusable
    """
    value = os.getenv(name)
    if value is None:
        return default
    try:
        size = int(value.strip())
    except ValueError:
        logger.warning("%s=%r is not a number, using %d", name, value, default)
        return default
    if size not in SUPPORTED_SIZES:
        logger.warning("%s=%d is not one of %s, using %d",
                       name, size, SUPPORTED_SIZES, default)
        return default
    return size


def session_file():
    value = os.getenv("TICTACGRID_SESSION_FILE")
    if value:
        return Path(value)
    return Path(tempfile.gettempdir()) / "tictacgrid-session.json"


def log_level():
    name = (os.getenv("TICTACGRID_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    # unknown names come back as the string "Level X"
    return level if isinstance(level, int) else logging.INFO


START_SIZE = env_size("TICTACGRID_SIZE")
PERSIST_ENABLED = env_flag("TICTACGRID_PERSIST", default=True)
