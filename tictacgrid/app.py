"""
wiring between config, session persistence and the moves store
"""
import logging

from . import config, game_logic
from .session import JsonFileStorage, SessionPersistence
from .store import MovesStore

logger = logging.getLogger(__name__)


def create_persistence():
    # None when persistence is switched off
    if not config.PERSIST_ENABLED:
        logger.info("session persistence disabled")
        return None
    path = config.session_file()
    logger.info("session file: %s", path)
    return SessionPersistence(JsonFileStorage(path), channel=config.DEFAULT_CHANNEL)


def build_store(persistence=None, size=config.DEFAULT_SIZE):
    """
    create the store, seeded from the session when one is available
    """
    initial = game_logic.reset(size)
    if persistence is not None:
        initial = persistence.restore(initial)
    store = MovesStore(initial)
    if persistence is not None:
        persistence.attach(store)
    return store
