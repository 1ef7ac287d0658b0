"""
moves store: holds the current snapshot and tells subscribers about changes
"""
import logging
from threading import RLock

from . import config, game_logic

logger = logging.getLogger(__name__)


class MovesStore:
    """
    container for the current game snapshot

    subscribers are plain callables called synchronously with each new
    snapshot, in the order they subscribed
    """
    def __init__(self, initial=None):
        self._last = initial if initial is not None else game_logic.reset(config.DEFAULT_SIZE)
        self._subscribers = []
        self._lock = RLock()  # serializes read-compute-publish, subscribers may re-enter

    def last(self):
        """
        current snapshot
        """
        return self._last

    def next(self, snapshot):
        """
        adopt snapshot as current and notify subscribers
        """
        with self._lock:
            self._publish(snapshot)

    def update(self, fn):
        """
        publish fn(current) atomically; if fn raises nothing changes
        """
        with self._lock:
            snapshot = fn(self._last)
            self._publish(snapshot)
            return snapshot

    def make_move(self, index):
        return self.update(lambda last: game_logic.apply_move(last, index))

    def reset(self, size=None):
        """
        new game, keeping the current size unless one is given
        """
        return self.update(
            lambda last: game_logic.reset(last.size if size is None else size)
        )

    def subscribe(self, callback):
        """
        register callback(snapshot); returns a function that unsubscribes it
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def _publish(self, snapshot):
        self._last = snapshot
        logger.debug("publish %dx%d snapshot to %d subscriber(s)",
                     snapshot.size, snapshot.size, len(self._subscribers))
        # copy so callbacks may unsubscribe while we iterate
        for callback in list(self._subscribers):
            callback(snapshot)
