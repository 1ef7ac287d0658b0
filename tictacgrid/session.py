"""
session persistence for the current game snapshot

stored as {"board": [...], "size": n, "turn": "X"} under a fixed channel key;
the evaluation is derived again on restore
"""
import json
import logging
from pathlib import Path
from threading import Lock

from .game_logic import Cell, GameError, from_parts

logger = logging.getLogger(__name__)

_MARKS = {"X": Cell.X, "O": Cell.O}


class SnapshotFormatError(GameError, ValueError):
    """persisted payload cannot be turned back into a snapshot"""


def snapshot_to_dict(snapshot):
    # empty cells become null
    return {
        "board": [None if cell is Cell.EMPTY else cell.value for cell in snapshot.board],
        "size": snapshot.size,
        "turn": snapshot.turn.value,
    }


def _cell_from_value(value):
    if value is None:
        return Cell.EMPTY
    if isinstance(value, str) and value in _MARKS:
        return _MARKS[value]
    raise SnapshotFormatError(f"invalid cell value: {value!r}")


def snapshot_from_dict(data):
    """
    payload -> snapshot, SnapshotFormatError on anything malformed
    """
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"snapshot payload must be an object, got {type(data).__name__}")
    board = data.get("board")
    size = data.get("size")
    turn = data.get("turn")
    if not isinstance(board, list):
        raise SnapshotFormatError("snapshot payload has no board list")
    if not isinstance(turn, str) or turn not in _MARKS:
        raise SnapshotFormatError(f"invalid turn value: {turn!r}")
    cells = [_cell_from_value(value) for value in board]
    try:
        return from_parts(cells, size, _MARKS[turn])
    except GameError as e:
        raise SnapshotFormatError(str(e)) from e


class MemoryStorage:
    """
    key-value storage kept in process memory
    """
    def __init__(self):
        self._data = {}

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def delete(self, key):
        self._data.pop(key, None)


class JsonFileStorage:
    """
    key-value storage backed by a single json file
    """
    def __init__(self, path):
        self.path = Path(path)
        self._lock = Lock()

    def _load_all(self):
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8")) or {}
        except ValueError:
            # bad json or bad utf-8, both are ValueError subclasses
            logger.warning("%s is corrupted or empty, returning {}", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not hold an object, returning {}", self.path)
            return {}
        return data

    def _save_all(self, data):
        # temp file, then atomic rename
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key):
        with self._lock:
            return self._load_all().get(key)

    def set(self, key, value):
        with self._lock:
            data = self._load_all()
            data[key] = value
            self._save_all(data)

    def delete(self, key):
        with self._lock:
            data = self._load_all()
            if key in data:
                del data[key]
                self._save_all(data)


class SessionPersistence:
    """
    saves the current snapshot under channel and restores it later
    """
    def __init__(self, storage, channel="moves"):
        self.storage = storage
        self.channel = channel

    def save(self, snapshot):
        self.storage.set(self.channel, snapshot_to_dict(snapshot))

    def clear(self):
        self.storage.delete(self.channel)

    def restore(self, default):
        """
        persisted snapshot, or default when none/unusable
        """
        payload = self.storage.get(self.channel)
        if payload is None:
            return default
        try:
            snapshot = snapshot_from_dict(payload)
        except SnapshotFormatError as e:
            logger.warning("discarding persisted %r snapshot: %s", self.channel, e)
            self.clear()
            return default
        logger.info("restored %dx%d game from session", snapshot.size, snapshot.size)
        return snapshot

    def attach(self, store):
        # returns the unsubscribe hook
        return store.subscribe(self.save)
