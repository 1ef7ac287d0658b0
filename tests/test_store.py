import threading

import pytest

from tictacgrid import config
from tictacgrid.game_logic import Cell, IllegalMoveError, reset
from tictacgrid.store import MovesStore


def test_default_store_uses_configured_size(monkeypatch):
    assert MovesStore().last().size == config.DEFAULT_SIZE
    monkeypatch.setattr(config, "DEFAULT_SIZE", 5)
    store = MovesStore()
    assert store.last().size == 5
    assert store.last().turn is Cell.X


def test_subscribers_notified_synchronously_in_order():
    store = MovesStore(reset(3))
    calls = []
    store.subscribe(lambda s: calls.append(("a", s)))
    store.subscribe(lambda s: calls.append(("b", s)))

    snapshot = store.make_move(4)

    assert [name for name, _ in calls] == ["a", "b"]
    assert all(s is snapshot for _, s in calls)
    assert store.last() is snapshot


def test_unsubscribe_stops_notifications():
    store = MovesStore(reset(3))
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.make_move(0)
    unsubscribe()
    unsubscribe()  # second call is a no-op
    store.make_move(1)
    assert len(seen) == 1


def test_failed_update_keeps_current_snapshot():
    store = MovesStore(reset(3))
    store.make_move(0)
    before = store.last()
    seen = []
    store.subscribe(seen.append)

    with pytest.raises(IllegalMoveError):
        store.make_move(0)

    assert store.last() is before
    assert seen == []


def test_reset_keeps_size_unless_given():
    store = MovesStore(reset(4))
    store.make_move(5)
    assert store.reset().size == 4
    assert store.last().board[5] is Cell.EMPTY
    assert store.reset(5).size == 5
    assert len(store.last().board) == 25


def test_next_adopts_snapshot():
    store = MovesStore(reset(3))
    seen = []
    store.subscribe(seen.append)
    fresh = reset(5)
    store.next(fresh)
    assert store.last() is fresh
    assert seen == [fresh]


def test_subscriber_may_reenter_store():
    store = MovesStore(reset(3))

    def reset_on_finish(snapshot):
        if snapshot.finished:
            store.reset()

    store.subscribe(reset_on_finish)
    for index in [0, 3, 1, 4, 2]:
        store.make_move(index)
    assert not store.last().finished
    assert all(cell is Cell.EMPTY for cell in store.last().board)


def test_subscriber_error_propagates():
    store = MovesStore(reset(3))

    def broken(snapshot):
        raise RuntimeError("boom")

    store.subscribe(broken)
    with pytest.raises(RuntimeError):
        store.make_move(0)
    # snapshot was adopted before subscribers ran
    assert store.last().board[0] is Cell.X


def test_concurrent_moves_are_not_lost():
    store = MovesStore(reset(5))
    barrier = threading.Barrier(4)
    errors = []

    def worker(cells):
        barrier.wait()
        for index in cells:
            try:
                store.make_move(index)
            except IllegalMoveError as e:
                errors.append(e)

    # four marks each, a 5x5 line needs five
    chunks = [[0, 6], [12, 18], [1, 7], [13, 19]]
    threads = [threading.Thread(target=worker, args=(c,)) for c in chunks]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    board = store.last().board
    assert errors == []
    assert sum(cell is not Cell.EMPTY for cell in board) == 8
    assert sum(cell is Cell.X for cell in board) == 4
    assert sum(cell is Cell.O for cell in board) == 4
