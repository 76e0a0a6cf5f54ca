# tests/test_history.py
import pytest

from lesh.history import HistoryStore
from lesh.parser import Command

X = Command("ls", ["-l"])
Y = Command("pwd")
Z = Command("echo", ["hi"])


def test_rerecording_moves_to_front_without_duplicating():
    store = HistoryStore()
    store.record_executed(X)
    store.record_executed(Y)
    store.record_executed(X)

    assert store.list() == [X, Y]
    assert len(store) == 2


def test_structurally_equal_commands_are_one_entry():
    store = HistoryStore()
    store.record_executed(Command("ls", ["-l"]))
    store.record_executed(Y)
    store.record_executed(Command("ls", ("-l",)))

    assert store.list() == [X, Y]


def test_eviction_drops_least_recently_used():
    store = HistoryStore(max_size=2)
    store.record_executed(X)
    store.record_executed(Y)
    store.record_executed(Z)

    assert store.list() == [Z, Y]
    assert X not in store


def test_promoted_entry_survives_eviction():
    store = HistoryStore(max_size=2)
    store.record_executed(X)
    store.record_executed(Y)
    store.record_executed(X)
    store.record_executed(Z)

    assert store.list() == [Z, X]


def test_get_by_display_index_is_one_based_most_recent_first():
    store = HistoryStore()
    store.record_executed(Y)
    store.record_executed(X)

    assert store.get_by_display_index(1) == X
    assert store.get_by_display_index(2) == Y
    assert store.get_by_display_index(0) is None
    assert store.get_by_display_index(3) is None
    assert store.get_by_display_index(-1) is None


def test_empty_store_lookups():
    store = HistoryStore()
    assert store.list() == []
    assert store.get_by_display_index(1) is None


def test_list_is_a_snapshot():
    store = HistoryStore()
    store.record_executed(X)
    snapshot = store.list()
    snapshot.append(Y)
    assert store.list() == [X]


def test_clear():
    store = HistoryStore()
    store.record_executed(X)
    store.record_executed(Y)
    store.clear()
    assert len(store) == 0
    assert store.get_by_display_index(1) is None


@pytest.mark.parametrize("size", [0, -1, 1001])
def test_capacity_bounds(size):
    with pytest.raises(ValueError):
        HistoryStore(max_size=size)


def test_never_exceeds_capacity():
    store = HistoryStore(max_size=3)
    for i in range(20):
        store.record_executed(Command("echo", [str(i)]))
        assert len(store) <= 3
    assert store.list()[0] == Command("echo", ["19"])
