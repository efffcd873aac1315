import pytest

from alphametic.domain import DIGITS, DomainStore


@pytest.fixture
def store():
    return DomainStore(["A", "B", "C"])


def test_initialize(store):
    assert store.var_names() == ["A", "B", "C"]
    assert len(store) == 3
    assert "B" in store
    assert "X" not in store
    for var_name in store:
        assert store[var_name] == DIGITS
    assert not store.pop_modified()


def test_narrow(store):
    change = store.narrow("A", {1, 2, 3, 11})
    assert change.changed
    assert not change.empty
    assert store["A"] == {1, 2, 3}
    change = store.narrow("A", range(10))
    assert not change.changed
    assert store.pop_modified() == {"A"}
    assert not store.pop_modified()


def test_narrow_empty(store):
    change = store.narrow("B", {12})
    assert change.changed
    assert change.empty
    assert store.is_failed()


@pytest.mark.parametrize("value", [0, 5, 9])
def test_assign(store, value):
    store.assign("C", value)
    assert store.is_bound("C")
    assert store.value("C") == value
    assert store.substitution() == {"C": value}
    assert store.unbound_var_names() == ["A", "B"]


def test_remove(store):
    assert store.remove("A", 0).changed
    assert 0 not in store["A"]
    assert not store.remove("A", 0).changed
    store.assign("B", 4)
    change = store.remove("B", 4)
    assert change.empty


def test_value_unbound(store):
    with pytest.raises(ValueError):
        store.value("A")


def test_snapshot_restore(store):
    snapshot = store.snapshot()
    store.assign("A", 1)
    store.assign("B", 2)
    store.assign("C", 3)
    assert store.is_complete()
    store.restore(snapshot)
    assert not store.pop_modified()
    assert store["A"] == DIGITS
    assert not store.is_complete()
    # the snapshot can be restored again
    store.assign("A", 7)
    store.restore(snapshot)
    assert store["A"] == DIGITS
