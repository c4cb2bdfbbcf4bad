from concurrent.futures import ThreadPoolExecutor

import pytest

from rewards.store import DuplicateReceiptError, ScoreStore


def test_put_then_get(store):
    store.put("r1", 28)
    assert store.get("r1") == 28


def test_get_missing_returns_none(store):
    assert store.get("nope") is None


def test_zero_points_are_found(store):
    store.put("r1", 0)
    assert store.get("r1") == 0
    assert "r1" in store


def test_duplicate_put_is_rejected_and_keeps_original(store):
    store.put("r1", 28)
    with pytest.raises(DuplicateReceiptError):
        store.put("r1", 109)
    assert store.get("r1") == 28
    assert len(store) == 1


def test_len_and_contains(store):
    assert len(store) == 0
    store.put("a", 1)
    store.put("b", 2)
    assert len(store) == 2
    assert "a" in store
    assert "c" not in store


def test_concurrent_puts_and_gets():
    store = ScoreStore()
    ids = [f"r{i}" for i in range(500)]

    def work(i):
        store.put(ids[i], i)
        return store.get(ids[i])

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(work, range(len(ids))))

    assert results == list(range(len(ids)))
    assert len(store) == len(ids)
