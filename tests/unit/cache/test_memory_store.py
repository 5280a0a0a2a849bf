"""Unit tests for the in-memory cache store."""

import threading
from uuid import uuid4

from infrastructure.cache.memory_store import InMemoryCacheStore


class TestInMemoryCacheStore:
    def test_miss_is_distinguishable_from_cached_none(self) -> None:
        store = InMemoryCacheStore()
        key = (uuid4(), "label")

        assert store.get(key) == (False, None)

        store.set_if_absent(key, None)

        assert store.get(key) == (True, None)

    def test_first_writer_wins(self) -> None:
        store = InMemoryCacheStore()
        key = (uuid4(), "label")

        assert store.set_if_absent(key, "first") == "first"
        assert store.set_if_absent(key, "second") == "first"

    def test_delete_entity_only_drops_that_entity(self) -> None:
        store = InMemoryCacheStore()
        kept, dropped = uuid4(), uuid4()
        store.set_if_absent((kept, "a"), 1)
        store.set_if_absent((dropped, "a"), 2)
        store.set_if_absent((dropped, "b"), 3)

        assert store.delete_entity(dropped) == 2
        assert len(store) == 1
        assert store.get((kept, "a")) == (True, 1)

    def test_concurrent_writers_store_one_value(self) -> None:
        store = InMemoryCacheStore()
        key = (uuid4(), "label")
        barrier = threading.Barrier(8)
        results: list[object] = []
        lock = threading.Lock()

        def write(value: int) -> None:
            barrier.wait()
            stored = store.set_if_absent(key, value)
            with lock:
                results.append(stored)

        threads = [threading.Thread(target=write, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(results)) == 1
        assert store.get(key) == (True, results[0])
