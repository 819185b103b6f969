"""Unit tests for the resource read cache"""
import threading

import pytest

from resource_service.cache.resource_cache import ResourceCache
from resource_service.models.resource import Resource


def make_resource(resource_id: str, code: str = None) -> Resource:
    return Resource(id=resource_id, code=code or f"C-{resource_id}", name=f"Name {resource_id}")


class TestResourceCache:
    """Test ResourceCache get/put/evict semantics"""

    def setup_method(self):
        self.cache = ResourceCache(max_size=3)

    def test_get_miss_returns_none(self):
        assert self.cache.get("missing") is None
        assert self.cache.stats()["misses"] == 1

    def test_put_then_get(self):
        resource = make_resource("1")
        self.cache.put("1", resource)

        assert self.cache.get("1") == resource
        assert self.cache.stats()["hits"] == 1

    def test_get_returns_copy(self):
        self.cache.put("1", make_resource("1"))

        fetched = self.cache.get("1")
        fetched.name = "Mutated"

        assert self.cache.get("1").name == "Name 1"

    def test_put_overwrites(self):
        self.cache.put("1", make_resource("1"))
        self.cache.put("1", Resource(id="1", code="C-1", name="Renamed"))

        assert self.cache.get("1").name == "Renamed"
        assert len(self.cache) == 1

    def test_evict_removes_entry(self):
        self.cache.put("1", make_resource("1"))

        self.cache.evict("1")

        assert self.cache.get("1") is None
        assert self.cache.stats()["evictions"] == 1

    def test_evict_absent_key_is_noop(self):
        self.cache.evict("never-cached")
        self.cache.evict("never-cached")

        assert len(self.cache) == 0
        assert self.cache.stats()["evictions"] == 0

    def test_lru_bound(self):
        for i in range(3):
            self.cache.put(str(i), make_resource(str(i)))

        # Touch "0" so "1" becomes least recently used
        self.cache.get("0")
        self.cache.put("3", make_resource("3"))

        assert len(self.cache) == 3
        assert self.cache.get("1") is None
        assert self.cache.get("0") is not None
        assert self.cache.get("3") is not None

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            ResourceCache(max_size=0)

    def test_clear(self):
        self.cache.put("1", make_resource("1"))
        self.cache.put("2", make_resource("2"))

        self.cache.clear()

        assert len(self.cache) == 0
        assert self.cache.stats()["evictions"] == 2

    def test_stats_shape(self):
        stats = self.cache.stats()

        assert stats == {"size": 0, "max_size": 3, "hits": 0, "misses": 0, "evictions": 0}


class TestPopulate:
    """Test the token-guarded populate used after a store read"""

    def setup_method(self):
        self.cache = ResourceCache(max_size=2)

    def test_populate_without_intervening_evict(self):
        token = self.cache.token()

        assert self.cache.populate("1", make_resource("1"), token) is True
        assert self.cache.get("1") is not None

    def test_populate_refused_after_evict(self):
        token = self.cache.token()
        self.cache.evict("1")

        assert self.cache.populate("1", make_resource("1"), token) is False
        assert self.cache.get("1") is None

    def test_populate_allowed_for_other_key(self):
        token = self.cache.token()
        self.cache.evict("other")

        assert self.cache.populate("1", make_resource("1"), token) is True

    def test_populate_with_fresh_token_after_evict(self):
        self.cache.evict("1")
        token = self.cache.token()

        assert self.cache.populate("1", make_resource("1"), token) is True

    def test_populate_refused_after_clear(self):
        token = self.cache.token()
        self.cache.clear()

        assert self.cache.populate("1", make_resource("1"), token) is False

    def test_populate_refused_once_eviction_record_is_pruned(self):
        token = self.cache.token()
        # More evictions than max_size drops the record for "1"
        for key in ("1", "2", "3"):
            self.cache.evict(key)

        assert self.cache.populate("1", make_resource("1"), token) is False
        assert self.cache.populate("9", make_resource("9"), token) is False


class TestThreadSafety:
    """Concurrent access from threads must not corrupt the cache"""

    def test_concurrent_put_get_evict(self):
        cache = ResourceCache(max_size=50)
        errors = []

        def worker(offset: int):
            try:
                for i in range(200):
                    key = str((offset + i) % 80)
                    cache.put(key, make_resource(key))
                    cache.get(key)
                    if i % 3 == 0:
                        cache.evict(key)
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n * 7,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(cache) <= 50
        assert cache.stats()["size"] == len(cache)
