"""
Single-process read cache for resources keyed by id.

The cache never loads on its own: the service reads the store on a miss and
hands the result back through `populate`. Entries are bounded by an LRU
policy and every operation is guarded by one lock, so get/put/evict on a key
are linearizable across threads and tasks.
"""

import threading
from collections import OrderedDict
from typing import Dict, Optional

from resource_service.models.resource import Resource


class ResourceCache:
    """Thread-safe LRU cache-aside layer in front of the resource store"""

    def __init__(self, max_size: int = 1024):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: "OrderedDict[str, Resource]" = OrderedDict()
        self._lock = threading.Lock()

        # Eviction bookkeeping for populate(): key -> epoch of its last evict
        self._epoch = 0
        self._evicted_at: "OrderedDict[str, int]" = OrderedDict()
        self._forgotten_epoch = 0

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, resource_id: str) -> Optional[Resource]:
        """Return the cached resource, or None on a miss"""
        with self._lock:
            resource = self._entries.get(resource_id)
            if resource is None:
                self._misses += 1
                return None
            self._entries.move_to_end(resource_id)
            self._hits += 1
            return resource.model_copy()

    def put(self, resource_id: str, resource: Resource) -> None:
        """Unconditionally store a resource"""
        with self._lock:
            self._store(resource_id, resource)

    def token(self) -> int:
        """Snapshot to pass to populate() after reading the store"""
        with self._lock:
            return self._epoch

    def populate(self, resource_id: str, resource: Resource, token: int) -> bool:
        """
        Store a resource read from the store, unless the key was evicted
        after `token` was taken. Returns whether the entry was stored.
        """
        with self._lock:
            evicted_at = self._evicted_at.get(resource_id)
            if evicted_at is None:
                # Untracked keys are only safe if no bookkeeping was dropped since
                stale = self._forgotten_epoch > token
            else:
                stale = evicted_at > token
            if stale:
                return False
            self._store(resource_id, resource)
            return True

    def evict(self, resource_id: str) -> None:
        """Remove a key; evicting an absent key is a no-op"""
        with self._lock:
            self._epoch += 1
            self._evicted_at[resource_id] = self._epoch
            self._evicted_at.move_to_end(resource_id)
            while len(self._evicted_at) > self.max_size:
                _, epoch = self._evicted_at.popitem(last=False)
                self._forgotten_epoch = max(self._forgotten_epoch, epoch)

            if self._entries.pop(resource_id, None) is not None:
                self._evictions += 1

    def clear(self) -> None:
        """Evict every entry; in-flight populate() calls are refused"""
        with self._lock:
            self._epoch += 1
            self._forgotten_epoch = self._epoch
            self._evicted_at.clear()
            self._evictions += len(self._entries)
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _store(self, resource_id: str, resource: Resource) -> None:
        self._entries[resource_id] = resource.model_copy()
        self._entries.move_to_end(resource_id)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
