from __future__ import annotations

import os
from typing import Iterable, Optional

import diskcache as dc
from platformdirs import user_cache_dir

from ..core.ports.cache_port import CachePort


class DiskCacheAdapter(CachePort):
    def __init__(self, namespace: str, base_dir: Optional[str] = None) -> None:
        self._namespace = namespace
        cache_dir = base_dir or os.getenv("TRUST_API_CACHE_DIR")
        if cache_dir:
            os.makedirs(cache_dir, exist_ok=True)
            path = os.path.join(cache_dir, namespace)
        else:
            path = os.path.join(user_cache_dir("trust_api"), namespace)
        os.makedirs(path, exist_ok=True)
        self._cache = dc.Cache(path)

    def get(self, key: str) -> bytes | None:
        value = self._cache.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value
        raise TypeError("DiskCacheAdapter invariant violated: stored value is not bytes")

    def set(self, key: str, value: bytes) -> None:
        self._cache.set(key, value)

    def contains(self, key: str) -> bool:
        return key in self._cache

    def iter_keys(self, prefix: str) -> Iterable[str]:
        for key in self._cache.iterkeys():
            if isinstance(key, str) and key.startswith(prefix):
                yield key

    def clear(self, prefix: str | None = None) -> None:
        if prefix is None:
            self._cache.clear()
            return
        for key in list(self.iter_keys(prefix)):
            self._cache.delete(key)

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> DiskCacheAdapter:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
