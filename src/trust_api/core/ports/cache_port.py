from __future__ import annotations

from typing import Iterable, Protocol
import json


class CachePort(Protocol):
    def get(self, key: str) -> bytes | None:
        """Return stored bytes for key, or None if missing."""

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under key."""

    def contains(self, key: str) -> bool:
        """Return True if key is present."""

    def clear(self, prefix: str | None = None) -> None:
        """Clear entries. Without prefix, clears all. With prefix, clears only matching keys."""

    def iter_keys(self, prefix: str) -> Iterable[str]:
        """Iterate over keys in the current namespace matching the given prefix."""
        ...

    def get_json(self, key: str) -> dict | None:
        """Return a stored JSON object decoded from bytes, or None if missing."""
        raw = self.get(key)
        if raw is None:
            return None
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise TypeError("CachePort.get_json invariant violated: expected JSON object")
        return data

    def set_json(self, key: str, value: dict) -> None:
        """Serialize value as JSON and store as bytes."""
        self.set(key, json.dumps(value).encode("utf-8"))
