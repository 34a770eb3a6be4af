import time
from typing import Any, Callable, Hashable, Optional


class QueryCache:
    """Query results keyed by tuples such as ``("announcements", "list", search, category)``.

    Entries are served until invalidated or until their freshness window
    (``ttl`` seconds, None meaning no expiry) has elapsed.
    Invalidation matches on key prefix, so ``("announcements", "list")``
    drops every cached list regardless of its filters.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[tuple, tuple[Any, Optional[float]]] = {}

    def get(self, key: tuple) -> tuple[bool, Any]:
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return False, None
        return True, value

    def set(self, key: tuple, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    def invalidate(self, prefix: tuple[Hashable, ...]) -> int:
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def __contains__(self, key: tuple) -> bool:
        return self.get(key)[0]

    def __len__(self) -> int:
        return len(self._entries)
