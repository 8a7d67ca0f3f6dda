import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PreviewCache:
    """In-memory key/value store with an absolute expiration per entry.

    Expired entries are dropped when they are looked up and whenever a new
    entry is stored.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._cache = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if not entry:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._cache[key]
                return None
            return value

    def set(self, key: str, value: Any, expires_at: datetime) -> None:
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, entry_expires_at) in self._cache.items() if now >= entry_expires_at]
            for k in expired:
                del self._cache[k]
            self._cache[key] = (value, expires_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
