"""Location-clustered cache of trending rankings."""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from ..errors import InvalidConfiguration
from ..models import Article
from .models import CacheEntry

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            # Readers wait while any writer is queued
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TrendingCache:
    """TTL cache of ranked articles keyed by cluster key."""

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize trending cache.

        Args:
            ttl_seconds: Entry lifetime, also the housekeeping period
            clock: Monotonic seconds source, defaults to time.monotonic
        """
        if not ttl_seconds > 0:
            raise InvalidConfiguration(f"cache TTL must be positive, got {ttl_seconds}")

        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()
        self._stop = threading.Event()
        self._housekeeper: Optional[threading.Thread] = None

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.computed_at > self.ttl_seconds

    def get(self, key: str) -> Optional[CacheEntry]:
        """Get the entry for `key`, or None if it is missing or stale."""
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is None or self._is_expired(entry, self._clock()):
            return None
        return entry

    def set(self, key: str, articles: List[Article]) -> CacheEntry:
        """Store `articles` for `key`, replacing any previous entry."""
        entry = CacheEntry(articles=list(articles), computed_at=self._clock())
        with self._lock.write():
            self._entries[key] = entry
        return entry

    def clear(self) -> None:
        """Drop every entry regardless of age."""
        with self._lock.write():
            self._entries = {}

    def evict_expired(self) -> int:
        """
        Physically remove stale entries.

        Returns:
            Number of entries removed
        """
        with self._lock.write():
            now = self._clock()
            stale = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
            for key in stale:
                del self._entries[key]

        if stale:
            logger.debug("Evicted %d stale trending cache entries", len(stale))
        return len(stale)

    def _housekeeping_loop(self) -> None:
        while not self._stop.wait(self.ttl_seconds):
            self.evict_expired()

    def start_housekeeping(self) -> None:
        """Start the background eviction thread if it is not running."""
        if self._housekeeper is not None and self._housekeeper.is_alive():
            return

        self._stop.clear()
        self._housekeeper = threading.Thread(
            target=self._housekeeping_loop,
            name="trending-cache-housekeeping",
            daemon=True,
        )
        self._housekeeper.start()

    def stop_housekeeping(self, timeout: Optional[float] = None) -> None:
        """Signal the eviction thread to stop and wait for it."""
        self._stop.set()
        if self._housekeeper is not None:
            self._housekeeper.join(timeout)
            self._housekeeper = None
