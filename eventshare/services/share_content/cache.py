"""
Bounded, time-expiring memo for generated share text.

Keys are fingerprints built with a fast 32-bit rolling hash. Collisions are
possible and tolerated: the worst case is serving another input's valid share
text until the entry expires. A standard fast hash (FNV-1a, xxHash) can be
swapped in without changing the cache contract.
"""

import string
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from eventshare.core.datetime_utils import epoch_millis, utc_now
from eventshare.core.logging import get_logger
from eventshare.schemas.event import Event
from eventshare.schemas.share import GenerationConfig, GenerationResult

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60
DEFAULT_MAX_SIZE = 10

_BASE36_DIGITS = string.digits + string.ascii_lowercase


def rolling_hash(text: str) -> int:
    """32-bit signed ``h = h * 31 + c`` hash over the characters of ``text``."""
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _short_hash(text: str, length: int) -> str:
    return to_base36(abs(rolling_hash(text)))[:length]


def fingerprint_events(events: Iterable[Event]) -> str:
    """Order-independent fingerprint of event identities (id, start, title)."""
    identities = sorted(
        f"{event.id}-{epoch_millis(event.start_date)}-{event.title}" for event in events
    )
    return _short_hash("|".join(identities), 16)


def fingerprint_config(config: GenerationConfig) -> str:
    return _short_hash(config.model_dump_json(), 8)


def build_cache_key(
    events: Iterable[Event],
    config: GenerationConfig,
    reference_date: date | None = None,
) -> str:
    """
    Combine event and config fingerprints into a cache key.

    The reference date decides which events are eligible, so it is part of
    the key whenever the caller supplies it.
    """
    key = f"{fingerprint_events(events)}-{fingerprint_config(config)}"
    if reference_date is not None:
        key = f"{key}-{reference_date.isoformat()}"
    return key


@dataclass(frozen=True)
class CacheEntry:
    """A cached generation result and when it was stored."""

    key: str
    result: GenerationResult
    created_at: datetime


class ResultCache:
    """
    In-memory result cache with TTL expiry and a bounded entry count.

    Expiry is checked lazily on every read; eviction runs before each insert
    (expired entries first, then oldest-first down to ``max_size``). A lock
    serializes the read-check-insert-evict sequence so readers never observe
    a half-evicted state.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_size: int = DEFAULT_MAX_SIZE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl_seconds: How long an entry may be served
            max_size: Maximum number of entries kept
            clock: Returns the current time (injectable for tests)
        """
        self._entries: dict[str, CacheEntry] = {}
        self._ttl = timedelta(seconds=ttl_seconds)
        self._max_size = max_size
        self._clock = clock
        self._lock = threading.Lock()
        self._disposed = False

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> GenerationResult | None:
        """Get cached result if not expired."""
        with self._lock:
            return self._get_unlocked(key)

    def set(self, key: str, result: GenerationResult) -> None:
        """Store a result, evicting expired and then oldest entries first."""
        with self._lock:
            self._set_unlocked(key, result)

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], GenerationResult],
    ) -> GenerationResult:
        """Return the cached result for ``key``, computing and storing it on a miss."""
        with self._lock:
            cached = self._get_unlocked(key)
            if cached is not None:
                logger.bind(key=key).debug("share_cache_hit")
                return cached

            result = compute()
            self._set_unlocked(key, result)
            return result

    def clear(self) -> None:
        """Clear all cached results."""
        with self._lock:
            self._entries.clear()

    def dispose(self) -> None:
        """Clear the cache and stop storing new results."""
        with self._lock:
            self._entries.clear()
            self._disposed = True

    def size(self) -> int:
        """Return current cache size."""
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict[str, Any]:
        """Snapshot of cache contents for debugging."""
        with self._lock:
            now = self._clock()
            return {
                "size": len(self._entries),
                "max_size": self._max_size,
                "ttl_seconds": self._ttl.total_seconds(),
                "entries": [
                    {
                        "key": entry.key,
                        "created_at": entry.created_at.isoformat(),
                        "age_seconds": (now - entry.created_at).total_seconds(),
                    }
                    for entry in self._entries.values()
                ],
            }

    def _is_expired(self, entry: CacheEntry, now: datetime) -> bool:
        return now - entry.created_at > self._ttl

    def _get_unlocked(self, key: str) -> GenerationResult | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            # Expired - remove from cache
            del self._entries[key]
            return None
        return entry.result

    def _set_unlocked(self, key: str, result: GenerationResult) -> None:
        if self._disposed or self._max_size <= 0:
            return

        now = self._clock()
        self._entries.pop(key, None)
        self._evict(now)
        self._entries[key] = CacheEntry(key=key, result=result, created_at=now)

    def _evict(self, now: datetime) -> None:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]

        # Leave room for the entry about to be inserted
        overflow = len(self._entries) - (self._max_size - 1)
        if overflow > 0:
            oldest = sorted(self._entries.values(), key=lambda entry: entry.created_at)
            for entry in oldest[:overflow]:
                del self._entries[entry.key]

        if expired or overflow > 0:
            logger.bind(
                expired=len(expired),
                evicted=max(overflow, 0),
                size=len(self._entries),
            ).debug("share_cache_evicted")
