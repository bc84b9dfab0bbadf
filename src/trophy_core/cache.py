import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .constants import DEFAULT_CACHE_MINUTES

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    inserted_at: float


class TTLCache(Generic[K, V]):
    """
    In-memory key/value store where every entry carries its insertion time.

    Entries older than ``ttl_minutes`` are hidden from normal reads but stay in
    memory until overwritten, so ``get(key, allow_stale=True)`` can still serve
    them. There is no eviction and no size bound.
    """

    def __init__(self, ttl_minutes: float | None = None, clock: Callable[[], float] = time.time):
        self.ttl_minutes = DEFAULT_CACHE_MINUTES if ttl_minutes is None else ttl_minutes
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}

    def get(self, key: K, allow_stale: bool = False) -> V | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if allow_stale or self._is_fresh(entry):
            return entry.value
        return None

    def put(self, key: K, value: V) -> None:
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def _is_fresh(self, entry: CacheEntry[V]) -> bool:
        age_minutes = (self._clock() - entry.inserted_at) / 60
        return age_minutes <= self.ttl_minutes

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[call-overload]
        return entry is not None and self._is_fresh(entry)

    def __len__(self) -> int:
        return len(self._entries)
