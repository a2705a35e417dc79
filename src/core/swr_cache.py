"""Generic stale-while-revalidate cache over a persistent key-value store.

Each key holds a JSON record ``{"timestamp": <epoch ms>, "data": <json>}``.
Reads fall into three zones based on the entry age:

 - fresh   (age < fresh_duration_ms): cached data, no fetch
 - stale   (fresh <= age < stale_duration_ms): cached data returned at once,
   refresh scheduled as a detached asyncio task
 - expired (age >= stale_duration_ms) or missing/corrupt: fetch, persist, return

Background refresh failures are logged and never reach the caller. Tests can
await outstanding refreshes with `drain_background_refreshes`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, Set, TypeVar

from .clock import Clock, get_clock_time, now_ms
from .errors import CacheCorruptionError
from .kv_store import KeyValueStore

__all__ = ["SWROptions", "CacheEntry", "SWRCache"]

_log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SWROptions:
    fresh_duration_ms: int
    stale_duration_ms: int


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    timestamp: int
    data: T

    def to_json(self) -> str:
        return json.dumps({"timestamp": self.timestamp, "data": self.data}, ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry[Any]":
        """Parse a persisted record, raising CacheCorruptionError on any shape problem."""
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            raise CacheCorruptionError(f"Unparsable cache entry: {e}") from e
        if not isinstance(parsed, dict) or "data" not in parsed:
            raise CacheCorruptionError("Cache entry is not a {timestamp, data} object")
        timestamp = parsed.get("timestamp")
        # bool is an int subclass but never a valid timestamp
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise CacheCorruptionError("Cache entry timestamp is not numeric")
        # json.loads accepts NaN and Infinity
        if not math.isfinite(timestamp):
            raise CacheCorruptionError("Cache entry timestamp is not finite")
        return cls(timestamp=int(timestamp), data=parsed["data"])


class SWRCache:
    """Stale-while-revalidate cache bound to a store and a clock."""

    def __init__(self, store: KeyValueStore, clock: Clock = get_clock_time) -> None:
        self.store = store
        self._clock = clock
        self._background: Set[asyncio.Task] = set()

    def _now_ms(self) -> int:
        return now_ms(self._clock)

    # Public API -------------------------------------------------------
    async def with_swr(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        options: SWROptions,
        transformer: Optional[Callable[[Any], T]] = None,
        on_background_update: Optional[Callable[[T], Any]] = None,
    ) -> T:
        """Return data for `key`, fetching or revalidating according to its age.

        Args:
            key: Store key; must identify the same dataset across restarts.
            fetcher: Zero-arg coroutine function producing JSON-serializable data.
            options: Fresh / stale windows in milliseconds.
            transformer: Applied exactly once to whatever data is returned
                (cached, refreshed or freshly fetched), e.g. to restore datetimes.
            on_background_update: Called with the transformed data when a
                background refresh completes.
        """
        raw = self.store.get(key)
        if raw is not None:
            try:
                entry = CacheEntry.from_json(raw)
                age = self._now_ms() - entry.timestamp
                if age < options.stale_duration_ms:
                    data = self._apply_cached(entry.data, transformer)
                    if age < options.fresh_duration_ms:
                        _log.debug("swr fresh hit %s (age %sms)", key, age)
                        return data
                    _log.debug("swr stale hit %s (age %sms), revalidating", key, age)
                    self.refresh_in_background(key, fetcher, transformer, on_background_update)
                    return data
                _log.debug("swr expired %s (age %sms)", key, age)
            except CacheCorruptionError as e:
                _log.warning("Discarding cached data for %s: %s", key, e)
                self.store.remove(key)

        data = await self._refresh(key, fetcher)
        return transformer(data) if transformer else data

    def refresh_in_background(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        transformer: Optional[Callable[[Any], Any]] = None,
        on_background_update: Optional[Callable[[Any], Any]] = None,
    ) -> asyncio.Task:
        """Schedule a detached refresh of `key`; its errors are logged, not raised."""
        task = asyncio.get_running_loop().create_task(
            self._background_refresh(key, fetcher, transformer, on_background_update)
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def drain_background_refreshes(self) -> None:
        """Wait until every scheduled background refresh has finished."""
        while self._background:
            await asyncio.gather(*list(self._background))

    @property
    def pending_refreshes(self) -> int:
        return len(self._background)

    def invalidate_cache(self, key: str) -> None:
        """Remove a single entry; missing keys are ignored."""
        self.store.remove(key)

    def invalidate_cache_by_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with `prefix`; returns the count."""
        # Snapshot first so removals cannot disturb the iteration.
        doomed = [k for k in list(self.store.keys()) if k.startswith(prefix)]
        for k in doomed:
            self.store.remove(k)
        return len(doomed)

    # Internals --------------------------------------------------------
    @staticmethod
    def _apply_cached(data: Any, transformer: Optional[Callable[[Any], Any]]) -> Any:
        if transformer is None:
            return data
        try:
            return transformer(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CacheCorruptionError(f"Cached data could not be restored: {e}") from e

    async def _refresh(self, key: str, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        data = await fetcher()
        entry = CacheEntry(timestamp=self._now_ms(), data=data)
        self.store.set(key, entry.to_json())
        return data

    async def _background_refresh(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        transformer: Optional[Callable[[Any], Any]],
        on_background_update: Optional[Callable[[Any], Any]],
    ) -> None:
        try:
            data = await self._refresh(key, fetcher)
            if on_background_update is not None:
                on_background_update(transformer(data) if transformer else data)
        except Exception as e:  # noqa: BLE001
            _log.warning("Background cache refresh failed for %s: %s", key, e)
