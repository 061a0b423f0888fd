import asyncio
import time
from typing import Any, Awaitable, Callable, Optional


class TTLCache:
    def __init__(self, default_ttl_seconds: int = 3600, clock: Callable[[], float] = time.monotonic):
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        # key -> (expires_at, value)
        self._store: dict[str, tuple[float, Any]] = {}

    def _get_unlocked(self, key: str) -> Optional[Any]:
        item = self._store.get(key)
        if item is None:
            return None
        expires_at, value = item
        if self._clock() > expires_at:
            self._store.pop(key, None)
            return None
        return value

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            return self._get_unlocked(key)

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        async with self._lock:
            self._store[key] = (self._clock() + ttl, value)

    async def remember(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: Optional[int] = None,
    ) -> Any:
        """Return the cached value, or build it with ``factory`` and cache it."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        await self.set(key, value, ttl_seconds)
        return value

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)
