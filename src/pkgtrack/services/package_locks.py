"""Per-key write serialization."""

import asyncio
from collections.abc import AsyncIterator, Hashable, Iterable
from contextlib import asynccontextmanager


class PackageLocks:
    """Lazily created asyncio locks keyed by id.

    A lock lives only while someone holds or waits for it; the last holder
    out drops it. Multi-key holders always acquire in ascending order so two
    writers touching the same pair cannot deadlock.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    async def _acquire(self, key: Hashable) -> None:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            await lock.acquire()
        except BaseException:
            self._forget(key)
            raise

    def _release(self, key: Hashable) -> None:
        self._locks[key].release()
        self._forget(key)

    def _forget(self, key: Hashable) -> None:
        remaining = self._holders[key] - 1
        if remaining:
            self._holders[key] = remaining
        else:
            del self._holders[key]
            del self._locks[key]

    @asynccontextmanager
    async def hold(self, keys: Iterable[Hashable]) -> AsyncIterator[None]:
        ordered = sorted(set(keys))
        acquired: list[Hashable] = []
        try:
            for key in ordered:
                await self._acquire(key)
                acquired.append(key)
            yield
        finally:
            for key in reversed(acquired):
                self._release(key)

    def __len__(self) -> int:
        return len(self._locks)
