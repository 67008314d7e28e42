"""Scoped UI exclusivity for modal interactions."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable


class WindowLock:
    """Mutual exclusion for interactions that block the application windows.

    ``on_lock`` and ``on_unlock`` are awaited after acquiring and before
    releasing; use them to disable and re-enable the host windows.  The
    lock is released on every exit path, including when ``on_unlock``
    itself fails.
    """

    def __init__(
        self,
        on_lock: Callable[[], Awaitable[None]] | None = None,
        on_unlock: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._lock = asyncio.Lock()
        self._on_lock = on_lock
        self._on_unlock = on_unlock

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def hold(self) -> AsyncGenerator[None]:
        """Hold the lock for the duration of the ``async with`` block."""
        async with self._lock:
            try:
                if self._on_lock is not None:
                    await self._on_lock()
                yield
            finally:
                if self._on_unlock is not None:
                    await self._on_unlock()
