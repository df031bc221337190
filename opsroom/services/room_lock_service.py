"""Keyed in-process locks that serialize mutations per entity.

Every mutating operation holds exactly one key for its whole
read-check-write-commit sequence, so no two operations ever wait on each
other's keys. Keys in use:

- ("room", room_id): join, leave and send on one room
- ("room-create",): room code allocation
- ("profile", caller_id): profile upsert
- ("operator-roles",): operator role check and upsert
- ("note", room_id, caller_id): note upsert

Reads never take a lock. Across processes the database constraints
(unique room code, unique membership, primary keys) are what hold.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, Tuple

logger = logging.getLogger(__name__)

LockKey = Tuple[Hashable, ...]


class RoomLockRegistry:
    """
    Registry of asyncio locks created on demand and dropped when idle.

    Locks are created lazily inside the running event loop rather than at
    import time.
    """

    def __init__(self) -> None:
        self._locks: Dict[LockKey, asyncio.Lock] = {}
        # Holders plus waiters per key; the lock is dropped at zero
        self._users: Dict[LockKey, int] = {}

    @asynccontextmanager
    async def hold(self, *key: Hashable) -> AsyncIterator[None]:
        """
        Hold the lock for ``key`` for the duration of the block.

        Usage:
            async with room_locks.hold("room", room_id):
                ...
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            remaining = self._users[key] - 1
            if remaining:
                self._users[key] = remaining
            else:
                del self._users[key]
                del self._locks[key]

    def is_held(self, *key: Hashable) -> bool:
        """Whether some operation currently holds ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @property
    def active_keys(self) -> int:
        """Number of keys with a holder or waiter."""
        return len(self._locks)


# Process-wide registry
room_locks = RoomLockRegistry()
