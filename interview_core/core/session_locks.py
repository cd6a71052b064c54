"""
Session Lock Registry

Per-session mutual exclusion for the read-modify-write sequences of the session
state machine (answer submission and completion). Requests against different
sessions never wait on each other.

Entries are reference counted: a lock lives only while some request holds it
or waits on it, so the registry stays bounded by the number of sessions with
in-flight requests.

The registry is process-local; across processes the row lock taken with
SELECT ... FOR UPDATE provides the same guarantee on PostgreSQL.
"""

import asyncio
import threading
from contextlib import asynccontextmanager
from typing import Dict, Hashable


class SessionLockRegistry:
    """Hands out one asyncio.Lock per session id."""

    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._users: Dict[Hashable, int] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._locks)

    def __contains__(self, session_id: Hashable) -> bool:
        return session_id in self._locks

    def _checkout(self, session_id: Hashable) -> asyncio.Lock:
        with self._guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = asyncio.Lock()
                self._locks[session_id] = lock
            self._users[session_id] = self._users.get(session_id, 0) + 1
            return lock

    def _release(self, session_id: Hashable) -> None:
        with self._guard:
            remaining = self._users[session_id] - 1
            if remaining:
                self._users[session_id] = remaining
            else:
                # No holder and no waiter left
                del self._users[session_id]
                del self._locks[session_id]

    @asynccontextmanager
    async def acquire(self, session_id: Hashable):
        lock = self._checkout(session_id)
        try:
            async with lock:
                yield
        finally:
            self._release(session_id)


session_locks = SessionLockRegistry()
