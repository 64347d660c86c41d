"""
Per-owner write serialization.

Conflict checks read the owner's schedule and then write; two requests
for the same owner must not interleave between those steps.  Each owner
gets one lock for the lifetime of the process.  Across processes the
``schedule_slots`` unique constraint is the backstop.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class OwnerLockRegistry:
    """Hands out one :class:`threading.Lock` per owner id."""

    def __init__(self):
        self._locks: dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, owner_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(owner_id)
            if lock is None:
                lock = self._locks[owner_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, owner_id: int) -> Iterator[None]:
        with self.lock_for(owner_id):
            yield


# Shared by every ScheduleService in the process
owner_locks = OwnerLockRegistry()
