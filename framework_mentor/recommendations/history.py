"""
Per-user selection history: a bounded FIFO of chosen framework ids.

One ``SelectionHistoryStore`` is owned by one ``FrameworkSelector`` (or
injected into it).  A buffer is created on the first record for a user key,
never by a read; the oldest id is evicted once ``capacity`` is reached.

Concurrency
-----------
Each user key has its own lock.  ``session(user_key)`` holds that lock for
the duration of a read-modify-write, so two selections for the same user
cannot lose an update, while selections for different users never contend.
A store-wide guard lock protects the buffer and lock tables.

Persistence is out of scope: ``snapshot()`` and ``from_snapshot()`` convert
to and from a plain ``{user_key: [framework_id, ...]}`` mapping for an
external collaborator to store however it likes.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter, deque
from contextlib import contextmanager
from typing import Generator, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class UserHistory:
    """View over one user's history; only valid inside ``session()``."""

    def __init__(self, store: "SelectionHistoryStore", user_key: str) -> None:
        self.user_key = user_key
        self._store = store

    def occurrences(self, framework_id: str) -> int:
        return self._store._held(self.user_key).count(framework_id)

    def counts(self) -> Counter[str]:
        return Counter(self._store._held(self.user_key))

    def record(self, framework_id: str) -> None:
        held = self._store._append(self.user_key, framework_id)
        logger.debug("History for %r: recorded %s (%d held)",
                     self.user_key, framework_id, held)

    def ids(self) -> list[str]:
        return self._store._held(self.user_key)

    def clear(self) -> None:
        self._store._drop(self.user_key)


class SelectionHistoryStore:
    """Mapping of user key → bounded FIFO of framework ids."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}.")
        self.capacity = capacity
        self._buffers: dict[str, deque[str]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    # ── Buffers and locks ─────────────────────────────────────────────────────

    def _lock_for(self, user_key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(user_key)
            if lock is None:
                lock = self._locks[user_key] = threading.Lock()
            return lock

    def _append(self, user_key: str, framework_id: str) -> int:
        with self._guard:
            buffer = self._buffers.get(user_key)
            if buffer is None:
                buffer = self._buffers[user_key] = deque(maxlen=self.capacity)
            buffer.append(framework_id)
            return len(buffer)

    def _held(self, user_key: str) -> list[str]:
        with self._guard:
            return list(self._buffers.get(user_key, ()))

    def _drop(self, user_key: str) -> None:
        with self._guard:
            self._buffers.pop(user_key, None)

    @contextmanager
    def session(self, user_key: str) -> Generator[UserHistory, None, None]:
        """Hold ``user_key``'s lock and yield its history.

        No buffer exists for a key until something is recorded under it.
        Locks outlive ``clear()``: a thread may already be waiting on one.
        """
        with self._lock_for(user_key):
            yield UserHistory(self, user_key)

    # ── Convenience ───────────────────────────────────────────────────────────

    def record(self, user_key: str, framework_id: str) -> None:
        with self.session(user_key) as history:
            history.record(framework_id)

    def occurrences(self, user_key: str, framework_id: str) -> int:
        return self._held(user_key).count(framework_id)

    def counts(self, user_key: str) -> Counter[str]:
        """Id → times chosen, read without taking the user's lock."""
        return Counter(self._held(user_key))

    def history(self, user_key: str) -> list[str]:
        """Oldest-first copy of ``user_key``'s buffer; ``[]`` for unknown keys."""
        return self._held(user_key)

    def users(self) -> list[str]:
        with self._guard:
            return sorted(self._buffers)

    def clear(self, user_key: Optional[str] = None) -> None:
        """Forget one user's history, or everyone's when ``user_key`` is None."""
        if user_key is None:
            with self._guard:
                keys = list(self._buffers)
        else:
            with self._guard:
                keys = [user_key] if user_key in self._buffers else []
        for key in keys:
            with self.session(key) as history:
                history.clear()

    def __len__(self) -> int:
        return len(self.users())

    # ── Snapshot ──────────────────────────────────────────────────────────────

    def snapshot(self) -> dict[str, list[str]]:
        """Plain copy of every non-empty buffer, oldest id first."""
        return {key: self.history(key) for key in self.users()}

    @classmethod
    def from_snapshot(
        cls,
        data: Mapping[str, Sequence[str]],
        capacity: int = DEFAULT_CAPACITY,
    ) -> "SelectionHistoryStore":
        """Rebuild a store; longer lists keep only their newest ``capacity`` ids."""
        store = cls(capacity=capacity)
        for user_key, ids in data.items():
            with store.session(user_key) as history:
                for framework_id in ids:
                    history.record(str(framework_id))
        return store
