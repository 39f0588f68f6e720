# projectflow/core/locks.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

import structlog

from projectflow.core.errors import DependencyFailure

log = structlog.get_logger(__name__)


class _Slot:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        # holder + waiters
        self.users = 0


class PersonLocks:
    """Lock table keyed by person id.

    Check-then-act mutations (read overlapping rows, decide, write) for the
    same person run one at a time; different persons never contend. An entry
    lives only while someone holds or waits for it.
    """

    def __init__(self, timeout_seconds: float = 5.0):
        self.timeout_seconds = timeout_seconds
        self._guard = threading.Lock()
        self._slots: dict[UUID, _Slot] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)

    def _checkout(self, person_id: UUID) -> _Slot:
        with self._guard:
            slot = self._slots.get(person_id)
            if slot is None:
                slot = self._slots[person_id] = _Slot()
            slot.users += 1
            return slot

    def _checkin(self, person_id: UUID, slot: _Slot) -> None:
        with self._guard:
            slot.users -= 1
            if slot.users == 0:
                del self._slots[person_id]

    @contextmanager
    def hold(self, person_id: UUID) -> Iterator[None]:
        slot = self._checkout(person_id)
        try:
            if not slot.lock.acquire(timeout=self.timeout_seconds):
                log.warning("person_lock.timeout", person_id=str(person_id), timeout=self.timeout_seconds)
                raise DependencyFailure("person_lock_timeout", person_id=str(person_id))
            try:
                yield
            finally:
                slot.lock.release()
        finally:
            self._checkin(person_id, slot)
