# projectflow/services/base.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, TypeVar
from uuid import UUID

from projectflow.core.errors import NotFound
from projectflow.core.locks import PersonLocks
from projectflow.repositories.base import Directory, ResourceRepository, dependency_guard

T = TypeVar("T")

Clock = Callable[[], datetime]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ResourceService:
    """Shared plumbing of the ledger, the schedule store and the workflow.

    Every mutation runs through :meth:`_mutate`: per-person lock, repository
    row lock, the caller's check-then-act body, commit. Anything raised inside
    rolls the repository back before propagating, so a rejected mutation
    leaves no trace.
    """

    def __init__(
        self,
        repo: ResourceRepository,
        directory: Directory,
        locks: PersonLocks,
        *,
        clock: Clock = _now,
    ):
        self.repo = repo
        self.directory = directory
        self.locks = locks
        self.clock = clock

    def _mutate(self, person_id: UUID, body: Callable[[], T]) -> T:
        with self.locks.hold(person_id):
            try:
                with dependency_guard("repository"):
                    self.repo.lock_person(person_id)
                result = body()
                with dependency_guard("repository"):
                    self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise
            return result

    def _require_person(self, person_id: UUID) -> None:
        with dependency_guard("directory"):
            exists = self.directory.person_exists(person_id)
        if not exists:
            raise NotFound("person_not_found", person_id=str(person_id))
