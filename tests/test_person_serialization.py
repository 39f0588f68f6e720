# tests/test_person_serialization.py
"""
Check-then-act races: concurrent mutations for one person are serialized by
the person lock table, so the 100% invariant holds under contention.
"""

from __future__ import annotations

import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from projectflow.core.errors import AllocationExceeded, DependencyFailure, OverlappingRequest
from projectflow.core.locks import PersonLocks
from projectflow.repositories.memory import InMemoryResourceRepository
from projectflow.services.allocation_ledger import AllocationLedger
from projectflow.services.time_off_workflow import TimeOffWorkflow


class SlowReadRepository(InMemoryResourceRepository):
    """Widens the window between the overlap read and the write."""

    def list_allocations(self, **kw):
        rows = super().list_allocations(**kw)
        time.sleep(0.01)
        return rows

    def list_requests(self, **kw):
        rows = super().list_requests(**kw)
        time.sleep(0.01)
        return rows


def _run_concurrently(n: int, fn):
    barrier = threading.Barrier(n)

    def worker(i):
        barrier.wait()
        try:
            return fn(i)
        except (AllocationExceeded, OverlappingRequest) as e:
            return e

    with ThreadPoolExecutor(max_workers=n) as pool:
        return list(pool.map(worker, range(n)))


def test_concurrent_proposals_never_exceed_capacity(directory, person_id, project_id):
    repo = SlowReadRepository()
    ledger = AllocationLedger(repo, directory, PersonLocks(timeout_seconds=10))

    results = _run_concurrently(
        10,
        lambda _i: ledger.propose_allocation(
            person_id=person_id,
            project_id=project_id,
            percentage=30,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 30),
        ),
    )

    accepted = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, AllocationExceeded)]
    assert len(accepted) == 3
    assert len(rejected) == 7
    assert sum(a.percentage for a in repo.list_allocations(person_id=person_id)) == 90


def test_concurrent_overlapping_time_off_only_one_wins(directory, person_id):
    repo = SlowReadRepository()
    workflow = TimeOffWorkflow(repo, directory, PersonLocks(timeout_seconds=10))

    results = _run_concurrently(
        6,
        lambda _i: workflow.submit_request(
            person_id=person_id,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 10),
            request_type="vacation",
        ),
    )

    assert sum(1 for r in results if not isinstance(r, Exception)) == 1
    assert len(repo.requests) == 1


def test_different_people_do_not_contend():
    locks = PersonLocks(timeout_seconds=0.05)
    a, b = uuid.uuid4(), uuid.uuid4()

    with locks.hold(a):
        with locks.hold(b):
            assert len(locks) == 2

    assert len(locks) == 0


def test_lock_timeout_is_dependency_failure():
    locks = PersonLocks(timeout_seconds=0.05)
    person = uuid.uuid4()
    held = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold(person):
            held.set()
            release.wait(2)

    t = threading.Thread(target=holder)
    t.start()
    try:
        assert held.wait(2)
        with pytest.raises(DependencyFailure) as exc:
            with locks.hold(person):
                pass
        assert exc.value.reason == "person_lock_timeout"
        # the holder still owns the entry
        assert len(locks) == 1
    finally:
        release.set()
        t.join()

    assert len(locks) == 0


def test_lock_table_is_pruned_after_contention(directory, person_id, project_id):
    repo = SlowReadRepository()
    locks = PersonLocks(timeout_seconds=10)
    ledger = AllocationLedger(repo, directory, locks)

    _run_concurrently(
        8,
        lambda _i: ledger.propose_allocation(
            person_id=person_id,
            project_id=project_id,
            percentage=10,
            start_date=date(2025, 6, 1),
        ),
    )

    assert len(repo.allocations) == 8
    assert len(locks) == 0
