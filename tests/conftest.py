from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.time_tracker.time_tracker.auth.model import Session
from src.time_tracker.time_tracker.container import build_services
from src.time_tracker.time_tracker.database.serialization import state_from_dict, state_to_dict
from src.time_tracker.time_tracker.timeclock.model import WorkerState
from src.time_tracker.time_tracker.workers.model import Worker


class InMemoryWorkers:
    def __init__(self):
        self._by_id: dict[str, Worker] = {}

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        return self._by_id.get(worker_id)

    def save(self, worker: Worker) -> None:
        self._by_id[worker.worker_id] = worker

    def delete_by_id(self, worker_id: str) -> bool:
        return self._by_id.pop(worker_id, None) is not None


class InMemoryStates:
    """Keeps serialized copies so tests see exactly what a real store would."""

    def __init__(self):
        self._by_id: dict[str, dict] = {}
        self.saves = 0

    def get_for_worker(self, worker_id: str) -> Optional[WorkerState]:
        raw = self._by_id.get(worker_id)
        return state_from_dict(raw) if raw is not None else None

    def save(self, worker_id: str, state: WorkerState) -> None:
        self.saves += 1
        self._by_id[worker_id] = state_to_dict(state)

    def delete_for_worker(self, worker_id: str) -> bool:
        return self._by_id.pop(worker_id, None) is not None

    def list_worker_ids(self):
        return list(self._by_id.keys())


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def admin() -> Session:
    return Session.admin()


@pytest.fixture
def workers_repo() -> InMemoryWorkers:
    return InMemoryWorkers()


@pytest.fixture
def states_repo() -> InMemoryStates:
    return InMemoryStates()


@pytest.fixture
def container(workers_repo, states_repo):
    return build_services(workers_repo, states_repo, admin_pin="4321")
