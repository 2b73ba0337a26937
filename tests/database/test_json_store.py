from __future__ import annotations

import json
from dataclasses import replace
from datetime import date, datetime

import pytest

from src.time_tracker.time_tracker.auth.model import Session
from src.time_tracker.time_tracker.container import build_container, build_services
from src.time_tracker.time_tracker.core.enums import EventKind
from src.time_tracker.time_tracker.core.exceptions import PersistenceError, StaleStateError
from src.time_tracker.time_tracker.database.json_store import JsonDocument, JsonWorkerRepository, JsonWorkerStateRepository
from src.time_tracker.time_tracker.timeclock.model import WorkerState


def test_state_survives_reopening_the_file(tmp_path):
    path = tmp_path / "state.json"
    admin = Session.admin()
    c1 = build_container(storage_backend="json", admin_pin="1234", json_store_path=path)
    worker = c1.worker_registry.add_worker("Ana", "1111", "hourly", 10, session=admin)
    c1.worker_registry.add_rest_day(worker.worker_id, date(2026, 2, 4), session=admin)
    c1.timeclock_service.append_event(
        worker.worker_id, EventKind.SESSION_START, b"jpeg-bytes", session=admin, now=datetime(2026, 2, 2, 9)
    )

    c2 = build_container(storage_backend="json", admin_pin="1234", json_store_path=path)
    reloaded = c2.worker_registry.get_worker(worker.worker_id)
    state = c2.worker_registry.get_state(worker.worker_id)

    assert reloaded == replace(worker, rest_days={date(2026, 2, 4)})
    assert state.current_day.events[0].photo == b"jpeg-bytes"
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["workerStates"][worker.worker_id]["currentDay"]["records"][0]["type"] == "start"


def test_stale_revision_is_rejected(tmp_path):
    repo = JsonWorkerStateRepository(JsonDocument(tmp_path / "s.json"))
    repo.save("w1", WorkerState())

    first = repo.get_for_worker("w1")
    second = repo.get_for_worker("w1")
    repo.save("w1", first)

    assert first.revision == second.revision + 1
    with pytest.raises(StaleStateError):
        repo.save("w1", second)


def test_change_feeds(tmp_path):
    doc = JsonDocument(tmp_path / "s.json")
    repo = JsonWorkerStateRepository(doc)
    seen = []
    unsubscribe = repo.on_worker_state_changed("w1", seen.append)

    repo.save("w1", WorkerState())
    repo.save("w2", WorkerState())
    unsubscribe()
    repo.delete_for_worker("w1")

    assert len(seen) == 1
    assert isinstance(seen[0], WorkerState)


def test_corrupt_file_raises_persistence_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonDocument(path)


def test_worker_feed_reports_current_list(tmp_path):
    doc = JsonDocument(tmp_path / "s.json")
    c = build_services(JsonWorkerRepository(doc), JsonWorkerStateRepository(doc), admin_pin="1")
    snapshots = []
    c.workers_repo.on_workers_changed(lambda workers: snapshots.append([w.name for w in workers]))

    worker = c.worker_registry.add_worker("Ana", "1111", session=Session.admin())
    c.worker_registry.remove_worker(worker.worker_id, session=Session.admin())

    assert snapshots == [["Ana"], []]
