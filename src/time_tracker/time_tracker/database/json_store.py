from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from ..core.exceptions import PersistenceError, StaleStateError
from ..timeclock.model import WorkerState
from ..workers.model import Worker
from .serialization import state_from_dict, state_to_dict, worker_from_dict, worker_to_dict

logger = logging.getLogger(__name__)


class JsonDocument:
    """Local durable store: the whole application state in one JSON file.

    Layout: ``{"workers": [...], "workerStates": {"<id>": {...}}}``.
    Every mutation rewrites the file atomically before returning.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.data: dict[str, Any] = {"workers": [], "workerStates": {}}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Cannot read %s: %s", self.path, e)
            raise PersistenceError(f"Cannot read {self.path}") from e

        self.data = {
            "workers": list(raw.get("workers") or []),
            "workerStates": dict(raw.get("workerStates") or {}),
        }

    def flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self.data, f, ensure_ascii=False)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            logger.error("Cannot write %s: %s", self.path, e)
            raise PersistenceError(f"Cannot write {self.path}") from e


class JsonWorkerRepository:
    """WorkerRepository + WorkerChangeFeed over a JsonDocument.

    Workers handed out are fresh copies built from the document.
    """

    def __init__(self, doc: JsonDocument):
        self._doc = doc
        self._listeners: list[Callable[[Sequence[Worker]], None]] = []

    def list_all(self) -> Sequence[Worker]:
        return [worker_from_dict(w) for w in self._doc.data["workers"]]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        for w in self._doc.data["workers"]:
            if w["id"] == worker_id:
                return worker_from_dict(w)
        return None

    def save(self, worker: Worker) -> None:
        raw = worker_to_dict(worker)
        workers = self._doc.data["workers"]
        for i, w in enumerate(workers):
            if w["id"] == worker.worker_id:
                workers[i] = raw
                break
        else:
            workers.append(raw)
        self._doc.flush()
        self._notify()

    def delete_by_id(self, worker_id: str) -> bool:
        workers = self._doc.data["workers"]
        kept = [w for w in workers if w["id"] != worker_id]
        if len(kept) == len(workers):
            return False
        self._doc.data["workers"] = kept
        self._doc.flush()
        self._notify()
        return True

    def on_workers_changed(self, callback: Callable[[Sequence[Worker]], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        workers = self.list_all()
        for callback in list(self._listeners):
            callback(workers)


class JsonWorkerStateRepository:
    """WorkerStateRepository + WorkerStateChangeFeed over a JsonDocument."""

    def __init__(self, doc: JsonDocument):
        self._doc = doc
        self._listeners: dict[str, list[Callable[[Optional[WorkerState]], None]]] = {}

    def get_for_worker(self, worker_id: str) -> Optional[WorkerState]:
        raw = self._doc.data["workerStates"].get(worker_id)
        if raw is None:
            return None
        return state_from_dict(raw)

    def save(self, worker_id: str, state: WorkerState) -> None:
        states = self._doc.data["workerStates"]
        stored = states.get(worker_id)
        if stored is not None:
            stored_revision = int(stored.get("revision") or 0)
            if stored_revision != state.revision:
                raise StaleStateError(
                    f"State of worker {worker_id} changed (stored revision {stored_revision}, got {state.revision})"
                )
            state.revision = stored_revision + 1

        states[worker_id] = state_to_dict(state)
        self._doc.flush()
        self._notify(worker_id, state_from_dict(states[worker_id]))

    def delete_for_worker(self, worker_id: str) -> bool:
        if self._doc.data["workerStates"].pop(worker_id, None) is None:
            return False
        self._doc.flush()
        self._notify(worker_id, None)
        return True

    def list_worker_ids(self) -> Sequence[str]:
        return list(self._doc.data["workerStates"].keys())

    def on_worker_state_changed(
        self, worker_id: str, callback: Callable[[Optional[WorkerState]], None]
    ) -> Callable[[], None]:
        listeners = self._listeners.setdefault(worker_id, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def _notify(self, worker_id: str, state: Optional[WorkerState]) -> None:
        for callback in list(self._listeners.get(worker_id, [])):
            callback(state)
