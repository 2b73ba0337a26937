from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.exceptions import StaleStateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from ..database.serialization import state_from_dict, state_to_dict
from .model import WorkerState
from .repository import WorkerStateRepository


class MySQLWorkerStateRepository(WorkerStateRepository):
    """Remote shared store for worker states.

    The revision column is compared at write time (optimistic versioning).
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_worker(self, worker_id: str) -> Optional[WorkerState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT state_json, revision FROM worker_states WHERE worker_id=%s", (worker_id,))
            r = fetchone(cur)
            if not r:
                return None
            state = state_from_dict(load_json_column(r["state_json"]))
            state.revision = int(r["revision"])
            return state

    def save(self, worker_id: str, state: WorkerState) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT revision FROM worker_states WHERE worker_id=%s FOR UPDATE", (worker_id,))
            r = fetchone(cur)
            if r is None:
                cur.execute(
                    "INSERT INTO worker_states(worker_id, state_json, revision) VALUES(%s,%s,%s)",
                    (worker_id, json.dumps(state_to_dict(state)), state.revision),
                )
                return

            stored_revision = int(r["revision"])
            if stored_revision != state.revision:
                raise StaleStateError(
                    f"State of worker {worker_id} changed (stored revision {stored_revision}, got {state.revision})"
                )

            new_revision = stored_revision + 1
            payload = state_to_dict(state)
            payload["revision"] = new_revision
            cur.execute(
                "UPDATE worker_states SET state_json=%s, revision=%s WHERE worker_id=%s AND revision=%s",
                (json.dumps(payload), new_revision, worker_id, stored_revision),
            )
            state.revision = new_revision

    def delete_for_worker(self, worker_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM worker_states WHERE worker_id=%s", (worker_id,))
            return cur.rowcount > 0

    def list_worker_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT worker_id FROM worker_states ORDER BY worker_id")
            return [str(r["worker_id"]) for r in fetchall(cur)]
