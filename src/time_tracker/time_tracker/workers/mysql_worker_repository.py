from __future__ import annotations

import json
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from ..database.serialization import schedule_from_list, schedule_to_list
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = """
    worker_id, name, pin_hash, payment_type, monthly_salary, hourly_rate,
    schedule_json, rest_days_json
"""


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers ORDER BY created_at, worker_id")
            return [self._to_worker(r) for r in fetchall(cur)]

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (worker_id,))
            r = fetchone(cur)
            return self._to_worker(r) if r else None

    def save(self, worker: Worker) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(
                    worker_id, name, pin_hash, payment_type, monthly_salary, hourly_rate,
                    schedule_json, rest_days_json
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name),
                    pin_hash=VALUES(pin_hash),
                    payment_type=VALUES(payment_type),
                    monthly_salary=VALUES(monthly_salary),
                    hourly_rate=VALUES(hourly_rate),
                    schedule_json=VALUES(schedule_json),
                    rest_days_json=VALUES(rest_days_json)
                """,
                (
                    worker.worker_id,
                    worker.name,
                    worker.pin_hash,
                    worker.payment_type.value,
                    str(worker.monthly_salary),
                    str(worker.hourly_rate),
                    json.dumps(schedule_to_list(worker.schedule)),
                    json.dumps(sorted(format_iso_date(d) for d in worker.rest_days)),
                ),
            )

    def delete_by_id(self, worker_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (worker_id,))
            return cur.rowcount > 0

    def _to_worker(self, r: dict) -> Worker:
        return Worker(
            worker_id=str(r["worker_id"]),
            name=r["name"],
            pin_hash=r["pin_hash"],
            payment_type=PaymentType(r.get("payment_type") or PaymentType.MONTHLY.value),
            monthly_salary=Decimal(str(r.get("monthly_salary") or 0)),
            hourly_rate=Decimal(str(r.get("hourly_rate") or 0)),
            schedule=schedule_from_list(load_json_column(r.get("schedule_json"))),
            rest_days={parse_iso_date(d) for d in load_json_column(r.get("rest_days_json")) or []},
        )
