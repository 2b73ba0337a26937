from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .auth.service import AuthService
from .database.connection import DBConfig, DatabaseConnection
from .database.json_store import JsonDocument, JsonWorkerRepository, JsonWorkerStateRepository
from .payroll.service import PayrollService
from .schedules.service import RestDayClassifier
from .timeclock.mysql_worker_state_repository import MySQLWorkerStateRepository
from .timeclock.repository import WorkerStateRepository
from .timeclock.service import TimeClockService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerRegistry

STORAGE_BACKENDS = ("json", "mysql")


@dataclass(frozen=True)
class Container:
    workers_repo: WorkerRepository
    states_repo: WorkerStateRepository

    auth_service: AuthService
    worker_registry: WorkerRegistry
    timeclock_service: TimeClockService
    rest_day_classifier: RestDayClassifier
    payroll_service: PayrollService


def build_services(workers_repo: WorkerRepository, states_repo: WorkerStateRepository, *, admin_pin: str) -> Container:
    """Wire the services once over any pair of repositories."""

    classifier = RestDayClassifier()
    return Container(
        workers_repo=workers_repo,
        states_repo=states_repo,
        auth_service=AuthService(workers_repo, admin_pin=admin_pin),
        worker_registry=WorkerRegistry(workers_repo, states_repo),
        timeclock_service=TimeClockService(states_repo, workers_repo),
        rest_day_classifier=classifier,
        payroll_service=PayrollService(workers_repo, states_repo, classifier=classifier),
    )


def build_container(
    *,
    storage_backend: str,
    admin_pin: str,
    json_store_path: Optional[str | Path] = None,
    db_config: Optional[dict] = None,
) -> Container:
    if storage_backend == "json":
        if not json_store_path:
            raise ValueError("JSON_STORE_PATH is required for the json storage backend")
        doc = JsonDocument(json_store_path)
        return build_services(JsonWorkerRepository(doc), JsonWorkerStateRepository(doc), admin_pin=admin_pin)

    if storage_backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        return build_services(MySQLWorkerRepository(conn), MySQLWorkerStateRepository(conn), admin_pin=admin_pin)

    raise ValueError(f"Unknown storage backend {storage_backend!r}; expected one of {STORAGE_BACKENDS}")
