"""Plain-dict mapping of the domain model.

Shared by the JSON file store, the JSON columns of the MySQL store and the
HTTP layer. Photos travel as base64 text; money as decimal strings.
"""

from __future__ import annotations

import base64
import binascii
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import format_hhmm, format_iso_date, parse_hhmm, parse_iso_date
from ..core.enums import EventKind, PaymentType
from ..schedules.model import DaySchedule, Shift, default_schedule
from ..timeclock.model import ClockEvent, DayLog, WorkerState
from ..workers.model import Worker


def encode_photo(photo: Optional[bytes]) -> Optional[str]:
    if photo is None:
        return None
    return base64.b64encode(photo).decode("ascii")


def decode_photo(value: Optional[str]) -> Optional[bytes]:
    if not value:
        return None
    if not isinstance(value, str):
        raise ValueError("photo must be a base64 string")
    # Browsers send data URLs ("data:image/jpeg;base64,....").
    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("photo is not valid base64") from None


def event_to_dict(event: ClockEvent) -> dict[str, Any]:
    return {
        "type": event.kind.value,
        "time": event.display_time,
        "timestamp": event.occurred_at_ms,
        "photo": encode_photo(event.photo),
    }


def event_from_dict(data: dict[str, Any]) -> ClockEvent:
    return ClockEvent(
        kind=EventKind(data["type"]),
        occurred_at_ms=int(data.get("timestamp") or 0),
        display_time=str(data.get("time") or ""),
        photo=decode_photo(data.get("photo")),
    )


def day_to_dict(day: DayLog) -> dict[str, Any]:
    return {
        "date": format_iso_date(day.date),
        "records": [event_to_dict(e) for e in day.events],
        "totalMinutes": day.total_minutes,
    }


def day_from_dict(data: dict[str, Any]) -> DayLog:
    return DayLog(
        date=parse_iso_date(data["date"]),
        events=[event_from_dict(e) for e in data.get("records") or []],
        total_minutes=int(data.get("totalMinutes") or 0),
    )


def state_to_dict(state: WorkerState) -> dict[str, Any]:
    return {
        "currentDay": day_to_dict(state.current_day) if state.current_day else None,
        "history": [day_to_dict(d) for d in state.history],
        "revision": state.revision,
    }


def state_from_dict(data: Optional[dict[str, Any]]) -> WorkerState:
    if not data:
        return WorkerState()
    current = data.get("currentDay")
    return WorkerState(
        current_day=day_from_dict(current) if current else None,
        history=[day_from_dict(d) for d in data.get("history") or []],
        revision=int(data.get("revision") or 0),
    )


def schedule_to_list(schedule: list[DaySchedule]) -> list[dict[str, Any]]:
    return [
        {
            "active": day.active,
            "shifts": [{"start": format_hhmm(s.start), "end": format_hhmm(s.end)} for s in day.shifts],
        }
        for day in schedule
    ]


def schedule_from_list(data: Optional[list[dict[str, Any]]]) -> list[DaySchedule]:
    if not data:
        return default_schedule()
    return [
        DaySchedule(
            active=bool(day.get("active")),
            shifts=tuple(
                Shift(start=parse_hhmm(s.get("start", "")), end=parse_hhmm(s.get("end", "")))
                for s in day.get("shifts") or []
            ),
        )
        for day in data
    ]


def worker_to_dict(worker: Worker, *, include_secret: bool = True) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": worker.worker_id,
        "name": worker.name,
        "paymentType": worker.payment_type.value,
        "monthlySalary": str(worker.monthly_salary),
        "hourlyRate": str(worker.hourly_rate),
        "schedule": schedule_to_list(worker.schedule),
        "restDays": sorted(format_iso_date(d) for d in worker.rest_days),
    }
    if include_secret:
        out["pinHash"] = worker.pin_hash
    return out


def worker_from_dict(data: dict[str, Any]) -> Worker:
    # Older documents may lack payment fields; they default to a monthly worker.
    return Worker(
        worker_id=str(data["id"]),
        name=str(data.get("name") or ""),
        pin_hash=str(data.get("pinHash") or ""),
        payment_type=PaymentType(data.get("paymentType") or PaymentType.MONTHLY.value),
        monthly_salary=Decimal(str(data.get("monthlySalary") or 0)),
        hourly_rate=Decimal(str(data.get("hourlyRate") or 0)),
        schedule=schedule_from_list(data.get("schedule")),
        rest_days={parse_iso_date(d) for d in data.get("restDays") or []},
    )
