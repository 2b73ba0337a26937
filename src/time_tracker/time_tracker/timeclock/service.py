from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Mapping, Optional

from ..auth.model import Session
from ..auth.service import require_admin, require_worker_access
from ..common.datetime_utils import (
    format_display_time,
    format_iso_date,
    format_worked_time,
    now_local,
    parse_display_time,
    to_epoch_millis,
)
from ..core.enums import DayStatus, EventKind
from ..core.exceptions import PersistenceError, ValidationError
from ..workers.repository import WorkerRepository
from .calculator import compute_worked_minutes, derive_day_status
from .model import ClockEvent, DayLog, DayRowUI, EventRowUI, WorkerState
from .repository import WorkerStateRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"kind", "display_time", "photo"})

_EVENT_LABELS = {
    EventKind.SESSION_START: "Day started",
    EventKind.BREAK: "Break",
    EventKind.RESUME: "Back from break",
    EventKind.SESSION_END: "Day ended",
}

_EVENT_ICONS = {
    EventKind.SESSION_START: "pi pi-play",
    EventKind.BREAK: "pi pi-pause",
    EventKind.RESUME: "pi pi-refresh",
    EventKind.SESSION_END: "pi pi-stop",
}


class TimeClockService:
    """Day engine: records clock events and keeps each worker's day totals.

    All lookups of unknown workers, dates or positions are no-ops that return
    ``None``/``False``; nothing is saved in that case.
    """

    def __init__(self, states: WorkerStateRepository, workers: WorkerRepository):
        self._states = states
        self._workers = workers

    def _load_state(self, worker_id: str) -> Optional[WorkerState]:
        if not self._workers.get_by_id(worker_id):
            logger.warning("Unknown worker %s", worker_id)
            return None
        return self._states.get_for_worker(worker_id) or WorkerState()

    def append_event(
        self,
        worker_id: str,
        kind: EventKind,
        photo: Optional[bytes] = None,
        *,
        session: Session,
        now: datetime | None = None,
    ) -> Optional[ClockEvent]:
        require_worker_access(session, worker_id)
        now = now or now_local()
        today = now.date()

        state = self._load_state(worker_id)
        if state is None:
            return None

        day = state.current_day
        if day is None or day.date != today:
            if day is not None and day.events:
                _archive(state, day)
            day = DayLog(date=today)
            state.current_day = day

        event = ClockEvent(
            kind=EventKind(kind),
            occurred_at_ms=to_epoch_millis(now),
            display_time=format_display_time(now),
            photo=photo,
        )
        day.events.append(event)

        if event.kind == EventKind.SESSION_END:
            day.total_minutes = compute_worked_minutes(day.events)
            state.store_in_history(day)

        self._states.save(worker_id, state)
        logger.info("Worker %s: %s at %s", worker_id, event.kind.value, event.display_time)
        return event

    def worked_minutes(self, worker_id: str, include_live_elapsed: bool = True, *, now: datetime | None = None) -> int:
        state = self._states.get_for_worker(worker_id)
        if state is None or state.current_day is None:
            return 0
        now = now or now_local()
        return compute_worked_minutes(
            state.current_day.events,
            now_ms=to_epoch_millis(now),
            include_live_elapsed=include_live_elapsed,
        )

    def day_status(self, worker_id: str) -> DayStatus:
        state = self._states.get_for_worker(worker_id)
        if state is None or state.current_day is None:
            return DayStatus.NOT_STARTED
        return derive_day_status(state.current_day.events)

    def edit_event(
        self,
        worker_id: str,
        work_date: date,
        index: int,
        updates: Mapping[str, object],
        *,
        session: Session,
    ) -> bool:
        """Admin correction of one event.

        A ``display_time`` update re-derives the timestamp from the 12-hour
        text anchored to ``work_date``.
        """

        require_admin(session)
        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot edit fields: {', '.join(sorted(unknown))}")

        state = self._load_state(worker_id)
        if state is None:
            return False
        day = state.find_day(work_date)
        if day is None or not 0 <= index < len(day.events):
            logger.warning("Worker %s: no event #%s on %s", worker_id, index, work_date)
            return False

        event = day.events[index]
        changes: dict = {}
        if "kind" in updates:
            try:
                changes["kind"] = EventKind(updates["kind"])
            except ValueError:
                raise ValidationError(f"Unknown event kind: {updates['kind']!r}") from None
        if "photo" in updates:
            changes["photo"] = updates["photo"]
        if "display_time" in updates:
            text = str(updates["display_time"] or "")
            changes["display_time"] = text
            changes["occurred_at_ms"] = to_epoch_millis(parse_display_time(text, on_date=work_date))

        day.events[index] = ClockEvent(
            kind=changes.get("kind", event.kind),
            occurred_at_ms=changes.get("occurred_at_ms", event.occurred_at_ms),
            display_time=changes.get("display_time", event.display_time),
            photo=changes.get("photo", event.photo),
        )
        self._recalculate(state, day)
        self._states.save(worker_id, state)
        logger.info("Worker %s: edited event #%s on %s", worker_id, index, work_date)
        return True

    def delete_event(self, worker_id: str, work_date: date, index: int, *, session: Session) -> bool:
        require_admin(session)
        state = self._load_state(worker_id)
        if state is None:
            return False
        day = state.find_day(work_date)
        if day is None or not 0 <= index < len(day.events):
            logger.warning("Worker %s: no event #%s on %s", worker_id, index, work_date)
            return False

        del day.events[index]
        self._recalculate(state, day)
        self._states.save(worker_id, state)
        logger.info("Worker %s: deleted event #%s on %s", worker_id, index, work_date)
        return True

    def check_new_day(self, *, now: datetime | None = None) -> int:
        """Lazy rollover run by the periodic tick.

        Moves every stale current day into history and clears it. A worker
        whose state cannot be read or saved is logged and skipped.
        """

        today = (now or now_local()).date()
        rolled = 0
        for worker_id in self._states.list_worker_ids():
            try:
                state = self._states.get_for_worker(worker_id)
                if state is None or state.current_day is None or state.current_day.date == today:
                    continue
                if state.current_day.events:
                    _archive(state, state.current_day)
                state.current_day = None
                self._states.save(worker_id, state)
            except PersistenceError as e:
                logger.error("Rollover of worker %s failed: %s", worker_id, e)
                continue
            rolled += 1
        if rolled:
            logger.info("Rolled %s worker day(s) over to %s", rolled, today)
        return rolled

    def get_today_events_ui(self, worker_id: str) -> list[EventRowUI]:
        state = self._states.get_for_worker(worker_id)
        if state is None or state.current_day is None:
            return []
        return [self._event_to_ui(e) for e in state.current_day.events]

    def get_history_ui(self, worker_id: str) -> list[DayRowUI]:
        state = self._states.get_for_worker(worker_id)
        if state is None:
            return []
        return [
            DayRowUI(
                date=format_iso_date(day.date),
                hours_worked=format_worked_time(day.total_minutes),
                total_minutes=day.total_minutes,
                status="complete" if day.has_ended else "incomplete",
                events=[self._event_to_ui(e) for e in day.events],
            )
            for day in reversed(state.history)
        ]

    def _recalculate(self, state: WorkerState, day: DayLog) -> None:
        day.total_minutes = compute_worked_minutes(day.events)
        # Keep the history snapshot of an ended current day in step with it.
        if day is state.current_day and any(d.date == day.date for d in state.history):
            state.store_in_history(day)

    def _event_to_ui(self, event: ClockEvent) -> EventRowUI:
        return EventRowUI(
            kind=event.kind.value,
            label=_EVENT_LABELS.get(event.kind, event.kind.value),
            icon=_EVENT_ICONS.get(event.kind, "pi pi-clock"),
            display_time=event.display_time,
            occurred_at_ms=event.occurred_at_ms,
            has_photo=event.photo is not None,
        )


def _archive(state: WorkerState, day: DayLog) -> None:
    day.total_minutes = compute_worked_minutes(day.events)
    state.store_in_history(day)
