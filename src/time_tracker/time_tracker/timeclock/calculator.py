from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DayStatus, EventKind
from .model import ClockEvent

_OPENING_KINDS = (EventKind.SESSION_START, EventKind.RESUME)
_CLOSING_KINDS = (EventKind.BREAK, EventKind.SESSION_END)


def compute_worked_minutes(
    events: Sequence[ClockEvent],
    *,
    now_ms: Optional[int] = None,
    include_live_elapsed: bool = False,
) -> int:
    """Sum every start/resume -> break/end span, floored to whole minutes.

    A span still open at the end counts up to ``now_ms`` only when live time
    is requested and the day holds no SESSION_END. Closing events with no open
    span and repeated opening events are accepted as recorded: a later opening
    event simply moves the open span's start.
    """

    total_ms = 0
    work_start: Optional[int] = None

    for event in events:
        if event.kind in _OPENING_KINDS:
            work_start = event.occurred_at_ms
        elif event.kind in _CLOSING_KINDS and work_start is not None:
            total_ms += event.occurred_at_ms - work_start
            work_start = None

    day_ended = any(e.kind == EventKind.SESSION_END for e in events)
    if work_start is not None and not day_ended and include_live_elapsed and now_ms is not None:
        total_ms += now_ms - work_start

    return total_ms // 60000


def derive_day_status(events: Sequence[ClockEvent]) -> DayStatus:
    if not events:
        return DayStatus.NOT_STARTED
    if any(e.kind == EventKind.SESSION_END for e in events):
        return DayStatus.FINISHED
    if events[-1].kind == EventKind.BREAK:
        return DayStatus.ON_BREAK
    return DayStatus.WORKING
