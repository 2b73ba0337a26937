from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time

from ..core.constants import DEFAULT_ACTIVE_WEEKDAYS, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): một khung giờ làm trong ngày."""

    start: time
    end: time

    @property
    def minutes(self) -> int:
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)


@dataclass(frozen=True)
class DaySchedule:
    """Lịch của một thứ trong tuần (index 0 = Chủ nhật)."""

    active: bool
    shifts: tuple[Shift, ...] = field(default_factory=tuple)


def default_schedule() -> list[DaySchedule]:
    """Mon-Fri active, weekends off; every day keeps the 09:00-18:00 shift."""
    shift = Shift(start=DEFAULT_SHIFT_START, end=DEFAULT_SHIFT_END)
    return [DaySchedule(active=i in DEFAULT_ACTIVE_WEEKDAYS, shifts=(shift,)) for i in range(7)]
