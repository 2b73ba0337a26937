from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import EventKind


@dataclass(frozen=True)
class ClockEvent:
    """Thực thể miền (domain): một lần bấm giờ (vào ca, nghỉ, quay lại, tan ca).

    Ảnh chụp (nếu có) được giữ nguyên dạng bytes, không giải mã.
    """

    kind: EventKind
    occurred_at_ms: int
    display_time: str
    photo: Optional[bytes] = None


@dataclass
class DayLog:
    """Nhật ký một ngày: danh sách sự kiện theo thứ tự thời gian.

    ``total_minutes`` chỉ là giá trị cache, được tính lại sau mỗi lần sửa.
    """

    date: date
    events: list[ClockEvent] = field(default_factory=list)
    total_minutes: int = 0

    @property
    def has_ended(self) -> bool:
        return any(e.kind == EventKind.SESSION_END for e in self.events)

    def copy(self) -> "DayLog":
        return DayLog(date=self.date, events=list(self.events), total_minutes=self.total_minutes)


@dataclass
class WorkerState:
    current_day: Optional[DayLog] = None
    history: list[DayLog] = field(default_factory=list)
    revision: int = 0

    def find_day(self, work_date: date) -> Optional[DayLog]:
        """Current day wins over a history snapshot of the same date."""
        if self.current_day is not None and self.current_day.date == work_date:
            return self.current_day
        for day in self.history:
            if day.date == work_date:
                return day
        return None

    def store_in_history(self, day: DayLog) -> None:
        """Insert a copy of ``day`` keeping one entry per date, oldest first."""
        snapshot = day.copy()
        for i, existing in enumerate(self.history):
            if existing.date == day.date:
                self.history[i] = snapshot
                return
        self.history.append(snapshot)
        self.history.sort(key=lambda d: d.date)


@dataclass(frozen=True)
class EventRowUI:
    kind: str
    label: str
    icon: str
    display_time: str
    occurred_at_ms: int
    has_photo: bool


@dataclass(frozen=True)
class DayRowUI:
    date: str
    hours_worked: str
    total_minutes: int
    status: str
    events: list[EventRowUI]
