from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    """Loại sự kiện chấm công trong một ngày làm việc."""

    SESSION_START = "start"
    BREAK = "break"
    RESUME = "return"
    SESSION_END = "end"


class DayStatus(str, Enum):
    """Trạng thái hiển thị của ngày hiện tại, suy ra từ sự kiện cuối."""

    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    FINISHED = "FINISHED"


class PaymentType(str, Enum):
    MONTHLY = "monthly"
    HOURLY = "hourly"


class SessionKind(str, Enum):
    """Vai trò của phiên đăng nhập dùng cho phân quyền."""

    ADMIN = "admin"
    WORKER = "worker"
