from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..core.enums import PaymentType
from ..schedules.model import DaySchedule


@dataclass
class Worker:
    """Thực thể miền (domain): Worker.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    Chỉ một trong ``monthly_salary`` / ``hourly_rate`` có hiệu lực, tùy ``payment_type``.
    """

    worker_id: str
    name: str
    pin_hash: str
    payment_type: PaymentType
    monthly_salary: Decimal
    hourly_rate: Decimal
    schedule: list[DaySchedule]
    rest_days: set[date] = field(default_factory=set)
