from __future__ import annotations

from decimal import Decimal

from ...common.money import round_cents
from ...workers.model import Worker
from .base import PayCalculator


class HourlyPayCalculator(PayCalculator):
    """minutes / 60 * hourly_rate."""

    def earnings_for_minutes(self, worker: Worker, minutes: int) -> Decimal:
        rate = Decimal(worker.hourly_rate or 0)
        return round_cents(Decimal(minutes) / 60 * rate)

    def projected_salary(self, worker: Worker, month_minutes: int) -> Decimal:
        return self.earnings_for_minutes(worker, month_minutes)
