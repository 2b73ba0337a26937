from __future__ import annotations

from decimal import Decimal

from ...common.money import round_cents, round_units
from ...workers.model import Worker
from .base import PayCalculator


class MonthlyPayCalculator(PayCalculator):
    """Salary pro-rated over the minutes the weekly schedule expects in a month."""

    def minute_rate(self, worker: Worker) -> Decimal:
        expected = self._classifier.expected_monthly_minutes(worker)
        if expected == 0:
            return Decimal(0)
        return Decimal(worker.monthly_salary or 0) / expected

    def earnings_for_minutes(self, worker: Worker, minutes: int) -> Decimal:
        return round_cents(Decimal(minutes) * self.minute_rate(worker))

    def projected_salary(self, worker: Worker, month_minutes: int) -> Decimal:
        salary = Decimal(worker.monthly_salary or 0)
        expected = self._classifier.expected_monthly_minutes(worker)
        if expected <= 0:
            return salary
        return round_units(salary * Decimal(month_minutes) / expected)
