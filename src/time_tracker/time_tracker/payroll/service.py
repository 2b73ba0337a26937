from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_worked_time, now_local, to_epoch_millis
from ..common.money import round_units
from ..core.enums import PaymentType
from ..schedules.service import RestDayClassifier
from ..timeclock.calculator import compute_worked_minutes
from ..timeclock.repository import WorkerStateRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .factory import PayCalculatorFactory


@dataclass(frozen=True)
class MonthlyStats:
    worked_minutes: int
    hours_worked: str
    hours_expected: int
    projected_salary: Decimal
    total_earnings: Decimal
    payment_type: PaymentType


_EMPTY_STATS = MonthlyStats(
    worked_minutes=0,
    hours_worked=format_worked_time(0),
    hours_expected=0,
    projected_salary=Decimal(0),
    total_earnings=Decimal(0),
    payment_type=PaymentType.MONTHLY,
)


class PayrollService:
    """Earnings projection from worked minutes and the worker's pay terms."""

    def __init__(
        self,
        workers: WorkerRepository,
        states: WorkerStateRepository,
        *,
        classifier: Optional[RestDayClassifier] = None,
        factory: Optional[PayCalculatorFactory] = None,
    ):
        self._workers = workers
        self._states = states
        self._classifier = classifier or RestDayClassifier()
        self._factory = factory or PayCalculatorFactory(self._classifier)

    def daily_earnings(self, worker: Worker, minutes: int) -> Decimal:
        return self._factory.for_worker(worker).earnings_for_minutes(worker, int(minutes))

    def monthly_stats(self, worker_id: str, *, now: datetime | None = None) -> MonthlyStats:
        worker = self._workers.get_by_id(worker_id)
        state = self._states.get_for_worker(worker_id)
        if not worker or state is None:
            return _EMPTY_STATS

        now = now or now_local()

        def in_month(d) -> bool:
            return d.year == now.year and d.month == now.month

        current = state.current_day
        worked = 0
        for day in state.history:
            if current is not None and day.date == current.date:
                # counted live below
                continue
            if in_month(day.date) and not self._classifier.is_rest_day(worker, day.date):
                worked += day.total_minutes

        if current is not None and in_month(current.date) and not self._classifier.is_rest_day(worker, current.date):
            worked += compute_worked_minutes(
                current.events,
                now_ms=to_epoch_millis(now),
                include_live_elapsed=True,
            )

        projected = self._factory.for_worker(worker).projected_salary(worker, worked)
        expected = self._classifier.expected_monthly_minutes(worker)
        return MonthlyStats(
            worked_minutes=worked,
            hours_worked=format_worked_time(worked),
            hours_expected=int(round_units(expected / 60)),
            projected_salary=projected,
            total_earnings=projected,
            payment_type=worker.payment_type,
        )
