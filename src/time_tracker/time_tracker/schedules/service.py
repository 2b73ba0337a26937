from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..common.datetime_utils import sunday_first_weekday
from ..core.constants import WEEKS_PER_MONTH
from ..workers.model import Worker


class RestDayClassifier:
    """Use case: decide whether a worker is expected to work on a date.

    Stateless; every answer depends only on the worker profile passed in.
    """

    def is_rest_day(self, worker: Worker, work_date: date) -> bool:
        if work_date in worker.rest_days:
            return True

        schedule = worker.schedule or []
        weekday = sunday_first_weekday(work_date)
        if weekday >= len(schedule):
            return True
        return not schedule[weekday].active

    def weekly_minutes(self, worker: Worker) -> int:
        total = 0
        for day in worker.schedule or []:
            if day.active:
                total += sum(shift.minutes for shift in day.shifts)
        return total

    def expected_monthly_minutes(self, worker: Worker) -> Decimal:
        return self.weekly_minutes(worker) * WEEKS_PER_MONTH
