from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from decimal import Decimal

from src.time_tracker.time_tracker.core.enums import PaymentType
from src.time_tracker.time_tracker.schedules.model import DaySchedule, Shift, default_schedule
from src.time_tracker.time_tracker.schedules.service import RestDayClassifier
from src.time_tracker.time_tracker.workers.model import Worker


def _worker(**kwargs) -> Worker:
    base = Worker(
        worker_id="w1",
        name="Ana",
        pin_hash="x",
        payment_type=PaymentType.MONTHLY,
        monthly_salary=Decimal("2000"),
        hourly_rate=Decimal("0"),
        schedule=default_schedule(),
        rest_days=set(),
    )
    return replace(base, **kwargs)


def test_weekends_are_rest_days_by_default():
    classifier = RestDayClassifier()
    worker = _worker()

    assert classifier.is_rest_day(worker, date(2026, 2, 1))  # Sunday
    assert classifier.is_rest_day(worker, date(2026, 2, 7))  # Saturday
    assert not classifier.is_rest_day(worker, date(2026, 2, 2))  # Monday


def test_explicit_rest_day_wins_over_schedule():
    classifier = RestDayClassifier()
    worker = _worker(rest_days={date(2026, 2, 4)})

    assert classifier.is_rest_day(worker, date(2026, 2, 4))
    # no side effects, same answer twice
    assert classifier.is_rest_day(worker, date(2026, 2, 4))
    assert worker.rest_days == {date(2026, 2, 4)}


def test_weekly_and_expected_minutes():
    classifier = RestDayClassifier()
    worker = _worker()

    assert classifier.weekly_minutes(worker) == 2700
    assert classifier.expected_monthly_minutes(worker) == Decimal("11691")


def test_split_shifts_are_summed():
    split = DaySchedule(active=True, shifts=(Shift(time(8, 0), time(12, 0)), Shift(time(14, 0), time(17, 30))))
    schedule = [DaySchedule(active=False)] + [split] * 6
    worker = _worker(schedule=schedule)

    assert RestDayClassifier().weekly_minutes(worker) == 6 * (240 + 210)
