from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.time_tracker.time_tracker.core.enums import EventKind, PaymentType


def _work(container, admin, worker_id: str, start: datetime, hours: int) -> None:
    clock = container.timeclock_service
    clock.append_event(worker_id, EventKind.SESSION_START, session=admin, now=start)
    clock.append_event(worker_id, EventKind.SESSION_END, session=admin, now=start + timedelta(hours=hours))


@pytest.fixture
def hourly(container, admin):
    return container.worker_registry.add_worker("Ana", "1111", "hourly", "12.50", session=admin)


@pytest.fixture
def monthly(container, admin):
    return container.worker_registry.add_worker("Luis", "2222", "monthly", 2000, session=admin)


def test_hourly_month_sums_history_and_live_day(container, admin, hourly):
    # Mon 2 and Tue 3 Feb 2026, then Wed 4 still open
    _work(container, admin, hourly.worker_id, datetime(2026, 2, 2, 9), 8)
    _work(container, admin, hourly.worker_id, datetime(2026, 2, 3, 9), 6)
    container.timeclock_service.append_event(
        hourly.worker_id, EventKind.SESSION_START, session=admin, now=datetime(2026, 2, 4, 9)
    )

    stats = container.payroll_service.monthly_stats(hourly.worker_id, now=datetime(2026, 2, 4, 11))

    assert stats.worked_minutes == (8 + 6 + 2) * 60
    assert stats.hours_worked == "16h 00m"
    assert stats.total_earnings == Decimal("200.00")
    assert stats.projected_salary == stats.total_earnings
    assert stats.payment_type == PaymentType.HOURLY


def test_ended_day_is_not_counted_twice(container, admin, hourly):
    _work(container, admin, hourly.worker_id, datetime(2026, 2, 2, 9), 8)

    stats = container.payroll_service.monthly_stats(hourly.worker_id, now=datetime(2026, 2, 2, 18))

    assert stats.worked_minutes == 480


def test_rest_days_and_other_months_are_excluded(container, admin, monthly):
    _work(container, admin, monthly.worker_id, datetime(2026, 1, 30, 9), 9)  # January
    _work(container, admin, monthly.worker_id, datetime(2026, 2, 1, 9), 9)  # Sunday
    _work(container, admin, monthly.worker_id, datetime(2026, 2, 2, 9), 9)  # Monday, declared rest day
    _work(container, admin, monthly.worker_id, datetime(2026, 2, 3, 9), 9)  # Tuesday
    container.worker_registry.add_rest_day(monthly.worker_id, date(2026, 2, 2), session=admin)

    stats = container.payroll_service.monthly_stats(monthly.worker_id, now=datetime(2026, 2, 10, 12))

    assert stats.worked_minutes == 540
    assert stats.hours_expected == 195
    # round(2000 * 540 / 11691)
    assert stats.projected_salary == Decimal("92")
    assert stats.total_earnings == Decimal("92")
    assert stats.payment_type == PaymentType.MONTHLY


def test_daily_earnings_example(container, admin, monthly):
    assert container.payroll_service.daily_earnings(monthly, 585) == Decimal("100.08")


def test_unknown_worker_gets_empty_stats(container):
    stats = container.payroll_service.monthly_stats("nope", now=datetime(2026, 2, 10))

    assert stats.worked_minutes == 0
    assert stats.total_earnings == Decimal(0)
    assert stats.payment_type == PaymentType.MONTHLY
