from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from src.time_tracker.time_tracker.core.enums import PaymentType
from src.time_tracker.time_tracker.payroll.calculator.hourly_calculator import HourlyPayCalculator
from src.time_tracker.time_tracker.payroll.calculator.monthly_calculator import MonthlyPayCalculator
from src.time_tracker.time_tracker.payroll.factory import PayCalculatorFactory
from src.time_tracker.time_tracker.schedules.model import DaySchedule, default_schedule
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
    )
    return replace(base, **kwargs)


def test_hourly_two_hours_at_ten():
    worker = _worker(payment_type=PaymentType.HOURLY, hourly_rate=Decimal("10"), monthly_salary=Decimal(0))

    assert HourlyPayCalculator().earnings_for_minutes(worker, 120) == Decimal("20.00")


def test_hourly_rounds_half_up_to_cents():
    worker = _worker(payment_type=PaymentType.HOURLY, hourly_rate=Decimal("0.15"))

    # 10 / 60 * 0.15 = 0.025
    assert HourlyPayCalculator().earnings_for_minutes(worker, 10) == Decimal("0.03")


def test_monthly_daily_earnings_use_expected_minutes():
    worker = _worker()

    assert MonthlyPayCalculator().earnings_for_minutes(worker, 585) == Decimal("100.08")


def test_monthly_without_schedule_earns_nothing_per_minute_but_keeps_flat_salary():
    worker = _worker(schedule=[DaySchedule(active=False) for _ in range(7)])
    calc = MonthlyPayCalculator()

    assert calc.earnings_for_minutes(worker, 585) == Decimal("0.00")
    assert calc.projected_salary(worker, 585) == Decimal("2000")


def test_monthly_projection_rounds_to_whole_units():
    worker = _worker()

    # 2000 * 5846 / 11691 = 1000.08...
    assert MonthlyPayCalculator().projected_salary(worker, 5846) == Decimal("1000")


def test_factory_picks_by_payment_type():
    factory = PayCalculatorFactory()

    assert isinstance(factory.for_worker(_worker(payment_type=PaymentType.HOURLY)), HourlyPayCalculator)
    assert isinstance(factory.for_worker(_worker()), MonthlyPayCalculator)
