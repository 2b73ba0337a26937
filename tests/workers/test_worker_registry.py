from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from decimal import Decimal

import pytest

from src.time_tracker.time_tracker.auth.model import Session
from src.time_tracker.time_tracker.core.enums import PaymentType
from src.time_tracker.time_tracker.core.exceptions import AuthorizationError, ValidationError
from src.time_tracker.time_tracker.schedules.model import DaySchedule, Shift


def test_add_worker_sets_defaults_and_empty_state(container, admin, states_repo):
    worker = container.worker_registry.add_worker("Ana", "1111", PaymentType.HOURLY, "9.5", session=admin)

    assert worker.worker_id
    assert worker.hourly_rate == Decimal("9.5")
    assert worker.monthly_salary == Decimal(0)
    assert worker.pin_hash != "1111"
    assert [d.active for d in worker.schedule] == [False, True, True, True, True, True, False]
    assert worker.schedule[1].shifts == (Shift(time(9, 0), time(18, 0)),)
    assert worker.rest_days == set()

    state = states_repo.get_for_worker(worker.worker_id)
    assert state is not None
    assert state.current_day is None
    assert state.history == []


def test_ids_are_unique(container, admin):
    a = container.worker_registry.add_worker("Ana", "1111", session=admin)
    b = container.worker_registry.add_worker("Ana", "1111", session=admin)

    assert a.worker_id != b.worker_id
    assert a.monthly_salary == Decimal(0)


@pytest.mark.parametrize(
    "name,pin,payment_type,amount",
    [
        ("", "1111", "monthly", 0),
        ("Ana", "12", "monthly", 0),
        ("Ana", "1111", "weekly", 0),
        ("Ana", "1111", "monthly", -5),
        ("Ana", "1111", "monthly", "lots"),
    ],
)
def test_add_worker_validation(container, admin, name, pin, payment_type, amount):
    with pytest.raises(ValidationError):
        container.worker_registry.add_worker(name, pin, payment_type, amount, session=admin)


def test_registry_mutations_need_admin(container, admin):
    worker = container.worker_registry.add_worker("Ana", "1111", session=admin)
    as_worker = Session.for_worker(worker.worker_id)

    with pytest.raises(AuthorizationError):
        container.worker_registry.add_worker("Luis", "2222", session=as_worker)
    with pytest.raises(AuthorizationError):
        container.worker_registry.remove_worker(worker.worker_id, session=as_worker)
    with pytest.raises(AuthorizationError):
        container.worker_registry.add_rest_day(worker.worker_id, date(2026, 2, 2), session=as_worker)


def test_remove_worker_cascades_to_state(container, admin, workers_repo, states_repo):
    worker = container.worker_registry.add_worker("Ana", "1111", session=admin)

    assert container.worker_registry.remove_worker(worker.worker_id, session=admin)
    assert workers_repo.get_by_id(worker.worker_id) is None
    assert states_repo.get_for_worker(worker.worker_id) is None
    assert not container.worker_registry.remove_worker(worker.worker_id, session=admin)


def test_rest_days_are_idempotent(container, admin):
    registry = container.worker_registry
    worker = registry.add_worker("Ana", "1111", session=admin)
    day = date(2026, 2, 4)

    assert registry.add_rest_day(worker.worker_id, day, session=admin)
    assert registry.add_rest_day(worker.worker_id, day, session=admin)
    assert registry.get_worker(worker.worker_id).rest_days == {day}

    assert registry.remove_rest_day(worker.worker_id, day, session=admin)
    assert registry.remove_rest_day(worker.worker_id, day, session=admin)
    assert registry.get_worker(worker.worker_id).rest_days == set()

    assert not registry.add_rest_day("nope", day, session=admin)


def test_update_and_schedule(container, admin):
    registry = container.worker_registry
    worker = registry.add_worker("Ana", "1111", session=admin)

    assert registry.update_worker(replace(worker, name=" Ana María ", monthly_salary=Decimal("2500")), session=admin)
    updated = registry.get_worker(worker.worker_id)
    assert updated.name == "Ana María"
    assert updated.monthly_salary == Decimal("2500")

    every_day = [DaySchedule(active=True, shifts=(Shift(time(8, 0), time(12, 0)),))] * 7
    assert registry.set_schedule(worker.worker_id, every_day, session=admin)
    assert all(d.active for d in registry.get_worker(worker.worker_id).schedule)

    with pytest.raises(ValidationError):
        registry.set_schedule(worker.worker_id, every_day[:3], session=admin)
    with pytest.raises(ValidationError):
        registry.set_schedule(
            worker.worker_id, [DaySchedule(active=True, shifts=(Shift(time(18, 0), time(9, 0)),))] * 7, session=admin
        )

    assert not registry.update_worker(replace(worker, worker_id="nope"), session=admin)


def test_update_with_short_pin_changes_nothing(container, admin):
    registry = container.worker_registry
    worker = registry.add_worker("Ana", "1111", "hourly", 10, session=admin)

    with pytest.raises(ValidationError):
        registry.update_worker(replace(worker, name="Changed", hourly_rate=Decimal("99")), session=admin, pin="12")

    assert registry.get_worker(worker.worker_id) == worker


def test_update_replaces_pin_with_profile(container, admin):
    registry = container.worker_registry
    worker = registry.add_worker("Ana", "1111", session=admin)

    assert registry.update_worker(replace(worker, name="Ana B"), session=admin, pin="5678")

    assert container.auth_service.login_as_worker(worker.worker_id, "5678").worker_id == worker.worker_id
    assert registry.get_worker(worker.worker_id).name == "Ana B"
