from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..auth.model import Session
from ..auth.service import hash_pin, require_admin
from ..common.validators import require_min_length, require_non_empty, require_non_negative_amount
from ..core.constants import MIN_PIN_LENGTH
from ..core.enums import PaymentType
from ..core.exceptions import ValidationError
from ..schedules.model import DaySchedule, default_schedule
from ..timeclock.model import WorkerState
from ..timeclock.repository import WorkerStateRepository
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


def generate_worker_id() -> str:
    return uuid.uuid4().hex


class WorkerRegistry:
    """Use case: manage worker profiles (admin).

    Creating or removing a worker always creates or removes its state too.
    """

    def __init__(self, workers: WorkerRepository, states: WorkerStateRepository):
        self._workers = workers
        self._states = states

    def list_workers(self) -> Sequence[Worker]:
        return self._workers.list_all()

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        return self._workers.get_by_id(worker_id)

    def get_state(self, worker_id: str) -> Optional[WorkerState]:
        return self._states.get_for_worker(worker_id)

    def add_worker(
        self,
        name: str,
        pin: str,
        payment_type: PaymentType = PaymentType.MONTHLY,
        amount: Decimal | int | str = 0,
        *,
        session: Session,
    ) -> Worker:
        require_admin(session)
        name = require_non_empty(name, "Name")
        require_min_length(pin, "PIN", MIN_PIN_LENGTH)
        payment_type = _payment_type(payment_type)
        amount = require_non_negative_amount(amount, "Amount")

        worker = Worker(
            worker_id=generate_worker_id(),
            name=name,
            pin_hash=hash_pin(pin),
            payment_type=payment_type,
            monthly_salary=amount if payment_type == PaymentType.MONTHLY else Decimal(0),
            hourly_rate=amount if payment_type == PaymentType.HOURLY else Decimal(0),
            schedule=default_schedule(),
            rest_days=set(),
        )
        self._workers.save(worker)
        self._states.save(worker.worker_id, WorkerState())
        logger.info("Added worker %s (%s)", worker.worker_id, worker.name)
        return worker

    def update_worker(self, worker: Worker, *, session: Session, pin: Optional[str] = None) -> bool:
        """Save a changed profile; ``pin``, when given, replaces the PIN in the same write.

        Everything is validated before anything is saved.
        """

        require_admin(session)
        if not self._workers.get_by_id(worker.worker_id):
            logger.warning("Cannot update unknown worker %s", worker.worker_id)
            return False

        require_non_empty(worker.name, "Name")
        _check_schedule(worker.schedule)
        if pin is not None:
            require_min_length(pin, "PIN", MIN_PIN_LENGTH)
        updated = replace(
            worker,
            name=worker.name.strip(),
            payment_type=_payment_type(worker.payment_type),
            monthly_salary=require_non_negative_amount(worker.monthly_salary, "Monthly salary"),
            hourly_rate=require_non_negative_amount(worker.hourly_rate, "Hourly rate"),
        )
        if pin is not None:
            updated = replace(updated, pin_hash=hash_pin(pin))
        self._workers.save(updated)
        logger.info("Updated worker %s", worker.worker_id)
        return True

    def remove_worker(self, worker_id: str, *, session: Session) -> bool:
        require_admin(session)
        if not self._workers.get_by_id(worker_id):
            logger.warning("Cannot remove unknown worker %s", worker_id)
            return False

        self._workers.delete_by_id(worker_id)
        self._states.delete_for_worker(worker_id)
        logger.info("Removed worker %s", worker_id)
        return True

    def set_schedule(self, worker_id: str, schedule: Sequence[DaySchedule], *, session: Session) -> bool:
        require_admin(session)
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            return False
        schedule = list(schedule)
        _check_schedule(schedule)
        self._workers.save(replace(worker, schedule=schedule))
        return True

    def add_rest_day(self, worker_id: str, rest_day: date, *, session: Session) -> bool:
        require_admin(session)
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            return False
        if rest_day not in worker.rest_days:
            self._workers.save(replace(worker, rest_days=worker.rest_days | {rest_day}))
        return True

    def remove_rest_day(self, worker_id: str, rest_day: date, *, session: Session) -> bool:
        require_admin(session)
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            return False
        if rest_day in worker.rest_days:
            self._workers.save(replace(worker, rest_days=worker.rest_days - {rest_day}))
        return True


def _payment_type(value) -> PaymentType:
    try:
        return PaymentType(value)
    except ValueError:
        raise ValidationError(f"Unknown payment type: {value!r}") from None


def _check_schedule(schedule: Sequence[DaySchedule]) -> None:
    if len(schedule) != 7:
        raise ValidationError("Schedule must have one entry per weekday")
    for day in schedule:
        for shift in day.shifts:
            if shift.minutes < 0:
                raise ValidationError("Shift ends before it starts")
