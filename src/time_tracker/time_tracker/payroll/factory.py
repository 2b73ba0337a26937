from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import PaymentType
from ..schedules.service import RestDayClassifier
from ..workers.model import Worker
from .calculator.base import PayCalculator
from .calculator.hourly_calculator import HourlyPayCalculator
from .calculator.monthly_calculator import MonthlyPayCalculator


@dataclass
class PayCalculatorFactory:
    """Factory Pattern: choose the calculator matching the worker's payment type."""

    classifier: RestDayClassifier = field(default_factory=RestDayClassifier)

    def for_worker(self, worker: Worker) -> PayCalculator:
        if worker.payment_type == PaymentType.HOURLY:
            return HourlyPayCalculator(self.classifier)
        return MonthlyPayCalculator(self.classifier)
