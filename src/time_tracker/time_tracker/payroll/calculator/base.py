from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...schedules.service import RestDayClassifier
from ...workers.model import Worker


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    def __init__(self, classifier: RestDayClassifier | None = None):
        self._classifier = classifier or RestDayClassifier()

    @abstractmethod
    def earnings_for_minutes(self, worker: Worker, minutes: int) -> Decimal:
        """Money earned for ``minutes`` of work, rounded to cents."""

        raise NotImplementedError

    @abstractmethod
    def projected_salary(self, worker: Worker, month_minutes: int) -> Decimal:
        """Projection for the month given the minutes counted so far."""

        raise NotImplementedError
