from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...employees.model import Employee


@dataclass(frozen=True)
class PayAmounts:
    gross: float
    withholding: float
    net_pay: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, employee: Employee) -> PayAmounts:
        raise NotImplementedError
