from __future__ import annotations

from ...core.constants import DEFAULT_MONTHLY_SALARY, WITHHOLDING_RATE
from ...employees.model import Employee
from .base import PayAmounts, PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: monthly salary (default 50,000) less a flat withholding."""

    def __init__(self, withholding_rate: float = WITHHOLDING_RATE, default_salary: float = DEFAULT_MONTHLY_SALARY):
        self._rate = withholding_rate
        self._default_salary = default_salary

    def calculate(self, employee: Employee) -> PayAmounts:
        gross = float(employee.salary if employee.salary else self._default_salary)
        withholding = round(gross * self._rate, 2)
        return PayAmounts(gross=gross, withholding=withholding, net_pay=round(gross - withholding, 2))
