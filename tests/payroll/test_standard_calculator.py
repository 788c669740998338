from smarthr.core.enums import EmployeeStatus
from smarthr.employees.model import Employee
from smarthr.payroll.calculator.standard_calculator import StandardPayrollCalculator


def _employee(salary=None):
    return Employee(
        id="e1",
        uid="u1",
        name="A",
        email="a@acme.test",
        role="Staff",
        department="General",
        status=EmployeeStatus.ACTIVE,
        salary=salary,
    )


def test_standard_calculator_defaults_salary():
    pay = StandardPayrollCalculator().calculate(_employee())

    assert pay.gross == 50000
    assert pay.withholding == 5000
    assert pay.net_pay == 45000


def test_standard_calculator_uses_employee_salary():
    pay = StandardPayrollCalculator().calculate(_employee(salary=82500))

    assert pay.withholding == 8250
    assert pay.net_pay == 74250


def test_custom_withholding_rate():
    pay = StandardPayrollCalculator(withholding_rate=0.2).calculate(_employee(salary=1000))

    assert pay.withholding == 200
    assert pay.net_pay == 800
