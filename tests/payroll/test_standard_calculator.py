import pytest

from src.attendance_points.attendance_points.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_defaults():
    calc = StandardPayrollCalculator()
    assert calc.points_in_currency(2.5) == 2500
    assert calc.daily_salary(900_000) == 30_000


def test_custom_point_value_and_missing_salary():
    calc = StandardPayrollCalculator(point_value=250, days_per_month=26)
    assert calc.points_in_currency(-4) == -1000
    assert calc.daily_salary(None) == 0


def test_days_per_month_must_be_positive():
    with pytest.raises(ValueError):
        StandardPayrollCalculator(days_per_month=0)
