from datetime import datetime

import pytest

from src.attendance_points.attendance_points.attendance.model import AttendanceRecord
from src.attendance_points.attendance_points.payroll.converter import PointsConverter
from src.attendance_points.attendance_points.policy.model import EvaluatedRecord


def _ev(employee_id: str, **kwargs) -> EvaluatedRecord:
    rec = AttendanceRecord(record_id="r", employee_id=employee_id, branch_id=None, check_in_time=datetime(2025, 3, 2, 9))
    return EvaluatedRecord(record=rec, **kwargs)


def test_totals_per_employee():
    totals = PointsConverter().convert(
        [
            _ev("a", net_points=10, overtime_minutes=10, salary_deduction_days=0),
            _ev("a", net_points=-2.5, late_minutes=5, late_deduction_points=2.5, salary_deduction_days=1),
            _ev("b", net_points=1),
        ],
        {"a": 900_000},
    )

    a = totals["a"]
    assert a.total_points == pytest.approx(7.5)
    assert a.points_in_currency == pytest.approx(7500)
    assert a.daily_salary == pytest.approx(30_000)
    assert a.total_deduction_days == 1
    assert a.total_deduction_currency == pytest.approx(30_000)
    assert (a.total_late_minutes, a.total_overtime_minutes, a.record_count) == (5, 10, 2)
    assert a.total_late_deduction_points == pytest.approx(2.5)

    b = totals["b"]
    assert b.daily_salary == 0
    assert b.total_deduction_currency == 0


def test_empty_input():
    assert PointsConverter().convert([], {"a": 1}) == {}
