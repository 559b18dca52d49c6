from datetime import date, datetime, timezone

import pytest

from src.attendance_points.attendance_points.attendance.model import AttendanceRecord
from src.attendance_points.attendance_points.core.enums import AttendanceStatus, LeaveType, RequestStatus
from src.attendance_points.attendance_points.core.exceptions import ValidationError
from src.attendance_points.attendance_points.database.documents import (
    attendance_from_document,
    branch_from_document,
    department_from_document,
    employee_from_document,
    leave_from_document,
    to_datetime,
)
from src.attendance_points.attendance_points.policy.evaluator import PolicyEvaluator


def test_employee_accepts_either_spelling():
    a = employee_from_document({"id": "e1", "name": "A", "departmentId": "d1", "startTime": "08:00"})
    b = employee_from_document({"employee_id": "e1", "name": "A", "department_id": "d1", "start_time": "08:00"})
    assert a == b
    assert a.salary == 0


def test_department_defaults():
    d = department_from_document({"id": "d1", "name": "Ops"})
    assert d.absence_limit_minutes == 480
    assert d.attendance_grace_period == 0
    assert d.exempt_employee_ids == frozenset()


def test_branch_nested_and_flat_location():
    nested = branch_from_document({"id": "b", "name": "HQ", "location": {"latitude": 1.5, "longitude": 2.5}, "radius": 50})
    flat = branch_from_document({"id": "b", "name": "HQ", "latitude": "1.5", "longitude": "2.5", "radius": "50"})
    assert nested == flat


def test_branch_without_center_is_invalid():
    with pytest.raises(ValidationError):
        branch_from_document({"id": "b", "name": "HQ", "radius": 50})


def test_attendance_status_follows_check_out():
    open_rec = attendance_from_document({"id": "r", "employeeId": "e", "checkInTime": "2025-03-02T09:00:00", "branchId": "N/A"})
    assert open_rec.status == AttendanceStatus.CHECKED_IN
    assert open_rec.branch_id is None

    closed = attendance_from_document(
        {"id": "r", "employeeId": "e", "checkInTime": "2025-03-02T09:00:00", "checkOutTime": "2025-03-02T17:00:00"}
    )
    assert closed.status == AttendanceStatus.CHECKED_OUT


def test_attendance_check_out_before_check_in_is_invalid():
    with pytest.raises(ValidationError):
        attendance_from_document(
            {"id": "r", "employeeId": "e", "checkInTime": "2025-03-02T09:00:00", "checkOutTime": "2025-03-02T08:00:00"}
        )


def test_leave_date_field():
    lv = leave_from_document(
        {"id": "l", "employeeId": "e", "type": "time", "status": "approved", "date": "2025-03-04", "startTime": "10:00", "endTime": "11:00"}
    )
    assert lv.type == LeaveType.TIME
    assert lv.status == RequestStatus.APPROVED
    assert lv.leave_date == date(2025, 3, 4)
    assert lv.deduct_salary is True


def test_unknown_leave_type_is_invalid():
    with pytest.raises(ValidationError):
        leave_from_document({"id": "l", "employeeId": "e", "type": "sabbatical"})


def test_to_datetime_variants():
    assert to_datetime("2025-03-02T09:00:00") == datetime(2025, 3, 2, 9, 0)
    assert to_datetime(date(2025, 3, 2)) == datetime(2025, 3, 2)
    assert to_datetime(None) is None

    utc = datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc)
    assert to_datetime("2025-03-02T09:00:00Z") == utc.astimezone().replace(tzinfo=None)
    assert to_datetime({"seconds": utc.timestamp()}) == datetime.fromtimestamp(utc.timestamp())

    with pytest.raises(ValidationError):
        to_datetime("yesterday")


def test_negative_radius_is_invalid():
    with pytest.raises(ValidationError):
        branch_from_document({"id": "b", "name": "HQ", "latitude": 1, "longitude": 2, "radius": -5})


def test_numeric_shift_is_coerced_and_evaluates():
    employee = employee_from_document({"id": "e1", "name": "A", "departmentId": "d1", "shift": 1})
    assert employee.shift == "1"

    rec = AttendanceRecord(record_id="r", employee_id="e1", branch_id=None, check_in_time=datetime(2025, 3, 2, 9, 30))
    ev = PolicyEvaluator().evaluate_for(rec, employee=employee, department=department_from_document({"id": "d1", "name": "Ops"}))
    assert ev.late_minutes == 30
