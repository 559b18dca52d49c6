"""Normalise document-store payloads into the canonical domain entities.

Documents exported from the document store carry optional fields and
alternative spellings (``departmentId`` or ``department_id``, ``branchId`` or
``branch_id``, nested ``location``). They are resolved here, once, so the rule
engine only ever sees one field name per concept.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus, LeaveType, RequestStatus
from ..common.validators import require_non_negative
from ..core.exceptions import ValidationError
from ..employees.model import Branch, Department, Employee
from ..leaves.model import LeaveRequest


def _first(doc: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = doc.get(key)
        if value is not None and value != "":
            return value
    return None


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _doc_id(doc: Mapping[str, Any], doc_id: Optional[str], *keys: str) -> str:
    value = doc_id or _first(doc, "id", *keys)
    if not value:
        raise ValidationError("Document has no id")
    return str(value)


def to_datetime(value: Any) -> Optional[datetime]:
    """datetime / date / ISO string / {"seconds": ...} timestamp -> naive local datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, datetime.min.time())
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value)
    elif isinstance(value, Mapping):
        seconds = _first(value, "seconds", "_seconds")
        if seconds is None:
            raise ValidationError(f"Unsupported timestamp: {value!r}")
        dt = datetime.fromtimestamp(float(seconds))
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid datetime: {value!r}")
    else:
        raise ValidationError(f"Unsupported datetime value type: {type(value)!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def to_date(value: Any) -> Optional[date]:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    dt = to_datetime(value)
    return dt.date() if dt else None


def _float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid number: {value!r}")


def employee_from_document(doc: Mapping[str, Any], *, doc_id: Optional[str] = None) -> Employee:
    return Employee(
        employee_id=_doc_id(doc, doc_id, "employeeId", "employee_id"),
        name=str(_first(doc, "name", "full_name", "fullName") or ""),
        department_id=_first(doc, "departmentId", "department_id"),
        start_time=_first(doc, "startTime", "start_time"),
        end_time=_first(doc, "endTime", "end_time"),
        shift=_str_or_none(_first(doc, "shift")),
        branch_id=_first(doc, "branchId", "branch_id"),
        salary=_float(_first(doc, "salary")),
    )


def department_from_document(doc: Mapping[str, Any], *, doc_id: Optional[str] = None) -> Department:
    exempt = _first(doc, "exemptEmployeeIds", "exempt_employee_ids") or ()
    absence_limit = _first(doc, "absenceLimitMinutes", "absence_limit_minutes")
    return Department(
        department_id=_doc_id(doc, doc_id, "departmentId", "department_id"),
        name=str(_first(doc, "name", "dept_name") or ""),
        branch_id=_first(doc, "branchId", "branch_id"),
        attendance_grace_period=int(_float(_first(doc, "attendanceGracePeriod", "attendance_grace_period"))),
        absence_limit_minutes=int(_float(absence_limit, 480)),
        late_deduction_points_per_minute=_float(
            _first(doc, "lateDeductionPointsPerMinute", "late_deduction_points_per_minute")
        ),
        overtime_points_per_minute=_float(_first(doc, "overtimePointsPerMinute", "overtime_points_per_minute")),
        exempt_employee_ids=frozenset(str(x) for x in exempt),
    )


def branch_from_document(doc: Mapping[str, Any], *, doc_id: Optional[str] = None) -> Branch:
    location = doc.get("location") or {}
    latitude = _first(location, "latitude", "lat") if location else None
    longitude = _first(location, "longitude", "lng", "lon") if location else None
    if latitude is None:
        latitude = _first(doc, "latitude", "lat")
    if longitude is None:
        longitude = _first(doc, "longitude", "lng", "lon")
    if latitude is None or longitude is None:
        raise ValidationError("Branch has no geofence center")

    return Branch(
        branch_id=_doc_id(doc, doc_id, "branchId", "branch_id"),
        name=str(_first(doc, "name", "branch_name") or ""),
        latitude=_float(latitude),
        longitude=_float(longitude),
        radius=require_non_negative(_first(doc, "radius") or 0, "Branch radius"),
    )


def attendance_from_document(doc: Mapping[str, Any], *, doc_id: Optional[str] = None) -> AttendanceRecord:
    check_in = to_datetime(_first(doc, "checkInTime", "check_in_time"))
    if check_in is None:
        raise ValidationError("Attendance record has no check-in time")
    check_out = to_datetime(_first(doc, "checkOutTime", "check_out_time"))
    if check_out is not None and check_out < check_in:
        raise ValidationError("Check-out time cannot be earlier than check-in time")

    branch_id = _first(doc, "branchId", "branch_id")
    return AttendanceRecord(
        record_id=_doc_id(doc, doc_id, "recordId", "record_id"),
        employee_id=str(_first(doc, "employeeId", "employee_id")),
        branch_id=None if branch_id == "N/A" else branch_id,
        check_in_time=check_in,
        check_out_time=check_out,
        status=AttendanceStatus.CHECKED_OUT if check_out else AttendanceStatus.CHECKED_IN,
        employee_name=_first(doc, "employeeName", "employee_name"),
        branch_name=_first(doc, "branchName", "branch_name"),
    )


def leave_from_document(doc: Mapping[str, Any], *, doc_id: Optional[str] = None) -> LeaveRequest:
    try:
        leave_type = LeaveType(str(_first(doc, "type", "leave_type")))
        status = RequestStatus(str(_first(doc, "status") or RequestStatus.PENDING.value))
    except ValueError as e:
        raise ValidationError(str(e)) from e

    return LeaveRequest(
        request_id=_doc_id(doc, doc_id, "requestId", "request_id"),
        employee_id=str(_first(doc, "employeeId", "employee_id")),
        type=leave_type,
        status=status,
        start_date=to_date(_first(doc, "startDate", "start_date")),
        end_date=to_date(_first(doc, "endDate", "end_date")),
        leave_date=to_date(_first(doc, "date", "leave_date")),
        start_time=_first(doc, "startTime", "start_time"),
        end_time=_first(doc, "endTime", "end_time"),
        deduct_salary=bool(doc.get("deductSalary", doc.get("deduct_salary", True))),
        reason=str(_first(doc, "reason") or ""),
        submitted_at=to_datetime(_first(doc, "submittedAt", "submitted_at")),
        reviewed_by=_first(doc, "reviewedBy", "reviewed_by"),
        reviewed_at=to_datetime(_first(doc, "reviewedAt", "reviewed_at")),
        rejection_reason=_first(doc, "rejectionReason", "rejection_reason"),
    )
