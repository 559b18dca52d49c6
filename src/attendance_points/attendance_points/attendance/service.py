from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import AlreadyCheckedIn, CheckinDeadlinePassed, ValidationError
from ..employees.model import Branch, Department, Employee, resolve_branch_id
from ..employees.repository import BranchRepository, DepartmentRepository, EmployeeRepository
from ..geo.geofence import GeofenceValidator
from ..geo.location import LocationProvider
from ..shifts.resolver import ShiftResolver
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in / check-out on top of the geofence validator.

    A check-in is persisted only after the validator accepts it. The service
    also keeps at most one open record per employee; serialising concurrent
    writes for the same employee is left to the store.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        branches: BranchRepository,
        *,
        geofence: GeofenceValidator | None = None,
        shift_resolver: ShiftResolver | None = None,
        enforce_checkin_deadline: bool = False,
    ):
        self._attendance = attendance
        self._employees = employees
        self._departments = departments
        self._branches = branches
        self._geofence = geofence or GeofenceValidator()
        self._shifts = shift_resolver or ShiftResolver()
        self._enforce_deadline = bool(enforce_checkin_deadline)

    def _load_context(self, employee_id: str) -> tuple[Employee, Department]:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise ValidationError("Employee does not exist")
        if not employee.department_id:
            raise ValidationError("You are not registered in a department. Please contact the administration.")
        department = self._departments.get_by_id(employee.department_id)
        if not department:
            raise ValidationError("Your department does not exist")
        return employee, department

    def _branch_for(self, employee: Employee, department: Department) -> Optional[Branch]:
        branch_id = resolve_branch_id(employee, department)
        if not branch_id:
            return None
        return self._branches.get_by_id(branch_id)

    def check_in(self, employee_id: str, *, locate: LocationProvider, now: datetime | None = None) -> str:
        now = now or now_local()
        employee, department = self._load_context(employee_id)

        latest = self._attendance.get_latest_for_employee(employee.employee_id)
        if latest and latest.is_open:
            raise AlreadyCheckedIn("You are already checked in")

        exempt = department.is_exempt(employee.employee_id)
        if self._enforce_deadline and not exempt:
            grace = int(department.attendance_grace_period or 0)
            shift = self._shifts.window_for(employee, now)
            if now > shift.start + timedelta(minutes=grace):
                raise CheckinDeadlinePassed(grace)

        branch = self._branch_for(employee, department)
        decision = self._geofence.validate(exempt=exempt, branch=branch, locate=locate)

        record_id = self._attendance.create_checkin(
            employee_id=employee.employee_id,
            branch_id=branch.branch_id if branch else None,
            check_in_time=now,
            employee_name=employee.name,
            branch_name=branch.name if branch else None,
        )
        logger.info(
            "check-in accepted: employee=%s record=%s exempt=%s distance=%s",
            employee.employee_id,
            record_id,
            decision.exempt,
            None if decision.distance is None else round(decision.distance, 1),
        )
        return record_id

    def check_out(self, employee_id: str, *, now: datetime | None = None) -> str:
        now = now or now_local()

        record = self._attendance.get_latest_for_employee(employee_id)
        if not record or not record.is_open:
            raise ValidationError("No active check-in found")
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        ok = self._attendance.update_checkout(record_id=record.record_id, check_out_time=now)
        if not ok:
            raise ValidationError("Check-out failed")

        logger.info("check-out: employee=%s record=%s", employee_id, record.record_id)
        return record.record_id

    def get_current_record(self, employee_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_latest_for_employee(employee_id)

    def get_history(self, employee_id: str, *, limit: int = 15):
        return list(self._attendance.get_recent_for_employee(employee_id, limit))

    def clear_all_records(self) -> int:
        removed = self._attendance.clear_all()
        logger.warning("all attendance records cleared: %s removed", removed)
        return removed
