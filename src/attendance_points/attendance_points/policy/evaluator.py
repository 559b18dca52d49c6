from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import round_minutes
from ..core.exceptions import MissingPolicyContext
from ..employees.model import Department, Employee
from ..leaves.intersector import LeaveIntersector
from ..leaves.model import NO_LEAVE, LeaveFlags, LeaveRequest
from ..shifts.model import ShiftWindow
from ..shifts.resolver import ShiftResolver
from .factory import AbsenceStrategyFactory
from .model import EvaluatedRecord

logger = logging.getLogger(__name__)


class PolicyEvaluator:
    """Rule engine: derive lateness, overtime, absence and points for one record.

    Evaluation is a pure function of its inputs; stored records are never
    mutated.
    """

    def __init__(
        self,
        *,
        shift_resolver: ShiftResolver | None = None,
        leave_intersector: LeaveIntersector | None = None,
        strategy_factory: AbsenceStrategyFactory | None = None,
    ):
        self._shifts = shift_resolver or ShiftResolver()
        self._leaves = leave_intersector or LeaveIntersector()
        self._factory = strategy_factory or AbsenceStrategyFactory()

    def evaluate(
        self,
        record: AttendanceRecord,
        *,
        shift: ShiftWindow,
        department: Department,
        leave_flags: LeaveFlags = NO_LEAVE,
        exempt: bool = False,
    ) -> EvaluatedRecord:
        late_minutes = 0
        if not exempt and not leave_flags.has_time_leave and record.check_in_time > shift.start:
            raw_late = round_minutes(record.check_in_time - shift.start)
            late_minutes = max(0, raw_late - int(department.attendance_grace_period or 0))

        overtime_minutes = 0
        if record.check_out_time is not None and record.check_out_time > shift.end:
            overtime_minutes = max(0, round_minutes(record.check_out_time - shift.end))

        absence_limit = int(department.absence_limit_minutes)
        strategy = self._factory.for_record(
            leave_flags=leave_flags,
            late_minutes=late_minutes,
            absence_limit_minutes=absence_limit,
        )
        decision = strategy.decide(late_minutes=late_minutes, absence_limit_minutes=absence_limit)

        overtime_points = overtime_minutes * float(department.overtime_points_per_minute or 0)
        if exempt or leave_flags.has_time_leave or leave_flags.has_full_day_leave:
            late_deduction_points = 0.0
        else:
            late_deduction_points = late_minutes * float(department.late_deduction_points_per_minute or 0)

        return EvaluatedRecord(
            record=record,
            late_minutes=late_minutes,
            overtime_minutes=overtime_minutes,
            overtime_points=overtime_points,
            late_deduction_points=late_deduction_points,
            net_points=overtime_points - late_deduction_points,
            salary_deduction_days=decision.salary_deduction_days,
            is_absent=decision.is_absent,
            has_full_day_leave=leave_flags.has_full_day_leave,
            has_time_leave=leave_flags.has_time_leave,
            note=decision.note,
        )

    def evaluate_for(
        self,
        record: AttendanceRecord,
        *,
        employee: Optional[Employee],
        department: Optional[Department],
        leaves: Iterable[LeaveRequest] = (),
    ) -> EvaluatedRecord:
        """Resolve shift, exemption and leave flags for the record, then evaluate.

        Missing employee/department context yields a zeroed result instead of
        an error so one malformed row cannot abort a whole report.
        """

        try:
            employee, department = self._require_context(record, employee, department)
        except MissingPolicyContext as e:
            logger.warning("record %s evaluated with zeroed fields: %s", record.record_id, e)
            return EvaluatedRecord(record=record)

        shift = self._shifts.window_for(employee, record.check_in_time)
        flags = self._leaves.flags_for(
            [lv for lv in leaves if lv.employee_id == employee.employee_id],
            record.work_date,
        )
        return self.evaluate(
            record,
            shift=shift,
            department=department,
            leave_flags=flags,
            exempt=department.is_exempt(employee.employee_id),
        )

    @staticmethod
    def _require_context(
        record: AttendanceRecord,
        employee: Optional[Employee],
        department: Optional[Department],
    ) -> tuple[Employee, Department]:
        if employee is None:
            raise MissingPolicyContext(f"employee {record.employee_id} not found")
        if department is None:
            raise MissingPolicyContext(f"department of employee {employee.employee_id} not found")
        return employee, department
