from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord, latest_record
from ..core.enums import AttendanceStatus, LeaveType, RequestStatus
from ..employees.model import Branch, Department, Employee
from ..leaves.model import LeaveRequest
from .documents import (
    attendance_from_document,
    branch_from_document,
    department_from_document,
    employee_from_document,
    leave_from_document,
)
from .mysql_base import new_id


@dataclass
class InMemoryEmployeeRepository:
    items: dict[str, Employee] = field(default_factory=dict)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.items.get(employee_id)

    def list_all(self) -> Sequence[Employee]:
        return sorted(self.items.values(), key=lambda e: e.name)


@dataclass
class InMemoryDepartmentRepository:
    items: dict[str, Department] = field(default_factory=dict)

    def get_by_id(self, department_id: str) -> Optional[Department]:
        return self.items.get(department_id)

    def list_all(self) -> Sequence[Department]:
        return sorted(self.items.values(), key=lambda d: d.name)


@dataclass
class InMemoryBranchRepository:
    items: dict[str, Branch] = field(default_factory=dict)

    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        return self.items.get(branch_id)


@dataclass
class InMemoryAttendanceRepository:
    items: dict[str, AttendanceRecord] = field(default_factory=dict)
    employees: Optional[InMemoryEmployeeRepository] = None

    def get_latest_for_employee(self, employee_id: str) -> Optional[AttendanceRecord]:
        return latest_record(r for r in self.items.values() if r.employee_id == employee_id)

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        rows = [r for r in self.items.values() if r.employee_id == employee_id]
        rows.sort(key=lambda r: r.check_in_time, reverse=True)
        return rows[:limit]

    def create_checkin(
        self,
        *,
        employee_id: str,
        branch_id: Optional[str],
        check_in_time: datetime,
        employee_name: Optional[str] = None,
        branch_name: Optional[str] = None,
    ) -> str:
        record_id = new_id()
        self.items[record_id] = AttendanceRecord(
            record_id=record_id,
            employee_id=employee_id,
            branch_id=branch_id,
            check_in_time=check_in_time,
            employee_name=employee_name,
            branch_name=branch_name,
        )
        return record_id

    def update_checkout(self, *, record_id: str, check_out_time: datetime) -> bool:
        rec = self.items.get(record_id)
        if not rec or rec.check_out_time is not None:
            return False
        self.items[record_id] = replace(rec, check_out_time=check_out_time, status=AttendanceStatus.CHECKED_OUT)
        return True

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        rows = []
        for r in self.items.values():
            if not (start_date <= r.work_date <= end_date):
                continue
            if employee_id and r.employee_id != employee_id:
                continue
            if department_id:
                employee = self.employees.get_by_id(r.employee_id) if self.employees else None
                if not employee or employee.department_id != department_id:
                    continue
            rows.append(r)
        rows.sort(key=lambda r: r.check_in_time)
        return rows

    def clear_all(self) -> int:
        n = len(self.items)
        self.items.clear()
        return n


@dataclass
class InMemoryLeaveRepository:
    items: dict[str, LeaveRequest] = field(default_factory=dict)

    def create(
        self,
        *,
        employee_id: str,
        type: LeaveType,
        start_date: Optional[date],
        end_date: Optional[date],
        leave_date: Optional[date],
        start_time: Optional[str],
        end_time: Optional[str],
        deduct_salary: bool,
        reason: str,
        submitted_at: datetime,
    ) -> str:
        request_id = new_id()
        self.items[request_id] = LeaveRequest(
            request_id=request_id,
            employee_id=employee_id,
            type=type,
            start_date=start_date,
            end_date=end_date,
            leave_date=leave_date,
            start_time=start_time,
            end_time=end_time,
            deduct_salary=deduct_salary,
            reason=reason,
            submitted_at=submitted_at,
        )
        return request_id

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        return self.items.get(request_id)

    def list_for_employee(self, employee_id: str, *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        return [
            lv
            for lv in self.items.values()
            if lv.employee_id == employee_id and (status is None or lv.status == status)
        ]

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        out = []
        for lv in self.items.values():
            if lv.status != RequestStatus.APPROVED:
                continue
            if employee_id and lv.employee_id != employee_id:
                continue
            if lv.type == LeaveType.FULL_DAY:
                if lv.start_date is None or lv.end_date is None:
                    continue
                if lv.end_date < start_date or lv.start_date > end_date:
                    continue
            elif lv.leave_date is None or not (start_date <= lv.leave_date <= end_date):
                continue
            out.append(lv)
        return out

    def decide(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        lv = self.items.get(request_id)
        if not lv or lv.status != RequestStatus.PENDING:
            return False
        self.items[request_id] = replace(
            lv,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            rejection_reason=rejection_reason,
        )
        return True


@dataclass
class InMemoryStore:
    """All repositories backed by dicts; seeded from a document-store export."""

    employees: InMemoryEmployeeRepository = field(default_factory=InMemoryEmployeeRepository)
    departments: InMemoryDepartmentRepository = field(default_factory=InMemoryDepartmentRepository)
    branches: InMemoryBranchRepository = field(default_factory=InMemoryBranchRepository)
    attendance: InMemoryAttendanceRepository = field(default_factory=InMemoryAttendanceRepository)
    leaves: InMemoryLeaveRepository = field(default_factory=InMemoryLeaveRepository)

    def __post_init__(self):
        if self.attendance.employees is None:
            self.attendance.employees = self.employees

    @classmethod
    def from_documents(cls, payload: Mapping[str, Any]) -> "InMemoryStore":
        """payload: {"employees": [...], "departments": [...], "branches": [...], "attendance": [...], "leaves": [...]}"""
        store = cls()
        for doc in payload.get("employees") or ():
            e = employee_from_document(doc)
            store.employees.items[e.employee_id] = e
        for doc in payload.get("departments") or ():
            d = department_from_document(doc)
            store.departments.items[d.department_id] = d
        for doc in payload.get("branches") or ():
            b = branch_from_document(doc)
            store.branches.items[b.branch_id] = b
        for doc in payload.get("attendance") or ():
            r = attendance_from_document(doc)
            store.attendance.items[r.record_id] = r
        for doc in payload.get("leaves") or ():
            lv = leave_from_document(doc)
            store.leaves.items[lv.request_id] = lv
        return store

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryStore":
        return cls.from_documents(json.loads(Path(path).read_text(encoding="utf-8")))
