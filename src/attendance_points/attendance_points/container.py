from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DAYS_PER_SALARY_MONTH,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
    DEFAULT_POINT_VALUE,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import InMemoryStore
from .employees.mysql_branch_repository import MySQLBranchRepository
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import BranchRepository, DepartmentRepository, EmployeeRepository
from .geo.geofence import GeofenceValidator
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.converter import PointsConverter
from .payroll.service import PayrollReportService
from .policy.evaluator import PolicyEvaluator
from .shifts.resolver import ShiftResolver

logger = logging.getLogger(__name__)

STORE_MYSQL = "mysql"
STORE_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    branches_repo: BranchRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_report_service: PayrollReportService


def _setting(settings: Any, name: str, default: Any) -> Any:
    if isinstance(settings, dict):
        return settings.get(name, default)
    return getattr(settings, name, default)


def build_container(*, settings: Any, store: Optional[InMemoryStore] = None) -> Container:
    """Wire repositories and services.

    ``settings`` is a settings module (or a dict with the same keys). Passing
    ``store`` forces the in-memory backend with that store.
    """

    backend = str(_setting(settings, "STORE_BACKEND", STORE_MYSQL)).lower()
    conn: Optional[DatabaseConnection] = None

    if store is not None or backend == STORE_MEMORY:
        if store is None:
            seed_path = _setting(settings, "SEED_DOCUMENTS_PATH", None)
            store = InMemoryStore.from_json_file(seed_path) if seed_path else InMemoryStore()
        employees_repo: EmployeeRepository = store.employees
        departments_repo: DepartmentRepository = store.departments
        branches_repo: BranchRepository = store.branches
        attendance_repo: AttendanceRepository = store.attendance
        leaves_repo: LeaveRepository = store.leaves
        backend = STORE_MEMORY
    elif backend == STORE_MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_settings(_setting(settings, "DB_CONFIG", {})))
        employees_repo = MySQLEmployeeRepository(conn)
        departments_repo = MySQLDepartmentRepository(conn)
        branches_repo = MySQLBranchRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        leaves_repo = MySQLLeaveRepository(conn)
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    shift_resolver = ShiftResolver()
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        departments_repo,
        branches_repo,
        geofence=GeofenceValidator(
            timeout_seconds=float(_setting(settings, "LOCATION_TIMEOUT_SECONDS", DEFAULT_LOCATION_TIMEOUT_SECONDS))
        ),
        shift_resolver=shift_resolver,
        enforce_checkin_deadline=bool(_setting(settings, "ENFORCE_CHECKIN_DEADLINE", False)),
    )
    leave_service = LeaveService(leaves_repo)
    payroll_report_service = PayrollReportService(
        attendance_repo,
        employees_repo,
        departments_repo,
        leaves_repo,
        evaluator=PolicyEvaluator(shift_resolver=shift_resolver),
        converter=PointsConverter(
            StandardPayrollCalculator(
                point_value=float(_setting(settings, "POINT_VALUE", DEFAULT_POINT_VALUE)),
                days_per_month=int(_setting(settings, "DAYS_PER_SALARY_MONTH", DAYS_PER_SALARY_MONTH)),
            )
        ),
    )
    logger.info("container ready: store=%s", backend)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        branches_repo=branches_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_report_service=payroll_report_service,
    )
