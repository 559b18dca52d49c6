import io
from datetime import date

import pandas as pd
import pytest

from src.attendance_points.attendance_points.core.enums import LeaveType, RequestStatus
from src.attendance_points.attendance_points.leaves.model import LeaveRequest
from src.attendance_points.attendance_points.payroll.export import REPORT_COLUMNS, report_to_csv, report_to_xlsx
from src.attendance_points.attendance_points.payroll.service import PayrollReportService

DAY = date(2025, 3, 2)


def _service(store) -> PayrollReportService:
    return PayrollReportService(store.attendance, store.employees, store.departments, store.leaves)


def _checkin(store, employee_id, check_in, check_out=None):
    rid = store.attendance.create_checkin(employee_id=employee_id, branch_id="br-1", check_in_time=check_in)
    if check_out:
        store.attendance.update_checkout(record_id=rid, check_out_time=check_out)
    return rid


def test_report_rows_and_summary(store, at):
    _checkin(store, "emp-1", at("09:25"), at("17:40"))
    _checkin(store, "emp-boss", at("11:00"), at("18:00"))

    data = _service(store).build_attendance_report(start=DAY, end=DAY)

    rows = {r["employee_id"]: r for r in data.rows}
    assert rows["emp-1"]["late_minutes"] == 15
    assert rows["emp-1"]["overtime_minutes"] == 40
    assert rows["emp-1"]["net_points"] == pytest.approx(40 - 7.5)
    assert rows["emp-boss"]["late_minutes"] == 0
    assert rows["emp-boss"]["check_out"] == "18:00"

    assert [s["employee_id"] for s in data.summary] == ["emp-boss", "emp-1"]
    ali = data.summary[1]
    assert ali["points_in_currency"] == pytest.approx(32_500)
    assert ali["daily_salary"] == pytest.approx(30_000)


def test_full_day_leave_deducts_salary(store, at):
    store.leaves.items["lv"] = LeaveRequest(
        request_id="lv",
        employee_id="emp-1",
        type=LeaveType.FULL_DAY,
        status=RequestStatus.APPROVED,
        start_date=DAY,
        end_date=DAY,
    )
    _checkin(store, "emp-1", at("09:00"), at("17:00"))

    data = _service(store).build_attendance_report(start=DAY, end=DAY)

    assert data.rows[0]["is_absent"] is True
    assert data.rows[0]["has_full_day_leave"] is True
    assert data.summary[0]["total_deduction_days"] == 1
    assert data.summary[0]["total_deduction_currency"] == pytest.approx(30_000)


def test_unknown_employee_is_zeroed_not_fatal(store, at):
    _checkin(store, "ghost", at("13:00"), at("20:00"))
    _checkin(store, "emp-1", at("09:00"))

    data = _service(store).build_attendance_report(start=DAY, end=DAY)

    ghost = next(r for r in data.rows if r["employee_id"] == "ghost")
    assert ghost["late_minutes"] == 0 and ghost["overtime_minutes"] == 0
    assert ghost["check_out"] == "20:00"
    assert next(s for s in data.summary if s["employee_id"] == "ghost")["employee_name"] == "-"


def test_filters(store, at):
    _checkin(store, "emp-1", at("09:00"))
    _checkin(store, "emp-remote", at("09:00"))
    _checkin(store, "emp-1", at("09:00", day=9))

    service = _service(store)
    by_dept = service.build_attendance_report(start=DAY, end=DAY, department_id="dep-remote")
    assert [r["employee_id"] for r in by_dept.rows] == ["emp-remote"]

    by_employee = service.build_attendance_report(start=DAY, end=date(2025, 3, 9), employee_id="emp-1")
    assert len(by_employee.rows) == 2


def test_csv_export(store, at):
    _checkin(store, "emp-1", at("09:25"), at("17:40"))
    payload = report_to_csv(_service(store).build_attendance_report(start=DAY, end=DAY))

    text = payload.decode("utf-8-sig")
    header, first = text.splitlines()[:2]
    assert header.split(",") == REPORT_COLUMNS
    assert first.startswith("2025-03-02,emp-1,")


def test_xlsx_export_has_both_sheets(store, at):
    _checkin(store, "emp-1", at("09:25"), at("17:40"))
    payload = report_to_xlsx(_service(store).build_attendance_report(start=DAY, end=DAY))

    sheets = pd.read_excel(io.BytesIO(payload), sheet_name=None)
    assert set(sheets) == {"Attendance", "Summary"}
    assert list(sheets["Attendance"]["employee_id"]) == ["emp-1"]
