from __future__ import annotations

import csv
import io

import pandas as pd

from .service import ReportData

REPORT_COLUMNS = [
    "work_date",
    "employee_id",
    "employee_name",
    "branch_name",
    "check_in",
    "check_out",
    "late_minutes",
    "overtime_minutes",
    "net_points",
    "salary_deduction_days",
    "is_absent",
    "has_full_day_leave",
    "has_time_leave",
]

SUMMARY_COLUMNS = [
    "employee_id",
    "employee_name",
    "records",
    "total_late_minutes",
    "total_overtime_minutes",
    "total_points",
    "points_in_currency",
    "daily_salary",
    "total_deduction_days",
    "total_deduction_currency",
]


def report_to_csv(data: ReportData) -> bytes:
    """Report rows as CSV (utf-8 with BOM so spreadsheet apps detect the encoding)."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=REPORT_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def report_to_xlsx(data: ReportData) -> bytes:
    """Workbook with an "Attendance" sheet and a per-employee "Summary" sheet."""
    rows_df = pd.DataFrame(data.rows, columns=REPORT_COLUMNS)
    summary_df = pd.DataFrame(data.summary, columns=SUMMARY_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        rows_df.to_excel(writer, index=False, sheet_name="Attendance")
        summary_df.to_excel(writer, index=False, sheet_name="Summary")
    return output.getvalue()
