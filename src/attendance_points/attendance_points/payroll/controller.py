from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import error_response, optional_date, server_error
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import DomainError, ValidationError
from .export import report_to_csv, report_to_xlsx

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container) -> None:
    def _build_report():
        end = optional_date(request.args.get("end"), "end") or now_local().date()
        start = optional_date(request.args.get("start"), "start") or (end - timedelta(days=DEFAULT_REPORT_DAYS - 1))
        if end < start:
            raise ValidationError("end must be on or after start")
        data = container.payroll_report_service.build_attendance_report(
            start=start,
            end=end,
            employee_id=request.args.get("employee_id") or None,
            department_id=request.args.get("department_id") or None,
        )
        return start, end, data

    def _attachment(payload: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_report_attendance")
    def api_report_attendance():
        try:
            start, end, data = _build_report()
            return jsonify(
                {
                    "success": True,
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                    "rows": data.rows,
                    "summary": data.summary,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("building the attendance report")

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="api_report_attendance_csv")
    def api_report_attendance_csv():
        try:
            start, end, data = _build_report()
            return _attachment(
                report_to_csv(data),
                mimetype="text/csv",
                filename=f"attendance_{start.isoformat()}_{end.isoformat()}.csv",
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("exporting the attendance report")

    @app.route("/api/reports/attendance.xlsx", methods=["GET"], endpoint="api_report_attendance_xlsx")
    def api_report_attendance_xlsx():
        try:
            start, end, data = _build_report()
            return _attachment(
                report_to_xlsx(data),
                mimetype=XLSX_MIMETYPE,
                filename=f"attendance_{start.isoformat()}_{end.isoformat()}.xlsx",
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("exporting the attendance report")
