from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, iso, json_body, optional_float, server_error
from ..core.exceptions import DomainError, ValidationError
from ..geo.location import StaticLocationProvider
from .model import AttendanceRecord


def _record_json(r: AttendanceRecord) -> dict:
    return {
        "record_id": r.record_id,
        "employee_id": r.employee_id,
        "employee_name": r.employee_name,
        "branch_id": r.branch_id,
        "branch_name": r.branch_name,
        "check_in_time": iso(r.check_in_time),
        "check_out_time": iso(r.check_out_time),
        "status": r.status.value,
    }


def register(app: Flask, container) -> None:
    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        try:
            data = json_body()
            employee_id = str(data.get("employee_id") or "").strip()
            if not employee_id:
                raise ValidationError("employee_id is required")
            locate = StaticLocationProvider(
                latitude=optional_float(data, "latitude"),
                longitude=optional_float(data, "longitude"),
                accuracy=optional_float(data, "accuracy"),
            )
            record_id = container.attendance_service.check_in(employee_id, locate=locate)
            return jsonify({"success": True, "record_id": record_id, "message": "Checked in"}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("checking in")

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    def api_checkout():
        try:
            data = json_body()
            employee_id = str(data.get("employee_id") or "").strip()
            if not employee_id:
                raise ValidationError("employee_id is required")
            record_id = container.attendance_service.check_out(employee_id)
            return jsonify({"success": True, "record_id": record_id, "message": "Checked out"}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("checking out")

    @app.route("/api/attendance/status/<employee_id>", methods=["GET"], endpoint="api_attendance_status")
    def api_attendance_status(employee_id: str):
        try:
            current = container.attendance_service.get_current_record(employee_id)
            limit = request.args.get("limit", default=15, type=int)
            history = container.attendance_service.get_history(employee_id, limit=limit)
            return jsonify(
                {
                    "success": True,
                    "checked_in": bool(current and current.is_open),
                    "current": _record_json(current) if current else None,
                    "history": [_record_json(r) for r in history],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("loading attendance status")

    @app.route("/api/attendance/records", methods=["DELETE"], endpoint="api_attendance_clear")
    def api_attendance_clear():
        try:
            removed = container.attendance_service.clear_all_records()
            return jsonify({"success": True, "removed": removed})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("clearing attendance records")
