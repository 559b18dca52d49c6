from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, iso, json_body, optional_date, server_error
from ..core.enums import LeaveType
from ..core.exceptions import DomainError, ValidationError
from .model import LeaveRequest
from .service import NewLeave


def _leave_json(lv: LeaveRequest) -> dict:
    return {
        "request_id": lv.request_id,
        "employee_id": lv.employee_id,
        "type": lv.type.value,
        "status": lv.status.value,
        "start_date": iso(lv.start_date),
        "end_date": iso(lv.end_date),
        "date": iso(lv.leave_date),
        "start_time": lv.start_time,
        "end_time": lv.end_time,
        "deduct_salary": lv.deduct_salary,
        "reason": lv.reason,
        "submitted_at": iso(lv.submitted_at),
        "reviewed_by": lv.reviewed_by,
        "reviewed_at": iso(lv.reviewed_at),
        "rejection_reason": lv.rejection_reason,
    }


def _reviewer(data: dict) -> str:
    reviewer = str(data.get("reviewer_id") or "").strip()
    if not reviewer:
        raise ValidationError("reviewer_id is required")
    return reviewer


def register(app: Flask, container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="api_leave_submit")
    def api_leave_submit():
        try:
            data = json_body()
            employee_id = str(data.get("employee_id") or "").strip()
            if not employee_id:
                raise ValidationError("employee_id is required")
            try:
                leave_type = LeaveType(str(data.get("type") or ""))
            except ValueError:
                raise ValidationError("type must be 'full_day' or 'time'")

            leave = NewLeave(
                type=leave_type,
                reason=str(data.get("reason") or ""),
                start_date=optional_date(data.get("start_date"), "start_date"),
                end_date=optional_date(data.get("end_date"), "end_date"),
                leave_date=optional_date(data.get("date"), "date"),
                start_time=data.get("start_time"),
                end_time=data.get("end_time"),
                deduct_salary=bool(data.get("deduct_salary", True)),
            )
            request_id = container.leave_service.submit(employee_id=employee_id, leave=leave)
            return jsonify({"success": True, "request_id": request_id}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("submitting the leave request")

    @app.route("/api/leaves/employee/<employee_id>", methods=["GET"], endpoint="api_leave_list")
    def api_leave_list(employee_id: str):
        try:
            items = container.leave_service.list_for_employee(employee_id)
            return jsonify({"success": True, "leaves": [_leave_json(lv) for lv in items]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("listing leave requests")

    @app.route("/api/leaves/<request_id>/approve", methods=["POST"], endpoint="api_leave_approve")
    def api_leave_approve(request_id: str):
        try:
            container.leave_service.approve(request_id=request_id, reviewer_id=_reviewer(json_body()))
            return jsonify({"success": True, "message": "Leave request approved"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("approving the leave request")

    @app.route("/api/leaves/<request_id>/reject", methods=["POST"], endpoint="api_leave_reject")
    def api_leave_reject(request_id: str):
        try:
            data = json_body()
            container.leave_service.reject(
                request_id=request_id,
                reviewer_id=_reviewer(data),
                reason=str(data.get("reason") or ""),
            )
            return jsonify({"success": True, "message": "Leave request rejected"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("rejecting the leave request")
