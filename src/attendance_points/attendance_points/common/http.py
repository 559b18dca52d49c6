from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, OutOfRange, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_float(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{key} must be a finite number")
    return number


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def error_response(e: DomainError):
    payload: dict[str, Any] = {"success": False, "code": e.code, "message": str(e)}
    if isinstance(e, OutOfRange):
        payload["distance"] = round(e.distance, 1)
        payload["radius"] = e.radius
    return jsonify(payload), 400


def server_error(action: str):
    logger.exception("unhandled error while %s", action)
    return jsonify({"success": False, "code": "server_error", "message": f"System error while {action}"}), 500


def iso(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value else None
