import io
from datetime import date, datetime

import pandas as pd
import pytest

from src.attendance_points.attendance_points.main import create_app

BRANCH = {"latitude": 33.3152, "longitude": 44.3661}


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(store=store)
    return app.test_client()


def _seed_record(store, employee_id="emp-1"):
    rid = store.attendance.create_checkin(
        employee_id=employee_id,
        branch_id="br-1",
        check_in_time=datetime(2025, 3, 2, 9, 25),
        employee_name="Ali",
        branch_name="Main Office",
    )
    store.attendance.update_checkout(record_id=rid, check_out_time=datetime(2025, 3, 2, 17, 40))
    return rid


def test_checkin_status_checkout(client):
    res = client.post("/api/attendance/checkin", json={"employee_id": "emp-1", **BRANCH})
    assert res.status_code == 201
    record_id = res.get_json()["record_id"]

    status = client.get("/api/attendance/status/emp-1").get_json()
    assert status["checked_in"] is True
    assert status["current"]["record_id"] == record_id
    assert status["current"]["status"] == "checked-in"

    res = client.post("/api/attendance/checkout", json={"employee_id": "emp-1"})
    assert res.status_code == 200
    assert client.get("/api/attendance/status/emp-1").get_json()["checked_in"] is False


def test_checkin_out_of_range_reports_distance(client):
    res = client.post("/api/attendance/checkin", json={"employee_id": "emp-1", "latitude": 33.3252, "longitude": 44.3661})
    body = res.get_json()
    assert res.status_code == 400
    assert body["code"] == "out_of_range"
    assert body["distance"] > body["radius"] == 100


@pytest.mark.parametrize(
    "payload,code",
    [
        ({"employee_id": "emp-1"}, "location_unavailable"),
        ({"employee_id": "emp-remote", **BRANCH}, "no_branch_assigned"),
        ({"employee_id": "emp-1", "latitude": "north", "longitude": 1}, "validation_error"),
        ({}, "validation_error"),
        ({"employee_id": "emp-1", "latitude": "nan", "longitude": "nan"}, "validation_error"),
        ({"employee_id": "emp-1", "latitude": "inf", "longitude": 1}, "validation_error"),
        ({"employee_id": "emp-1", "latitude": 95, "longitude": 44.3661}, "location_unavailable"),
    ],
)
def test_checkin_rejections(client, payload, code):
    res = client.post("/api/attendance/checkin", json=payload)
    assert res.status_code == 400
    assert res.get_json()["code"] == code


def test_second_checkin_is_rejected(client):
    client.post("/api/attendance/checkin", json={"employee_id": "emp-1", **BRANCH})
    res = client.post("/api/attendance/checkin", json={"employee_id": "emp-1", **BRANCH})
    assert res.get_json()["code"] == "already_checked_in"


def test_checkout_without_checkin(client):
    res = client.post("/api/attendance/checkout", json={"employee_id": "emp-1"})
    assert res.status_code == 400


def test_leave_flow(client):
    res = client.post(
        "/api/leaves",
        json={"employee_id": "emp-1", "type": "full_day", "start_date": "2025-03-04", "end_date": "2025-03-05", "reason": "trip"},
    )
    assert res.status_code == 201
    request_id = res.get_json()["request_id"]

    assert client.post(f"/api/leaves/{request_id}/approve", json={"reviewer_id": "mgr"}).status_code == 200
    again = client.post(f"/api/leaves/{request_id}/reject", json={"reviewer_id": "mgr"})
    assert again.status_code == 400

    leaves = client.get("/api/leaves/employee/emp-1").get_json()["leaves"]
    assert leaves[0]["status"] == "approved"
    assert leaves[0]["start_date"] == "2025-03-04"


def test_leave_validation(client):
    res = client.post("/api/leaves", json={"employee_id": "emp-1", "type": "holiday", "reason": "x"})
    assert res.status_code == 400
    res = client.post("/api/leaves", json={"employee_id": "emp-1", "type": "time", "date": "03/04/2025", "reason": "x"})
    assert res.get_json()["code"] == "validation_error"


def test_report_json(client, store):
    _seed_record(store)
    body = client.get("/api/reports/attendance?start=2025-03-02&end=2025-03-02").get_json()
    assert body["rows"][0]["late_minutes"] == 15
    assert body["summary"][0]["employee_id"] == "emp-1"


def test_report_range_must_be_ordered(client):
    res = client.get("/api/reports/attendance?start=2025-03-05&end=2025-03-01")
    assert res.status_code == 400


def test_report_exports(client, store):
    _seed_record(store)
    csv_res = client.get("/api/reports/attendance.csv?start=2025-03-02&end=2025-03-02")
    assert csv_res.mimetype == "text/csv"
    assert "attachment" in csv_res.headers["Content-Disposition"]
    assert "emp-1" in csv_res.data.decode("utf-8-sig")

    xlsx_res = client.get("/api/reports/attendance.xlsx?start=2025-03-02&end=2025-03-02")
    assert xlsx_res.status_code == 200
    summary = pd.read_excel(io.BytesIO(xlsx_res.data), sheet_name="Summary")
    assert list(summary["employee_id"]) == ["emp-1"]


def test_clear_records(client, store):
    _seed_record(store)
    res = client.delete("/api/attendance/records")
    assert res.get_json()["removed"] == 1
    assert store.attendance.items == {}


def test_unexpected_error_is_500(client, store, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(store.attendance, "list_between", boom)
    res = client.get(f"/api/reports/attendance?end={date(2025, 3, 2).isoformat()}")
    assert res.status_code == 500
    assert res.get_json()["code"] == "server_error"


def test_rejected_coordinates_do_not_create_a_record(client, store):
    client.post("/api/attendance/checkin", json={"employee_id": "emp-1", "latitude": "nan", "longitude": "nan"})
    assert store.attendance.items == {}
