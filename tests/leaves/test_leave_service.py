from datetime import date, datetime

import pytest

from src.attendance_points.attendance_points.core.enums import LeaveType, RequestStatus
from src.attendance_points.attendance_points.core.exceptions import ValidationError
from src.attendance_points.attendance_points.database.memory_store import InMemoryLeaveRepository
from src.attendance_points.attendance_points.leaves.service import LeaveService, NewLeave

NOW = datetime(2025, 3, 1, 8, 0)


@pytest.fixture
def repo():
    return InMemoryLeaveRepository()


def test_submit_full_day(repo):
    svc = LeaveService(repo)
    rid = svc.submit(
        employee_id="e1",
        leave=NewLeave(type=LeaveType.FULL_DAY, reason=" trip ", start_date=date(2025, 3, 4), end_date=date(2025, 3, 5)),
        now=NOW,
    )
    saved = repo.get_by_id(rid)
    assert saved.status == RequestStatus.PENDING
    assert saved.reason == "trip"
    assert saved.submitted_at == NOW
    assert saved.leave_date is None


def test_full_day_end_before_start_is_rejected(repo):
    with pytest.raises(ValidationError):
        LeaveService(repo).submit(
            employee_id="e1",
            leave=NewLeave(type=LeaveType.FULL_DAY, reason="x", start_date=date(2025, 3, 5), end_date=date(2025, 3, 4)),
        )


def test_time_leave_normalises_times(repo):
    svc = LeaveService(repo)
    rid = svc.submit(
        employee_id="e1",
        leave=NewLeave(type=LeaveType.TIME, reason="doctor", leave_date=date(2025, 3, 4), start_time="9:00", end_time="11:30"),
    )
    saved = repo.get_by_id(rid)
    assert (saved.start_time, saved.end_time) == ("09:00", "11:30")


@pytest.mark.parametrize("start,end", [("11:00", "10:00"), ("10:00", "10:00"), ("bad", "10:00")])
def test_time_leave_invalid_window(repo, start, end):
    with pytest.raises(ValidationError):
        LeaveService(repo).submit(
            employee_id="e1",
            leave=NewLeave(type=LeaveType.TIME, reason="x", leave_date=date(2025, 3, 4), start_time=start, end_time=end),
        )


def test_reason_is_required(repo):
    with pytest.raises(ValidationError):
        LeaveService(repo).submit(
            employee_id="e1",
            leave=NewLeave(type=LeaveType.FULL_DAY, reason="  ", start_date=date(2025, 3, 4), end_date=date(2025, 3, 4)),
        )


def test_approve_then_decide_again_fails(repo):
    svc = LeaveService(repo)
    rid = svc.submit(
        employee_id="e1",
        leave=NewLeave(type=LeaveType.FULL_DAY, reason="x", start_date=date(2025, 3, 4), end_date=date(2025, 3, 4)),
    )
    svc.approve(request_id=rid, reviewer_id="mgr")
    approved = repo.get_by_id(rid)
    assert approved.status == RequestStatus.APPROVED
    assert approved.reviewed_by == "mgr"

    with pytest.raises(ValidationError):
        svc.reject(request_id=rid, reviewer_id="mgr", reason="late")


def test_reject_keeps_reason(repo):
    svc = LeaveService(repo)
    rid = svc.submit(
        employee_id="e1",
        leave=NewLeave(type=LeaveType.TIME, reason="x", leave_date=date(2025, 3, 4), start_time="10:00", end_time="11:00"),
    )
    svc.reject(request_id=rid, reviewer_id="mgr", reason=" busy day ")
    assert repo.get_by_id(rid).rejection_reason == "busy day"
    assert [lv.request_id for lv in svc.list_for_employee("e1")] == [rid]


def test_unknown_request(repo):
    with pytest.raises(ValidationError):
        LeaveService(repo).approve(request_id="nope", reviewer_id="mgr")
