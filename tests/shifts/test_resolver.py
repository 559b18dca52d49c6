from datetime import date, datetime, timedelta

from src.attendance_points.attendance_points.employees.model import Employee
from src.attendance_points.attendance_points.shifts.resolver import ShiftResolver

DAY = date(2025, 3, 2)


def _emp(**kwargs) -> Employee:
    return Employee(employee_id="e", name="E", **kwargs)


def test_morning_is_default():
    w = ShiftResolver().resolve(_emp(), on=DAY)
    assert w.start == datetime(2025, 3, 2, 9, 0)
    assert w.end == datetime(2025, 3, 2, 17, 0)


def test_evening_preset_ends_next_day():
    w = ShiftResolver().resolve(_emp(shift="evening"), on=DAY)
    assert w.start == datetime(2025, 3, 2, 17, 0)
    assert w.end == datetime(2025, 3, 3, 1, 0)


def test_night_preset():
    w = ShiftResolver().resolve(_emp(shift="Night"), on=DAY)
    assert (w.start, w.end) == (datetime(2025, 3, 2, 1, 0), datetime(2025, 3, 2, 9, 0))


def test_explicit_times_win_over_preset():
    w = ShiftResolver().resolve(_emp(shift="night", start_time="08:30", end_time="16:30"), on=DAY)
    assert w.start == datetime(2025, 3, 2, 8, 30)
    assert w.duration_minutes == 8 * 60


def test_overnight_explicit_shift():
    w = ShiftResolver().resolve(_emp(start_time="22:00", end_time="06:00"), on=DAY)
    midnight = datetime.combine(DAY, datetime.min.time())
    assert w.end == midnight + timedelta(hours=24 + 6)
    assert w.end > w.start


def test_malformed_times_fall_back_to_preset():
    w = ShiftResolver().resolve(_emp(shift="evening", start_time="25:00", end_time="xx"), on=DAY)
    assert w.start == datetime(2025, 3, 2, 17, 0)


def test_unknown_preset_falls_back_to_morning():
    w = ShiftResolver().resolve(_emp(shift="graveyard"), on=DAY)
    assert w.start.hour == 9


def test_window_for_after_midnight_belongs_to_previous_night():
    emp = _emp(start_time="22:00", end_time="06:00")
    w = ShiftResolver().window_for(emp, datetime(2025, 3, 3, 0, 30))
    assert w.start == datetime(2025, 3, 2, 22, 0)
    assert w.end == datetime(2025, 3, 3, 6, 0)


def test_window_for_early_arrival_keeps_same_day_shift():
    w = ShiftResolver().window_for(_emp(shift="morning"), datetime(2025, 3, 3, 8, 40))
    assert w.start == datetime(2025, 3, 3, 9, 0)


def test_window_for_after_overnight_shift_ended():
    emp = _emp(start_time="22:00", end_time="06:00")
    w = ShiftResolver().window_for(emp, datetime(2025, 3, 3, 7, 0))
    assert w.start == datetime(2025, 3, 3, 22, 0)


def test_non_string_preset_falls_back_to_morning():
    w = ShiftResolver().resolve(_emp(shift=1), on=DAY)
    assert w.start.hour == 9
