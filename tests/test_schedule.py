"""
Unit tests for assessment schedules.

These tests verify:
1. Schedule validation (time of day, day fields, frequency, instrument)
2. Next trigger times for each frequency, including month-length clamping
3. Due checks and ordering of due schedules

Usage:
    pytest tests/test_schedule.py -v
"""
import pytest
from datetime import date, datetime, timedelta, timezone

from wellbeing_engine.errors import InvalidInput
from wellbeing_engine.schedule import (
    AssessmentSchedule,
    ScheduleFrequency,
    add_months,
    days_in_month,
    due_schedules,
    is_due,
    next_trigger,
    parse_time_of_day,
)

# 2024-06-15 (the conftest `now`) is a Saturday
SATURDAY, MONDAY = 6, 1


def _schedule(frequency="daily", time_of_day="09:00", **kwargs):
    kwargs.setdefault("id", 1)
    kwargs.setdefault("instrument", "PHQ9")
    return AssessmentSchedule(frequency=frequency, time_of_day=time_of_day, **kwargs)


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


# ============================================================================
# Validation Tests
# ============================================================================


class TestTimeOfDay:
    """Test HH:MM parsing."""

    @pytest.mark.parametrize("value", ["09:00", "00:00", "23:59", "12:30"])
    def test_valid(self, value):
        assert parse_time_of_day(value).strftime("%H:%M") == value

    @pytest.mark.parametrize("value", ["24:00", "09:60", "9:00", "09:0", "0900", "", None])
    def test_invalid(self, value):
        with pytest.raises(InvalidInput) as exc:
            parse_time_of_day(value)
        assert exc.value.field == "time_of_day"


class TestScheduleValidation:
    """Test AssessmentSchedule construction."""

    def test_frequency_is_case_insensitive(self):
        assert _schedule("WEEKLY", day_of_week=MONDAY).frequency is ScheduleFrequency.WEEKLY

    def test_unknown_frequency(self):
        with pytest.raises(InvalidInput) as exc:
            _schedule("hourly")
        assert exc.value.field == "frequency"

    def test_instrument_is_normalized(self):
        assert _schedule(instrument="phq-9").instrument == "PHQ9"

    def test_unknown_instrument(self):
        with pytest.raises(InvalidInput) as exc:
            _schedule(instrument="BDI2")
        assert exc.value.field == "instrument"

    def test_bad_time_of_day(self):
        with pytest.raises(InvalidInput) as exc:
            _schedule(time_of_day="25:00")
        assert exc.value.field == "time_of_day"

    @pytest.mark.parametrize("frequency", ["weekly", "biweekly"])
    def test_weekly_requires_day_of_week(self, frequency):
        with pytest.raises(InvalidInput) as exc:
            _schedule(frequency)
        assert exc.value.field == "day_of_week"

    def test_monthly_requires_day_of_month(self):
        with pytest.raises(InvalidInput) as exc:
            _schedule("monthly")
        assert exc.value.field == "day_of_month"

    @pytest.mark.parametrize("day", [-1, 7])
    def test_day_of_week_range(self, day):
        with pytest.raises(InvalidInput) as exc:
            _schedule("weekly", day_of_week=day)
        assert exc.value.field == "day_of_week"

    @pytest.mark.parametrize("day", [0, 32])
    def test_day_of_month_range(self, day):
        with pytest.raises(InvalidInput) as exc:
            _schedule("monthly", day_of_month=day)
        assert exc.value.field == "day_of_month"

    def test_to_dict(self, now):
        data = _schedule("monthly", day_of_month=31, last_triggered_at=now).to_dict()
        assert data["frequency"] == "monthly"
        assert data["day_of_month"] == 31
        assert data["last_triggered_at"] == "2024-06-15T12:00:00+00:00"


# ============================================================================
# Calendar Helper Tests
# ============================================================================


class TestCalendarHelpers:
    @pytest.mark.parametrize("year,month,days", [(2024, 2, 29), (2023, 2, 28), (2024, 4, 30), (2024, 12, 31)])
    def test_days_in_month(self, year, month, days):
        assert days_in_month(year, month) == days

    def test_add_months_clamps(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)

    def test_add_months_crosses_year(self):
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)


# ============================================================================
# Next Trigger Tests
# ============================================================================


class TestNextTrigger:
    """Test next trigger computation from 2024-06-15 12:00 UTC."""

    def test_daily_later_today(self, now):
        assert next_trigger(_schedule(time_of_day="14:00"), now) == _utc(2024, 6, 15, 14, 0)

    def test_daily_passed_rolls_to_tomorrow(self, now):
        assert next_trigger(_schedule(), now) == _utc(2024, 6, 16, 9, 0)

    def test_daily_exact_time_is_not_next(self, now):
        """The trigger must be strictly after the reference time."""
        assert next_trigger(_schedule(time_of_day="12:00"), now) == _utc(2024, 6, 16, 12, 0)

    def test_weekly_upcoming_weekday(self, now):
        schedule = _schedule("weekly", day_of_week=MONDAY)
        assert next_trigger(schedule, now) == _utc(2024, 6, 17, 9, 0)

    def test_weekly_same_day_later(self, now):
        schedule = _schedule("weekly", time_of_day="14:00", day_of_week=SATURDAY)
        assert next_trigger(schedule, now) == _utc(2024, 6, 15, 14, 0)

    def test_weekly_same_day_passed(self, now):
        schedule = _schedule("weekly", day_of_week=SATURDAY)
        assert next_trigger(schedule, now) == _utc(2024, 6, 22, 9, 0)

    def test_biweekly_same_day_passed(self, now):
        schedule = _schedule("biweekly", day_of_week=SATURDAY)
        assert next_trigger(schedule, now) == _utc(2024, 6, 29, 9, 0)

    def test_biweekly_upcoming_weekday(self, now):
        schedule = _schedule("biweekly", day_of_week=MONDAY)
        assert next_trigger(schedule, now) == _utc(2024, 6, 17, 9, 0)

    def test_monthly_later_this_month(self, now):
        schedule = _schedule("monthly", day_of_month=20)
        assert next_trigger(schedule, now) == _utc(2024, 6, 20, 9, 0)

    def test_monthly_same_day_later(self, now):
        schedule = _schedule("monthly", time_of_day="14:00", day_of_month=15)
        assert next_trigger(schedule, now) == _utc(2024, 6, 15, 14, 0)

    def test_monthly_same_day_passed(self, now):
        schedule = _schedule("monthly", day_of_month=15)
        assert next_trigger(schedule, now) == _utc(2024, 7, 15, 9, 0)

    def test_monthly_clamps_to_month_end(self, now):
        schedule = _schedule("monthly", day_of_month=31)
        assert next_trigger(schedule, now) == _utc(2024, 6, 30, 9, 0)

    def test_monthly_clamped_day_already_passed(self):
        """June 30 09:00 has passed at 12:00, so the next trigger is July 31."""
        schedule = _schedule("monthly", day_of_month=31)
        assert next_trigger(schedule, _utc(2024, 6, 30, 12, 0)) == _utc(2024, 7, 31, 9, 0)

    def test_monthly_february(self):
        schedule = _schedule("monthly", day_of_month=31)
        assert next_trigger(schedule, _utc(2024, 2, 10)) == _utc(2024, 2, 29, 9, 0)
        assert next_trigger(schedule, _utc(2023, 2, 10)) == _utc(2023, 2, 28, 9, 0)

    def test_monthly_crosses_year(self):
        schedule = _schedule("monthly", day_of_month=5)
        assert next_trigger(schedule, _utc(2024, 12, 20)) == _utc(2025, 1, 5, 9, 0)

    def test_keeps_reference_timezone(self):
        tz = timezone(timedelta(hours=2))
        result = next_trigger(_schedule(), datetime(2024, 6, 15, 8, 0, tzinfo=tz))
        assert result == datetime(2024, 6, 15, 9, 0, tzinfo=tz)
        assert result.tzinfo is tz


# ============================================================================
# Due Tests
# ============================================================================


class TestIsDue:
    """Test due checks at 2024-06-15 12:00 UTC."""

    def test_never_triggered(self, now):
        assert is_due(_schedule(), now)

    def test_disabled(self, now):
        assert not is_due(_schedule(enabled=False), now)

    def test_time_not_reached(self, now):
        assert not is_due(_schedule(time_of_day="14:00"), now)

    def test_daily(self, now):
        assert is_due(_schedule(last_triggered_at=now - timedelta(days=1)), now)
        assert not is_due(_schedule(last_triggered_at=now - timedelta(hours=2)), now)

    @pytest.mark.parametrize("frequency,gap", [("weekly", 7), ("biweekly", 14)])
    def test_fixed_gap(self, now, frequency, gap):
        due = _schedule(frequency, day_of_week=SATURDAY, last_triggered_at=now - timedelta(days=gap))
        early = _schedule(frequency, day_of_week=SATURDAY, last_triggered_at=now - timedelta(days=gap - 1))
        assert is_due(due, now)
        assert not is_due(early, now)

    def test_monthly(self, now):
        due = _schedule("monthly", day_of_month=15, last_triggered_at=_utc(2024, 5, 15, 9, 0))
        early = _schedule("monthly", day_of_month=15, last_triggered_at=_utc(2024, 5, 16, 9, 0))
        assert is_due(due, now)
        assert not is_due(early, now)


class TestDueSchedules:
    def test_sorted_by_time_of_day(self, now):
        schedules = [
            _schedule(id=1, time_of_day="11:30"),
            _schedule(id=2, time_of_day="14:00"),
            _schedule(id=3, time_of_day="07:15"),
            _schedule(id=4, time_of_day="09:00", enabled=False),
        ]
        assert [s.id for s in due_schedules(schedules, now)] == [3, 1]

    def test_empty(self, now):
        assert due_schedules([], now) == []
