"""
Assessment Schedule Module.

Recurring reminders to complete a questionnaire: daily, weekly,
biweekly or monthly at a fixed time of day. Computes the next trigger
time and whether a schedule is due; sending the reminder and recording
last_triggered_at belong to the caller.
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from .errors import InvalidInput
from .instruments import get_instrument

logger = logging.getLogger(__name__)

_TIME_OF_DAY = re.compile(r"^(\d{2}):(\d{2})$")


class ScheduleFrequency(str, Enum):
    """How often a schedule recurs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def min_gap(self) -> Optional[timedelta]:
        """Minimum time between triggers for the fixed-interval frequencies."""
        return {
            ScheduleFrequency.WEEKLY: timedelta(days=7),
            ScheduleFrequency.BIWEEKLY: timedelta(days=14),
        }.get(self)


def parse_time_of_day(value: str) -> time:
    """
    Parse a zero-padded 24-hour "HH:MM" string.

    Raises:
        InvalidInput: If the value is not a valid HH:MM time
    """
    match = _TIME_OF_DAY.match(value) if isinstance(value, str) else None
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour < 24 and minute < 60:
            return time(hour, minute)
    raise InvalidInput(
        f"Invalid time format: {value!r}. Must be HH:MM (00:00-23:59)",
        field="time_of_day",
    )


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    index = day.month - 1 + months
    year, month = day.year + index // 12, index % 12 + 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def _weekday_from_sunday(day: date) -> int:
    return (day.weekday() + 1) % 7


@dataclass(frozen=True)
class AssessmentSchedule:
    """
    A recurring reminder for one instrument.

    day_of_week (0 = Sunday .. 6 = Saturday) is required for weekly and
    biweekly schedules; day_of_month (1-31) for monthly ones. A
    day_of_month past the end of a short month fires on its last day.
    """

    id: int
    instrument: str
    frequency: ScheduleFrequency
    time_of_day: str
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    enabled: bool = True
    last_triggered_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "instrument", get_instrument(self.instrument).code)
        frequency = self.frequency.lower() if isinstance(self.frequency, str) else self.frequency
        try:
            object.__setattr__(self, "frequency", ScheduleFrequency(frequency))
        except ValueError:
            raise InvalidInput(
                f"Invalid frequency: '{self.frequency}'. Must be one of: "
                f"{', '.join(f.value for f in ScheduleFrequency)}",
                field="frequency",
            ) from None
        parse_time_of_day(self.time_of_day)

        if self.day_of_week is not None and not 0 <= self.day_of_week <= 6:
            raise InvalidInput(
                f"Invalid day of week: {self.day_of_week}. Must be 0-6 (Sunday-Saturday)",
                field="day_of_week",
            )
        if self.day_of_month is not None and not 1 <= self.day_of_month <= 31:
            raise InvalidInput(
                f"Invalid day of month: {self.day_of_month}. Must be 1-31",
                field="day_of_month",
            )

        if self.frequency in (ScheduleFrequency.WEEKLY, ScheduleFrequency.BIWEEKLY):
            if self.day_of_week is None:
                raise InvalidInput(
                    f"day_of_week required for {self.frequency.value} schedules",
                    field="day_of_week",
                )
        elif self.frequency == ScheduleFrequency.MONTHLY and self.day_of_month is None:
            raise InvalidInput("day_of_month required for monthly schedules", field="day_of_month")

    @property
    def target_time(self) -> time:
        return parse_time_of_day(self.time_of_day)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "instrument": self.instrument,
            "frequency": self.frequency.value,
            "time_of_day": self.time_of_day,
            "day_of_week": self.day_of_week,
            "day_of_month": self.day_of_month,
            "enabled": self.enabled,
            "last_triggered_at": (
                self.last_triggered_at.isoformat() if self.last_triggered_at else None
            ),
        }


def _at(day: date, target: time, like: datetime) -> datetime:
    return datetime.combine(day, target, tzinfo=like.tzinfo)


def next_trigger(schedule: AssessmentSchedule, after: datetime) -> datetime:
    """
    First trigger time strictly later than `after`.

    The result carries after's tzinfo. Biweekly schedules step two weeks
    only when the target weekday has already passed today; otherwise
    they fire on the next matching weekday like weekly ones.
    """
    target = schedule.target_time
    today = after.date()

    if schedule.frequency == ScheduleFrequency.DAILY:
        trigger = _at(today, target, after)
        if trigger <= after:
            trigger += timedelta(days=1)
        return trigger

    if schedule.frequency == ScheduleFrequency.MONTHLY:
        month_start = today.replace(day=1)
        for offset in (0, 1):
            month = add_months(month_start, offset)
            day = min(schedule.day_of_month, days_in_month(month.year, month.month))
            trigger = _at(month.replace(day=day), target, after)
            if trigger > after:
                return trigger
        return trigger

    days_ahead = (schedule.day_of_week - _weekday_from_sunday(today)) % 7
    trigger = _at(today + timedelta(days=days_ahead), target, after)
    if trigger <= after:
        trigger += schedule.frequency.min_gap
    return trigger


def is_due(schedule: AssessmentSchedule, now: datetime) -> bool:
    """
    Whether a reminder should fire at now.

    A schedule is due when it is enabled, its time of day has arrived and
    it has never fired, or enough time has passed since it last fired:
    a new calendar day (daily), 7 or 14 days (weekly, biweekly), or one
    calendar month by date (monthly).
    """
    if not schedule.enabled or schedule.target_time > now.time():
        return False

    last = schedule.last_triggered_at
    if last is None:
        return True
    if schedule.frequency == ScheduleFrequency.DAILY:
        return last.date() < now.date()
    if schedule.frequency == ScheduleFrequency.MONTHLY:
        return add_months(last.date(), 1) <= now.date()
    return now - last >= schedule.frequency.min_gap


def due_schedules(schedules: Iterable[AssessmentSchedule], now: datetime) -> List[AssessmentSchedule]:
    """Schedules due at now, earliest time of day first."""
    due = sorted(
        (s for s in schedules if is_due(s, now)),
        key=lambda s: s.time_of_day,
    )
    logger.debug(f"[SCHEDULE] {len(due)} schedules due at {now.isoformat()}")
    return due
