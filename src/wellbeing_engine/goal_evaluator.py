"""
Goal Progress Module.

Evaluates activity goals against activity logs and produces the
frequency and period-over-period trend reports shown on the dashboard.

Periods end at the supplied evaluation time `now` and are half-open
on the left: the current period is (now - period_days, now] and the
previous period is (now - 2 * period_days, now - period_days]. Logs
outside both windows are ignored, so callers may pass a superset.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Set

from .errors import InvalidInput
from .models import (
    Activity,
    ActivityGoal,
    ActivityLog,
    GoalProgress,
    GoalStatus,
    GoalType,
    TrendDirection,
)
from .trend_comparator import compare

logger = logging.getLogger(__name__)

# Percent-change deadband for activity trend reports
ACTIVITY_TREND_DEADBAND = 10.0

# Reported improvement when the previous period had no occurrences
ZERO_BASELINE_IMPROVEMENT = 100.0


@dataclass(frozen=True)
class ActivityFrequency:
    """How often an activity was logged within a window."""

    activity_id: int
    unique_days: int
    total_logs: int
    days_per_week: float
    period_start: datetime
    period_end: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "activity_id": self.activity_id,
            "unique_days": self.unique_days,
            "total_logs": self.total_logs,
            "days_per_week": self.days_per_week,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
        }


@dataclass(frozen=True)
class ActivityTrend:
    """Active days in the current period versus the previous one."""

    activity_id: int
    current_period_days: int
    previous_period_days: int
    change_days: int
    change_percentage: float
    direction: TrendDirection

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "activity_id": self.activity_id,
            "current_period_days": self.current_period_days,
            "previous_period_days": self.previous_period_days,
            "change_days": self.change_days,
            "change_percentage": self.change_percentage,
            "direction": self.direction.value,
        }


def resolve_scope(goal: ActivityGoal, activities: Iterable[Activity]) -> Set[int]:
    """
    Activity ids whose logs count toward a goal.

    Group membership is read from the activities as they are now, not as
    they were when each log was written: moving an activity into the
    group makes its older logs count too. Soft-deleted activities drop
    out of group scope.
    """
    if not goal.is_group_scoped:
        return {goal.activity_id}
    return {
        a.id for a in activities
        if a.group_id == goal.group_id and not a.is_deleted
    }


def _in_window(ts: datetime, start: datetime, end: datetime) -> bool:
    return start < ts <= end


def _select(
    logs: Iterable[ActivityLog],
    activity_ids: Set[int],
    start: datetime,
    end: datetime,
) -> List[ActivityLog]:
    return [
        log for log in logs
        if log.activity_id in activity_ids and _in_window(log.logged_at, start, end)
    ]


def _unique_days(logs: Iterable[ActivityLog]) -> int:
    return len({log.logged_at.date() for log in logs})


def _raw_change(current: float, previous: float) -> float:
    if previous == 0:
        return ZERO_BASELINE_IMPROVEMENT if current > 0 else 0.0
    return (current - previous) / previous * 100


def percent_change(current: float, previous: float) -> float:
    """
    Percent change from previous to current, rounded to one decimal.

    A zero baseline yields ZERO_BASELINE_IMPROVEMENT when current is
    positive and 0.0 otherwise.
    """
    return round(_raw_change(current, previous), 1)


def _improvement_status(goal: ActivityGoal, current: int, previous: int) -> GoalStatus:
    # Any occurrence after an empty baseline meets the goal, whatever the target
    if previous == 0:
        return GoalStatus.MET if current > 0 else GoalStatus.UNMET

    change = _raw_change(current, previous)
    if change >= goal.target_value:
        return GoalStatus.MET
    if change > 0:
        return GoalStatus.PARTIAL
    return GoalStatus.UNMET


def evaluate(
    goal: ActivityGoal,
    logs: Sequence[ActivityLog],
    activities: Iterable[Activity] = (),
    now: Optional[datetime] = None,
) -> GoalProgress:
    """
    Evaluate a goal for the period ending at now.

    Args:
        goal: The goal definition
        logs: Activity logs covering at least the current period (and the
            previous period for percent-improvement goals)
        activities: Current activity records; required to resolve
            group-scoped goals
        now: End of the evaluation period

    Returns:
        GoalProgress for the current period

    Raises:
        InvalidInput: If now is missing, or a group-scoped goal is
            evaluated without activities
    """
    if now is None:
        raise InvalidInput("Evaluation time is required", field="now")

    activities = list(activities)
    if goal.is_group_scoped and not activities:
        raise InvalidInput(
            f"Goal {goal.id} targets group {goal.group_id}; activities are required",
            field="activities",
        )

    period = timedelta(days=goal.period_days)
    period_start = now - period
    activity_ids = resolve_scope(goal, activities)
    current = _select(logs, activity_ids, period_start, now)

    if goal.goal_type == GoalType.PERCENT_IMPROVEMENT:
        previous = _select(logs, activity_ids, period_start - period, period_start)
        observed = percent_change(len(current), len(previous))
        status = _improvement_status(goal, len(current), len(previous))
    else:
        if goal.goal_type == GoalType.DAYS_PER_PERIOD:
            observed = float(_unique_days(current))
        else:
            observed = float(len(current))
        status = GoalStatus.MET if observed >= goal.target_value else GoalStatus.UNMET

    logger.info(
        f"[GOALS] Goal {goal.id} ({goal.goal_type.value}) {status.value}: "
        f"{observed}/{goal.target_value} over {len(activity_ids)} activities"
    )
    return GoalProgress(
        goal_id=goal.id,
        goal_type=goal.goal_type,
        observed_value=observed,
        target_value=goal.target_value,
        status=status,
        period_start=period_start,
        period_end=now,
    )


def activity_frequency(
    activity_id: int,
    logs: Iterable[ActivityLog],
    start: datetime,
    end: datetime,
) -> ActivityFrequency:
    """
    Distinct active days, total logs and days per week within [start, end].
    """
    if end < start:
        raise InvalidInput("Window end precedes start", field="end")

    selected = [
        log for log in logs
        if log.activity_id == activity_id and start <= log.logged_at <= end
    ]
    unique_days = _unique_days(selected)
    weeks = (end - start).total_seconds() / 86400 / 7
    days_per_week = unique_days / weeks if weeks > 0 else 0.0

    return ActivityFrequency(
        activity_id=activity_id,
        unique_days=unique_days,
        total_logs=len(selected),
        days_per_week=days_per_week,
        period_start=start,
        period_end=end,
    )


def activity_trend(
    activity_id: int,
    logs: Sequence[ActivityLog],
    period_days: int,
    now: datetime,
    deadband: float = ACTIVITY_TREND_DEADBAND,
) -> ActivityTrend:
    """
    Compare active days in the current period with the previous period.

    Direction comes from the percent change run through the trend
    comparator (higher is better, deadband in percentage points).
    """
    if period_days < 1:
        raise InvalidInput(f"Invalid period: {period_days}", field="period_days")

    period = timedelta(days=period_days)
    ids = {activity_id}
    current_days = _unique_days(_select(logs, ids, now - period, now))
    previous_days = _unique_days(_select(logs, ids, now - 2 * period, now - period))
    change = percent_change(current_days, previous_days)
    comparison = compare(change, 0.0, higher_is_better=True, deadband=deadband)

    return ActivityTrend(
        activity_id=activity_id,
        current_period_days=current_days,
        previous_period_days=previous_days,
        change_days=current_days - previous_days,
        change_percentage=change,
        direction=comparison.direction,
    )
