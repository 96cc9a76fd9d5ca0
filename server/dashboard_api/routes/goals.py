"""Activity goal and reporting API routes."""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from wellbeing_engine.goal_evaluator import activity_frequency, activity_trend, evaluate
from wellbeing_engine.models import Activity, ActivityGoal, ActivityLog

from ..config import get_settings
from ..dependencies import as_utc, check_record_limit
from ..models.goals import ActivityIn, ActivityLogIn, GoalIn, GoalProgressRequest, GoalProgressResponse

router = APIRouter(prefix="/api/goals", tags=["Goals"])


class ActivityReportRequest(BaseModel):
    """Logs for one activity."""
    activity_id: int
    logs: list[ActivityLogIn]
    start: Optional[datetime] = None
    end: Optional[datetime] = None


def _to_goal(model: GoalIn) -> ActivityGoal:
    return ActivityGoal(
        id=model.id,
        goal_type=model.goal_type,
        target_value=model.target_value,
        period_days=model.period_days,
        activity_id=model.activity_id,
        group_id=model.group_id,
    )


def _to_log(model: ActivityLogIn) -> ActivityLog:
    return ActivityLog(activity_id=model.activity_id, logged_at=as_utc(model.logged_at), notes=model.notes)


def _to_activity(model: ActivityIn) -> Activity:
    return Activity(
        id=model.id,
        group_id=model.group_id,
        name=model.name,
        color=model.color,
        icon=model.icon,
        deleted_at=as_utc(model.deleted_at),
    )


def _now(value: Optional[datetime]) -> datetime:
    return as_utc(value) or datetime.now(timezone.utc)


@router.post("/progress", response_model=GoalProgressResponse)
async def get_goal_progress(request: GoalProgressRequest):
    """Evaluate a goal for the period ending at `now`."""
    check_record_limit(request.logs, "logs")
    progress = evaluate(
        _to_goal(request.goal),
        [_to_log(log) for log in request.logs],
        [_to_activity(a) for a in request.activities],
        now=_now(request.now),
    )
    return GoalProgressResponse(**progress.to_dict())


@router.post("/frequency")
async def get_activity_frequency(request: ActivityReportRequest):
    """Distinct active days, total logs and days per week in [start, end]."""
    check_record_limit(request.logs, "logs")
    logs = [_to_log(log) for log in request.logs]
    end = _now(request.end)
    start = as_utc(request.start) or min((log.logged_at for log in logs), default=end)
    report = activity_frequency(request.activity_id, logs, start, end)
    return report.to_dict()


@router.post("/trend")
async def get_activity_trend(
    request: ActivityReportRequest,
    period_days: int = Query(default=7, ge=1, le=365, description="Period length in days"),
):
    """Active days this period versus the previous period."""
    check_record_limit(request.logs, "logs")
    report = activity_trend(
        request.activity_id,
        [_to_log(log) for log in request.logs],
        period_days,
        _now(request.end),
        deadband=get_settings().activity_trend_deadband,
    )
    return report.to_dict()
