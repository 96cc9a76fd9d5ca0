"""Assessment reminder schedule API routes."""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter

from wellbeing_engine.schedule import AssessmentSchedule, due_schedules, next_trigger

from ..dependencies import as_utc, check_record_limit
from ..models.schedules import DueSchedulesRequest, NextTriggerRequest, NextTriggerResponse, ScheduleIn

router = APIRouter(prefix="/api/schedules", tags=["Schedules"])


def _to_schedule(model: ScheduleIn) -> AssessmentSchedule:
    return AssessmentSchedule(
        id=model.id,
        instrument=model.instrument,
        frequency=model.frequency,
        time_of_day=model.time_of_day,
        day_of_week=model.day_of_week,
        day_of_month=model.day_of_month,
        enabled=model.enabled,
        last_triggered_at=as_utc(model.last_triggered_at),
    )


def _now(value: Optional[datetime]) -> datetime:
    return as_utc(value) or datetime.now(timezone.utc)


@router.post("/next", response_model=NextTriggerResponse)
async def get_next_trigger(request: NextTriggerRequest):
    """First trigger time strictly after `after`."""
    schedule = _to_schedule(request.schedule)
    return NextTriggerResponse(schedule_id=schedule.id, next_trigger=next_trigger(schedule, _now(request.after)))


@router.post("/due")
async def get_due_schedules(request: DueSchedulesRequest):
    """Schedules due at `now`, earliest time of day first."""
    check_record_limit(request.schedules, "schedules")
    schedules = [_to_schedule(s) for s in request.schedules]
    return [s.to_dict() for s in due_schedules(schedules, _now(request.now))]
