"""Assessment schedule request and response models."""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, Literal

FrequencyName = Literal["daily", "weekly", "biweekly", "monthly"]


class ScheduleIn(BaseModel):
    """Recurring reminder; day_of_week is 0 = Sunday .. 6 = Saturday."""

    id: int
    instrument: str
    frequency: FrequencyName
    time_of_day: str = Field(description="Time of day as HH:MM in the reference time's offset")
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    enabled: bool = True
    last_triggered_at: Optional[datetime] = None


class NextTriggerRequest(BaseModel):
    schedule: ScheduleIn
    after: Optional[datetime] = Field(default=None, description="Reference time; defaults to the current time")


class NextTriggerResponse(BaseModel):
    schedule_id: int
    next_trigger: datetime


class DueSchedulesRequest(BaseModel):
    schedules: list[ScheduleIn]
    now: Optional[datetime] = None
