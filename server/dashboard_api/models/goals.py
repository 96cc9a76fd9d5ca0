"""Activity goal request and response models."""
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal

GoalTypeName = Literal["count_per_period", "days_per_period", "percent_improvement"]
GoalStatusName = Literal["met", "partial", "unmet"]


class ActivityIn(BaseModel):
    """Activity as it currently exists (group membership at evaluation time)."""

    id: int
    group_id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    deleted_at: Optional[datetime] = None


class ActivityLogIn(BaseModel):
    activity_id: int
    logged_at: datetime
    notes: Optional[str] = None


class GoalIn(BaseModel):
    """Goal scoped to exactly one of activity_id or group_id."""

    id: int
    goal_type: GoalTypeName
    target_value: int
    period_days: int
    activity_id: Optional[int] = None
    group_id: Optional[int] = None


class GoalProgressRequest(BaseModel):
    goal: GoalIn
    logs: list[ActivityLogIn]
    activities: list[ActivityIn] = Field(default_factory=list)
    now: Optional[datetime] = Field(default=None, description="End of the period; defaults to the current time")


class GoalProgressResponse(BaseModel):
    """Goal evaluation for one period."""

    model_config = ConfigDict(populate_by_name=True)

    goal_id: int = Field(serialization_alias="goalId")
    goal_type: GoalTypeName = Field(serialization_alias="goalType")
    observed_value: float = Field(serialization_alias="observedValue")
    target_value: int = Field(serialization_alias="targetValue")
    percentage: float
    status: GoalStatusName
    period_start: datetime = Field(serialization_alias="periodStart")
    period_end: datetime = Field(serialization_alias="periodEnd")
