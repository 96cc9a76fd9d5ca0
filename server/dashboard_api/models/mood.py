"""Mood check-in request and response models."""
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class MoodCheckinIn(BaseModel):
    """Mood check-in as supplied by the persistence layer."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    rating: int = Field(ge=1, le=7)
    created_at: datetime
    activity_ids: list[int] = Field(default_factory=list)
    notes: Optional[str] = None


class MoodSummaryRequest(BaseModel):
    """Check-ins, newest first."""

    checkins: list[MoodCheckinIn]


class MoodSummaryResponse(BaseModel):
    """Average, count and latest check-in."""

    model_config = ConfigDict(populate_by_name=True)

    average_rating: float = Field(serialization_alias="averageRating")
    count: int
    most_recent: Optional[MoodCheckinIn] = Field(default=None, serialization_alias="mostRecent")


class MoodStatisticsRequest(BaseModel):
    checkins: list[MoodCheckinIn]
    days: Optional[float] = Field(default=None, gt=0, description="Length of the window in days")


class MoodStatisticsResponse(BaseModel):
    """Distribution statistics; all fields null when there are no check-ins."""

    min: Optional[int] = None
    max: Optional[int] = None
    average: Optional[float] = None
    median: Optional[float] = None
    mode: Optional[int] = None
    total_checkins: int = 0
    distribution: dict[int, int] = Field(default_factory=dict)
    checkins_per_day: float = 0.0


class CorrelationRequest(BaseModel):
    checkins: list[MoodCheckinIn]
    activity_id: int


class CorrelationResponse(BaseModel):
    """Mean mood for check-ins that include one activity."""

    activity_id: int
    no_data: bool
    average_rating: Optional[float] = None
    checkin_count: int = 0
