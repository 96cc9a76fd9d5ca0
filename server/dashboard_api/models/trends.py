"""Trend comparison models."""
from pydantic import BaseModel, Field
from typing import Optional, Literal

Direction = Literal["improving", "worsening", "flat"]


class CompareRequest(BaseModel):
    """Aggregates for two non-overlapping periods."""

    current: float
    previous: float
    higher_is_better: bool = True
    deadband: Optional[float] = Field(default=None, ge=0, description="Defaults to the configured deadband")


class TrendResponse(BaseModel):
    current: float
    previous: float
    delta: float
    direction: Direction
