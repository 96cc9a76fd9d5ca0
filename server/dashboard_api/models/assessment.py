"""Assessment scoring request and response models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from wellbeing_engine.models import SeverityLevel


class ScoreRequest(BaseModel):
    """A completed questionnaire to score."""

    instrument: str = Field(description="Instrument code, e.g. PHQ9 or GAD-7")
    responses: list[int] = Field(description="Item scores in question order")


class SeverityBandOut(BaseModel):
    """Inclusive score range for one severity level."""

    low: int
    high: int
    level: SeverityLevel
    label: str
    color: str


class AssessmentScoreResponse(BaseModel):
    """Scored questionnaire."""

    model_config = ConfigDict(populate_by_name=True)

    instrument: str
    total: int
    max_score: int = Field(serialization_alias="maxScore")
    severity: SeverityLevel
    severity_label: str = Field(serialization_alias="severityLabel")
    band: SeverityBandOut


class QuestionOut(BaseModel):
    number: int
    text: str
    options: list[str]


class ThresholdLineOut(BaseModel):
    label: str
    value: int
    color: str


class InstrumentOut(BaseModel):
    """Instrument catalog entry."""

    code: str
    name: str
    description: str
    item_count: int
    item_min: int
    item_max: int
    min_score: int
    max_score: int
    bands: list[SeverityBandOut]
    questions: Optional[list[QuestionOut]] = None
    thresholds: Optional[list[ThresholdLineOut]] = None


class StatisticsRequest(BaseModel):
    """Assessment history for one instrument, oldest first."""

    instrument: str
    scores: list[int]


class ScoreStatisticsResponse(BaseModel):
    """Chart statistics over an assessment history."""

    model_config = ConfigDict(populate_by_name=True)

    min: int
    max: int
    average: float
    total_assessments: int = Field(serialization_alias="totalAssessments")
    trend: str
