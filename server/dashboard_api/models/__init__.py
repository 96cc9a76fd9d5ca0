"""Pydantic models for dashboard API requests and responses."""
from .assessment import (
    ScoreRequest,
    AssessmentScoreResponse,
    InstrumentOut,
    StatisticsRequest,
    ScoreStatisticsResponse,
)
from .mood import (
    MoodCheckinIn,
    MoodSummaryRequest,
    MoodSummaryResponse,
    MoodStatisticsRequest,
    MoodStatisticsResponse,
    CorrelationRequest,
    CorrelationResponse,
)
from .goals import ActivityIn, ActivityLogIn, GoalIn, GoalProgressRequest, GoalProgressResponse
from .trends import CompareRequest, TrendResponse
from .schedules import ScheduleIn, NextTriggerRequest, NextTriggerResponse, DueSchedulesRequest

__all__ = [
    "ScoreRequest",
    "AssessmentScoreResponse",
    "InstrumentOut",
    "StatisticsRequest",
    "ScoreStatisticsResponse",
    "MoodCheckinIn",
    "MoodSummaryRequest",
    "MoodSummaryResponse",
    "MoodStatisticsRequest",
    "MoodStatisticsResponse",
    "CorrelationRequest",
    "CorrelationResponse",
    "ActivityIn",
    "ActivityLogIn",
    "GoalIn",
    "GoalProgressRequest",
    "GoalProgressResponse",
    "CompareRequest",
    "TrendResponse",
    "ScheduleIn",
    "NextTriggerRequest",
    "NextTriggerResponse",
    "DueSchedulesRequest",
]
