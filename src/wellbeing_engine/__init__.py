"""
Wellbeing Engine.

Pure scoring and aggregation for mood tracking: questionnaire scoring,
mood summaries, activity goal progress, period-over-period trends and
assessment reminder schedules.
"""

from .errors import WellbeingError, InvalidInput, ConfigurationError
from .models import (
    AssessmentResponse,
    SeverityBand,
    SeverityLevel,
    MoodCheckin,
    Activity,
    ActivityGroup,
    ActivityLog,
    ActivityGoal,
    GoalType,
    GoalStatus,
    GoalProgress,
    TrendDirection,
)
from .instruments import get_instrument, list_instruments, validate_instruments
from .assessment_scorer import AssessmentScorer, AssessmentScore, score
from .mood_aggregator import NO_DATA, summarize, correlate, mood_statistics
from .goal_evaluator import evaluate
from .trend_comparator import compare
from .schedule import AssessmentSchedule, ScheduleFrequency, next_trigger, due_schedules

__all__ = [
    "WellbeingError",
    "InvalidInput",
    "ConfigurationError",
    "AssessmentResponse",
    "SeverityBand",
    "SeverityLevel",
    "MoodCheckin",
    "Activity",
    "ActivityGroup",
    "ActivityLog",
    "ActivityGoal",
    "GoalType",
    "GoalStatus",
    "GoalProgress",
    "TrendDirection",
    "get_instrument",
    "list_instruments",
    "validate_instruments",
    "AssessmentScorer",
    "AssessmentScore",
    "score",
    "NO_DATA",
    "summarize",
    "correlate",
    "mood_statistics",
    "evaluate",
    "compare",
    "AssessmentSchedule",
    "ScheduleFrequency",
    "next_trigger",
    "due_schedules",
]
