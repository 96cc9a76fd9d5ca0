"""
Record types shared by the engine components.

Records are immutable snapshots handed over by the persistence layer.
Construction validates each record's own fields and raises
InvalidInput; nothing here performs I/O or holds references back to
other records (ActivityLog.activity_id is a lookup key only).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .errors import InvalidInput

# Mood scale bounds (7-point scale)
MOOD_RATING_MIN = 1
MOOD_RATING_MAX = 7

# Field limits shared by mood, assessment and activity records
MAX_NOTES_LENGTH = 5000
MAX_ACTIVITY_NAME_LENGTH = 50
MAX_ACTIVITY_ICON_LENGTH = 20

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class SeverityLevel(str, Enum):
    """Severity bucket label, least to most severe."""

    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    MODERATELY_SEVERE = "moderately_severe"
    SEVERE = "severe"

    @property
    def display_name(self) -> str:
        """Human readable label, e.g. 'Moderately Severe'."""
        return " ".join(word.capitalize() for word in self.value.split("_"))


class GoalType(str, Enum):
    """How a goal's observed value is measured."""

    COUNT_PER_PERIOD = "count_per_period"
    DAYS_PER_PERIOD = "days_per_period"
    PERCENT_IMPROVEMENT = "percent_improvement"


class GoalStatus(str, Enum):
    """Outcome of a goal evaluation."""

    MET = "met"
    PARTIAL = "partial"
    UNMET = "unmet"


class TrendDirection(str, Enum):
    """Qualitative direction of a change between two periods."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    FLAT = "flat"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_mood_rating(rating) -> int:
    """
    Check a mood rating lies on the 1-7 scale.

    Returns:
        The rating unchanged

    Raises:
        InvalidInput: If the rating is not an integer within bounds
    """
    if not _is_int(rating) or not MOOD_RATING_MIN <= rating <= MOOD_RATING_MAX:
        raise InvalidInput(
            f"Invalid mood rating: {rating!r}. "
            f"Must be between {MOOD_RATING_MIN} and {MOOD_RATING_MAX}",
            field="rating",
        )
    return rating


def validate_notes(notes: Optional[str]) -> Optional[str]:
    """Check a free-text note does not exceed MAX_NOTES_LENGTH."""
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        raise InvalidInput(
            f"Notes too long: {len(notes)} characters (max {MAX_NOTES_LENGTH})",
            field="notes",
        )
    return notes


@dataclass(frozen=True)
class AssessmentResponse:
    """One answered questionnaire."""

    instrument: str
    responses: Tuple[int, ...]
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "responses", tuple(self.responses))
        validate_notes(self.notes)


@dataclass(frozen=True)
class SeverityBand:
    """Inclusive score range [low, high] mapped to a severity level."""

    low: int
    high: int
    level: SeverityLevel
    color: str = "#6b7280"

    def contains(self, total: int) -> bool:
        return self.low <= total <= self.high

    @property
    def label(self) -> str:
        return self.level.value

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "low": self.low,
            "high": self.high,
            "level": self.level.value,
            "label": self.level.display_name,
            "color": self.color,
        }


@dataclass(frozen=True)
class MoodCheckin:
    """A single mood entry on the 1-7 scale."""

    rating: int
    created_at: datetime
    activity_ids: FrozenSet[int] = field(default_factory=frozenset)
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        validate_mood_rating(self.rating)
        validate_notes(self.notes)
        object.__setattr__(self, "activity_ids", frozenset(self.activity_ids))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "rating": self.rating,
            "created_at": self.created_at.isoformat(),
            "activity_ids": sorted(self.activity_ids),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class ActivityGroup:
    """A named category of activities."""

    id: int
    name: str
    description: Optional[str] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class Activity:
    """
    A trackable behavior belonging to exactly one group.

    Soft-deleted activities (deleted_at set) are kept so historical
    aggregates still resolve them, but they no longer count toward
    group-scoped goals.
    """

    id: int
    group_id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        name = (self.name or "").strip()
        if not name:
            raise InvalidInput("Activity name cannot be empty", field="name")
        if len(name) > MAX_ACTIVITY_NAME_LENGTH:
            raise InvalidInput(
                f"Activity name too long: {len(name)} characters "
                f"(max {MAX_ACTIVITY_NAME_LENGTH})",
                field="name",
            )
        object.__setattr__(self, "name", name)

        if self.color is not None and not _HEX_COLOR.match(self.color):
            raise InvalidInput(
                f"Invalid color format: '{self.color}'. Must be #RGB, #RRGGBB, or #RRGGBBAA",
                field="color",
            )
        if self.icon is not None:
            if not self.icon:
                raise InvalidInput("Icon cannot be an empty string", field="icon")
            if len(self.icon) > MAX_ACTIVITY_ICON_LENGTH:
                raise InvalidInput(
                    f"Activity icon too long: {len(self.icon)} characters "
                    f"(max {MAX_ACTIVITY_ICON_LENGTH})",
                    field="icon",
                )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }


@dataclass(frozen=True)
class ActivityLog:
    """One occurrence of an activity."""

    activity_id: int
    logged_at: datetime
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        validate_notes(self.notes)


@dataclass(frozen=True)
class ActivityGoal:
    """
    A target for a single activity or a whole activity group.

    Exactly one of activity_id / group_id is set. target_value is a
    count (or number of days) for the per-period types and a percentage
    for PERCENT_IMPROVEMENT.
    """

    id: int
    goal_type: GoalType
    target_value: int
    period_days: int
    activity_id: Optional[int] = None
    group_id: Optional[int] = None

    def __post_init__(self):
        if (self.activity_id is None) == (self.group_id is None):
            raise InvalidInput(
                "Goal must target exactly one of activity_id or group_id",
                field="scope",
            )
        try:
            object.__setattr__(self, "goal_type", GoalType(self.goal_type))
        except ValueError:
            raise InvalidInput(
                f"Invalid goal type: '{self.goal_type}'. Must be one of: "
                f"{', '.join(t.value for t in GoalType)}",
                field="goal_type",
            ) from None
        if not _is_int(self.target_value) or self.target_value < 1:
            raise InvalidInput(
                f"Invalid goal target: {self.target_value!r}. Must be a positive integer",
                field="target_value",
            )
        if not _is_int(self.period_days) or self.period_days < 1:
            raise InvalidInput(
                f"Invalid period: {self.period_days!r}. Must be a positive number of days",
                field="period_days",
            )

    @property
    def is_group_scoped(self) -> bool:
        return self.group_id is not None


@dataclass(frozen=True)
class GoalProgress:
    """Result of evaluating a goal over one period. Derived, never stored."""

    goal_id: int
    goal_type: GoalType
    observed_value: float
    target_value: int
    status: GoalStatus
    period_start: datetime
    period_end: datetime

    @property
    def percentage(self) -> float:
        """Observed value as a percentage of the target."""
        return (self.observed_value / self.target_value) * 100

    @property
    def is_met(self) -> bool:
        return self.status == GoalStatus.MET

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "goal_id": self.goal_id,
            "goal_type": self.goal_type.value,
            "observed_value": self.observed_value,
            "target_value": self.target_value,
            "percentage": self.percentage,
            "status": self.status.value,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
        }
