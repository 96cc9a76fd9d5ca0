"""
Mood Aggregation Module.

Summary statistics over mood check-ins and per-activity mood
correlation. Callers filter by date range before aggregating (see
filter_by_range) and supply check-ins newest first; nothing here sorts
or drops records.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from .errors import InvalidInput
from .models import MOOD_RATING_MAX, MOOD_RATING_MIN, Activity, MoodCheckin, validate_mood_rating

logger = logging.getLogger(__name__)

RATING_LABELS = {
    1: "Terrible",
    2: "Very Bad",
    3: "Bad",
    4: "Ok",
    5: "Good",
    6: "Very Good",
    7: "Excellent",
}

# Old 1-5 scale -> current 1-7 scale
LEGACY_RATING_MAP = {1: 1, 2: 3, 3: 4, 4: 5, 5: 7}


class _NoData:
    """Sentinel for an aggregate over an empty subset."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA = _NoData()


@dataclass(frozen=True)
class MoodSummary:
    """Average, count and latest entry of a check-in sequence."""

    average_rating: float
    count: int
    most_recent: Optional[MoodCheckin] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "average_rating": self.average_rating,
            "count": self.count,
            "most_recent": self.most_recent.to_dict() if self.most_recent else None,
        }


@dataclass(frozen=True)
class ActivityCorrelation:
    """Mean mood of the check-ins that include one activity."""

    activity_id: int
    average_rating: float
    checkin_count: int
    activity: Optional[Activity] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "activity_id": self.activity_id,
            "activity": self.activity.to_dict() if self.activity else None,
            "average_rating": self.average_rating,
            "checkin_count": self.checkin_count,
        }


@dataclass(frozen=True)
class MoodStatistics:
    """Distribution statistics for a set of check-ins."""

    min: int
    max: int
    average: float
    median: float
    mode: int
    total_checkins: int
    distribution: Dict[int, int] = field(default_factory=dict)
    checkins_per_day: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "min": self.min,
            "max": self.max,
            "average": self.average,
            "median": self.median,
            "mode": self.mode,
            "total_checkins": self.total_checkins,
            "distribution": dict(self.distribution),
            "checkins_per_day": self.checkins_per_day,
        }


def summarize(checkins: Sequence[MoodCheckin]) -> MoodSummary:
    """
    Summarize check-ins supplied newest first.

    An empty sequence yields an average of 0 and no most_recent entry.
    most_recent is simply the first element; the input order is trusted.
    """
    count = len(checkins)
    if count == 0:
        return MoodSummary(average_rating=0.0, count=0, most_recent=None)

    average = sum(c.rating for c in checkins) / count
    logger.debug(f"[MOOD] Summarized {count} check-ins: average={average:.2f}")
    return MoodSummary(average_rating=average, count=count, most_recent=checkins[0])


def correlate(
    checkins: Iterable[MoodCheckin],
    activity_id: int,
    activity: Optional[Activity] = None,
) -> Union[ActivityCorrelation, _NoData]:
    """
    Mean rating of the check-ins linked to activity_id.

    Returns:
        ActivityCorrelation, or NO_DATA when no check-in includes the
        activity (a numeric 0 would read as a rating)
    """
    ratings = [c.rating for c in checkins if activity_id in c.activity_ids]
    if not ratings:
        return NO_DATA

    return ActivityCorrelation(
        activity_id=activity_id,
        average_rating=sum(ratings) / len(ratings),
        checkin_count=len(ratings),
        activity=activity,
    )


def activity_breakdown(
    checkins: Sequence[MoodCheckin],
    activities: Iterable[Activity],
) -> List[ActivityCorrelation]:
    """
    Correlation for every activity that appears in at least one check-in.

    Soft-deleted activities are included so history stays complete.
    Sorted by average rating (best first), then by name.
    """
    results = []
    for activity in activities:
        correlation = correlate(checkins, activity.id, activity)
        if correlation is not NO_DATA:
            results.append(correlation)

    results.sort(key=lambda c: (-c.average_rating, c.activity.name))
    return results


def mood_statistics(
    checkins: Sequence[MoodCheckin],
    days: Optional[float] = None,
) -> Optional[MoodStatistics]:
    """
    Min, max, mean, median, mode and rating distribution.

    Args:
        checkins: Check-ins in any order
        days: Length of the window the check-ins were drawn from, used
            for checkins_per_day

    Returns:
        MoodStatistics, or None for an empty sequence
    """
    if not checkins:
        return None

    ratings = sorted(c.rating for c in checkins)
    n = len(ratings)
    mid = n // 2
    if n % 2 == 0:
        median = (ratings[mid - 1] + ratings[mid]) / 2
    else:
        median = float(ratings[mid])

    counts = Counter(ratings)
    # Lowest rating wins a tie
    mode = max(sorted(counts), key=lambda r: counts[r])
    distribution = {r: counts.get(r, 0) for r in range(MOOD_RATING_MIN, MOOD_RATING_MAX + 1)}

    per_day = n / days if days and days > 0 else 0.0

    return MoodStatistics(
        min=ratings[0],
        max=ratings[-1],
        average=sum(ratings) / n,
        median=median,
        mode=mode,
        total_checkins=n,
        distribution=distribution,
        checkins_per_day=per_day,
    )


def rating_label(rating: int) -> str:
    """Display label for a 1-7 rating."""
    return RATING_LABELS[validate_mood_rating(rating)]


def is_negative(rating: int) -> bool:
    return validate_mood_rating(rating) <= 3


def is_neutral(rating: int) -> bool:
    return validate_mood_rating(rating) == 4


def is_positive(rating: int) -> bool:
    return validate_mood_rating(rating) >= 5


def convert_legacy_rating(rating: int) -> int:
    """Map a rating from the retired 1-5 scale onto the 1-7 scale."""
    if rating not in LEGACY_RATING_MAP or isinstance(rating, bool):
        raise InvalidInput(
            f"Invalid legacy mood rating: {rating!r}. Must be between 1 and 5",
            field="rating",
        )
    return LEGACY_RATING_MAP[rating]


class TimeRange(str, Enum):
    """Preset dashboard windows."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL_TIME = "all_time"

    @property
    def days(self) -> Optional[int]:
        return {
            TimeRange.WEEK: 7,
            TimeRange.MONTH: 30,
            TimeRange.QUARTER: 90,
            TimeRange.YEAR: 365,
        }.get(self)

    def bounds(self, now: datetime) -> Optional[Tuple[datetime, datetime]]:
        """(start, end) ending at now, or None for ALL_TIME."""
        if self.days is None:
            return None
        return now - timedelta(days=self.days), now


T = TypeVar("T")


def filter_by_range(
    records: Iterable[T],
    start: Optional[datetime],
    end: Optional[datetime],
    key=lambda r: r.created_at,
) -> List[T]:
    """
    Keep records whose timestamp lies within [start, end], preserving order.

    Either bound may be None for an open range. key extracts the
    timestamp (created_at for check-ins; pass lambda r: r.logged_at for
    activity logs).
    """
    return [
        r for r in records
        if (start is None or key(r) >= start) and (end is None or key(r) <= end)
    ]
