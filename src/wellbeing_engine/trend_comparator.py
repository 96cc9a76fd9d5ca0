"""Period-over-period trend comparison."""

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import InvalidInput
from .models import TrendDirection

logger = logging.getLogger(__name__)

# Changes smaller than this (in the compared unit) are reported as flat
DEFAULT_DEADBAND = 1.0

# Relative change a chart series must exceed to count as a trend
DEFAULT_SERIES_THRESHOLD = 0.20


@dataclass(frozen=True)
class TrendComparison:
    """Signed change between two periods and its qualitative direction."""

    current: float
    previous: float
    delta: float
    direction: TrendDirection

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "previous": self.previous,
            "delta": self.delta,
            "direction": self.direction.value,
        }


def _direction(delta: float, higher_is_better: bool) -> TrendDirection:
    if (delta > 0) == higher_is_better:
        return TrendDirection.IMPROVING
    return TrendDirection.WORSENING


def compare(
    current: float,
    previous: float,
    higher_is_better: bool = True,
    deadband: float = DEFAULT_DEADBAND,
) -> TrendComparison:
    """
    Compare a period's value with the preceding period's.

    Args:
        current: Aggregate for the later period
        previous: Aggregate for the earlier period
        higher_is_better: False for symptom scores (PHQ-9 etc.), True for
            activity frequency and mood
        deadband: |delta| below this is reported as flat; a zero delta is
            always flat

    Returns:
        TrendComparison with delta = current - previous
    """
    if deadband < 0:
        raise InvalidInput(f"Deadband must be non-negative, got {deadband}", field="deadband")

    delta = current - previous
    if delta == 0 or abs(delta) < deadband:
        direction = TrendDirection.FLAT
    else:
        direction = _direction(delta, higher_is_better)

    logger.debug(
        f"[TREND] {previous} -> {current}: delta={delta} ({direction.value}, "
        f"higher_is_better={higher_is_better}, deadband={deadband})"
    )
    return TrendComparison(
        current=current,
        previous=previous,
        delta=delta,
        direction=direction,
    )


def series_trend(
    values: Sequence[float],
    higher_is_better: bool = True,
    relative_threshold: float = DEFAULT_SERIES_THRESHOLD,
) -> TrendDirection:
    """
    Trend of a chronological series, judged by its first and last values.

    The series is flat when it has fewer than two values, starts at zero,
    or its relative change does not exceed relative_threshold.
    """
    if len(values) < 2 or values[0] == 0:
        return TrendDirection.FLAT

    first, last = values[0], values[-1]
    change = abs((last - first) / first)
    if change <= relative_threshold:
        return TrendDirection.FLAT
    return _direction(last - first, higher_is_better)
