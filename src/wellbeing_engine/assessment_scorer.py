"""
Assessment Scoring Module.

Scores completed questionnaires (PHQ-9, GAD-7, CES-D, OASIS) against
the instrument catalog and maps totals to severity bands. Also provides
the chart helpers used by the dashboard: threshold lines and summary
statistics over an assessment history.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .errors import ConfigurationError, InvalidInput
from .instruments import INSTRUMENTS, InstrumentDefinition, lookup_instrument
from .models import AssessmentResponse, SeverityBand, SeverityLevel, TrendDirection
from .trend_comparator import series_trend

logger = logging.getLogger(__name__)

SEVERITY_ORDER = (
    SeverityLevel.MINIMAL,
    SeverityLevel.MILD,
    SeverityLevel.MODERATE,
    SeverityLevel.MODERATELY_SEVERE,
    SeverityLevel.SEVERE,
)


@dataclass(frozen=True)
class AssessmentScore:
    """Total score and severity band for one questionnaire."""

    instrument: str
    total: int
    band: SeverityBand
    max_score: int

    @property
    def severity(self) -> SeverityLevel:
        return self.band.level

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "instrument": self.instrument,
            "total": self.total,
            "max_score": self.max_score,
            "severity": self.band.level.value,
            "severity_label": self.band.level.display_name,
            "band": self.band.to_dict(),
        }


@dataclass(frozen=True)
class ThresholdLine:
    """Horizontal chart marker where a severity band begins."""

    label: str
    value: int
    color: str

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class ScoreStatistics:
    """Summary of an assessment history, oldest first."""

    min: int
    max: int
    average: float
    count: int
    trend: TrendDirection

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "min": self.min,
            "max": self.max,
            "average": self.average,
            "total_assessments": self.count,
            "trend": self.trend.value,
        }


class AssessmentScorer:
    """
    Scores questionnaire responses against an instrument catalog.

    The catalog is read-only configuration, validated before it gets
    here; the scorer keeps no other state and every call is a pure
    function of its arguments.
    """

    def __init__(self, instruments: Optional[Dict[str, InstrumentDefinition]] = None):
        """
        Initialize the scorer.

        Args:
            instruments: Validated catalog keyed by canonical code
                (defaults to the built-in INSTRUMENTS)
        """
        self.instruments = instruments if instruments is not None else INSTRUMENTS

    def get_instrument(self, instrument_id: str) -> InstrumentDefinition:
        """
        Look up an instrument by code.

        Raises:
            InvalidInput: If the code is not in this scorer's catalog
        """
        return lookup_instrument(self.instruments, instrument_id)

    def validate_responses(
        self, definition: InstrumentDefinition, responses: Sequence[int]
    ) -> None:
        """
        Check item count and per-item range.

        Raises:
            InvalidInput: Naming the first offending index
        """
        if len(responses) != definition.item_count:
            raise InvalidInput(
                f"{definition.code} requires {definition.item_count} responses, "
                f"got {len(responses)}",
                field="responses",
            )

        for i, value in enumerate(responses):
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or not definition.item_min <= value <= definition.item_max
            ):
                raise InvalidInput(
                    f"Question {i + 1} has invalid value: {value!r}. "
                    f"Must be {definition.item_min}-{definition.item_max}",
                    field="responses",
                    index=i,
                )

    def find_band(self, definition: InstrumentDefinition, total: int) -> SeverityBand:
        """
        Return the unique band containing total.

        Raises:
            ConfigurationError: If no band (or more than one) matches
        """
        matches = [band for band in definition.bands if band.contains(total)]
        if len(matches) != 1:
            raise ConfigurationError(
                f"{definition.code}: {len(matches)} severity bands contain score {total}"
            )
        return matches[0]

    def score(self, instrument_id: str, responses: Sequence[int]) -> AssessmentScore:
        """
        Score one questionnaire.

        Args:
            instrument_id: Instrument code (e.g. "PHQ9", "GAD-7")
            responses: Item scores in question order

        Returns:
            AssessmentScore with the summed total and its severity band
        """
        definition = self.get_instrument(instrument_id)
        responses = list(responses)
        self.validate_responses(definition, responses)

        total = sum(responses)
        band = self.find_band(definition, total)

        logger.debug(f"[SCORER] {definition.code}: total={total} severity={band.label}")
        return AssessmentScore(
            instrument=definition.code,
            total=total,
            band=band,
            max_score=definition.max_score,
        )

    def score_response(self, response: AssessmentResponse) -> AssessmentScore:
        """Score a stored AssessmentResponse record."""
        return self.score(response.instrument, response.responses)

    def threshold_lines(self, instrument_id: str) -> List[ThresholdLine]:
        """Lower bound of every band above the first, for chart overlays."""
        definition = self.get_instrument(instrument_id)
        return [
            ThresholdLine(label=band.level.display_name, value=band.low, color=band.color)
            for band in definition.bands[1:]
        ]

    def score_statistics(
        self,
        instrument_id: str,
        totals: Sequence[int],
    ) -> Optional[ScoreStatistics]:
        """
        Summarize an assessment history for charts.

        Args:
            instrument_id: Instrument the totals belong to
            totals: Total scores, oldest first

        Returns:
            ScoreStatistics, or None when there are no totals
        """
        definition = self.get_instrument(instrument_id)
        if not totals:
            return None

        for i, total in enumerate(totals):
            if not definition.min_score <= total <= definition.max_score:
                raise InvalidInput(
                    f"Score {total} is outside {definition.code} range "
                    f"{definition.min_score}-{definition.max_score}",
                    field="scores",
                    index=i,
                )

        # Lower scores are better on every supported instrument
        trend = series_trend(totals, higher_is_better=False)
        return ScoreStatistics(
            min=min(totals),
            max=max(totals),
            average=sum(totals) / len(totals),
            count=len(totals),
            trend=trend,
        )


def compare_severity(a: SeverityLevel, b: SeverityLevel) -> int:
    """Return -1, 0 or 1 as a is less, equally or more severe than b."""
    ia = SEVERITY_ORDER.index(SeverityLevel(a))
    ib = SEVERITY_ORDER.index(SeverityLevel(b))
    return (ia > ib) - (ia < ib)


# Global singleton instance
assessment_scorer = AssessmentScorer()


def score(instrument_id: str, responses: Sequence[int]) -> AssessmentScore:
    """Convenience function to score against the built-in catalog."""
    return assessment_scorer.score(instrument_id, responses)
