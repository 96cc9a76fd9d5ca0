"""
Unit tests for mood aggregation.

These tests verify:
1. Summary (average, count, most recent) over check-ins
2. Activity correlation and the NO_DATA sentinel
3. Distribution statistics and time range filtering
4. Rating validation, labels and legacy scale conversion

Usage:
    pytest tests/test_mood_aggregator.py -v
"""
import pytest
from datetime import timedelta

from wellbeing_engine.errors import InvalidInput
from wellbeing_engine.models import Activity, MoodCheckin
from wellbeing_engine.mood_aggregator import (
    NO_DATA,
    TimeRange,
    activity_breakdown,
    convert_legacy_rating,
    correlate,
    filter_by_range,
    is_negative,
    is_neutral,
    is_positive,
    mood_statistics,
    rating_label,
    summarize,
)


# ============================================================================
# Check-in Validation Tests
# ============================================================================


class TestMoodCheckinValidation:
    """Test MoodCheckin field validation."""

    @pytest.mark.parametrize("rating", [1, 4, 7])
    def test_valid_ratings(self, make_checkin, rating):
        assert make_checkin(rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 8, -1])
    def test_out_of_range_rating(self, make_checkin, rating):
        with pytest.raises(InvalidInput) as exc:
            make_checkin(rating)
        assert exc.value.field == "rating"

    def test_bool_rating_rejected(self, make_checkin):
        with pytest.raises(InvalidInput):
            make_checkin(True)

    def test_notes_limit(self, make_checkin):
        """Notes up to 5000 characters are accepted."""
        assert len(make_checkin(4, notes="x" * 5000).notes) == 5000
        with pytest.raises(InvalidInput) as exc:
            make_checkin(4, notes="x" * 5001)
        assert exc.value.field == "notes"

    def test_activity_ids_are_frozen(self, now):
        checkin = MoodCheckin(rating=5, created_at=now, activity_ids=[1, 2, 2])
        assert checkin.activity_ids == frozenset({1, 2})


# ============================================================================
# Summary Tests
# ============================================================================


class TestSummarize:
    """Test summary aggregation."""

    def test_empty_sequence(self):
        """Empty input yields zero average and no most recent entry."""
        summary = summarize([])
        assert summary.average_rating == 0.0
        assert summary.count == 0
        assert summary.most_recent is None

    def test_average_and_most_recent(self, make_checkin):
        checkins = [make_checkin(5, 0), make_checkin(3, 1), make_checkin(4, 2)]
        summary = summarize(checkins)
        assert summary.average_rating == 4.0
        assert summary.count == 3
        assert summary.most_recent is checkins[0]

    def test_input_order_is_trusted(self, make_checkin):
        """most_recent is the first element even if it is not the newest."""
        older, newer = make_checkin(2, 5), make_checkin(6, 0)
        assert summarize([older, newer]).most_recent is older

    def test_average_within_scale(self, make_checkin):
        checkins = [make_checkin(r, i) for i, r in enumerate([1, 7, 7, 1, 3])]
        summary = summarize(checkins)
        assert 1 <= summary.average_rating <= 7
        assert summary.average_rating == pytest.approx(19 / 5)

    def test_to_dict(self, make_checkin):
        data = summarize([make_checkin(6, id=9)]).to_dict()
        assert data["average_rating"] == 6.0
        assert data["most_recent"]["id"] == 9


# ============================================================================
# Correlation Tests
# ============================================================================


class TestCorrelate:
    """Test per-activity mood correlation."""

    def test_correlation(self, make_checkin):
        checkins = [
            make_checkin(6, 0, activity_ids=[1]),
            make_checkin(4, 1, activity_ids=[1, 2]),
            make_checkin(2, 2, activity_ids=[2]),
        ]
        result = correlate(checkins, 1)
        assert result.average_rating == 5.0
        assert result.checkin_count == 2

    def test_no_matching_checkins(self, make_checkin):
        """Should return NO_DATA rather than a numeric zero."""
        result = correlate([make_checkin(5, activity_ids=[2])], 1)
        assert result is NO_DATA
        assert not result
        assert repr(result) == "NO_DATA"

    def test_empty_input(self):
        assert correlate([], 1) is NO_DATA

    def test_breakdown_sorted_by_average(self, make_checkin, activities):
        checkins = [
            make_checkin(3, 0, activity_ids=[1]),
            make_checkin(7, 1, activity_ids=[2]),
            make_checkin(3, 2, activity_ids=[3]),
        ]
        breakdown = activity_breakdown(checkins, activities)
        assert [c.activity.name for c in breakdown] == ["Yoga", "Call a friend", "Running"]

    def test_breakdown_skips_unused_activities(self, make_checkin, activities):
        breakdown = activity_breakdown([make_checkin(5, activity_ids=[2])], activities)
        assert [c.activity_id for c in breakdown] == [2]

    def test_breakdown_keeps_deleted_activities(self, make_checkin, now):
        deleted = Activity(id=4, group_id=1, name="Swimming", deleted_at=now)
        breakdown = activity_breakdown([make_checkin(5, activity_ids=[4])], [deleted])
        assert breakdown[0].activity is deleted


# ============================================================================
# Statistics Tests
# ============================================================================


class TestMoodStatistics:
    """Test distribution statistics."""

    def test_empty(self):
        assert mood_statistics([]) is None

    def test_statistics(self, make_checkin):
        checkins = [make_checkin(r, i) for i, r in enumerate([5, 3, 5, 7])]
        stats = mood_statistics(checkins, days=2)
        assert stats.min == 3
        assert stats.max == 7
        assert stats.average == 5.0
        assert stats.median == 5.0
        assert stats.mode == 5
        assert stats.total_checkins == 4
        assert stats.checkins_per_day == 2.0
        assert stats.distribution == {1: 0, 2: 0, 3: 1, 4: 0, 5: 2, 6: 0, 7: 1}

    def test_even_median(self, make_checkin):
        stats = mood_statistics([make_checkin(2), make_checkin(5)])
        assert stats.median == 3.5

    def test_mode_tie_prefers_lowest(self, make_checkin):
        stats = mood_statistics([make_checkin(6), make_checkin(2)])
        assert stats.mode == 2

    def test_no_window_means_zero_rate(self, make_checkin):
        assert mood_statistics([make_checkin(4)]).checkins_per_day == 0.0


class TestTimeRange:
    """Test preset windows and range filtering."""

    def test_days(self):
        assert TimeRange.WEEK.days == 7
        assert TimeRange.MONTH.days == 30
        assert TimeRange.QUARTER.days == 90
        assert TimeRange.YEAR.days == 365
        assert TimeRange.ALL_TIME.days is None

    def test_bounds(self, now):
        start, end = TimeRange.WEEK.bounds(now)
        assert end == now
        assert start == now - timedelta(days=7)
        assert TimeRange.ALL_TIME.bounds(now) is None

    def test_filter_by_range(self, make_checkin, now):
        checkins = [make_checkin(5, 0), make_checkin(4, 7), make_checkin(3, 8)]
        start, end = TimeRange.WEEK.bounds(now)
        filtered = filter_by_range(checkins, start, end)
        # Both ends inclusive, order preserved
        assert [c.rating for c in filtered] == [5, 4]

    def test_open_range(self, make_checkin):
        checkins = [make_checkin(5, 0), make_checkin(4, 100)]
        assert filter_by_range(checkins, None, None) == checkins

    def test_filter_logs_with_key(self, make_log, now):
        logs = [make_log(1, 0), make_log(1, 3)]
        filtered = filter_by_range(
            logs, now - timedelta(days=1), None, key=lambda r: r.logged_at
        )
        assert filtered == logs[:1]


# ============================================================================
# Rating Helper Tests
# ============================================================================


class TestRatingHelpers:
    """Test labels, buckets and legacy conversion."""

    def test_labels(self):
        assert rating_label(1) == "Terrible"
        assert rating_label(4) == "Ok"
        assert rating_label(7) == "Excellent"

    def test_label_rejects_invalid(self):
        with pytest.raises(InvalidInput):
            rating_label(0)

    def test_buckets(self):
        assert [is_negative(r) for r in range(1, 8)] == [True] * 3 + [False] * 4
        assert [is_neutral(r) for r in range(1, 8)] == [False] * 3 + [True] + [False] * 3
        assert [is_positive(r) for r in range(1, 8)] == [False] * 4 + [True] * 3

    @pytest.mark.parametrize("legacy,current", [(1, 1), (2, 3), (3, 4), (4, 5), (5, 7)])
    def test_convert_legacy_rating(self, legacy, current):
        assert convert_legacy_rating(legacy) == current

    @pytest.mark.parametrize("legacy", [0, 6])
    def test_convert_legacy_rejects_out_of_range(self, legacy):
        with pytest.raises(InvalidInput):
            convert_legacy_rating(legacy)
