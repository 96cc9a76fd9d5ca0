"""Mood API routes."""
from fastapi import APIRouter

from wellbeing_engine.models import MoodCheckin
from wellbeing_engine.mood_aggregator import NO_DATA, correlate, mood_statistics, summarize

from ..dependencies import as_utc, check_record_limit
from ..models.mood import (
    CorrelationRequest,
    CorrelationResponse,
    MoodCheckinIn,
    MoodStatisticsRequest,
    MoodStatisticsResponse,
    MoodSummaryRequest,
    MoodSummaryResponse,
)

router = APIRouter(prefix="/api/mood", tags=["Mood"])


def _to_checkin(model: MoodCheckinIn) -> MoodCheckin:
    """Convert an API check-in to an engine record."""
    return MoodCheckin(
        id=model.id,
        rating=model.rating,
        created_at=as_utc(model.created_at),
        activity_ids=frozenset(model.activity_ids),
        notes=model.notes,
    )


def _to_checkins(models: list[MoodCheckinIn]) -> list[MoodCheckin]:
    check_record_limit(models, "checkins")
    return [_to_checkin(m) for m in models]


@router.post("/summary", response_model=MoodSummaryResponse)
async def get_mood_summary(request: MoodSummaryRequest):
    """
    Average rating, count and most recent check-in.
    Check-ins must be supplied newest first; they are not re-sorted.
    """
    summary = summarize(_to_checkins(request.checkins))
    return MoodSummaryResponse(
        average_rating=summary.average_rating,
        count=summary.count,
        most_recent=request.checkins[0] if summary.count else None,
    )


@router.post("/statistics", response_model=MoodStatisticsResponse)
async def get_mood_statistics(request: MoodStatisticsRequest):
    """Distribution statistics for the supplied check-ins."""
    stats = mood_statistics(_to_checkins(request.checkins), days=request.days)
    if stats is None:
        return MoodStatisticsResponse()
    return MoodStatisticsResponse(**stats.to_dict())


@router.post("/correlation", response_model=CorrelationResponse)
async def get_activity_correlation(request: CorrelationRequest):
    """Mean mood of check-ins that include the given activity."""
    result = correlate(_to_checkins(request.checkins), request.activity_id)
    if result is NO_DATA:
        return CorrelationResponse(activity_id=request.activity_id, no_data=True)
    return CorrelationResponse(
        activity_id=request.activity_id,
        no_data=False,
        average_rating=result.average_rating,
        checkin_count=result.checkin_count,
    )
