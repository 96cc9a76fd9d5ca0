"""Trend comparison API routes."""
from fastapi import APIRouter

from wellbeing_engine.trend_comparator import compare

from ..config import get_settings
from ..models.trends import CompareRequest, TrendResponse

router = APIRouter(prefix="/api/trends", tags=["Trends"])


@router.post("/compare", response_model=TrendResponse)
async def compare_periods(request: CompareRequest):
    """
    Compare two period aggregates.
    Set higher_is_better=false for symptom scores such as PHQ-9.
    """
    deadband = request.deadband
    if deadband is None:
        deadband = get_settings().trend_deadband

    result = compare(
        request.current,
        request.previous,
        higher_is_better=request.higher_is_better,
        deadband=deadband,
    )
    return TrendResponse(**result.to_dict())
