"""Assessment scoring API routes."""
from fastapi import APIRouter, HTTPException

from wellbeing_engine.assessment_scorer import assessment_scorer
from wellbeing_engine.errors import InvalidInput
from wellbeing_engine.instruments import InstrumentDefinition, get_instrument, list_instruments

from ..dependencies import check_record_limit
from ..models.assessment import (
    AssessmentScoreResponse,
    InstrumentOut,
    ScoreRequest,
    ScoreStatisticsResponse,
    StatisticsRequest,
)

router = APIRouter(prefix="/api/assessments", tags=["Assessments"])


def _instrument_to_model(definition: InstrumentDefinition, detailed: bool = False) -> InstrumentOut:
    """Convert an instrument definition to its API model."""
    data = definition.to_dict(include_questions=detailed)
    if detailed:
        data["thresholds"] = [
            line.to_dict() for line in assessment_scorer.threshold_lines(definition.code)
        ]
    return InstrumentOut(**data)


@router.get("/instruments", response_model=list[InstrumentOut])
async def get_instruments():
    """List supported questionnaires and their severity bands."""
    return [_instrument_to_model(d) for d in list_instruments()]


@router.get("/instruments/{code}", response_model=InstrumentOut)
async def get_instrument_detail(code: str):
    """Get one questionnaire with question text and chart threshold lines."""
    try:
        definition = get_instrument(code)
    except InvalidInput as e:
        raise HTTPException(status_code=404, detail=e.message)
    return _instrument_to_model(definition, detailed=True)


@router.post("/score", response_model=AssessmentScoreResponse)
async def score_assessment(request: ScoreRequest):
    """Score a completed questionnaire."""
    result = assessment_scorer.score(request.instrument, request.responses)
    return AssessmentScoreResponse(**result.to_dict())


@router.post("/statistics", response_model=ScoreStatisticsResponse)
async def get_score_statistics(request: StatisticsRequest):
    """Min, max, average and trend for an assessment history (oldest first)."""
    check_record_limit(request.scores, "scores")
    stats = assessment_scorer.score_statistics(request.instrument, request.scores)
    if stats is None:
        raise InvalidInput("At least one score is required", field="scores")
    return ScoreStatisticsResponse(**stats.to_dict())
