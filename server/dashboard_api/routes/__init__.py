"""API route modules."""
from .assessments import router as assessments_router
from .mood import router as mood_router
from .goals import router as goals_router
from .trends import router as trends_router
from .schedules import router as schedules_router

__all__ = [
    "assessments_router",
    "mood_router",
    "goals_router",
    "trends_router",
    "schedules_router",
]
