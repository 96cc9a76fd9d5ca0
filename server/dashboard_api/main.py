"""Wellbeing Engine API - FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wellbeing_engine.errors import ConfigurationError, InvalidInput

from .config import get_settings
from .routes import assessments, mood, goals, trends, schedules

log = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Wellbeing Engine API",
    description="Stateless scoring and aggregation for mood, assessment and activity data",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(assessments.router)
app.include_router(mood.router)
app.include_router(goals.router)
app.include_router(trends.router)
app.include_router(schedules.router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    log.info(f"[API] {request.url.path}: {exc.message}")
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    log.error(f"[API] Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "dashboard-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.dashboard_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
