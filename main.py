"""
Season Stats Platform API Server

FastAPI server exposing the stored NBA season stats table and the
token-protected trigger that recomputes a season.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8001

Environment Variables:
    PIPELINE_API_TOKEN - Bearer secret for the pipeline trigger endpoints
    BALLDONTLIE_API_KEY - Key for the BALLDONTLIE stats API
    DATABASE_URL - playhouse db_url (sqlite:///..., postgresql://...)
"""

from contextlib import asynccontextmanager
from datetime import datetime

import pytz
from fastapi import FastAPI
from pydantic import BaseModel

from core.correlation_middleware import CorrelationMiddleware
from core.logging import setup_logging, get_logger
from core.middleware import setup_middleware
from core.settings import settings
from db.base import close_db, init_db
from api.v1 import pipelines, stats


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    log = get_logger()
    log.info("api_starting", service=settings.service_name, season=settings.nba_season)

    init_db(settings.database_url)

    yield

    close_db()
    log.info("api_stopped")


app = FastAPI(
    title="Season Stats Platform",
    description="NBA season stats and fantasy scoring",
    version="1.0.0",
    lifespan=lifespan,
)

# Middlewares
app.add_middleware(CorrelationMiddleware)
setup_middleware(app)

app.include_router(stats.router, prefix="/v1")
app.include_router(pipelines.router, prefix="/v1/internal")


class HealthResponse(BaseModel):
    status: str
    timestamp: str


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint (no auth required)."""
    central_tz = pytz.timezone("US/Central")
    now = datetime.now(central_tz)
    return HealthResponse(status="healthy", timestamp=now.isoformat())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
