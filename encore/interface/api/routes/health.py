"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from encore.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response.

    Also reports the Elo constants in effect, so a client can tell which
    rating configuration produced the numbers it shows.
    """

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    environment: str
    default_rating: float
    k_factor: float


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Liveness probe; does not touch the database."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        git_sha=settings.git_sha,
        environment=settings.environment,
        default_rating=settings.ranking.default_rating,
        k_factor=settings.ranking.k_factor,
    )
