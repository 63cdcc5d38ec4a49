"""Health check route."""

from datetime import datetime, timezone
from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from inkwell.config import Settings
from inkwell.domain.repository import ChangeFeed

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: Literal["healthy"]
    checked_at: datetime
    git_sha: str
    environment: str
    live_viewers: int  # open live comment subscriptions in this process


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], change_feed: FromDishka[ChangeFeed]
) -> HealthResponse:
    """Liveness probe. Also reports how many live viewers this worker serves."""
    return HealthResponse(
        status="healthy",
        checked_at=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        environment=settings.environment,
        live_viewers=change_feed.subscriber_count,
    )
