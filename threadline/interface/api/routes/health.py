"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from threadline.adapter.realtime.hub import WebSocketHub
from threadline.config import Settings
from threadline.domain.model.common import utcnow

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    connections: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], hub: FromDishka[WebSocketHub]
) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=utcnow(),
        version="0.1.0",
        git_sha=settings.git_sha,
        connections=hub.connection_count,
    )
