"""Request usage counters endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from travel_map_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/stats", response_model=Dict[str, Any])
async def get_stats() -> Dict[str, Any]:
    """Return request counts keyed by ``"<METHOD> <path>"``."""
    return await StatisticsService.snapshot()
