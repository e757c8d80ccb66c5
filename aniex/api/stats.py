from typing import Annotated

from fastapi import APIRouter, Depends

from aniex.api.deps import SessionDep
from aniex.schemas.stats import CatalogStatsResponse
from aniex.services.stats import StatisticsService


def get_stats_service(db: SessionDep) -> StatisticsService:
    return StatisticsService(db)


admin_router = APIRouter()


@admin_router.get("", response_model=CatalogStatsResponse)
async def get_dashboard_stats(service: Annotated[StatisticsService, Depends(get_stats_service)]):
    """Counts and recent uploads for the admin dashboard."""
    return service.get_dashboard_payload()
