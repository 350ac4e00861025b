from fastapi import APIRouter, Depends, Query

from app.schemas.common_schema import DataResponse
from app.schemas.stats_schema import ChartStats, LatestStats, OverviewStats
from app.services import stats_service
from app.utils.deps import Repos, strict_query

router = APIRouter()


@router.get("/overview", response_model=DataResponse[OverviewStats])
async def get_overview(repos: Repos):
    """Entity totals for the dashboard."""
    return {"data": await stats_service.get_overview(repos)}


@router.get(
    "/latest",
    response_model=DataResponse[LatestStats],
    dependencies=[Depends(strict_query("limit"))],
)
async def get_latest(repos: Repos, limit: int = Query(5, ge=1, le=50)):
    """Most recently created classes and teachers."""
    return {"data": await stats_service.get_latest(repos, limit)}


@router.get("/charts", response_model=DataResponse[ChartStats])
async def get_charts(repos: Repos):
    return {"data": await stats_service.get_charts(repos)}
