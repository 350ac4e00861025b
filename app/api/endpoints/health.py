import structlog
from fastapi import APIRouter

from app.config import settings
from app.exceptions import ClassroomException
from app.schemas.health_schema import HealthCheck
from app.services import stats_service
from app.utils.deps import Repos

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_model=HealthCheck)
async def health_check(repos: Repos) -> HealthCheck:
    """
    Report application status and whether the database answers queries.
    """
    try:
        db_status = "healthy" if await stats_service.check_database(repos) else "unhealthy"
    except ClassroomException as e:
        logger.error("Database health check failed", error=e.message)
        db_status = "unhealthy"

    return HealthCheck(
        status="healthy",
        database_status=db_status,
        environment=settings.ENVIRONMENT,
    )
