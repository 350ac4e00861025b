from app.schemas.common_schema import CamelModel


class HealthCheck(CamelModel):
    status: str
    database_status: str
    environment: str
