from fastapi import APIRouter

from app.api.endpoints import (
    classes,
    departments,
    enrollments,
    health,
    stats,
    subjects,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(
    departments.router, prefix="/departments", tags=["Departments"]
)
api_router.include_router(subjects.router, prefix="/subjects", tags=["Subjects"])
api_router.include_router(classes.router, prefix="/classes", tags=["Classes"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(
    enrollments.router, prefix="/enrollments", tags=["Enrollments"]
)
api_router.include_router(stats.router, prefix="/stats", tags=["Stats"])
