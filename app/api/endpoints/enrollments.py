from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.schemas.common_schema import DataResponse, MessageResponse, Page
from app.schemas.enrollment_schema import (
    EnrollmentCreate,
    EnrollmentDetail,
    EnrollmentJoin,
)
from app.services import enrollment_service
from app.utils.deps import PAGE_PARAMS, PageQuery, Repos, strict_query

router = APIRouter()


@router.get(
    "",
    response_model=Page[EnrollmentDetail],
    dependencies=[Depends(strict_query(*PAGE_PARAMS, "classId", "studentId"))],
)
async def list_enrollments(
    repos: Repos,
    pagination: PageQuery,
    class_id: Optional[int] = Query(None, alias="classId", gt=0),
    student_id: Optional[str] = Query(None, alias="studentId", min_length=1),
):
    result = await enrollment_service.list_enrollments(
        repos, pagination, class_id=class_id, student_id=student_id
    )
    return result.to_response()


@router.get("/{enrollment_id}", response_model=DataResponse[EnrollmentDetail])
async def get_enrollment(repos: Repos, enrollment_id: int = Path(..., gt=0)):
    return {"data": await enrollment_service.get_enrollment(repos, enrollment_id)}


@router.post(
    "",
    response_model=DataResponse[EnrollmentDetail],
    status_code=status.HTTP_201_CREATED,
)
async def create_enrollment(payload: EnrollmentCreate, repos: Repos):
    return {"data": await enrollment_service.create_enrollment(repos, payload)}


@router.post(
    "/join",
    response_model=DataResponse[EnrollmentDetail],
    status_code=status.HTTP_201_CREATED,
)
async def join_class(payload: EnrollmentJoin, repos: Repos):
    """Enroll a student using a class invite code."""
    return {"data": await enrollment_service.join_class(repos, payload)}


@router.delete("/{enrollment_id}", response_model=MessageResponse)
async def delete_enrollment(repos: Repos, enrollment_id: int = Path(..., gt=0)):
    await enrollment_service.delete_enrollment(repos, enrollment_id)
    return MessageResponse(message="Enrollment deleted")
