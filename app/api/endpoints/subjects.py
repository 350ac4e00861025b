from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user_model import UserRole
from app.schemas.class_schema import ClassWithTeacher, RosterRole
from app.schemas.common_schema import DataResponse, MessageResponse, Page
from app.schemas.subject_schema import (
    SubjectCreate,
    SubjectDetailResponse,
    SubjectUpdate,
    SubjectWithDepartment,
)
from app.schemas.user_schema import UserResponse
from app.services import subject_service
from app.utils.deps import PAGE_PARAMS, PageQuery, Repos, strict_query

router = APIRouter()


@router.get(
    "",
    response_model=Page[SubjectWithDepartment],
    dependencies=[
        Depends(strict_query(*PAGE_PARAMS, "search", "department", "departmentId"))
    ],
)
async def list_subjects(
    repos: Repos,
    pagination: PageQuery,
    search: Optional[str] = Query(None, min_length=1),
    department: Optional[str] = Query(None, min_length=1),
    department_id: Optional[int] = Query(None, alias="departmentId", gt=0),
):
    """List subjects with their department.

    ``search`` matches the subject name or code, ``department`` matches the
    department name.
    """
    result = await subject_service.list_subjects(
        repos,
        pagination,
        search=search,
        department=department,
        department_id=department_id,
    )
    return result.to_response()


@router.get(
    "/{subject_id}/classes",
    response_model=Page[ClassWithTeacher],
    dependencies=[Depends(strict_query(*PAGE_PARAMS))],
)
async def list_subject_classes(
    repos: Repos, pagination: PageQuery, subject_id: int = Path(..., gt=0)
):
    result = await subject_service.list_subject_classes(repos, subject_id, pagination)
    return result.to_response()


@router.get(
    "/{subject_id}/users",
    response_model=Page[UserResponse],
    dependencies=[Depends(strict_query(*PAGE_PARAMS, "role"))],
)
async def list_subject_users(
    repos: Repos,
    pagination: PageQuery,
    role: RosterRole,
    subject_id: int = Path(..., gt=0),
):
    """List the teachers or enrolled students across a subject's classes."""
    result = await subject_service.list_subject_users(
        repos, subject_id, UserRole(role.value), pagination
    )
    return result.to_response()


@router.get("/{subject_id}", response_model=DataResponse[SubjectDetailResponse])
async def get_subject(repos: Repos, subject_id: int = Path(..., gt=0)):
    return {"data": await subject_service.get_subject(repos, subject_id)}


@router.post(
    "",
    response_model=DataResponse[SubjectWithDepartment],
    status_code=status.HTTP_201_CREATED,
)
async def create_subject(payload: SubjectCreate, repos: Repos):
    return {"data": await subject_service.create_subject(repos, payload)}


@router.put("/{subject_id}", response_model=DataResponse[SubjectWithDepartment])
async def update_subject(
    payload: SubjectUpdate, repos: Repos, subject_id: int = Path(..., gt=0)
):
    return {"data": await subject_service.update_subject(repos, subject_id, payload)}


@router.delete("/{subject_id}", response_model=MessageResponse)
async def delete_subject(repos: Repos, subject_id: int = Path(..., gt=0)):
    await subject_service.delete_subject(repos, subject_id)
    return MessageResponse(message="Subject deleted")
