from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.class_model import ClassStatus
from app.models.user_model import UserRole
from app.schemas.class_schema import (
    ClassCreate,
    ClassDetail,
    ClassResponse,
    ClassUpdate,
    RosterRole,
)
from app.schemas.common_schema import DataResponse, MessageResponse, Page
from app.schemas.user_schema import UserResponse
from app.services import class_service
from app.utils.deps import PAGE_PARAMS, PageQuery, Repos, strict_query

router = APIRouter()


@router.get(
    "",
    response_model=Page[ClassResponse],
    dependencies=[
        Depends(
            strict_query(*PAGE_PARAMS, "search", "subjectId", "teacherId", "status")
        )
    ],
)
async def list_classes(
    repos: Repos,
    pagination: PageQuery,
    search: Optional[str] = Query(None, min_length=1),
    subject_id: Optional[int] = Query(None, alias="subjectId", gt=0),
    teacher_id: Optional[str] = Query(None, alias="teacherId", min_length=1),
    class_status: Optional[ClassStatus] = Query(None, alias="status"),
):
    """List classes, newest first.

    ``search`` matches the class name or invite code.
    """
    result = await class_service.list_classes(
        repos,
        pagination,
        search=search,
        subject_id=subject_id,
        teacher_id=teacher_id,
        status=class_status,
    )
    return result.to_response()


@router.get("/invite/{code}", response_model=DataResponse[ClassResponse])
async def get_class_by_invite_code(repos: Repos, code: str = Path(..., min_length=1)):
    return {"data": await class_service.get_class_by_invite_code(repos, code.strip())}


@router.get(
    "/{class_id}/users",
    response_model=Page[UserResponse],
    dependencies=[Depends(strict_query(*PAGE_PARAMS, "role"))],
)
async def list_class_users(
    repos: Repos,
    pagination: PageQuery,
    role: RosterRole,
    class_id: int = Path(..., gt=0),
):
    """List the teacher or the enrolled students of a class."""
    result = await class_service.list_class_users(
        repos, class_id, UserRole(role.value), pagination
    )
    return result.to_response()


@router.get("/{class_id}", response_model=DataResponse[ClassDetail])
async def get_class(repos: Repos, class_id: int = Path(..., gt=0)):
    return {"data": await class_service.get_class(repos, class_id)}


@router.post(
    "",
    response_model=DataResponse[ClassDetail],
    status_code=status.HTTP_201_CREATED,
)
async def create_class(payload: ClassCreate, repos: Repos):
    return {"data": await class_service.create_class(repos, payload)}


@router.put("/{class_id}", response_model=DataResponse[ClassDetail])
async def update_class(
    payload: ClassUpdate, repos: Repos, class_id: int = Path(..., gt=0)
):
    return {"data": await class_service.update_class(repos, class_id, payload)}


@router.delete("/{class_id}", response_model=MessageResponse)
async def delete_class(repos: Repos, class_id: int = Path(..., gt=0)):
    await class_service.delete_class(repos, class_id)
    return MessageResponse(message="Class deleted")
