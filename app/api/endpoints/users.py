from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.models.user_model import UserRole
from app.schemas.common_schema import DataResponse, MessageResponse, Page
from app.schemas.user_schema import UserCreate, UserResponse, UserUpdate
from app.services import user_service
from app.utils.deps import PAGE_PARAMS, PageQuery, Repos, strict_query

router = APIRouter()


@router.get(
    "",
    response_model=Page[UserResponse],
    dependencies=[Depends(strict_query(*PAGE_PARAMS, "search", "role"))],
)
async def list_users(
    repos: Repos,
    pagination: PageQuery,
    search: Optional[str] = Query(None, min_length=1),
    role: Optional[UserRole] = None,
):
    """List users, optionally searching name and email."""
    result = await user_service.list_users(repos, pagination, search=search, role=role)
    return result.to_response()


@router.get("/{user_id}", response_model=DataResponse[UserResponse])
async def get_user(repos: Repos, user_id: str = Path(..., min_length=1)):
    return {"data": await user_service.get_user(repos, user_id)}


@router.post(
    "",
    response_model=DataResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(payload: UserCreate, repos: Repos):
    return {"data": await user_service.create_user(repos, payload)}


@router.put("/{user_id}", response_model=DataResponse[UserResponse])
async def update_user(
    payload: UserUpdate, repos: Repos, user_id: str = Path(..., min_length=1)
):
    return {"data": await user_service.update_user(repos, user_id, payload)}


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(repos: Repos, user_id: str = Path(..., min_length=1)):
    await user_service.delete_user(repos, user_id)
    return MessageResponse(message="User deleted")
