from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.schemas.common_schema import DataResponse, MessageResponse, Page
from app.schemas.department_schema import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
)
from app.schemas.subject_schema import SubjectResponse
from app.services import department_service
from app.utils.deps import PAGE_PARAMS, PageQuery, Repos, strict_query

router = APIRouter()


@router.get(
    "",
    response_model=Page[DepartmentResponse],
    dependencies=[Depends(strict_query(*PAGE_PARAMS, "search"))],
)
async def list_departments(
    repos: Repos,
    pagination: PageQuery,
    search: Optional[str] = Query(None, min_length=1),
):
    """List departments, optionally searching name and code."""
    result = await department_service.list_departments(repos, pagination, search=search)
    return result.to_response()


@router.get(
    "/{department_id}/subjects",
    response_model=Page[SubjectResponse],
    dependencies=[Depends(strict_query(*PAGE_PARAMS))],
)
async def list_department_subjects(
    repos: Repos,
    pagination: PageQuery,
    department_id: int = Path(..., gt=0),
):
    result = await department_service.list_department_subjects(
        repos, department_id, pagination
    )
    return result.to_response()


@router.get("/{department_id}", response_model=DataResponse[DepartmentDetailResponse])
async def get_department(repos: Repos, department_id: int = Path(..., gt=0)):
    """Get a department with its subject and class totals."""
    return {"data": await department_service.get_department(repos, department_id)}


@router.post(
    "",
    response_model=DataResponse[DepartmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_department(payload: DepartmentCreate, repos: Repos):
    return {"data": await department_service.create_department(repos, payload)}


@router.put("/{department_id}", response_model=DataResponse[DepartmentResponse])
async def update_department(
    payload: DepartmentUpdate, repos: Repos, department_id: int = Path(..., gt=0)
):
    return {
        "data": await department_service.update_department(
            repos, department_id, payload
        )
    }


@router.delete("/{department_id}", response_model=MessageResponse)
async def delete_department(repos: Repos, department_id: int = Path(..., gt=0)):
    await department_service.delete_department(repos, department_id)
    return MessageResponse(message="Department deleted")
