from typing import Any, Optional

import structlog

from app.exceptions import ConflictError, NotFoundError
from app.models.department_model import DepartmentModel
from app.repositories.registry import Repositories
from app.schemas.department_schema import DepartmentCreate, DepartmentUpdate
from app.utils.error_handling import handle_database_errors
from app.utils.pagination import PageParams, PageResult

logger = structlog.get_logger()

CODE_TAKEN = "Department code already exists"


async def _get_or_404(repos: Repositories, department_id: int) -> DepartmentModel:
    department = await repos.departments.get_by_id(department_id)
    if department is None:
        raise NotFoundError("Department not found", resource_type="department")
    return department


@handle_database_errors("Failed to fetch departments")
async def list_departments(
    repos: Repositories, params: PageParams, search: Optional[str] = None
) -> PageResult:
    return await repos.departments.list_departments(params, search=search)


@handle_database_errors("Failed to fetch department details")
async def get_department(repos: Repositories, department_id: int) -> dict[str, Any]:
    """Get a department together with how many subjects and classes it has."""
    department = await _get_or_404(repos, department_id)
    return {
        "department": department,
        "totals": {
            "subjects": await repos.departments.count_subjects(department_id),
            "classes": await repos.departments.count_classes(department_id),
        },
    }


@handle_database_errors("Failed to fetch department subjects")
async def list_department_subjects(
    repos: Repositories, department_id: int, params: PageParams
) -> PageResult:
    await _get_or_404(repos, department_id)
    return await repos.subjects.list_for_department(department_id, params)


@handle_database_errors("Failed to create department")
async def create_department(
    repos: Repositories, payload: DepartmentCreate
) -> DepartmentModel:
    """Create a department after checking its code is free.

    Raises:
        ConflictError: If the code is already used
    """
    if await repos.departments.get_by_code(payload.code) is not None:
        raise ConflictError(CODE_TAKEN)

    department = await repos.departments.add(
        DepartmentModel(**payload.model_dump()), conflict_message=CODE_TAKEN
    )
    await repos.commit()
    logger.info("Department created", department_id=department.id, code=department.code)
    return await _get_or_404(repos, department.id)


@handle_database_errors("Failed to update department")
async def update_department(
    repos: Repositories, department_id: int, payload: DepartmentUpdate
) -> DepartmentModel:
    department = await _get_or_404(repos, department_id)
    changes = payload.changes()

    if "code" in changes:
        existing = await repos.departments.get_by_code(changes["code"])
        if existing is not None and existing.id != department_id:
            raise ConflictError(CODE_TAKEN)

    await repos.departments.update(department, changes, conflict_message=CODE_TAKEN)
    await repos.commit()
    return await _get_or_404(repos, department_id)


@handle_database_errors("Failed to delete department")
async def delete_department(repos: Repositories, department_id: int) -> None:
    deleted = await repos.departments.delete_by_id(
        department_id, in_use_message="Department still has subjects"
    )
    if not deleted:
        raise NotFoundError("Department not found", resource_type="department")
    await repos.commit()
    logger.info("Department deleted", department_id=department_id)
