from typing import Any, Optional

import structlog

from app.exceptions import ConflictError, NotFoundError
from app.models.subject_model import SubjectModel
from app.models.user_model import UserRole
from app.repositories.registry import Repositories
from app.schemas.subject_schema import SubjectCreate, SubjectUpdate
from app.utils.error_handling import handle_database_errors
from app.utils.pagination import PageParams, PageResult

logger = structlog.get_logger()

CODE_TAKEN = "Subject code already exists"


async def _get_or_404(repos: Repositories, subject_id: int) -> SubjectModel:
    subject = await repos.subjects.get_by_id(subject_id)
    if subject is None:
        raise NotFoundError("Subject not found", resource_type="subject")
    return subject


async def _ensure_department_exists(repos: Repositories, department_id: int) -> None:
    if await repos.departments.get_by_id(department_id) is None:
        raise NotFoundError("Department not found", resource_type="department")


@handle_database_errors("Failed to fetch subjects")
async def list_subjects(
    repos: Repositories,
    params: PageParams,
    search: Optional[str] = None,
    department: Optional[str] = None,
    department_id: Optional[int] = None,
) -> PageResult:
    return await repos.subjects.list_subjects(
        params, search=search, department=department, department_id=department_id
    )


@handle_database_errors("Failed to fetch subject details")
async def get_subject(repos: Repositories, subject_id: int) -> dict[str, Any]:
    subject = await _get_or_404(repos, subject_id)
    return {
        "subject": subject,
        "totals": {"classes": await repos.classes.count_for_subject(subject_id)},
    }


@handle_database_errors("Failed to fetch subject classes")
async def list_subject_classes(
    repos: Repositories, subject_id: int, params: PageParams
) -> PageResult:
    await _get_or_404(repos, subject_id)
    return await repos.classes.list_for_subject(subject_id, params)


@handle_database_errors("Failed to fetch subject users")
async def list_subject_users(
    repos: Repositories, subject_id: int, role: UserRole, params: PageParams
) -> PageResult:
    await _get_or_404(repos, subject_id)
    return await repos.users.list_roster(role, params, subject_id=subject_id)


@handle_database_errors("Failed to create subject")
async def create_subject(repos: Repositories, payload: SubjectCreate) -> SubjectModel:
    """Create a subject in an existing department.

    Raises:
        NotFoundError: If the department does not exist
        ConflictError: If the subject code is already used
    """
    await _ensure_department_exists(repos, payload.department_id)

    if await repos.subjects.get_by_code(payload.code) is not None:
        raise ConflictError(CODE_TAKEN)

    subject = await repos.subjects.add(
        SubjectModel(**payload.model_dump()), conflict_message=CODE_TAKEN
    )
    await repos.commit()
    logger.info("Subject created", subject_id=subject.id, code=subject.code)
    return await _get_or_404(repos, subject.id)


@handle_database_errors("Failed to update subject")
async def update_subject(
    repos: Repositories, subject_id: int, payload: SubjectUpdate
) -> SubjectModel:
    subject = await _get_or_404(repos, subject_id)
    changes = payload.changes()

    if "department_id" in changes:
        await _ensure_department_exists(repos, changes["department_id"])

    if "code" in changes:
        existing = await repos.subjects.get_by_code(changes["code"])
        if existing is not None and existing.id != subject_id:
            raise ConflictError(CODE_TAKEN)

    await repos.subjects.update(subject, changes, conflict_message=CODE_TAKEN)
    await repos.commit()
    return await _get_or_404(repos, subject_id)


@handle_database_errors("Failed to delete subject")
async def delete_subject(repos: Repositories, subject_id: int) -> None:
    deleted = await repos.subjects.delete_by_id(
        subject_id, in_use_message="Subject still has classes"
    )
    if not deleted:
        raise NotFoundError("Subject not found", resource_type="subject")
    await repos.commit()
    logger.info("Subject deleted", subject_id=subject_id)
