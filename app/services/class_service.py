from typing import Optional

import structlog

from app.config import settings
from app.exceptions import ConflictError, NotFoundError
from app.models.class_model import ClassModel, ClassStatus
from app.models.user_model import UserRole
from app.repositories.registry import Repositories
from app.schemas.class_schema import ClassCreate, ClassUpdate
from app.utils.error_handling import handle_database_errors
from app.utils.invite_codes import allocate_invite_code, generate_invite_code
from app.utils.pagination import PageParams, PageResult

logger = structlog.get_logger()

INVITE_CODE_TAKEN = "Invite code already exists"


async def _get_or_404(repos: Repositories, class_id: int) -> ClassModel:
    classroom = await repos.classes.get_by_id(class_id)
    if classroom is None:
        raise NotFoundError("Class not found", resource_type="class")
    return classroom


async def _ensure_subject_exists(repos: Repositories, subject_id: int) -> None:
    if await repos.subjects.get_by_id(subject_id) is None:
        raise NotFoundError("Subject not found", resource_type="subject")


async def _ensure_teacher_exists(repos: Repositories, teacher_id: str) -> None:
    if await repos.users.get_by_id(teacher_id) is None:
        raise NotFoundError("Teacher not found", resource_type="user")


@handle_database_errors("Failed to fetch classes")
async def list_classes(
    repos: Repositories,
    params: PageParams,
    search: Optional[str] = None,
    subject_id: Optional[int] = None,
    teacher_id: Optional[str] = None,
    status: Optional[ClassStatus] = None,
) -> PageResult:
    return await repos.classes.list_classes(
        params,
        search=search,
        subject_id=subject_id,
        teacher_id=teacher_id,
        status=status,
    )


@handle_database_errors("Failed to fetch class")
async def get_class(repos: Repositories, class_id: int) -> ClassModel:
    return await _get_or_404(repos, class_id)


@handle_database_errors("Failed to fetch class")
async def get_class_by_invite_code(repos: Repositories, invite_code: str) -> ClassModel:
    classroom = await repos.classes.get_by_invite_code(invite_code)
    if classroom is None:
        raise NotFoundError("Class not found", resource_type="class")
    return classroom


@handle_database_errors("Failed to fetch class users")
async def list_class_users(
    repos: Repositories, class_id: int, role: UserRole, params: PageParams
) -> PageResult:
    await _get_or_404(repos, class_id)
    return await repos.users.list_roster(role, params, class_id=class_id)


@handle_database_errors("Failed to create class")
async def create_class(repos: Repositories, payload: ClassCreate) -> ClassModel:
    """Create a class with a freshly allocated invite code.

    Args:
        repos: Persistence context
        payload: Validated class fields

    Returns:
        ClassModel: Canonical view of the new class

    Raises:
        NotFoundError: If the subject or teacher does not exist
        InviteCodeGenerationError: If no free invite code could be drawn
    """
    await _ensure_subject_exists(repos, payload.subject_id)
    await _ensure_teacher_exists(repos, payload.teacher_id)

    invite_code = await allocate_invite_code(
        repos.classes.invite_code_exists,
        generator=generate_invite_code,
        max_attempts=settings.INVITE_CODE_MAX_ATTEMPTS,
    )

    values = payload.model_dump(exclude={"schedules"})
    values["schedules"] = [
        schedule.model_dump(by_alias=True) for schedule in payload.schedules
    ]
    classroom = await repos.classes.add(
        ClassModel(invite_code=invite_code, **values),
        conflict_message=INVITE_CODE_TAKEN,
    )
    await repos.commit()
    logger.info("Class created", class_id=classroom.id, invite_code=invite_code)
    return await _get_or_404(repos, classroom.id)


@handle_database_errors("Failed to update class")
async def update_class(
    repos: Repositories, class_id: int, payload: ClassUpdate
) -> ClassModel:
    """Apply the provided fields to a class.

    Referenced subject and teacher are re-checked when they change, and a
    new invite code must not belong to another class.
    """
    classroom = await _get_or_404(repos, class_id)
    changes = payload.changes()

    if "subject_id" in changes:
        await _ensure_subject_exists(repos, changes["subject_id"])

    if "teacher_id" in changes:
        await _ensure_teacher_exists(repos, changes["teacher_id"])

    if "invite_code" in changes:
        existing = await repos.classes.get_by_invite_code(changes["invite_code"])
        if existing is not None and existing.id != class_id:
            raise ConflictError(INVITE_CODE_TAKEN)

    await repos.classes.update(classroom, changes, conflict_message=INVITE_CODE_TAKEN)
    await repos.commit()
    return await _get_or_404(repos, class_id)


@handle_database_errors("Failed to delete class")
async def delete_class(repos: Repositories, class_id: int) -> None:
    deleted = await repos.classes.delete_by_id(
        class_id, in_use_message="Class is still referenced"
    )
    if not deleted:
        raise NotFoundError("Class not found", resource_type="class")
    await repos.commit()
    logger.info("Class deleted", class_id=class_id)
