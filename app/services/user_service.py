import uuid
from typing import Optional

import structlog

from app.exceptions import ConflictError, NotFoundError
from app.models.user_model import UserModel, UserRole
from app.repositories.registry import Repositories
from app.schemas.user_schema import UserCreate, UserUpdate
from app.utils.error_handling import handle_database_errors
from app.utils.pagination import PageParams, PageResult

logger = structlog.get_logger()

EMAIL_TAKEN = "Email already exists"


async def _get_or_404(repos: Repositories, user_id: str) -> UserModel:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found", resource_type="user")
    return user


@handle_database_errors("Failed to fetch users")
async def list_users(
    repos: Repositories,
    params: PageParams,
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
) -> PageResult:
    return await repos.users.list_users(params, search=search, role=role)


@handle_database_errors("Failed to fetch user")
async def get_user(repos: Repositories, user_id: str) -> UserModel:
    return await _get_or_404(repos, user_id)


@handle_database_errors("Failed to create user")
async def create_user(repos: Repositories, payload: UserCreate) -> UserModel:
    """Create a user, generating an id when the caller did not supply one.

    Raises:
        ConflictError: If the id or email is already used
    """
    values = payload.model_dump()
    values["id"] = values["id"] or uuid.uuid4().hex

    if await repos.users.get_by_id(values["id"]) is not None:
        raise ConflictError("User id already exists")
    if await repos.users.get_by_email(values["email"]) is not None:
        raise ConflictError(EMAIL_TAKEN)

    user = await repos.users.add(UserModel(**values), conflict_message=EMAIL_TAKEN)
    await repos.commit()
    logger.info("User created", user_id=user.id, role=user.role.value)
    return await _get_or_404(repos, user.id)


@handle_database_errors("Failed to update user")
async def update_user(
    repos: Repositories, user_id: str, payload: UserUpdate
) -> UserModel:
    user = await _get_or_404(repos, user_id)
    changes = payload.changes()

    if "email" in changes:
        existing = await repos.users.get_by_email(changes["email"])
        if existing is not None and existing.id != user_id:
            raise ConflictError(EMAIL_TAKEN)

    await repos.users.update(user, changes, conflict_message=EMAIL_TAKEN)
    await repos.commit()
    return await _get_or_404(repos, user_id)


@handle_database_errors("Failed to delete user")
async def delete_user(repos: Repositories, user_id: str) -> None:
    deleted = await repos.users.delete_by_id(
        user_id, in_use_message="User still teaches classes"
    )
    if not deleted:
        raise NotFoundError("User not found", resource_type="user")
    await repos.commit()
    logger.info("User deleted", user_id=user_id)
