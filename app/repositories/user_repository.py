from typing import Optional

from sqlalchemy import select

from app.models.class_model import ClassModel
from app.models.enrollment_model import EnrollmentModel
from app.models.user_model import UserModel, UserRole
from app.repositories.base_repository import BaseRepository
from app.utils.filters import FilterBuilder
from app.utils.pagination import PageParams, PageResult, paginate

NEWEST_FIRST = (UserModel.created_at.desc(), UserModel.id.desc())


class UserRepository(BaseRepository):
    model = UserModel

    async def get_by_id(self, user_id: str) -> Optional[UserModel]:
        """Get a user by primary key, or None."""
        return await self.db.get(UserModel, user_id, populate_existing=True)

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        """Get a user by email address, or None."""
        result = await self.db.execute(select(UserModel).where(UserModel.email == email))
        return result.scalar_one_or_none()

    async def list_users(
        self,
        params: PageParams,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> PageResult:
        filters = (
            FilterBuilder()
            .search(search, UserModel.name, UserModel.email)
            .equals(UserModel.role, role)
        )
        statement = select(UserModel).where(*filters.conditions)
        return await paginate(self.db, statement, params, order_by=NEWEST_FIRST)

    async def list_roster(
        self,
        role: UserRole,
        params: PageParams,
        *,
        class_id: Optional[int] = None,
        subject_id: Optional[int] = None,
    ) -> PageResult:
        """List the users holding ``role`` in a class or across a subject's classes.

        Teachers are reached through ``classes.teacher_id``; students
        through their enrollments. A user attached to several matching
        classes is returned once.

        Args:
            role: Teacher or student
            params: Requested page and limit
            class_id: Restrict to one class
            subject_id: Restrict to the classes of one subject
        """
        statement = select(UserModel).where(UserModel.role == role)
        if role == UserRole.TEACHER:
            statement = statement.join(ClassModel, ClassModel.teacher_id == UserModel.id)
        else:
            statement = statement.join(
                EnrollmentModel, EnrollmentModel.student_id == UserModel.id
            ).join(ClassModel, ClassModel.id == EnrollmentModel.class_id)

        filters = (
            FilterBuilder()
            .equals(ClassModel.id, class_id)
            .equals(ClassModel.subject_id, subject_id)
        )
        statement = statement.where(*filters.conditions).group_by(
            *UserModel.__table__.columns
        )
        return await paginate(self.db, statement, params, order_by=NEWEST_FIRST)

    async def latest(self, role: UserRole, limit: int) -> list[UserModel]:
        result = await self.db.execute(
            select(UserModel)
            .where(UserModel.role == role)
            .order_by(*NEWEST_FIRST)
            .limit(limit)
        )
        return list(result.scalars().all())
