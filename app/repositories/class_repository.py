from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from app.models import department_model, enrollment_model, user_model  # noqa: F401
from app.models.class_model import ClassModel, ClassStatus
from app.models.subject_model import SubjectModel
from app.repositories.base_repository import BaseRepository
from app.utils.filters import FilterBuilder
from app.utils.pagination import PageParams, PageResult, paginate

NEWEST_FIRST = (ClassModel.created_at.desc(), ClassModel.id.desc())

# Canonical class view: subject, the subject's department and the teacher
DETAIL_OPTIONS = (
    joinedload(ClassModel.subject).joinedload(SubjectModel.department),
    joinedload(ClassModel.teacher),
)


class ClassRepository(BaseRepository):
    model = ClassModel

    async def get_by_id(self, class_id: int) -> Optional[ClassModel]:
        """Get the canonical view of a class, or None."""
        result = await self.db.execute(
            select(ClassModel)
            .options(*DETAIL_OPTIONS)
            .where(ClassModel.id == class_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_invite_code(self, invite_code: str) -> Optional[ClassModel]:
        """Get a class by its invite code, without joins, or None."""
        result = await self.db.execute(
            select(ClassModel).where(ClassModel.invite_code == invite_code)
        )
        return result.scalar_one_or_none()

    async def invite_code_exists(self, invite_code: str) -> bool:
        return await self.count(ClassModel.invite_code == invite_code) > 0

    async def list_classes(
        self,
        params: PageParams,
        search: Optional[str] = None,
        subject_id: Optional[int] = None,
        teacher_id: Optional[str] = None,
        status: Optional[ClassStatus] = None,
    ) -> PageResult:
        """List classes newest first.

        Args:
            params: Requested page and limit
            search: Substring of the class name or invite code
            subject_id: Exact subject
            teacher_id: Exact teacher
            status: Exact status
        """
        filters = (
            FilterBuilder()
            .search(search, ClassModel.name, ClassModel.invite_code)
            .equals(ClassModel.subject_id, subject_id)
            .equals(ClassModel.teacher_id, teacher_id)
            .equals(ClassModel.status, status)
        )
        statement = select(ClassModel).where(*filters.conditions)
        return await paginate(self.db, statement, params, order_by=NEWEST_FIRST)

    async def list_for_subject(self, subject_id: int, params: PageParams) -> PageResult:
        """List the classes of a subject with their teacher."""
        statement = select(ClassModel).where(ClassModel.subject_id == subject_id)
        return await paginate(
            self.db,
            statement,
            params,
            order_by=NEWEST_FIRST,
            options=(joinedload(ClassModel.teacher),),
        )

    async def count_for_subject(self, subject_id: int) -> int:
        return await self.count(ClassModel.subject_id == subject_id)

    async def latest(self, limit: int) -> list[ClassModel]:
        result = await self.db.execute(
            select(ClassModel).options(*DETAIL_OPTIONS).order_by(*NEWEST_FIRST).limit(limit)
        )
        return list(result.scalars().all())
