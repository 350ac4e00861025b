from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from app.models.enrollment_model import EnrollmentModel
from app.repositories.base_repository import BaseRepository
from app.utils.filters import FilterBuilder
from app.utils.pagination import PageParams, PageResult, paginate

DETAIL_OPTIONS = (
    joinedload(EnrollmentModel.student),
    joinedload(EnrollmentModel.classroom),
)


class EnrollmentRepository(BaseRepository):
    model = EnrollmentModel

    async def get_by_id(self, enrollment_id: int) -> Optional[EnrollmentModel]:
        """Get an enrollment with its student and class, or None."""
        result = await self.db.execute(
            select(EnrollmentModel)
            .options(*DETAIL_OPTIONS)
            .where(EnrollmentModel.id == enrollment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_for_student_and_class(
        self, student_id: str, class_id: int
    ) -> Optional[EnrollmentModel]:
        result = await self.db.execute(
            select(EnrollmentModel).where(
                EnrollmentModel.student_id == student_id,
                EnrollmentModel.class_id == class_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_for_class(self, class_id: int) -> int:
        return await self.count(EnrollmentModel.class_id == class_id)

    async def list_enrollments(
        self,
        params: PageParams,
        class_id: Optional[int] = None,
        student_id: Optional[str] = None,
    ) -> PageResult:
        filters = (
            FilterBuilder()
            .equals(EnrollmentModel.class_id, class_id)
            .equals(EnrollmentModel.student_id, student_id)
        )
        statement = select(EnrollmentModel).where(*filters.conditions)
        return await paginate(
            self.db,
            statement,
            params,
            order_by=(EnrollmentModel.created_at.desc(), EnrollmentModel.id.desc()),
            options=DETAIL_OPTIONS,
        )
