from typing import Optional

from sqlalchemy import func, select

from app.models.class_model import ClassModel
from app.models.department_model import DepartmentModel
from app.models.subject_model import SubjectModel
from app.repositories.base_repository import BaseRepository
from app.utils.filters import FilterBuilder
from app.utils.pagination import PageParams, PageResult, paginate


class DepartmentRepository(BaseRepository):
    model = DepartmentModel

    async def get_by_id(self, department_id: int) -> Optional[DepartmentModel]:
        """Get a department by primary key, or None."""
        return await self.db.get(DepartmentModel, department_id, populate_existing=True)

    async def get_by_code(self, code: str) -> Optional[DepartmentModel]:
        """Get a department by its unique code, or None."""
        result = await self.db.execute(
            select(DepartmentModel).where(DepartmentModel.code == code)
        )
        return result.scalar_one_or_none()

    async def list_departments(
        self, params: PageParams, search: Optional[str] = None
    ) -> PageResult:
        filters = FilterBuilder().search(
            search, DepartmentModel.name, DepartmentModel.code
        )
        statement = select(DepartmentModel).where(*filters.conditions)
        return await paginate(
            self.db,
            statement,
            params,
            order_by=(DepartmentModel.created_at.desc(), DepartmentModel.id.desc()),
        )

    async def count_subjects(self, department_id: int) -> int:
        statement = select(func.count(SubjectModel.id)).where(
            SubjectModel.department_id == department_id
        )
        return (await self.db.execute(statement)).scalar_one()

    async def count_classes(self, department_id: int) -> int:
        statement = (
            select(func.count(ClassModel.id))
            .join(SubjectModel, ClassModel.subject_id == SubjectModel.id)
            .where(SubjectModel.department_id == department_id)
        )
        return (await self.db.execute(statement)).scalar_one()
