from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from app.models.department_model import DepartmentModel
from app.models.subject_model import SubjectModel
from app.repositories.base_repository import BaseRepository
from app.utils.filters import FilterBuilder
from app.utils.pagination import PageParams, PageResult, paginate

NEWEST_FIRST = (SubjectModel.created_at.desc(), SubjectModel.id.desc())


class SubjectRepository(BaseRepository):
    model = SubjectModel

    async def get_by_id(self, subject_id: int) -> Optional[SubjectModel]:
        """Get a subject with its department, or None."""
        result = await self.db.execute(
            select(SubjectModel)
            .options(joinedload(SubjectModel.department))
            .where(SubjectModel.id == subject_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[SubjectModel]:
        """Get a subject by its unique code, or None."""
        result = await self.db.execute(
            select(SubjectModel).where(SubjectModel.code == code)
        )
        return result.scalar_one_or_none()

    async def list_subjects(
        self,
        params: PageParams,
        search: Optional[str] = None,
        department: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> PageResult:
        """List subjects with their department, newest first.

        Args:
            params: Requested page and limit
            search: Substring of the subject name or code
            department: Substring of the department name
            department_id: Exact department
        """
        filters = (
            FilterBuilder()
            .search(search, SubjectModel.name, SubjectModel.code)
            .search(department, DepartmentModel.name)
            .equals(SubjectModel.department_id, department_id)
        )
        statement = (
            select(SubjectModel)
            .outerjoin(DepartmentModel, SubjectModel.department_id == DepartmentModel.id)
            .where(*filters.conditions)
        )
        return await paginate(
            self.db,
            statement,
            params,
            order_by=NEWEST_FIRST,
            options=(joinedload(SubjectModel.department),),
        )

    async def list_for_department(
        self, department_id: int, params: PageParams
    ) -> PageResult:
        statement = select(SubjectModel).where(
            SubjectModel.department_id == department_id
        )
        return await paginate(self.db, statement, params, order_by=NEWEST_FIRST)
