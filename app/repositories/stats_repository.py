from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.class_model import ClassModel
from app.models.department_model import DepartmentModel
from app.models.enrollment_model import EnrollmentModel
from app.models.subject_model import SubjectModel
from app.models.user_model import UserModel


class StatsRepository:
    """Aggregate counts for the dashboard."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ping(self) -> bool:
        result = await self.db.execute(text("SELECT 1"))
        return result.scalar() == 1

    async def count_rows(self, model: Any) -> int:
        result = await self.db.execute(select(func.count()).select_from(model))
        return result.scalar_one()

    async def count_users_by_role(self) -> dict[str, int]:
        result = await self.db.execute(
            select(UserModel.role, func.count(UserModel.id)).group_by(UserModel.role)
        )
        return {role.value: total for role, total in result.all()}

    async def count_classes_by_status(self) -> dict[str, int]:
        result = await self.db.execute(
            select(ClassModel.status, func.count(ClassModel.id)).group_by(
                ClassModel.status
            )
        )
        return {status.value: total for status, total in result.all()}

    async def subjects_per_department(self) -> list[dict[str, Any]]:
        total_subjects = func.count(SubjectModel.id).label("total_subjects")
        result = await self.db.execute(
            select(
                DepartmentModel.id.label("department_id"),
                DepartmentModel.name.label("department_name"),
                total_subjects,
            )
            .outerjoin(SubjectModel, SubjectModel.department_id == DepartmentModel.id)
            .group_by(DepartmentModel.id, DepartmentModel.name)
            .order_by(total_subjects.desc(), DepartmentModel.id)
        )
        return [dict(row) for row in result.mappings()]

    async def classes_per_subject(self) -> list[dict[str, Any]]:
        total_classes = func.count(ClassModel.id).label("total_classes")
        result = await self.db.execute(
            select(
                SubjectModel.id.label("subject_id"),
                SubjectModel.name.label("subject_name"),
                total_classes,
            )
            .outerjoin(ClassModel, ClassModel.subject_id == SubjectModel.id)
            .group_by(SubjectModel.id, SubjectModel.name)
            .order_by(total_classes.desc(), SubjectModel.id)
        )
        return [dict(row) for row in result.mappings()]

    async def count_enrollments(self) -> int:
        return await self.count_rows(EnrollmentModel)
