from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.class_repository import ClassRepository
from app.repositories.department_repository import DepartmentRepository
from app.repositories.enrollment_repository import EnrollmentRepository
from app.repositories.stats_repository import StatsRepository
from app.repositories.subject_repository import SubjectRepository
from app.repositories.user_repository import UserRepository


class Repositories:
    """Per-request persistence context handed to every service function.

    All repositories share one session, so a service's lookups, writes and
    re-fetch happen in the same unit of work.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.departments = DepartmentRepository(db)
        self.subjects = SubjectRepository(db)
        self.classes = ClassRepository(db)
        self.users = UserRepository(db)
        self.enrollments = EnrollmentRepository(db)
        self.stats = StatsRepository(db)

    async def commit(self) -> None:
        await self.db.commit()
