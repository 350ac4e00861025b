from pydantic import Field

from app.schemas.class_schema import ClassDetail
from app.schemas.common_schema import CamelModel
from app.schemas.user_schema import UserResponse


class UserTotals(CamelModel):
    total: int = 0
    admins: int = 0
    teachers: int = 0
    students: int = 0


class ClassTotals(CamelModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    archived: int = 0


class OverviewStats(CamelModel):
    users: UserTotals
    departments: int
    subjects: int
    classes: ClassTotals
    enrollments: int


class LatestStats(CamelModel):
    latest_classes: list[ClassDetail] = Field(default_factory=list)
    latest_teachers: list[UserResponse] = Field(default_factory=list)


class RoleCount(CamelModel):
    role: str
    total: int


class DepartmentSubjectCount(CamelModel):
    department_id: int
    department_name: str
    total_subjects: int


class SubjectClassCount(CamelModel):
    subject_id: int
    subject_name: str
    total_classes: int


class ChartStats(CamelModel):
    users_by_role: list[RoleCount]
    subjects_by_department: list[DepartmentSubjectCount]
    classes_by_subject: list[SubjectClassCount]
