from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from app.models.class_model import ClassStatus
from app.schemas.common_schema import (
    CamelModel,
    PartialUpdateModel,
    RequestModel,
)
from app.schemas.department_schema import DepartmentResponse
from app.schemas.subject_schema import SubjectResponse
from app.schemas.user_schema import UserResponse


class RosterRole(str, Enum):
    """Roles that can be listed on a class or subject roster"""

    TEACHER = "teacher"
    STUDENT = "student"


class Schedule(RequestModel):
    day: str = Field(..., min_length=1)
    start_time: str = Field(..., min_length=1)
    end_time: str = Field(..., min_length=1)


class ClassCreate(RequestModel):
    """Schema for creating a class. The invite code is always generated."""

    name: str = Field(..., min_length=1, max_length=255)
    subject_id: int = Field(..., gt=0)
    teacher_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    banner_url: Optional[str] = None
    banner_cld_pub_id: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    status: ClassStatus = ClassStatus.ACTIVE
    schedules: list[Schedule] = Field(default_factory=list)


class ClassUpdate(PartialUpdateModel):
    """Schema for updating a class"""

    non_nullable_fields = (
        "name",
        "invite_code",
        "subject_id",
        "teacher_id",
        "status",
        "schedules",
    )

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    invite_code: Optional[str] = Field(None, min_length=1, max_length=50)
    subject_id: Optional[int] = Field(None, gt=0)
    teacher_id: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    banner_url: Optional[str] = None
    banner_cld_pub_id: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    status: Optional[ClassStatus] = None
    schedules: Optional[list[Schedule]] = None

    def changes(self) -> dict:
        values = super().changes()
        if "schedules" in values:
            # Stored with the same camelCase keys the API exposes
            values["schedules"] = [
                schedule.model_dump(by_alias=True) for schedule in self.schedules
            ]
        return values


class ScheduleResponse(CamelModel):
    day: str
    start_time: str
    end_time: str


class ClassResponse(CamelModel):
    id: int
    name: str
    invite_code: str
    subject_id: int
    teacher_id: str
    description: Optional[str] = None
    banner_url: Optional[str] = None
    banner_cld_pub_id: Optional[str] = None
    capacity: Optional[int] = None
    status: ClassStatus
    schedules: list[ScheduleResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


class ClassDetail(ClassResponse):
    """Canonical class view: subject, its department and the teacher nested in"""

    subject: Optional[SubjectResponse] = None
    department: Optional[DepartmentResponse] = None
    teacher: Optional[UserResponse] = None


class ClassWithTeacher(ClassResponse):
    teacher: Optional[UserResponse] = None
