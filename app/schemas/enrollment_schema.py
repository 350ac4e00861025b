from datetime import datetime

from pydantic import Field

from app.schemas.class_schema import ClassResponse
from app.schemas.common_schema import CamelModel, RequestModel
from app.schemas.user_schema import UserResponse


class EnrollmentCreate(RequestModel):
    student_id: str = Field(..., min_length=1)
    class_id: int = Field(..., gt=0)


class EnrollmentJoin(RequestModel):
    """Schema for joining a class with its invite code"""

    invite_code: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)


class EnrollmentResponse(CamelModel):
    id: int
    student_id: str
    class_id: int
    created_at: datetime


class EnrollmentDetail(EnrollmentResponse):
    student: UserResponse | None = None
    classroom: ClassResponse | None = None
