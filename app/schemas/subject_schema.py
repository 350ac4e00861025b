from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common_schema import CamelModel, PartialUpdateModel, RequestModel
from app.schemas.department_schema import DepartmentResponse


class SubjectCreate(RequestModel):
    department_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None


class SubjectUpdate(PartialUpdateModel):
    non_nullable_fields = ("department_id", "name", "code")

    department_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None


class SubjectResponse(CamelModel):
    id: int
    department_id: int
    name: str
    code: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class SubjectWithDepartment(SubjectResponse):
    """Canonical subject view with its department nested in"""

    department: Optional[DepartmentResponse] = None


class SubjectTotals(CamelModel):
    classes: int


class SubjectDetailResponse(CamelModel):
    subject: SubjectWithDepartment
    totals: SubjectTotals
