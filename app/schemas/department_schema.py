from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common_schema import CamelModel, PartialUpdateModel, RequestModel


class DepartmentCreate(RequestModel):
    """Schema for creating a department"""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class DepartmentUpdate(PartialUpdateModel):
    """Schema for updating a department"""

    non_nullable_fields = ("code", "name")

    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class DepartmentResponse(CamelModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class DepartmentTotals(CamelModel):
    subjects: int
    classes: int


class DepartmentDetailResponse(CamelModel):
    """Department with counts of the subjects and classes it owns"""

    department: DepartmentResponse
    totals: DepartmentTotals
