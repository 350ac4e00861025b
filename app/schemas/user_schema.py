from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.models.user_model import UserRole
from app.schemas.common_schema import CamelModel, PartialUpdateModel, RequestModel


class UserCreate(RequestModel):
    """Schema for creating a user.

    ``id`` is normally assigned by the auth provider; one is generated
    when it is omitted.
    """

    id: Optional[str] = Field(None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    email_verified: bool = False
    image: Optional[str] = None
    image_cld_pub_id: Optional[str] = None
    role: UserRole = UserRole.STUDENT


class UserUpdate(PartialUpdateModel):
    """Schema for updating a user"""

    non_nullable_fields = ("name", "email", "email_verified", "role")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    email_verified: Optional[bool] = None
    image: Optional[str] = None
    image_cld_pub_id: Optional[str] = None
    role: Optional[UserRole] = None


class UserResponse(CamelModel):
    """Schema for user response."""

    id: str
    name: str
    email: str
    email_verified: bool
    image: Optional[str] = None
    image_cld_pub_id: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None
