from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy import Enum as SQLEnum

from app.database import Base


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class UserModel(Base):
    """User accounts. Rows are owned by the auth provider, so ids are strings."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    image = Column(String(1024), nullable=True)
    image_cld_pub_id = Column(String(255), nullable=True)
    role = Column(
        SQLEnum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now
    )
