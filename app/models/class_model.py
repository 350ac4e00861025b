from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from app.database import Base


class ClassStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class ClassModel(Base):
    """Model representing a class: a subject taught by one teacher to enrolled students.

    Attributes:
        invite_code: Short unique token students use to join the class
        schedules: Ordered list of {"day", "startTime", "endTime"} entries
        capacity: Maximum number of enrollments, unlimited when null
    """

    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    invite_code = Column(String(50), nullable=False, unique=True)
    subject_id = Column(
        Integer,
        ForeignKey("subjects.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    teacher_id = Column(
        String(64),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    description = Column(Text, nullable=True)
    banner_url = Column(Text, nullable=True)
    banner_cld_pub_id = Column(Text, nullable=True)
    capacity = Column(Integer, nullable=True)
    status = Column(
        SQLEnum(
            ClassStatus,
            name="class_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=ClassStatus.ACTIVE,
    )
    schedules = Column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list
    )
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now
    )

    # Relationships
    subject = relationship("SubjectModel", back_populates="classes")
    teacher = relationship("UserModel")
    enrollments = relationship(
        "EnrollmentModel", back_populates="classroom", passive_deletes=True
    )

    @property
    def department(self):
        return self.subject.department if self.subject is not None else None
