from typing import Optional

import structlog

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.class_model import ClassModel, ClassStatus
from app.models.enrollment_model import EnrollmentModel
from app.models.user_model import UserRole
from app.repositories.registry import Repositories
from app.schemas.enrollment_schema import EnrollmentCreate, EnrollmentJoin
from app.utils.error_handling import handle_database_errors
from app.utils.pagination import PageParams, PageResult

logger = structlog.get_logger()

ALREADY_ENROLLED = "Student is already enrolled in this class"


async def _get_or_404(repos: Repositories, enrollment_id: int) -> EnrollmentModel:
    enrollment = await repos.enrollments.get_by_id(enrollment_id)
    if enrollment is None:
        raise NotFoundError("Enrollment not found", resource_type="enrollment")
    return enrollment


async def _enroll(
    repos: Repositories, student_id: str, classroom: ClassModel
) -> EnrollmentModel:
    """Enroll a student after checking role, class status, duplicates and capacity."""
    student = await repos.users.get_by_id(student_id)
    if student is None:
        raise NotFoundError("Student not found", resource_type="user")
    if student.role != UserRole.STUDENT:
        raise ValidationError("Only students can be enrolled", field="studentId")

    if classroom.status != ClassStatus.ACTIVE:
        raise ConflictError("Class is not accepting enrollments")

    if (
        await repos.enrollments.get_for_student_and_class(student_id, classroom.id)
        is not None
    ):
        raise ConflictError(ALREADY_ENROLLED)

    if classroom.capacity is not None:
        enrolled = await repos.enrollments.count_for_class(classroom.id)
        if enrolled >= classroom.capacity:
            raise ConflictError("Class is full")

    enrollment = await repos.enrollments.add(
        EnrollmentModel(student_id=student_id, class_id=classroom.id),
        conflict_message=ALREADY_ENROLLED,
    )
    await repos.commit()
    logger.info(
        "Student enrolled",
        enrollment_id=enrollment.id,
        student_id=student_id,
        class_id=classroom.id,
    )
    return await _get_or_404(repos, enrollment.id)


@handle_database_errors("Failed to fetch enrollments")
async def list_enrollments(
    repos: Repositories,
    params: PageParams,
    class_id: Optional[int] = None,
    student_id: Optional[str] = None,
) -> PageResult:
    return await repos.enrollments.list_enrollments(
        params, class_id=class_id, student_id=student_id
    )


@handle_database_errors("Failed to fetch enrollment")
async def get_enrollment(repos: Repositories, enrollment_id: int) -> EnrollmentModel:
    return await _get_or_404(repos, enrollment_id)


@handle_database_errors("Failed to create enrollment")
async def create_enrollment(
    repos: Repositories, payload: EnrollmentCreate
) -> EnrollmentModel:
    classroom = await repos.classes.get_by_id(payload.class_id)
    if classroom is None:
        raise NotFoundError("Class not found", resource_type="class")
    return await _enroll(repos, payload.student_id, classroom)


@handle_database_errors("Failed to join class")
async def join_class(repos: Repositories, payload: EnrollmentJoin) -> EnrollmentModel:
    """Enroll a student in the class identified by an invite code."""
    classroom = await repos.classes.get_by_invite_code(payload.invite_code)
    if classroom is None:
        raise NotFoundError("Class not found", resource_type="class")
    return await _enroll(repos, payload.student_id, classroom)


@handle_database_errors("Failed to delete enrollment")
async def delete_enrollment(repos: Repositories, enrollment_id: int) -> None:
    deleted = await repos.enrollments.delete_by_id(
        enrollment_id, in_use_message="Enrollment is still referenced"
    )
    if not deleted:
        raise NotFoundError("Enrollment not found", resource_type="enrollment")
    await repos.commit()
