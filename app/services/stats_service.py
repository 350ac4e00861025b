from typing import Any

from app.models.class_model import ClassStatus
from app.models.department_model import DepartmentModel
from app.models.subject_model import SubjectModel
from app.models.user_model import UserRole
from app.repositories.registry import Repositories
from app.utils.error_handling import handle_database_errors


@handle_database_errors("Failed to fetch overview stats")
async def get_overview(repos: Repositories) -> dict[str, Any]:
    """Totals of every entity, with users split by role and classes by status."""
    users_by_role = await repos.stats.count_users_by_role()
    classes_by_status = await repos.stats.count_classes_by_status()

    return {
        "users": {
            "total": sum(users_by_role.values()),
            "admins": users_by_role.get(UserRole.ADMIN.value, 0),
            "teachers": users_by_role.get(UserRole.TEACHER.value, 0),
            "students": users_by_role.get(UserRole.STUDENT.value, 0),
        },
        "departments": await repos.stats.count_rows(DepartmentModel),
        "subjects": await repos.stats.count_rows(SubjectModel),
        "classes": {
            "total": sum(classes_by_status.values()),
            **{
                status.value: classes_by_status.get(status.value, 0)
                for status in ClassStatus
            },
        },
        "enrollments": await repos.stats.count_enrollments(),
    }


@handle_database_errors("Failed to fetch latest stats")
async def get_latest(repos: Repositories, limit: int) -> dict[str, Any]:
    return {
        "latest_classes": await repos.classes.latest(limit),
        "latest_teachers": await repos.users.latest(UserRole.TEACHER, limit),
    }


@handle_database_errors("Failed to fetch chart stats")
async def get_charts(repos: Repositories) -> dict[str, Any]:
    users_by_role = await repos.stats.count_users_by_role()
    return {
        "users_by_role": [
            {"role": role.value, "total": users_by_role.get(role.value, 0)}
            for role in UserRole
        ],
        "subjects_by_department": await repos.stats.subjects_per_department(),
        "classes_by_subject": await repos.stats.classes_per_subject(),
    }


@handle_database_errors("Database health check failed")
async def check_database(repos: Repositories) -> bool:
    return await repos.stats.ping()
