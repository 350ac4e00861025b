import os

# Settings are read at import time, so point them at SQLite first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DB_CREATE_TABLES"] = "true"
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.database import Database
from app.main import create_app


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Client for an app backed by a fresh in-memory database."""
    database = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    app = create_app(database=database)
    with TestClient(app) as test_client:
        yield test_client


def create_user(client: TestClient, **overrides) -> dict:
    payload = {"name": "Grace Hopper", "email": "grace@school.edu", "role": "student"}
    payload.update(overrides)
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def create_department(client: TestClient, **overrides) -> dict:
    payload = {"code": "CS", "name": "Computer Science"}
    payload.update(overrides)
    response = client.post("/api/departments", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def create_subject(client: TestClient, department_id: int, **overrides) -> dict:
    payload = {"departmentId": department_id, "name": "Algorithms", "code": "CS101"}
    payload.update(overrides)
    response = client.post("/api/subjects", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def create_class(client: TestClient, subject_id: int, teacher_id: str, **overrides) -> dict:
    payload = {"name": "Algorithms A", "subjectId": subject_id, "teacherId": teacher_id}
    payload.update(overrides)
    response = client.post("/api/classes", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


@pytest.fixture
def teacher(client: TestClient) -> dict:
    return create_user(
        client, id="teacher-1", name="Ada Lovelace", email="ada@school.edu", role="teacher"
    )


@pytest.fixture
def student(client: TestClient) -> dict:
    return create_user(client, id="student-1")


@pytest.fixture
def department(client: TestClient) -> dict:
    return create_department(client)


@pytest.fixture
def subject(client: TestClient, department: dict) -> dict:
    return create_subject(client, department["id"])


@pytest.fixture
def classroom(client: TestClient, subject: dict, teacher: dict) -> dict:
    return create_class(client, subject["id"], teacher["id"])
