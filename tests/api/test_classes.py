import re

import pytest
from fastapi.testclient import TestClient

from conftest import create_class, create_subject, create_user


def test_create_class_returns_canonical_view(
    client: TestClient, subject: dict, teacher: dict
):
    response = client.post(
        "/api/classes",
        json={
            "name": "Algorithms A",
            "subjectId": subject["id"],
            "teacherId": teacher["id"],
            "capacity": 25,
            "schedules": [
                {"day": "Monday", "startTime": "09:00", "endTime": "10:30"},
            ],
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert re.fullmatch(r"[a-z0-9]{7}", data["inviteCode"])
    assert data["status"] == "active"
    assert data["capacity"] == 25
    assert data["schedules"] == [
        {"day": "Monday", "startTime": "09:00", "endTime": "10:30"}
    ]
    assert data["subject"]["id"] == subject["id"]
    assert data["department"]["id"] == subject["departmentId"]
    assert data["teacher"]["id"] == teacher["id"]


def test_create_class_rejects_client_invite_code(
    client: TestClient, subject: dict, teacher: dict
):
    response = client.post(
        "/api/classes",
        json={
            "name": "Algorithms A",
            "subjectId": subject["id"],
            "teacherId": teacher["id"],
            "inviteCode": "chosen1",
        },
    )

    assert response.status_code == 400


def test_create_class_missing_subject(client: TestClient, teacher: dict):
    response = client.post(
        "/api/classes",
        json={"name": "Ghost class", "subjectId": 999, "teacherId": teacher["id"]},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Subject not found"}
    assert client.get("/api/classes").json()["pagination"]["total"] == 0


def test_create_class_missing_teacher(client: TestClient, subject: dict):
    response = client.post(
        "/api/classes",
        json={"name": "Orphan class", "subjectId": subject["id"], "teacherId": "nobody"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Teacher not found"}


def test_create_class_invite_code_exhausted(
    client: TestClient, classroom: dict, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(
        "app.services.class_service.generate_invite_code",
        lambda: classroom["inviteCode"],
    )

    response = client.post(
        "/api/classes",
        json={
            "name": "Algorithms B",
            "subjectId": classroom["subjectId"],
            "teacherId": classroom["teacherId"],
        },
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate invite code"}
    assert client.get("/api/classes").json()["pagination"]["total"] == 1


def test_create_class_retries_after_collision(
    client: TestClient, classroom: dict, monkeypatch: pytest.MonkeyPatch
):
    codes = iter([classroom["inviteCode"], "fresh42"])
    monkeypatch.setattr(
        "app.services.class_service.generate_invite_code", lambda: next(codes)
    )

    created = create_class(
        client, classroom["subjectId"], classroom["teacherId"], name="Algorithms B"
    )

    assert created["inviteCode"] == "fresh42"


def test_get_class_by_invite_code(client: TestClient, classroom: dict):
    response = client.get(f"/api/classes/invite/{classroom['inviteCode']}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == classroom["id"]
    assert client.get("/api/classes/invite/missing").status_code == 404


def test_list_classes_filters(client: TestClient, subject: dict, teacher: dict):
    other_teacher = create_user(
        client, id="teacher-2", name="Alan", email="alan@school.edu", role="teacher"
    )
    other_subject = create_subject(
        client, subject["departmentId"], code="CS200", name="Databases"
    )
    create_class(client, subject["id"], teacher["id"], name="Algorithms Morning")
    create_class(
        client, subject["id"], other_teacher["id"], name="Algorithms Evening"
    )
    create_class(
        client,
        other_subject["id"],
        teacher["id"],
        name="Databases Morning",
        status="archived",
    )

    def names_for(**params):
        body = client.get("/api/classes", params=params).json()
        return sorted(c["name"] for c in body["data"]), body["pagination"]["total"]

    assert names_for(search="morning") == (
        ["Algorithms Morning", "Databases Morning"],
        2,
    )
    assert names_for(subjectId=subject["id"]) == (
        ["Algorithms Evening", "Algorithms Morning"],
        2,
    )
    assert names_for(teacherId=other_teacher["id"]) == (["Algorithms Evening"], 1)
    assert names_for(status="archived") == (["Databases Morning"], 1)
    assert names_for(search="morning", teacherId=teacher["id"], status="active") == (
        ["Algorithms Morning"],
        1,
    )


def test_list_classes_pagination(client: TestClient, subject: dict, teacher: dict):
    for index in range(7):
        create_class(client, subject["id"], teacher["id"], name=f"Section {index}")

    body = client.get("/api/classes", params={"page": 2, "limit": 3}).json()

    assert len(body["data"]) == 3
    assert body["pagination"] == {"page": 2, "limit": 3, "total": 7, "totalPages": 3}
    assert [c["name"] for c in body["data"]] == ["Section 3", "Section 2", "Section 1"]

    beyond = client.get("/api/classes", params={"page": 9, "limit": 3}).json()
    assert beyond["data"] == []
    assert beyond["pagination"]["total"] == 7


def test_list_classes_rejects_unknown_status(client: TestClient):
    response = client.get("/api/classes", params={"status": "paused"})

    assert response.status_code == 400


def test_update_class_partial(client: TestClient, classroom: dict):
    response = client.put(f"/api/classes/{classroom['id']}", json={"capacity": 30})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["capacity"] == 30
    assert data["name"] == classroom["name"]
    assert data["inviteCode"] == classroom["inviteCode"]
    assert data["status"] == classroom["status"]


def test_update_class_clears_capacity(client: TestClient, subject: dict, teacher: dict):
    classroom = create_class(client, subject["id"], teacher["id"], capacity=10)

    response = client.put(f"/api/classes/{classroom['id']}", json={"capacity": None})

    assert response.status_code == 200
    assert response.json()["data"]["capacity"] is None


def test_update_class_rejects_null_name(client: TestClient, classroom: dict):
    response = client.put(f"/api/classes/{classroom['id']}", json={"name": None})

    assert response.status_code == 400


def test_update_class_replaces_schedules(client: TestClient, classroom: dict):
    schedules = [
        {"day": "Tuesday", "startTime": "13:00", "endTime": "14:00"},
        {"day": "Thursday", "startTime": "13:00", "endTime": "14:00"},
    ]

    response = client.put(
        f"/api/classes/{classroom['id']}", json={"schedules": schedules}
    )

    assert response.status_code == 200
    assert response.json()["data"]["schedules"] == schedules


def test_update_class_invite_code_conflict(
    client: TestClient, subject: dict, teacher: dict
):
    first = create_class(client, subject["id"], teacher["id"], name="First")
    second = create_class(client, subject["id"], teacher["id"], name="Second")

    response = client.put(
        f"/api/classes/{second['id']}", json={"inviteCode": first["inviteCode"]}
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Invite code already exists"}


def test_update_class_missing_teacher(client: TestClient, classroom: dict):
    response = client.put(
        f"/api/classes/{classroom['id']}", json={"teacherId": "nobody"}
    )

    assert response.status_code == 404


def test_update_class_empty_payload(client: TestClient, classroom: dict):
    response = client.put(f"/api/classes/{classroom['id']}", json={})

    assert response.status_code == 400


def test_list_class_users(client: TestClient, classroom: dict, teacher: dict):
    for index in range(3):
        student = create_user(
            client, id=f"s{index}", name=f"Student {index}", email=f"s{index}@school.edu"
        )
        enrolled = client.post(
            "/api/enrollments",
            json={"studentId": student["id"], "classId": classroom["id"]},
        )
        assert enrolled.status_code == 201

    students = client.get(
        f"/api/classes/{classroom['id']}/users", params={"role": "student", "limit": 2}
    ).json()
    teachers = client.get(
        f"/api/classes/{classroom['id']}/users", params={"role": "teacher"}
    ).json()

    assert len(students["data"]) == 2
    assert students["pagination"]["total"] == 3
    assert students["pagination"]["totalPages"] == 2
    assert [u["id"] for u in teachers["data"]] == [teacher["id"]]


def test_list_class_users_missing_class(client: TestClient):
    response = client.get("/api/classes/999/users", params={"role": "student"})

    assert response.status_code == 404


def test_delete_class_removes_enrollments(
    client: TestClient, classroom: dict, student: dict
):
    enrolled = client.post(
        "/api/enrollments",
        json={"studentId": student["id"], "classId": classroom["id"]},
    )
    assert enrolled.status_code == 201

    response = client.delete(f"/api/classes/{classroom['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Class deleted"}
    assert client.get(f"/api/classes/{classroom['id']}").status_code == 404
    enrollments = client.get("/api/enrollments").json()
    assert enrollments["pagination"]["total"] == 0


def test_get_missing_class(client: TestClient):
    response = client.get("/api/classes/12345")

    assert response.status_code == 404
    assert response.json() == {"error": "Class not found"}


def test_get_class_rejects_non_numeric_id(client: TestClient):
    response = client.get("/api/classes/abc")

    assert response.status_code == 400


def test_delete_missing_class(client: TestClient):
    response = client.delete("/api/classes/12345")

    assert response.status_code == 404


def test_list_classes_rejects_unknown_query_params(client: TestClient):
    response = client.get("/api/classes", params={"search": "a", "teacher": "x"})

    assert response.status_code == 400
    assert response.json()["error"] == "Unrecognized query parameter: teacher"


def test_not_found_body_has_only_error(client: TestClient):
    response = client.get("/api/classes/invite/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Class not found"}
