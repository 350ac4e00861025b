from fastapi.testclient import TestClient

from conftest import create_class, create_user


def enroll(client: TestClient, student_id: str, class_id: int):
    return client.post(
        "/api/enrollments", json={"studentId": student_id, "classId": class_id}
    )


def test_create_enrollment(client: TestClient, classroom: dict, student: dict):
    response = enroll(client, student["id"], classroom["id"])

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["studentId"] == student["id"]
    assert data["classId"] == classroom["id"]
    assert data["student"]["email"] == student["email"]
    assert data["classroom"]["inviteCode"] == classroom["inviteCode"]


def test_create_enrollment_twice_conflicts(
    client: TestClient, classroom: dict, student: dict
):
    assert enroll(client, student["id"], classroom["id"]).status_code == 201

    response = enroll(client, student["id"], classroom["id"])

    assert response.status_code == 409
    assert response.json() == {"error": "Student is already enrolled in this class"}


def test_create_enrollment_missing_class(client: TestClient, student: dict):
    response = enroll(client, student["id"], 999)

    assert response.status_code == 404
    assert response.json() == {"error": "Class not found"}


def test_create_enrollment_missing_student(client: TestClient, classroom: dict):
    response = enroll(client, "ghost", classroom["id"])

    assert response.status_code == 404
    assert response.json() == {"error": "Student not found"}


def test_create_enrollment_rejects_teacher(
    client: TestClient, classroom: dict, teacher: dict
):
    response = enroll(client, teacher["id"], classroom["id"])

    assert response.status_code == 400
    assert response.json()["error"] == "Only students can be enrolled"


def test_create_enrollment_full_class(client: TestClient, subject: dict, teacher: dict):
    classroom = create_class(client, subject["id"], teacher["id"], capacity=1)
    first = create_user(client, id="s1", email="s1@school.edu")
    second = create_user(client, id="s2", email="s2@school.edu")

    assert enroll(client, first["id"], classroom["id"]).status_code == 201
    response = enroll(client, second["id"], classroom["id"])

    assert response.status_code == 409
    assert response.json() == {"error": "Class is full"}


def test_create_enrollment_inactive_class(
    client: TestClient, subject: dict, teacher: dict, student: dict
):
    classroom = create_class(client, subject["id"], teacher["id"], status="inactive")

    response = enroll(client, student["id"], classroom["id"])

    assert response.status_code == 409


def test_join_class_with_invite_code(
    client: TestClient, classroom: dict, student: dict
):
    response = client.post(
        "/api/enrollments/join",
        json={"inviteCode": classroom["inviteCode"], "studentId": student["id"]},
    )

    assert response.status_code == 201
    assert response.json()["data"]["classId"] == classroom["id"]

    again = client.post(
        "/api/enrollments/join",
        json={"inviteCode": classroom["inviteCode"], "studentId": student["id"]},
    )
    assert again.status_code == 409


def test_join_class_unknown_code(client: TestClient, student: dict):
    response = client.post(
        "/api/enrollments/join", json={"inviteCode": "nope123", "studentId": student["id"]}
    )

    assert response.status_code == 404


def test_list_enrollments_filters(client: TestClient, subject: dict, teacher: dict):
    morning = create_class(client, subject["id"], teacher["id"], name="Morning")
    evening = create_class(client, subject["id"], teacher["id"], name="Evening")
    alice = create_user(client, id="alice", email="alice@school.edu")
    bob = create_user(client, id="bob", email="bob@school.edu")
    enroll(client, alice["id"], morning["id"])
    enroll(client, alice["id"], evening["id"])
    enroll(client, bob["id"], evening["id"])

    by_class = client.get("/api/enrollments", params={"classId": evening["id"]}).json()
    by_student = client.get("/api/enrollments", params={"studentId": "alice"}).json()
    both = client.get(
        "/api/enrollments", params={"classId": morning["id"], "studentId": "bob"}
    ).json()

    assert {e["studentId"] for e in by_class["data"]} == {"alice", "bob"}
    assert by_student["pagination"]["total"] == 2
    assert both["data"] == []
    assert both["pagination"] == {"page": 1, "limit": 10, "total": 0, "totalPages": 0}


def test_delete_enrollment_frees_seat(client: TestClient, subject: dict, teacher: dict):
    classroom = create_class(client, subject["id"], teacher["id"], capacity=1)
    first = create_user(client, id="s1", email="s1@school.edu")
    second = create_user(client, id="s2", email="s2@school.edu")
    enrollment = enroll(client, first["id"], classroom["id"]).json()["data"]

    response = client.delete(f"/api/enrollments/{enrollment['id']}")

    assert response.status_code == 200
    assert client.get(f"/api/enrollments/{enrollment['id']}").status_code == 404
    assert enroll(client, second["id"], classroom["id"]).status_code == 201


def test_delete_missing_enrollment(client: TestClient):
    response = client.delete("/api/enrollments/404")

    assert response.status_code == 404
