from fastapi.testclient import TestClient

from conftest import create_class, create_department, create_subject, create_user


def test_overview_on_empty_database(client: TestClient):
    response = client.get("/api/stats/overview")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["users"] == {"total": 0, "admins": 0, "teachers": 0, "students": 0}
    assert data["classes"]["total"] == 0
    assert data["enrollments"] == 0


def test_overview_counts(
    client: TestClient, classroom: dict, student: dict, subject: dict, teacher: dict
):
    create_class(client, subject["id"], teacher["id"], name="Old", status="archived")
    create_user(client, id="root", email="root@school.edu", role="admin")
    client.post(
        "/api/enrollments", json={"studentId": student["id"], "classId": classroom["id"]}
    )

    data = client.get("/api/stats/overview").json()["data"]

    assert data["users"] == {"total": 3, "admins": 1, "teachers": 1, "students": 1}
    assert data["departments"] == 1
    assert data["subjects"] == 1
    assert data["classes"] == {"total": 2, "active": 1, "inactive": 0, "archived": 1}
    assert data["enrollments"] == 1


def test_latest(client: TestClient, subject: dict, teacher: dict):
    for index in range(3):
        create_class(client, subject["id"], teacher["id"], name=f"Section {index}")
    create_user(client, id="t2", name="Alan", email="alan@school.edu", role="teacher")

    data = client.get("/api/stats/latest", params={"limit": 2}).json()["data"]

    assert [c["name"] for c in data["latestClasses"]] == ["Section 2", "Section 1"]
    assert data["latestClasses"][0]["teacher"]["id"] == teacher["id"]
    assert [t["id"] for t in data["latestTeachers"]] == ["t2", teacher["id"]]


def test_latest_rejects_bad_limit(client: TestClient):
    assert client.get("/api/stats/latest", params={"limit": 0}).status_code == 400


def test_charts(client: TestClient, subject: dict, teacher: dict):
    empty = create_department(client, code="ART", name="Art")
    create_subject(client, subject["departmentId"], code="CS200", name="Databases")
    create_class(client, subject["id"], teacher["id"])

    data = client.get("/api/stats/charts").json()["data"]

    assert {"role": "teacher", "total": 1} in data["usersByRole"]
    departments = {d["departmentId"]: d["totalSubjects"] for d in data["subjectsByDepartment"]}
    assert departments == {subject["departmentId"]: 2, empty["id"]: 0}
    assert data["classesBySubject"][0] == {
        "subjectId": subject["id"],
        "subjectName": subject["name"],
        "totalClasses": 1,
    }
