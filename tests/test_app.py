from __future__ import annotations

import pytest

from classroom_attendance.main import create_app

DAY = "2024-03-04"


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    app = create_app("classroom_attendance.config.testing")
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def signed_in(client):
    resp = client.post(
        "/api/auth/register",
        json={
            "name": "María",
            "surname": "González",
            "email": "maria@example.com",
            "password": "secret",
            "confirm_password": "secret",
        },
    )
    assert resp.status_code == 201
    return client


def _add_group(client, name="Math 101"):
    resp = client.post("/api/groups", json={"name": name, "subject": "Mathematics"})
    assert resp.status_code == 201
    return resp.get_json()["group"]["group_id"]


def _add_student(client, group_id, name, surname, code):
    return client.post(
        f"/api/groups/{group_id}/students",
        json={"name": name, "surname": surname, "code": code},
    )


def test_requires_sign_in(client):
    resp = client.get("/api/groups")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Please sign in to continue"}


def test_login_with_wrong_password(signed_in):
    signed_in.post("/api/auth/logout")

    resp = signed_in.post("/api/auth/login", json={"email": "maria@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_unknown_group_is_404(signed_in):
    resp = signed_in.get("/api/groups/999")

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Group not found"


def test_duplicate_student_code_is_409(signed_in):
    group_id = _add_group(signed_in)
    assert _add_student(signed_in, group_id, "Ana", "Alvarez", "A-001").status_code == 201

    resp = _add_student(signed_in, group_id, "Otra", "Alumna", "A-001")

    assert resp.status_code == 409
    assert resp.get_json()["message"] == "A student with that code already exists"
    assert signed_in.get(f"/api/groups/{group_id}/students").get_json()["count"] == 1


def test_invalid_student_is_400_with_field_errors(signed_in):
    group_id = _add_group(signed_in)

    resp = _add_student(signed_in, group_id, "A", "Alvarez", "A-001")

    assert resp.status_code == 400
    assert "name" in resp.get_json()["errors"]


def test_record_attendance_and_report(signed_in):
    group_id = _add_group(signed_in)
    ana = _add_student(signed_in, group_id, "Ana", "Alvarez", "A-001").get_json()["student"]["student_id"]
    bruno = _add_student(signed_in, group_id, "Bruno", "Benitez", "B-002").get_json()["student"]["student_id"]

    resp = signed_in.post(
        f"/api/groups/{group_id}/attendance",
        json={"date": DAY, "statuses": {str(ana): "present", str(bruno): "PRESENT"}},
    )
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["message"] == "Attendance saved"
    assert body["summary"]["present"] == 2
    assert body["summary"]["unset"] == 0

    day = signed_in.get(f"/api/groups/{group_id}/attendance?date={DAY}").get_json()
    assert day["state"] == "success"
    assert {row["code"]: row["status"] for row in day["students"]} == {"A-001": "PRESENT", "B-002": "PRESENT"}
    assert day["students"][0]["label"] == "Presente"

    days = signed_in.get(f"/api/groups/{group_id}/attendance/days").get_json()["days"]
    assert days == [DAY]

    report = signed_in.get(f"/api/groups/{group_id}/report?start={DAY}&end={DAY}").get_json()["report"]
    assert report["total_records"] == 2
    assert report["present_pct"] == 100.0
    assert report["overall_attendance"] == 100.0


def test_invalid_status_is_rejected(signed_in):
    group_id = _add_group(signed_in)
    ana = _add_student(signed_in, group_id, "Ana", "Alvarez", "A-001").get_json()["student"]["student_id"]

    resp = signed_in.post(
        f"/api/groups/{group_id}/attendance",
        json={"date": DAY, "statuses": {str(ana): "sleeping"}},
    )

    assert resp.status_code == 400


def test_other_teachers_groups_are_hidden(client):
    def register(email):
        client.post(
            "/api/auth/register",
            json={"name": "Luis", "surname": "Perez", "email": email, "password": "abcd", "confirm_password": "abcd"},
        )

    register("luis@example.com")
    group_id = _add_group(client)
    client.post("/api/auth/logout")
    register("otro@example.com")

    assert client.get(f"/api/groups/{group_id}").status_code == 404
    assert client.get("/api/groups").get_json()["count"] == 0


@pytest.mark.parametrize("statuses", [[1, 2], "PRESENT"])
def test_statuses_must_be_an_object(signed_in, statuses):
    group_id = _add_group(signed_in)
    _add_student(signed_in, group_id, "Ana", "Alvarez", "A-001")

    resp = signed_in.post(f"/api/groups/{group_id}/attendance", json={"date": DAY, "statuses": statuses})

    assert resp.status_code == 400
    assert "statuses" in resp.get_json()["errors"]
    assert signed_in.get(f"/api/groups/{group_id}/attendance/days").get_json()["days"] == []


def test_transfer_needs_a_numeric_group_id(signed_in):
    group_id = _add_group(signed_in)
    ana = _add_student(signed_in, group_id, "Ana", "Alvarez", "A-001").get_json()["student"]["student_id"]

    resp = signed_in.post(f"/api/students/{ana}/transfer", json={"group_id": "second"})

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"group_id": "Must be a whole number"}
