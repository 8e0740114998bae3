"""Tests for the course catalog endpoints."""

COURSE = {
    "name": "Psicologia",
    "code": "PSI",
    "description": "Bacharelado em Psicologia",
    "duration": 60,
    "coordinator": "Dra. Helena Lima",
    "price": 1099.9,
}


def _create_course(client, headers, **overrides):
    response = client.post("/admin/courses", json={**COURSE, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_seeded_catalog(client, store):
    assert store.seed_default_courses() == 5
    assert store.seed_default_courses() == 0

    courses = client.get("/courses").json()
    assert [c["code"] for c in courses] == ["ADM", "ENG-CIV", "DIR", "CC", "MED"]
    shifts = client.get(f"/courses/{courses[0]['id']}/shifts").json()
    assert [s["name"] for s in shifts] == ["Manhã", "Tarde", "Noite"]
    modalities = client.get(f"/courses/{courses[0]['id']}/modalities").json()
    assert [m["name"] for m in modalities] == ["Presencial", "Semipresencial", "EAD"]


def test_create_update_delete_course(client, admin_headers):
    course = _create_course(client, admin_headers)
    assert course["active"] is True
    assert client.get(f"/courses/{course['id']}").json() == course

    response = client.put(f"/admin/courses/{course['id']}", json={"price": 999.0}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["price"] == 999.0
    assert response.json()["name"] == "Psicologia"

    assert client.delete(f"/admin/courses/{course['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/courses/{course['id']}").status_code == 404


def test_invalid_course(client, admin_headers):
    response = client.post("/admin/courses", json={**COURSE, "duration": 0}, headers=admin_headers)
    assert response.status_code == 400


def test_update_unknown_course(client, admin_headers):
    assert client.put("/admin/courses/12", json={"price": 1.0}, headers=admin_headers).status_code == 404


def test_shifts_and_modalities(client, admin_headers):
    course = _create_course(client, admin_headers)

    shift = client.post("/admin/course-shifts", json={
        "course_id": course["id"], "name": "Noite", "start_time": "19:00", "end_time": "22:30",
    }, headers=admin_headers)
    assert shift.status_code == 201
    modality = client.post("/admin/course-modalities", json={
        "course_id": course["id"], "name": "EAD",
    }, headers=admin_headers)
    assert modality.status_code == 201

    updated = client.put(
        f"/admin/course-shifts/{shift.json()['id']}", json={"end_time": "23:00"}, headers=admin_headers
    )
    assert updated.json()["end_time"] == "23:00"
    updated = client.put(
        f"/admin/course-modalities/{modality.json()['id']}", json={"active": False}, headers=admin_headers
    )
    assert updated.json()["active"] is False

    # Removing the course takes its shifts and modalities with it
    client.delete(f"/admin/courses/{course['id']}", headers=admin_headers)
    assert client.get(f"/courses/{course['id']}/shifts").json() == []
    assert client.get(f"/courses/{course['id']}/modalities").json() == []


def test_shift_requires_existing_course(client, admin_headers):
    response = client.post("/admin/course-shifts", json={
        "course_id": 31, "name": "Manhã", "start_time": "08:00", "end_time": "12:00",
    }, headers=admin_headers)
    assert response.status_code == 404


def test_shift_time_format(client, admin_headers):
    course = _create_course(client, admin_headers)
    response = client.post("/admin/course-shifts", json={
        "course_id": course["id"], "name": "Manhã", "start_time": "8h", "end_time": "12:00",
    }, headers=admin_headers)
    assert response.status_code == 400


def test_catalog_management_is_admin_only(client, student_headers):
    assert client.post("/admin/courses", json=COURSE).status_code == 401
    assert client.post("/admin/courses", json=COURSE, headers=student_headers).status_code == 403
    assert client.delete("/admin/course-shifts/1", headers=student_headers).status_code == 403
