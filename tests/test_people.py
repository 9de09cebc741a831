from config.settings import settings
from models.people import Person

API = settings.API_PREFIX


def test_create_student_returns_joined_person(api):
    student = api.student(1001, "Ada Lovelace", cohort="2025T1")
    assert student["full_name"] == "Ada Lovelace"
    assert student["email"] == "s1001@uni.test"
    assert student["cohort"] == "2025T1"
    assert student["person_id"] > 0


def test_failed_role_insert_leaves_no_person(api, client, db):
    api.student(1001, "Ada")
    r = client.post(f"{API}/students/", json={
        "student_id": 1001,
        "full_name": "Someone Else",
        "email": "else@uni.test",
    })
    assert r.status_code == 409
    assert db.query(Person).filter(Person.email == "else@uni.test").count() == 0
    assert db.query(Person).count() == 1


def test_duplicate_email_is_a_conflict(api, client):
    api.student(1001, "Ada")
    r = client.post(f"{API}/students/", json={"student_id": 1002, "full_name": "Ada 2", "email": "s1001@uni.test"})
    assert r.status_code == 409
    assert r.json() == {"error": "Duplicate/unique constraint"}


def test_missing_required_field_is_rejected(client):
    r = client.post(f"{API}/students/", json={"full_name": "No Id", "email": "x@uni.test"})
    assert r.status_code == 400
    assert "student_id" in r.json()["error"]


def test_student_from_existing_person(client):
    person = client.post(f"{API}/people/", json={"full_name": "Grace", "email": "grace@uni.test"}).json()

    r = client.post(f"{API}/students/from-person", json={"person_id": person["person_id"], "student_id": 2001})
    assert r.status_code == 201
    assert r.json()["full_name"] == "Grace"

    again = client.post(f"{API}/students/from-person", json={"person_id": person["person_id"], "student_id": 2002})
    assert again.status_code == 409

    missing = client.post(f"{API}/students/from-person", json={"person_id": 999, "student_id": 2003})
    assert missing.status_code == 400


def test_person_with_a_role_cannot_be_deleted(api, client):
    student = api.student(1001, "Ada")

    r = client.delete(f"{API}/people/{student['person_id']}")
    assert r.status_code == 409
    assert client.get(f"{API}/people/{student['person_id']}").status_code == 200
    assert client.get(f"{API}/students/1001").status_code == 200


def test_delete_student_removes_person(api, client):
    student = api.student(1001, "Ada")
    assert client.delete(f"{API}/students/1001").status_code == 204
    assert client.get(f"{API}/people/{student['person_id']}").status_code == 404
    assert client.delete(f"{API}/students/1001").status_code == 404


def test_enrolled_student_cannot_be_deleted(api, client, offering):
    student = api.student(1001, "Ada")
    api.enrol(offering["class_offering_id"], 1001)

    r = client.delete(f"{API}/students/1001")
    assert r.status_code == 409
    assert client.get(f"{API}/students/1001").status_code == 200
    assert client.get(f"{API}/people/{student['person_id']}").status_code == 200


def test_update_student_keeps_unsent_fields(api, client):
    api.student(1001, "Ada", cohort="2025T1")
    r = client.put(f"{API}/students/1001", json={"full_name": "Ada L."})
    assert r.status_code == 200
    assert r.json()["full_name"] == "Ada L."
    assert r.json()["cohort"] == "2025T1"
    assert client.put(f"{API}/students/4242", json={"cohort": "x"}).status_code == 404


def test_student_search(api, client):
    api.student(1001, "Ada Lovelace")
    api.student(1002, "Brian Kernighan")
    r = client.get(f"{API}/students/", params={"q": "Kernighan"})
    assert [s["student_id"] for s in r.json()] == [1002]


def test_renumbering_an_instructor_carries_assignments(api, client, offering):
    api.instructor(501, "Dr Grace")
    api.assign(501, offering["class_offering_id"])

    r = client.put(f"{API}/instructors/501", json={"new_instructor_id": 601, "full_name": "Prof Grace"})
    assert r.status_code == 200
    assert r.json()["instructor_id"] == 601
    assert r.json()["full_name"] == "Prof Grace"

    assignments = client.get(f"{API}/teaching-assignments/", params={"class_offering_id": offering["class_offering_id"]})
    assert [a["instructor_id"] for a in assignments.json()] == [601]
    assert client.get(f"{API}/instructors/501").status_code == 404


def test_teaching_instructor_cannot_be_deleted(api, client, offering):
    api.instructor(501, "Dr Grace")
    api.assign(501, offering["class_offering_id"])
    assert client.delete(f"{API}/instructors/501").status_code == 409

    client.delete(f"{API}/teaching-assignments/501/{offering['class_offering_id']}")
    assert client.delete(f"{API}/instructors/501").status_code == 204


def test_identity_lookup(api, client):
    api.student(1001, "Ada")
    api.instructor(501, "Dr Grace")

    student = client.get("/auth/student/1001")
    assert student.status_code == 200
    assert student.json()["role"] == "student"
    assert student.json()["full_name"] == "Ada"

    instructor = client.get("/auth/instructor/501")
    assert instructor.json()["role"] == "instructor"
    assert instructor.json()["instructor_id"] == 501

    assert client.get("/auth/student/9").status_code == 404
    assert client.get("/auth/student/9").json() == {"error": "Student not found"}
