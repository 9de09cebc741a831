import pytest

from config.settings import settings

API = settings.API_PREFIX


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert "X-Latency-Ms" in r.headers


def test_course_crud(api, client):
    api.course(code="CS101", name="Intro to Programming")
    api.course(code="MA101", name="Calculus")

    assert client.post(f"{API}/courses/", json={
        "course_code": "CS101", "course_name": "Again", "credit": 6,
    }).status_code == 409

    found = client.get(f"{API}/courses/", params={"q": "Calc"}).json()
    assert [c["course_code"] for c in found] == ["MA101"]

    r = client.put(f"{API}/courses/MA101", json={"course_name": "Calculus I", "credit": 6})
    assert r.status_code == 200
    assert r.json()["course_name"] == "Calculus I"

    assert client.delete(f"{API}/courses/MA101").status_code == 204
    assert client.get(f"{API}/courses/MA101").status_code == 404
    assert client.put(f"{API}/courses/MA101", json={"course_name": "x", "credit": 1}).status_code == 404


def test_course_in_use_cannot_be_deleted(client, offering):
    r = client.delete(f"{API}/courses/CS101")
    assert r.status_code == 409
    assert r.json() == {"error": "Row is still referenced by other records"}


def test_term_dates_are_validated(client):
    r = client.post(f"{API}/terms/", json={
        "term_label": "Backwards", "start_date": "2025-05-01", "end_date": "2025-02-01",
    })
    assert r.status_code == 400


def test_terms_are_listed_most_recent_first(api, client):
    api.term(label="2024 T3", start="2024-09-02", end="2024-12-06")
    api.term(label="2025 T1", start="2025-02-10", end="2025-05-02")
    assert [t["term_label"] for t in client.get(f"{API}/terms/").json()] == ["2025 T1", "2024 T3"]


def test_offering_with_unknown_course_is_rejected(api, client):
    term = api.term()
    r = client.post(f"{API}/class-offerings/", json={
        "course_code": "NOPE", "term_id": term["term_id"], "class_group": "A",
    })
    assert r.status_code == 400
    assert r.json() == {"error": "Referenced record does not exist"}


def test_offering_views(api, client, offering):
    coid = offering["class_offering_id"]
    assert offering["course_name"] == "Intro to Programming"
    assert offering["class_type"] == "LEC"

    api.student(1001, "Ada")
    api.instructor(501, "Dr Grace")
    api.enrol(coid, 1001)
    api.assign(501, coid, role="TA")

    assert [o["class_offering_id"] for o in client.get(f"{API}/class-offerings/by-student/1001").json()] == [coid]
    assert [o["class_offering_id"] for o in client.get(f"{API}/class-offerings/by-instructor/501").json()] == [coid]
    assert client.get(f"{API}/class-offerings/by-student/1002").json() == []

    filtered = client.get(f"{API}/class-offerings/", params={"course_code": "XX"}).json()
    assert filtered == []


def test_offering_with_sessions_cannot_be_deleted(api, client, offering):
    api.session(offering["class_offering_id"])
    assert client.delete(f"{API}/class-offerings/{offering['class_offering_id']}").status_code == 409


def test_offering_type_must_be_known(api, client):
    api.course()
    term = api.term()
    r = client.post(f"{API}/class-offerings/", json={
        "course_code": "CS101", "term_id": term["term_id"], "class_group": "A", "class_type": "SEM",
    })
    assert r.status_code == 400


def test_teaching_assignment_crud(api, client, offering):
    coid = offering["class_offering_id"]
    api.instructor(501, "Dr Grace")
    created = api.assign(501, coid)
    assert created["teaching_role"] == "Lecturer"

    assert client.post(f"{API}/teaching-assignments/", json={
        "instructor_id": 501, "class_offering_id": coid,
    }).status_code == 409

    r = client.put(f"{API}/teaching-assignments/501/{coid}", json={"teaching_role": "Tutor"})
    assert r.json()["teaching_role"] == "Tutor"
    assert len(client.get(f"{API}/teaching-assignments/", params={"teaching_role": "Tutor"}).json()) == 1

    assert client.delete(f"{API}/teaching-assignments/501/{coid}").status_code == 204
    assert client.get(f"{API}/teaching-assignments/501/{coid}").status_code == 404


def test_enrolment_crud(api, client, offering):
    coid = offering["class_offering_id"]
    api.student(1001, "Ada", cohort="2025T1")
    enrolment = api.enrol(coid, 1001)
    assert enrolment["full_name"] == "Ada"
    assert enrolment["course_code"] == "CS101"
    assert enrolment["enrolment_status"] == "Active"

    # one enrolment per student per offering
    assert client.post(f"{API}/enrolments/", json={"class_offering_id": coid, "student_id": 1001}).status_code == 409
    assert client.post(f"{API}/enrolments/", json={"class_offering_id": coid, "student_id": 4242}).status_code == 400

    eid = enrolment["enrolment_id"]
    r = client.put(f"{API}/enrolments/{eid}", json={"enrolment_status": "Inactive"})
    assert r.json()["enrolment_status"] == "Inactive"
    assert len(client.get(f"{API}/enrolments/", params={"student_id": 1001}).json()) == 1

    assert client.delete(f"{API}/enrolments/{eid}").status_code == 204
    assert client.delete(f"{API}/enrolments/{eid}").status_code == 404


def test_enrolment_with_attendance_cannot_be_deleted(api, client, offering):
    api.student(1001, "Ada")
    enrolment = api.enrol(offering["class_offering_id"], 1001)
    api.session(offering["class_offering_id"])
    assert client.delete(f"{API}/enrolments/{enrolment['enrolment_id']}").status_code == 409


@pytest.mark.parametrize("weight", [-5, 120])
def test_assessment_weight_range(client, offering, weight):
    r = client.post(f"{API}/assessment-types/", json={
        "course_code": "CS101", "assessment_type": "Quiz", "weight": weight,
    })
    assert r.status_code == 400


def test_assessment_label_unique_per_course(api, client, offering):
    api.assessment("CS101", "Quiz", 10)
    assert client.post(f"{API}/assessment-types/", json={
        "course_code": "CS101", "assessment_type": "Quiz", "weight": 20,
    }).status_code == 409

    listed = client.get(f"{API}/assessment-types/", params={"course_code": "CS101"}).json()
    assert [(a["assessment_type"], a["course_name"]) for a in listed] == [("Quiz", "Intro to Programming")]


@pytest.mark.parametrize("path", [
    "/people/1", "/students/1", "/instructors/1", "/courses/X", "/terms/1",
    "/class-offerings/1", "/class-sessions/1", "/enrolments/1", "/attendance/1",
    "/assessment-types/1", "/grades/1",
])
def test_missing_rows_are_not_found(client, path):
    r = client.get(API + path)
    assert r.status_code == 404
    assert r.json() == {"error": "Not found"}
