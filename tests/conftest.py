import os

# must be set before config.settings is imported anywhere
os.environ["SQLALCHEMY_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["REQUEST_LOG"] = "false"
os.environ["LEGACY_GRADES_ATTENDANCE"] = "false"

import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from database.db import SessionLocal, engine
from database.schema import create_all, drop_all
from main import app

API = settings.API_PREFIX


class Api:
    """Thin helper around TestClient that builds fixture data through the API."""

    def __init__(self, client):
        self.client = client

    def post(self, path, body, expected=201):
        r = self.client.post(API + path, json=body)
        assert r.status_code == expected, r.text
        return r.json()

    def course(self, code="CS101", name="Intro to Programming", credit=6):
        return self.post("/courses/", {"course_code": code, "course_name": name, "credit": credit})

    def term(self, label="2025 T1", start="2025-02-10", end="2025-05-02"):
        return self.post("/terms/", {"term_label": label, "start_date": start, "end_date": end})

    def offering(self, course_code, term_id, group="A", class_type="LEC"):
        body = {"course_code": course_code, "term_id": term_id, "class_group": group, "class_type": class_type}
        return self.post("/class-offerings/", body)

    def student(self, student_id, name, cohort=None):
        body = {
            "student_id": student_id,
            "full_name": name,
            "email": f"s{student_id}@uni.test",
            "cohort": cohort,
        }
        return self.post("/students/", body)

    def instructor(self, instructor_id, name):
        body = {"instructor_id": instructor_id, "full_name": name, "email": f"i{instructor_id}@uni.test"}
        return self.post("/instructors/", body)

    def assign(self, instructor_id, class_offering_id, role="Lecturer"):
        body = {"instructor_id": instructor_id, "class_offering_id": class_offering_id, "teaching_role": role}
        return self.post("/teaching-assignments/", body)

    def enrol(self, class_offering_id, student_id, status="Active"):
        body = {"class_offering_id": class_offering_id, "student_id": student_id, "enrolment_status": status}
        return self.post("/enrolments/", body)

    def session(self, class_offering_id, session_no=1, expected=201):
        body = {
            "class_offering_id": class_offering_id,
            "session_no": session_no,
            "session_start_date": f"2025-03-{session_no:02d}T09:00:00",
            "session_end_date": f"2025-03-{session_no:02d}T11:00:00",
            "title": f"Week {session_no}",
            "room": "B-101",
        }
        return self.post("/class-sessions/", body, expected=expected)

    def assessment(self, course_code, label, weight):
        body = {"course_code": course_code, "assessment_type": label, "weight": weight}
        return self.post("/assessment-types/", body)

    def grade(self, enrolment_id, assessment_id, score):
        body = {"enrolment_id": enrolment_id, "assessment_id": assessment_id, "score": score}
        return self.post("/grades/", body)

    def attendance(self, session_id):
        r = self.client.get(API + "/attendance/", params={"session_id": session_id})
        assert r.status_code == 200, r.text
        return r.json()


@pytest.fixture(autouse=True)
def schema():
    create_all(engine)
    yield
    drop_all(engine)


@pytest.fixture
def client():
    # unhandled errors still come back as the 500 JSON body instead of raising here
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def offering(api):
    """CS101 / 2025 T1 / group A with no enrolments yet."""
    api.course()
    term = api.term()
    return api.offering("CS101", term["term_id"])
