import pytest

from config.settings import settings
from models.attendance import AttendanceStatus
from services.attendance_service import claimed_status

API = settings.API_PREFIX


@pytest.fixture
def roster(api, offering):
    """Two active students, one session, placeholders provisioned."""
    coid = offering["class_offering_id"]
    api.student(1001, "Ada")
    api.student(1002, "Brian")
    e1 = api.enrol(coid, 1001)
    e2 = api.enrol(coid, 1002)
    session = api.session(coid)
    return {
        "class_offering_id": coid,
        "session_id": session["session_id"],
        "enrolments": [e1["enrolment_id"], e2["enrolment_id"]],
    }


def _status_by_enrolment(api, session_id):
    return {r["enrolment_id"]: r["attendance_status"] for r in api.attendance(session_id)}


@pytest.mark.parametrize("current, expected", [
    (None, AttendanceStatus.PENDING),
    (AttendanceStatus.NOT_ATTENDED, AttendanceStatus.PENDING),
    (AttendanceStatus.PENDING, AttendanceStatus.PENDING),
    (AttendanceStatus.VERIFIED, AttendanceStatus.VERIFIED),
])
def test_claimed_status(current, expected):
    assert claimed_status(current) == expected


def test_student_claim_is_idempotent(client, roster):
    url = f"{API}/attendance/student/1001/session/{roster['session_id']}/pending"

    first = client.patch(url)
    second = client.patch(url)

    assert first.status_code == second.status_code == 200
    assert first.json()["attendance_status"] == "Pending"
    assert second.json() == first.json()


def test_student_claim_never_downgrades_verified(api, client, roster):
    sid = roster["session_id"]
    client.patch(f"{API}/attendance/student/1001/session/{sid}/pending")
    client.patch(f"{API}/attendance/verify-all/{sid}")

    r = client.patch(f"{API}/attendance/student/1001/session/{sid}/pending")
    assert r.status_code == 200
    assert r.json()["attendance_status"] == "Verified"


def test_student_claim_creates_missing_row(api, client, roster):
    # enrolled after the session was provisioned, so no placeholder exists
    api.student(1003, "Chen")
    late = api.enrol(roster["class_offering_id"], 1003)

    r = client.patch(f"{API}/attendance/student/1003/session/{roster['session_id']}/pending")
    assert r.status_code == 200
    assert r.json()["enrolment_id"] == late["enrolment_id"]
    assert r.json()["attendance_status"] == "Pending"


def test_student_claim_without_enrolment_is_not_found(api, client, roster):
    api.student(1009, "Zed")
    r = client.patch(f"{API}/attendance/student/1009/session/{roster['session_id']}/pending")
    assert r.status_code == 404
    assert r.json() == {"error": "No enrolment found for this student & session"}


def test_single_record_pending_uses_the_same_rule(client, api, roster):
    row = api.attendance(roster["session_id"])[0]
    url = f"{API}/attendance/{row['attendance_id']}/pending"

    assert client.patch(url).json()["attendance_status"] == "Pending"
    client.put(f"{API}/attendance/{row['attendance_id']}", json={"attendance_status": "Verified"})
    assert client.patch(url).json()["attendance_status"] == "Verified"
    assert client.patch(f"{API}/attendance/99999/pending").status_code == 404


def test_verify_all_only_touches_pending_rows_of_that_session(api, client, roster):
    coid, sid = roster["class_offering_id"], roster["session_id"]
    other = api.session(coid, session_no=2)
    client.patch(f"{API}/attendance/student/1001/session/{sid}/pending")
    client.patch(f"{API}/attendance/student/1001/session/{other['session_id']}/pending")

    r = client.patch(f"{API}/attendance/verify-all/{sid}")
    assert r.status_code == 200
    assert r.json() == {"message": "Updated successfully", "updated": 1}

    e1, e2 = roster["enrolments"]
    assert _status_by_enrolment(api, sid) == {e1: "Verified", e2: "Not attended"}
    assert _status_by_enrolment(api, other["session_id"])[e1] == "Pending"

    again = client.patch(f"{API}/attendance/verify-all/{sid}")
    assert again.json()["updated"] == 0
    assert _status_by_enrolment(api, sid) == {e1: "Verified", e2: "Not attended"}


def test_verify_all_unknown_session_is_not_found(client):
    assert client.patch(f"{API}/attendance/verify-all/424242").status_code == 404


def test_direct_set_inserts_then_updates(api, client, offering):
    coid = offering["class_offering_id"]
    session = api.session(coid)
    api.student(1001, "Ada")
    enrolment = api.enrol(coid, 1001)        # after the session: no placeholder
    body = {"enrolment_id": enrolment["enrolment_id"], "session_id": session["session_id"]}

    created = client.post(f"{API}/attendance/", json=body)
    assert created.status_code == 201
    assert created.json()["attendance_status"] == "Not attended"

    updated = client.post(f"{API}/attendance/", json={**body, "attendance_status": "Verified"})
    assert updated.status_code == 200
    assert updated.json()["attendance_id"] == created.json()["attendance_id"]
    assert updated.json()["attendance_status"] == "Verified"
    assert len(api.attendance(session["session_id"])) == 1


def test_direct_set_rejects_enrolment_from_another_offering(api, client, roster, offering):
    other = api.offering("CS101", offering["term_id"], group="B")
    api.student(1005, "Eve")
    foreign = api.enrol(other["class_offering_id"], 1005)

    r = client.post(f"{API}/attendance/", json={
        "enrolment_id": foreign["enrolment_id"],
        "session_id": roster["session_id"],
    })
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid enrolment_id for this session"}


def test_direct_set_rejects_unknown_status(client, roster):
    r = client.post(f"{API}/attendance/", json={
        "enrolment_id": roster["enrolments"][0],
        "session_id": roster["session_id"],
        "attendance_status": "Late",
    })
    assert r.status_code == 400


def test_instructor_roster_requires_teaching_assignment(api, client, roster):
    api.instructor(501, "Dr Grace")
    api.instructor(502, "Dr Other")
    api.assign(501, roster["class_offering_id"])
    sid = roster["session_id"]

    ok = client.get(f"{API}/attendance/instructor/501/session/{sid}")
    assert ok.status_code == 200
    assert [r["student_name"] for r in ok.json()] == ["Ada", "Brian"]
    assert {r["attendance_status"] for r in ok.json()} == {"Not attended"}

    denied = client.get(f"{API}/attendance/instructor/502/session/{sid}")
    assert denied.status_code == 403
    assert denied.json() == {"error": "Not authorized for this session"}

    missing = client.get(f"{API}/attendance/instructor/501/session/99999")
    assert missing.status_code == 404


def test_instructor_set_and_verify(api, client, roster):
    api.instructor(501, "Dr Grace")
    api.assign(501, roster["class_offering_id"])
    sid = roster["session_id"]
    e1, e2 = roster["enrolments"]

    r = client.post(f"{API}/attendance/instructor/501/session/{sid}", json={
        "enrolment_id": e1,
        "attendance_status": "Pending",
    })
    assert r.status_code == 200          # placeholder already existed

    verified = client.post(f"{API}/attendance/instructor/501/session/{sid}/verify-pending")
    assert verified.json()["updated"] == 1
    assert _status_by_enrolment(api, sid) == {e1: "Verified", e2: "Not attended"}


def test_roster_reports_missing_rows_as_not_attended(api, client, roster):
    api.instructor(501, "Dr Grace")
    api.assign(501, roster["class_offering_id"])
    api.student(1003, "Chen")
    api.enrol(roster["class_offering_id"], 1003)

    rows = client.get(f"{API}/attendance/instructor/501/session/{roster['session_id']}").json()
    chen = next(r for r in rows if r["student_id"] == 1003)
    assert chen == {
        "enrolment_id": chen["enrolment_id"],
        "student_id": 1003,
        "student_name": "Chen",
        "attendance_status": "Not attended",
        "attendance_id": None,
    }


def test_by_class_offering_lists_every_session(api, client, roster):
    api.session(roster["class_offering_id"], session_no=2)
    r = client.get(f"{API}/attendance/by-class-offering/{roster['class_offering_id']}")
    assert r.status_code == 200
    assert len(r.json()) == 4
    assert [row["session_no"] for row in r.json()] == [1, 1, 2, 2]


def test_delete_attendance(api, client, roster):
    row = api.attendance(roster["session_id"])[0]
    assert client.delete(f"{API}/attendance/{row['attendance_id']}").status_code == 204
    assert client.get(f"{API}/attendance/{row['attendance_id']}").status_code == 404
