from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.access import require_session_instructor
from models.attendance import Attendance as AttendanceModel
from models.class_sessions import ClassSession as ClassSessionModel
from models.enrolments import Enrolment as EnrolmentModel
from models.people import Person as PersonModel
from models.students import Student as StudentModel
from schemas.attendance import (
    Attendance,
    AttendanceDetail,
    AttendanceSet,
    AttendanceUpdate,
    RosterRow,
    SessionAttendanceSet,
)
from schemas.common import ERROR_RESPONSES, UpdatedCount
from services import attendance_service
from services.errors import NotFound

router = APIRouter(
    prefix="/attendance",
    tags=["attendance"],
    responses=ERROR_RESPONSES,
)


def _detail_query(db: Session):
    return (
        db.query(AttendanceModel, ClassSessionModel, EnrolmentModel, PersonModel)
        .join(ClassSessionModel, ClassSessionModel.session_id == AttendanceModel.session_id)
        .join(EnrolmentModel, EnrolmentModel.enrolment_id == AttendanceModel.enrolment_id)
        .join(StudentModel, StudentModel.student_id == EnrolmentModel.student_id)
        .join(PersonModel, PersonModel.person_id == StudentModel.person_id)
    )


def _detail_rows(rows) -> list:
    return [
        {
            "attendance_id": a.attendance_id,
            "enrolment_id": a.enrolment_id,
            "session_id": a.session_id,
            "attendance_status": a.attendance_status,
            "class_offering_id": s.class_offering_id,
            "session_no": s.session_no,
            "session_start_date": s.session_start_date,
            "session_end_date": s.session_end_date,
            "session_title": s.title,
            "room": s.room,
            "student_id": e.student_id,
            "enrolment_status": e.enrolment_status,
            "student_name": p.full_name,
            "student_email": p.email,
        }
        for a, s, e, p in rows
    ]


# ==========================================================
# [1] direct set (upsert on enrolment + session)
# ==========================================================

# ✅ [UPSERT] 201 when inserted, 200 when an existing row was updated
@router.post("/", response_model=Attendance, status_code=201)
def set_attendance(body: AttendanceSet, response: Response, db: Session = Depends(get_db)):
    record, created = attendance_service.set_status(
        db, body.enrolment_id, body.session_id, body.attendance_status
    )
    if not created:
        response.status_code = 200
    return record


# ==========================================================
# [2] listings
# ==========================================================

# ✅ [READ] attendance rows, optional enrolment/session filters
@router.get("/", response_model=list[AttendanceDetail])
def read_attendance(
    enrolment_id: Optional[int] = None,
    session_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = _detail_query(db)
    if enrolment_id is not None:
        query = query.filter(AttendanceModel.enrolment_id == enrolment_id)
    if session_id is not None:
        query = query.filter(AttendanceModel.session_id == session_id)
    rows = query.order_by(ClassSessionModel.session_no, PersonModel.full_name, AttendanceModel.attendance_id).all()
    return _detail_rows(rows)


# ✅ [READ] every attendance row of an offering, session by session
@router.get("/by-class-offering/{class_offering_id}", response_model=list[AttendanceDetail])
def read_attendance_by_class_offering(class_offering_id: int, db: Session = Depends(get_db)):
    rows = (
        _detail_query(db)
        .filter(ClassSessionModel.class_offering_id == class_offering_id)
        .order_by(ClassSessionModel.session_no, PersonModel.full_name, AttendanceModel.attendance_id)
        .all()
    )
    return _detail_rows(rows)


# ==========================================================
# [3] instructor views (only for the offering's instructors)
# ==========================================================

# ✅ [ROSTER] every enrolment of the session, missing rows as "Not attended"
@router.get("/instructor/{instructor_id}/session/{session_id}", response_model=list[RosterRow])
def read_session_roster(
    session: ClassSessionModel = Depends(require_session_instructor),
    db: Session = Depends(get_db),
):
    return attendance_service.roster(db, session)


@router.post("/instructor/{instructor_id}/session/{session_id}", response_model=Attendance, status_code=201)
def set_session_attendance(
    body: SessionAttendanceSet,
    response: Response,
    session: ClassSessionModel = Depends(require_session_instructor),
    db: Session = Depends(get_db),
):
    record, created = attendance_service.set_status(
        db, body.enrolment_id, session.session_id, body.attendance_status
    )
    if not created:
        response.status_code = 200
    return record


@router.post("/instructor/{instructor_id}/session/{session_id}/verify-pending", response_model=UpdatedCount)
def verify_session_pending(
    session: ClassSessionModel = Depends(require_session_instructor),
    db: Session = Depends(get_db),
):
    return {"updated": attendance_service.verify_all(db, session.session_id)}


# ==========================================================
# [4] state transitions
# ==========================================================

# ✅ [CLAIM] student marks themselves present; Pending/Verified are left as is
@router.patch("/student/{student_id}/session/{session_id}/pending", response_model=Attendance)
def mark_student_pending(student_id: int, session_id: int, db: Session = Depends(get_db)):
    return attendance_service.mark_pending_for_student(db, student_id, session_id)


# ✅ [VERIFY] Pending -> Verified for one session
@router.patch("/verify-all/{session_id}", response_model=UpdatedCount)
def verify_all(session_id: int, db: Session = Depends(get_db)):
    return {"updated": attendance_service.verify_all(db, session_id)}


# ==========================================================
# [5] single row
# ==========================================================

@router.get("/{attendance_id}", response_model=Attendance)
def read_attendance_record(attendance_id: int, db: Session = Depends(get_db)):
    record = db.get(AttendanceModel, attendance_id)
    if record is None:
        raise NotFound("Not found")
    return record


# ✅ [OVERWRITE] admin correction, any status allowed
@router.put("/{attendance_id}", response_model=Attendance)
def overwrite_attendance(attendance_id: int, body: AttendanceUpdate, db: Session = Depends(get_db)):
    return attendance_service.overwrite(db, attendance_id, body.attendance_status)


@router.patch("/{attendance_id}/pending", response_model=Attendance)
def mark_pending(attendance_id: int, db: Session = Depends(get_db)):
    return attendance_service.mark_pending(db, attendance_id)


@router.delete("/{attendance_id}", status_code=204)
def delete_attendance(attendance_id: int, db: Session = Depends(get_db)):
    attendance_service.delete(db, attendance_id)
    return Response(status_code=204)
