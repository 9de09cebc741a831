from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from database.db import get_db
from models.attendance import Attendance as AttendanceModel, AttendanceStatus
from models.class_sessions import ClassSession as ClassSessionModel
from models.enrolments import Enrolment as EnrolmentModel
from schemas.class_sessions import ClassSession, ClassSessionCreate, StudentSession
from schemas.common import ERROR_RESPONSES
from services import session_service
from services.errors import NotFound

router = APIRouter(prefix="/class-sessions", tags=["class-sessions"], responses=ERROR_RESPONSES)


def session_row(s: ClassSessionModel) -> dict:
    offering = s.class_offering
    return {
        "session_id": s.session_id,
        "class_offering_id": s.class_offering_id,
        "session_no": s.session_no,
        "session_start_date": s.session_start_date,
        "session_end_date": s.session_end_date,
        "title": s.title,
        "room": s.room,
        "course_code": offering.course_code,
        "class_group": offering.class_group,
        "class_type": offering.class_type,
        "course_name": offering.course.course_name,
        "term_label": offering.term.term_label,
    }


# ==========================================================
# [1] create (session + attendance placeholders)
# ==========================================================

# ✅ [CREATE] session; every Active enrolment gets a "Not attended" row
@router.post("/", response_model=ClassSession, status_code=201)
def create_class_session(body: ClassSessionCreate, db: Session = Depends(get_db)):
    session = session_service.create_session(db, body.model_dump())
    return session_row(session)


# ==========================================================
# [2] read
# ==========================================================

# ✅ [READ] sessions, optional offering filter and title/room search
@router.get("/", response_model=list[ClassSession])
def read_class_sessions(
    q: Optional[str] = None,
    class_offering_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(ClassSessionModel)
    if class_offering_id is not None:
        query = query.filter(ClassSessionModel.class_offering_id == class_offering_id)
    if q:
        query = query.filter(or_(ClassSessionModel.title.contains(q), ClassSessionModel.room.contains(q)))
    sessions = query.order_by(
        ClassSessionModel.class_offering_id,
        ClassSessionModel.session_no,
    ).all()
    return [session_row(s) for s in sessions]


# ✅ [READ] one student's sessions in one offering, with attendance
@router.get("/by-student/{student_id}/{class_offering_id}", response_model=list[StudentSession])
def read_student_sessions(student_id: int, class_offering_id: int, db: Session = Depends(get_db)):
    enrolment = (
        db.query(EnrolmentModel)
        .filter(
            EnrolmentModel.student_id == student_id,
            EnrolmentModel.class_offering_id == class_offering_id,
        )
        .first()
    )
    if enrolment is None:
        raise NotFound("No enrolment found for this student & class offering")

    rows = (
        db.query(ClassSessionModel, AttendanceModel)
        .outerjoin(
            AttendanceModel,
            and_(
                AttendanceModel.session_id == ClassSessionModel.session_id,
                AttendanceModel.enrolment_id == enrolment.enrolment_id,
            ),
        )
        .filter(ClassSessionModel.class_offering_id == class_offering_id)
        .order_by(ClassSessionModel.session_no)
        .all()
    )
    return [
        {
            "session_id": s.session_id,
            "session_no": s.session_no,
            "session_start_date": s.session_start_date,
            "session_end_date": s.session_end_date,
            "title": s.title,
            "room": s.room,
            "enrolment_id": enrolment.enrolment_id,
            "attendance_id": a.attendance_id if a else None,
            "attendance_status": a.attendance_status if a else AttendanceStatus.NOT_ATTENDED,
        }
        for s, a in rows
    ]


@router.get("/{session_id}", response_model=ClassSession)
def read_class_session(session_id: int, db: Session = Depends(get_db)):
    session = db.get(ClassSessionModel, session_id)
    if session is None:
        raise NotFound("Not found")
    return session_row(session)


# ==========================================================
# [3] update / delete
# ==========================================================

@router.put("/{session_id}", response_model=ClassSession)
def update_class_session(session_id: int, body: ClassSessionCreate, db: Session = Depends(get_db)):
    return session_row(session_service.update_session(db, session_id, body.model_dump()))


# ✅ [DELETE] session; its attendance rows are removed with it
@router.delete("/{session_id}", status_code=204)
def delete_class_session(session_id: int, db: Session = Depends(get_db)):
    session_service.delete_session(db, session_id)
    return Response(status_code=204)
