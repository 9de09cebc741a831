"""
Legacy denormalized grades + attendance records.

Kept for older clients only; `/attendance` and `/grades` are authoritative.
Every route here is flagged deprecated in the OpenAPI document.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.attendance import AttendanceStatus
from models.class_sessions import ClassSession as ClassSessionModel
from models.enrolments import Enrolment as EnrolmentModel
from models.grades_attendance import GradesAndAttendance as GradesAttendanceModel
from models.people import Person as PersonModel
from models.students import Student as StudentModel
from schemas.common import ERROR_RESPONSES, UpdatedCount
from schemas.grades_attendance import (
    GradesAttendance,
    GradesAttendanceCreate,
    GradesAttendanceDetail,
    GradesAttendanceUpdate,
)
from services.attendance_service import claimed_status
from services.errors import NotFound

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/grades-attendance",
    tags=["grades-attendance (legacy)"],
    responses=ERROR_RESPONSES,
    deprecated=True,
)


def _get_or_404(db: Session, record_id: int) -> GradesAttendanceModel:
    record = db.get(GradesAttendanceModel, record_id)
    if record is None:
        raise NotFound("Not found")
    return record


def _detail_query(db: Session):
    return (
        db.query(GradesAttendanceModel, EnrolmentModel, PersonModel, ClassSessionModel)
        .join(EnrolmentModel, EnrolmentModel.enrolment_id == GradesAttendanceModel.enrolment_id)
        .join(StudentModel, StudentModel.student_id == EnrolmentModel.student_id)
        .join(PersonModel, PersonModel.person_id == StudentModel.person_id)
        .outerjoin(ClassSessionModel, ClassSessionModel.session_id == GradesAttendanceModel.session_id)
    )


def _detail_rows(rows) -> list:
    return [
        {
            "record_id": r.record_id,
            "enrolment_id": r.enrolment_id,
            "session_id": r.session_id,
            "assessment_type": r.assessment_type,
            "score": r.score,
            "weight": r.weight,
            "attendance_status": r.attendance_status,
            "student_id": e.student_id,
            "student_name": p.full_name,
            "student_email": p.email,
            "session_no": s.session_no if s else None,
            "class_offering_id": s.class_offering_id if s else None,
        }
        for r, e, p, s in rows
    ]


# ==========================================================
# [1] CRUD
# ==========================================================

@router.post("/", response_model=GradesAttendance, status_code=201)
def create_record(body: GradesAttendanceCreate, db: Session = Depends(get_db)):
    data = body.model_dump()
    data["attendance_status"] = data["attendance_status"] or AttendanceStatus.NOT_ATTENDED
    record = GradesAttendanceModel(**data)
    with atomic(db):
        db.add(record)
    return record


@router.get("/", response_model=list[GradesAttendanceDetail])
def read_records(db: Session = Depends(get_db)):
    return _detail_rows(_detail_query(db).order_by(GradesAttendanceModel.record_id).all())


@router.get("/by-class-offering/{class_offering_id}", response_model=list[GradesAttendanceDetail])
def read_records_by_class_offering(class_offering_id: int, db: Session = Depends(get_db)):
    rows = (
        _detail_query(db)
        .filter(EnrolmentModel.class_offering_id == class_offering_id)
        .order_by(ClassSessionModel.session_no, PersonModel.full_name, GradesAttendanceModel.record_id)
        .all()
    )
    return _detail_rows(rows)


# ✅ [VERIFY] Pending -> Verified for one session
@router.patch("/verify-all/{session_id}", response_model=UpdatedCount)
def verify_all(session_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        updated = (
            db.query(GradesAttendanceModel)
            .filter(
                GradesAttendanceModel.session_id == session_id,
                GradesAttendanceModel.attendance_status == AttendanceStatus.PENDING,
            )
            .update(
                {GradesAttendanceModel.attendance_status: AttendanceStatus.VERIFIED},
                synchronize_session=False,
            )
        )
    logger.info("legacy verify-all: %d rows for session %s", updated, session_id)
    return {"updated": updated}


@router.get("/{record_id}", response_model=GradesAttendance)
def read_record(record_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, record_id)


@router.put("/{record_id}", response_model=GradesAttendance)
def update_record(record_id: int, body: GradesAttendanceUpdate, db: Session = Depends(get_db)):
    with atomic(db):
        record = _get_or_404(db, record_id)
        for key, value in body.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(record, key, value)
    return record


# ✅ [CLAIM] only "Not attended" moves to Pending
@router.patch("/{record_id}/attendance-pending", response_model=GradesAttendance)
def mark_pending(record_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        record = _get_or_404(db, record_id)
        record.attendance_status = claimed_status(record.attendance_status)
    return record


@router.delete("/{record_id}", status_code=204)
def delete_record(record_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        db.delete(_get_or_404(db, record_id))
    return Response(status_code=204)
