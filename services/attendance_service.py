"""
Attendance state machine: Not attended -> Pending -> Verified.

- claim (student / single record): only Not attended moves to Pending,
  any other state is kept and the current record is returned.
- verify_all: Pending -> Verified for one session; idempotent.
- set_status: instructor/admin upsert keyed on (enrolment_id, session_id).
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import atomic
from models.attendance import Attendance, AttendanceStatus
from models.class_sessions import ClassSession
from models.enrolments import Enrolment
from models.people import Person
from models.students import Student
from services.errors import InvalidRequest, NotFound, ReferenceNotFound
from utils.db_errors import classify_integrity_error, UNIQUE

logger = logging.getLogger(__name__)


def claimed_status(current: Optional[AttendanceStatus]) -> AttendanceStatus:
    """Status after a student claims attendance; None means no row yet."""
    if current is None or current == AttendanceStatus.NOT_ATTENDED:
        return AttendanceStatus.PENDING
    return current


def _find(db: Session, enrolment_id: int, session_id: int) -> Optional[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.enrolment_id == enrolment_id, Attendance.session_id == session_id)
        .first()
    )


def _retry_on_duplicate(operation):
    """Run `operation` again when a concurrent request inserted the same (enrolment, session) first."""
    try:
        return operation()
    except IntegrityError as exc:
        if classify_integrity_error(exc) != UNIQUE:
            raise
        logger.info("attendance row inserted concurrently, retrying as update")
        return operation()


# ==========================================================
# [1] claim (-> Pending)
# ==========================================================

def mark_pending(db: Session, attendance_id: int) -> Attendance:
    with atomic(db):
        record = db.get(Attendance, attendance_id)
        if record is None:
            raise NotFound("Not found")
        record.attendance_status = claimed_status(record.attendance_status)
    return record


def mark_pending_for_student(db: Session, student_id: int, session_id: int) -> Attendance:
    session = db.get(ClassSession, session_id)
    enrolment = None
    if session is not None:
        enrolment = (
            db.query(Enrolment)
            .filter(
                Enrolment.class_offering_id == session.class_offering_id,
                Enrolment.student_id == student_id,
            )
            .first()
        )
    if enrolment is None:
        raise NotFound("No enrolment found for this student & session")

    enrolment_id = enrolment.enrolment_id

    def claim():
        with atomic(db):
            record = _find(db, enrolment_id, session_id)
            if record is None:
                record = Attendance(
                    enrolment_id=enrolment_id,
                    session_id=session_id,
                    attendance_status=AttendanceStatus.PENDING,
                )
                db.add(record)
            else:
                record.attendance_status = claimed_status(record.attendance_status)
        return record

    return _retry_on_duplicate(claim)


# ==========================================================
# [2] verify-all (Pending -> Verified)
# ==========================================================

def verify_all(db: Session, session_id: int) -> int:
    with atomic(db):
        if db.get(ClassSession, session_id) is None:
            raise NotFound("Session not found")
        updated = (
            db.query(Attendance)
            .filter(
                Attendance.session_id == session_id,
                Attendance.attendance_status == AttendanceStatus.PENDING,
            )
            .update({Attendance.attendance_status: AttendanceStatus.VERIFIED}, synchronize_session=False)
        )
    logger.info("verified %d pending attendance rows for session %s", updated, session_id)
    return updated


# ==========================================================
# [3] direct set (upsert) / overwrite
# ==========================================================

def _check_same_offering(db: Session, enrolment_id: int, session_id: int) -> None:
    enrolment = db.get(Enrolment, enrolment_id)
    if enrolment is None:
        raise ReferenceNotFound(f"enrolment_id {enrolment_id} does not exist")
    session = db.get(ClassSession, session_id)
    if session is None:
        raise ReferenceNotFound(f"session_id {session_id} does not exist")
    if enrolment.class_offering_id != session.class_offering_id:
        raise InvalidRequest("Invalid enrolment_id for this session")


def set_status(
    db: Session,
    enrolment_id: int,
    session_id: int,
    status: Optional[AttendanceStatus] = None,
) -> Tuple[Attendance, bool]:
    """Insert-or-update; returns (record, created)."""
    status = status or AttendanceStatus.NOT_ATTENDED
    _check_same_offering(db, enrolment_id, session_id)

    def upsert():
        with atomic(db):
            record = _find(db, enrolment_id, session_id)
            created = record is None
            if created:
                record = Attendance(enrolment_id=enrolment_id, session_id=session_id)
                db.add(record)
            record.attendance_status = status
        return record, created

    return _retry_on_duplicate(upsert)


def overwrite(db: Session, attendance_id: int, status: Optional[AttendanceStatus]) -> Attendance:
    with atomic(db):
        record = db.get(Attendance, attendance_id)
        if record is None:
            raise NotFound("Not found")
        if status is not None:
            record.attendance_status = status
    return record


def delete(db: Session, attendance_id: int) -> None:
    with atomic(db):
        record = db.get(Attendance, attendance_id)
        if record is None:
            raise NotFound("Not found")
        db.delete(record)


# ==========================================================
# [4] session roster
# ==========================================================

def roster(db: Session, session: ClassSession) -> List[dict]:
    """Every enrolment of the session's offering with its attendance, if any."""
    rows = (
        db.query(Enrolment, Person, Attendance)
        .join(Student, Student.student_id == Enrolment.student_id)
        .join(Person, Person.person_id == Student.person_id)
        .outerjoin(
            Attendance,
            and_(
                Attendance.enrolment_id == Enrolment.enrolment_id,
                Attendance.session_id == session.session_id,
            ),
        )
        .filter(Enrolment.class_offering_id == session.class_offering_id)
        .order_by(Person.full_name.asc(), Enrolment.enrolment_id.asc())
        .all()
    )
    return [
        {
            "enrolment_id": e.enrolment_id,
            "student_id": e.student_id,
            "student_name": p.full_name,
            "attendance_status": a.attendance_status if a else AttendanceStatus.NOT_ATTENDED,
            "attendance_id": a.attendance_id if a else None,
        }
        for e, p, a in rows
    ]
