"""
Class session lifecycle.

Creating a session provisions one "Not attended" attendance row for every
Active enrolment of the owning offering, inside the same transaction as the
session insert: either the session and all its placeholders exist, or none do.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from database.db import atomic
from models.attendance import Attendance, AttendanceStatus
from models.class_offerings import ClassOffering
from models.class_sessions import ClassSession
from models.enrolments import Enrolment, EnrolmentStatus
from models.grades_attendance import GradesAndAttendance
from services.errors import Conflict, NotFound, ReferenceNotFound

logger = logging.getLogger(__name__)

LEGACY_ASSESSMENT_LABEL = "Session"


def active_enrolment_ids(db: Session, class_offering_id: int) -> List[int]:
    rows = (
        db.query(Enrolment.enrolment_id)
        .filter(
            Enrolment.class_offering_id == class_offering_id,
            Enrolment.enrolment_status == EnrolmentStatus.ACTIVE,
        )
        .order_by(Enrolment.enrolment_id)
        .all()
    )
    return [r[0] for r in rows]


def _provision_placeholders(db: Session, session_id: int, enrolment_ids: List[int], legacy: bool) -> int:
    db.add_all(
        Attendance(
            enrolment_id=enrolment_id,
            session_id=session_id,
            attendance_status=AttendanceStatus.NOT_ATTENDED,
        )
        for enrolment_id in enrolment_ids
    )
    if legacy:
        db.add_all(
            GradesAndAttendance(
                enrolment_id=enrolment_id,
                session_id=session_id,
                assessment_type=LEGACY_ASSESSMENT_LABEL,
                score=0,
                weight=0,
                attendance_status=AttendanceStatus.NOT_ATTENDED,
            )
            for enrolment_id in enrolment_ids
        )
    db.flush()
    return len(enrolment_ids)


def _require_offering(db: Session, class_offering_id: int) -> ClassOffering:
    offering = db.get(ClassOffering, class_offering_id)
    if offering is None:
        raise ReferenceNotFound(f"class_offering_id {class_offering_id} does not exist")
    return offering


def create_session(db: Session, data: dict, legacy: Optional[bool] = None) -> ClassSession:
    """Insert a session and fan out attendance placeholders atomically."""
    if legacy is None:
        legacy = settings.LEGACY_GRADES_ATTENDANCE

    with atomic(db):
        _require_offering(db, data["class_offering_id"])
        session = ClassSession(**data)
        db.add(session)
        db.flush()

        enrolment_ids = active_enrolment_ids(db, session.class_offering_id)
        provisioned = _provision_placeholders(db, session.session_id, enrolment_ids, legacy)

    logger.info(
        "session %s created for offering %s with %d attendance placeholders",
        session.session_id, session.class_offering_id, provisioned,
    )
    return session


def update_session(db: Session, session_id: int, data: dict) -> ClassSession:
    with atomic(db):
        session = db.get(ClassSession, session_id)
        if session is None:
            raise NotFound("Not found")

        if data["class_offering_id"] != session.class_offering_id:
            _require_offering(db, data["class_offering_id"])
            # attendance rows must stay within the session's offering
            has_rows = db.query(Attendance.attendance_id).filter(Attendance.session_id == session_id).first()
            if has_rows:
                raise Conflict("Session already has attendance records; it cannot move to another class offering")

        for key, value in data.items():
            setattr(session, key, value)
    return session


def delete_session(db: Session, session_id: int) -> None:
    """Delete a session; its attendance rows go with it (ON DELETE CASCADE)."""
    with atomic(db):
        session = db.get(ClassSession, session_id)
        if session is None:
            raise NotFound("Not found")
        db.delete(session)
