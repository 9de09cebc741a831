from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from database.db import get_db
from models.class_sessions import ClassSession
from models.teaching_assignments import TeachingAssignment
from services.errors import Forbidden, NotFound

InstructorId = Annotated[int, Path(description="instructor acting on the session")]
SessionId = Annotated[int, Path(description="class session id")]


def require_session_instructor(
    instructor_id: InstructorId,
    session_id: SessionId,
    db: Session = Depends(get_db),
) -> ClassSession:
    """Resolve the session, allowing only instructors assigned to its class offering."""
    session = db.get(ClassSession, session_id)
    if session is None:
        raise NotFound("Session not found for this instructor")

    assigned = (
        db.query(TeachingAssignment)
        .filter(
            TeachingAssignment.instructor_id == instructor_id,
            TeachingAssignment.class_offering_id == session.class_offering_id,
        )
        .first()
    )
    if assigned is None:
        raise Forbidden("Not authorized for this session")

    return session
