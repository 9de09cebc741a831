from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.teaching_assignments import TeachingAssignment as TeachingAssignmentModel, TeachingRole
from schemas.common import ERROR_RESPONSES
from schemas.teaching_assignments import (
    TeachingAssignment,
    TeachingAssignmentCreate,
    TeachingAssignmentUpdate,
)
from services.errors import NotFound

router = APIRouter(prefix="/teaching-assignments", tags=["teaching-assignments"], responses=ERROR_RESPONSES)


def _get_or_404(db: Session, instructor_id: int, class_offering_id: int) -> TeachingAssignmentModel:
    assignment = db.get(TeachingAssignmentModel, (instructor_id, class_offering_id))
    if assignment is None:
        raise NotFound("Not found")
    return assignment


# ✅ [CREATE] assign an instructor to an offering (same pair twice -> 409)
@router.post("/", response_model=TeachingAssignment, status_code=201)
def create_teaching_assignment(body: TeachingAssignmentCreate, db: Session = Depends(get_db)):
    assignment = TeachingAssignmentModel(**body.model_dump())
    with atomic(db):
        db.add(assignment)
    return assignment


# ✅ [READ] assignments, optional instructor/offering/role filters
@router.get("/", response_model=list[TeachingAssignment])
def read_teaching_assignments(
    instructor_id: Optional[int] = None,
    class_offering_id: Optional[int] = None,
    teaching_role: Optional[TeachingRole] = None,
    db: Session = Depends(get_db),
):
    query = db.query(TeachingAssignmentModel)
    if instructor_id is not None:
        query = query.filter(TeachingAssignmentModel.instructor_id == instructor_id)
    if class_offering_id is not None:
        query = query.filter(TeachingAssignmentModel.class_offering_id == class_offering_id)
    if teaching_role is not None:
        query = query.filter(TeachingAssignmentModel.teaching_role == teaching_role)
    return query.order_by(
        TeachingAssignmentModel.class_offering_id,
        TeachingAssignmentModel.instructor_id,
    ).all()


@router.get("/{instructor_id}/{class_offering_id}", response_model=TeachingAssignment)
def read_teaching_assignment(instructor_id: int, class_offering_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, instructor_id, class_offering_id)


# ✅ [UPDATE] only the role changes; the pair is the key
@router.put("/{instructor_id}/{class_offering_id}", response_model=TeachingAssignment)
def update_teaching_assignment(
    instructor_id: int,
    class_offering_id: int,
    body: TeachingAssignmentUpdate,
    db: Session = Depends(get_db),
):
    with atomic(db):
        assignment = _get_or_404(db, instructor_id, class_offering_id)
        assignment.teaching_role = body.teaching_role
    return assignment


@router.delete("/{instructor_id}/{class_offering_id}", status_code=204)
def delete_teaching_assignment(instructor_id: int, class_offering_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        db.delete(_get_or_404(db, instructor_id, class_offering_id))
    return Response(status_code=204)
