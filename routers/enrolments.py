from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.enrolments import Enrolment as EnrolmentModel
from schemas.common import ERROR_RESPONSES
from schemas.enrolments import Enrolment, EnrolmentCreate, EnrolmentUpdate
from services.errors import NotFound

router = APIRouter(prefix="/enrolments", tags=["enrolments"], responses=ERROR_RESPONSES)


def enrolment_row(e: EnrolmentModel) -> dict:
    student, offering = e.student, e.class_offering
    return {
        "enrolment_id": e.enrolment_id,
        "class_offering_id": e.class_offering_id,
        "student_id": e.student_id,
        "enrolment_status": e.enrolment_status,
        "cohort": student.cohort,
        "full_name": student.person.full_name,
        "email": student.person.email,
        "course_code": offering.course_code,
        "class_group": offering.class_group,
        "class_type": offering.class_type,
        "course_name": offering.course.course_name,
        "term_label": offering.term.term_label,
    }


def _get_or_404(db: Session, enrolment_id: int) -> EnrolmentModel:
    enrolment = db.get(EnrolmentModel, enrolment_id)
    if enrolment is None:
        raise NotFound("Not found")
    return enrolment


# ✅ [CREATE] enrol a student (second enrolment in the same offering -> 409)
@router.post("/", response_model=Enrolment, status_code=201)
def create_enrolment(body: EnrolmentCreate, db: Session = Depends(get_db)):
    enrolment = EnrolmentModel(**body.model_dump())
    with atomic(db):
        db.add(enrolment)
    return enrolment_row(enrolment)


# ✅ [READ] enrolments, optional offering/student filters
@router.get("/", response_model=list[Enrolment])
def read_enrolments(
    class_offering_id: Optional[int] = None,
    student_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(EnrolmentModel)
    if class_offering_id is not None:
        query = query.filter(EnrolmentModel.class_offering_id == class_offering_id)
    if student_id is not None:
        query = query.filter(EnrolmentModel.student_id == student_id)
    return [enrolment_row(e) for e in query.order_by(EnrolmentModel.enrolment_id).all()]


@router.get("/{enrolment_id}", response_model=Enrolment)
def read_enrolment(enrolment_id: int, db: Session = Depends(get_db)):
    return enrolment_row(_get_or_404(db, enrolment_id))


# ✅ [UPDATE] status only (Active / Inactive)
@router.put("/{enrolment_id}", response_model=Enrolment)
def update_enrolment(enrolment_id: int, body: EnrolmentUpdate, db: Session = Depends(get_db)):
    with atomic(db):
        enrolment = _get_or_404(db, enrolment_id)
        enrolment.enrolment_status = body.enrolment_status
    return enrolment_row(enrolment)


# ✅ [DELETE] enrolment (409 while attendance/grades reference it)
@router.delete("/{enrolment_id}", status_code=204)
def delete_enrolment(enrolment_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        db.delete(_get_or_404(db, enrolment_id))
    return Response(status_code=204)
