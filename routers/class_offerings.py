from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.class_offerings import ClassOffering as ClassOfferingModel
from models.courses import Course as CourseModel
from models.enrolments import Enrolment as EnrolmentModel
from models.teaching_assignments import TeachingAssignment as TeachingAssignmentModel
from models.terms import Term as TermModel
from schemas.class_offerings import ClassOffering, ClassOfferingCreate
from schemas.common import ERROR_RESPONSES
from services import grade_service
from services.errors import NotFound

router = APIRouter(prefix="/class-offerings", tags=["class-offerings"], responses=ERROR_RESPONSES)


def offering_row(o: ClassOfferingModel) -> dict:
    return {
        "class_offering_id": o.class_offering_id,
        "course_code": o.course_code,
        "term_id": o.term_id,
        "class_group": o.class_group,
        "class_type": o.class_type,
        "course_name": o.course.course_name,
        "term_label": o.term.term_label,
    }


def _joined(db: Session):
    return (
        db.query(ClassOfferingModel)
        .join(CourseModel, CourseModel.course_code == ClassOfferingModel.course_code)
        .join(TermModel, TermModel.term_id == ClassOfferingModel.term_id)
    )


def _ordered(query):
    return query.order_by(
        TermModel.start_date.desc(),
        ClassOfferingModel.course_code.asc(),
        ClassOfferingModel.class_group.asc(),
        ClassOfferingModel.class_offering_id.asc(),
    )


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] class offering (unknown course/term -> 400)
@router.post("/", response_model=ClassOffering, status_code=201)
def create_class_offering(body: ClassOfferingCreate, db: Session = Depends(get_db)):
    offering = ClassOfferingModel(**body.model_dump())
    with atomic(db):
        db.add(offering)
    return offering_row(offering)


# ✅ [READ] offerings, optional term/course filters
@router.get("/", response_model=list[ClassOffering])
def read_class_offerings(
    term_id: Optional[int] = None,
    course_code: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = _joined(db)
    if term_id is not None:
        query = query.filter(ClassOfferingModel.term_id == term_id)
    if course_code:
        query = query.filter(ClassOfferingModel.course_code == course_code)
    return [offering_row(o) for o in _ordered(query).all()]


# ==========================================================
# [2] per-person views (static routes first)
# ==========================================================

# ✅ [READ] offerings a student is (or was) enrolled in
@router.get("/by-student/{student_id}", response_model=list[ClassOffering])
def read_offerings_by_student(student_id: int, db: Session = Depends(get_db)):
    query = (
        _joined(db)
        .join(EnrolmentModel, EnrolmentModel.class_offering_id == ClassOfferingModel.class_offering_id)
        .filter(EnrolmentModel.student_id == student_id)
    )
    return [offering_row(o) for o in _ordered(query).all()]


# ✅ [READ] offerings an instructor teaches
@router.get("/by-instructor/{instructor_id}", response_model=list[ClassOffering])
def read_offerings_by_instructor(instructor_id: int, db: Session = Depends(get_db)):
    query = (
        _joined(db)
        .join(
            TeachingAssignmentModel,
            TeachingAssignmentModel.class_offering_id == ClassOfferingModel.class_offering_id,
        )
        .filter(TeachingAssignmentModel.instructor_id == instructor_id)
    )
    return [offering_row(o) for o in _ordered(query).all()]


# ==========================================================
# [3] single row
# ==========================================================

@router.get("/{class_offering_id}", response_model=ClassOffering)
def read_class_offering(class_offering_id: int, db: Session = Depends(get_db)):
    offering = db.get(ClassOfferingModel, class_offering_id)
    if offering is None:
        raise NotFound("Not found")
    return offering_row(offering)


@router.put("/{class_offering_id}", response_model=ClassOffering)
def update_class_offering(class_offering_id: int, body: ClassOfferingCreate, db: Session = Depends(get_db)):
    with atomic(db):
        offering = db.get(ClassOfferingModel, class_offering_id)
        if offering is None:
            raise NotFound("Not found")
        grade_service.check_course_change(db, body.course_code, offering=offering)
        for key, value in body.model_dump().items():
            setattr(offering, key, value)
        db.flush()
    db.refresh(offering)
    return offering_row(offering)


# ✅ [DELETE] offering (409 while sessions/enrolments reference it)
@router.delete("/{class_offering_id}", status_code=204)
def delete_class_offering(class_offering_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        offering = db.get(ClassOfferingModel, class_offering_id)
        if offering is None:
            raise NotFound("Not found")
        db.delete(offering)
    return Response(status_code=204)
