from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.assessment_types import AssessmentType as AssessmentTypeModel
from models.class_offerings import ClassOffering as ClassOfferingModel
from models.enrolments import Enrolment as EnrolmentModel
from models.grades import Grade as GradeModel
from models.people import Person as PersonModel
from models.students import Student as StudentModel
from schemas.common import ERROR_RESPONSES
from schemas.grades import (
    Grade,
    GradebookRow,
    GradeCreate,
    GradeDetail,
    GradeSummaryRow,
    GradeUpdate,
    StudentCourseGrades,
)
from services import grade_service
from services.errors import NotFound

router = APIRouter(prefix="/grades", tags=["grades"], responses=ERROR_RESPONSES)


def _detail_query(db: Session):
    return (
        db.query(GradeModel, AssessmentTypeModel, EnrolmentModel, PersonModel)
        .outerjoin(AssessmentTypeModel, AssessmentTypeModel.assessment_id == GradeModel.assessment_id)
        .join(EnrolmentModel, EnrolmentModel.enrolment_id == GradeModel.enrolment_id)
        .join(StudentModel, StudentModel.student_id == EnrolmentModel.student_id)
        .join(PersonModel, PersonModel.person_id == StudentModel.person_id)
    )


def _detail_rows(rows) -> list:
    return [
        {
            "grade_id": g.grade_id,
            "enrolment_id": g.enrolment_id,
            "assessment_id": g.assessment_id,
            "score": g.score,
            "course_code": at.course_code if at else None,
            "assessment_type": at.assessment_type if at else None,
            "weight": at.weight if at else None,
            "student_id": e.student_id,
            "class_offering_id": e.class_offering_id,
            "enrolment_status": e.enrolment_status,
            "student_name": p.full_name,
            "student_email": p.email,
        }
        for g, at, e, p in rows
    ]


def _get_or_404(db: Session, grade_id: int) -> GradeModel:
    grade = db.get(GradeModel, grade_id)
    if grade is None:
        raise NotFound("Not found")
    return grade


# ==========================================================
# [1] create
# ==========================================================

# ✅ [CREATE] grade (second grade for the same assessment -> 409)
@router.post("/", response_model=Grade, status_code=201)
def create_grade(body: GradeCreate, db: Session = Depends(get_db)):
    grade_service.check_grade_target(db, body.enrolment_id, body.assessment_id)
    grade = GradeModel(**body.model_dump())
    with atomic(db):
        db.add(grade)
    return grade


# ==========================================================
# [2] listings and aggregation (static routes first)
# ==========================================================

# ✅ [READ] grades, optional enrolment/assessment/offering/course filters
@router.get("/", response_model=list[GradeDetail])
def read_grades(
    enrolment_id: Optional[int] = None,
    assessment_id: Optional[int] = None,
    class_offering_id: Optional[int] = None,
    course_code: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = _detail_query(db)
    if enrolment_id is not None:
        query = query.filter(GradeModel.enrolment_id == enrolment_id)
    if assessment_id is not None:
        query = query.filter(GradeModel.assessment_id == assessment_id)
    if class_offering_id is not None:
        query = query.filter(EnrolmentModel.class_offering_id == class_offering_id)
    if course_code:
        query = query.join(
            ClassOfferingModel, ClassOfferingModel.class_offering_id == EnrolmentModel.class_offering_id
        ).filter(ClassOfferingModel.course_code == course_code)
    return _detail_rows(query.order_by(GradeModel.grade_id).all())


@router.get("/by-class-offering/{class_offering_id}", response_model=list[GradeDetail])
def read_grades_by_class_offering(class_offering_id: int, db: Session = Depends(get_db)):
    rows = (
        _detail_query(db)
        .filter(EnrolmentModel.class_offering_id == class_offering_id)
        .order_by(PersonModel.full_name, AssessmentTypeModel.assessment_type, GradeModel.grade_id)
        .all()
    )
    return _detail_rows(rows)


# ✅ [GRADEBOOK] one assessment across the offering's roster
@router.get("/gradebook", response_model=list[GradebookRow])
def read_gradebook(
    class_offering_id: int = Query(..., description="class offering to list"),
    assessment_id: int = Query(..., description="assessment of that offering's course"),
    db: Session = Depends(get_db),
):
    return grade_service.gradebook(db, class_offering_id, assessment_id)


# ✅ [TOTAL] weighted components and total for one enrolment
@router.get(
    "/student/{student_id}/class-offering/{class_offering_id}",
    response_model=StudentCourseGrades,
)
def read_student_course_grades(student_id: int, class_offering_id: int, db: Session = Depends(get_db)):
    return grade_service.compute_student_course_total(db, student_id, class_offering_id)


# ✅ [SUMMARY] totals for every offering the student is or was enrolled in
@router.get("/student/{student_id}/summary", response_model=list[GradeSummaryRow])
def read_student_summary(student_id: int, db: Session = Depends(get_db)):
    return grade_service.summary_for_student(db, student_id)


# ==========================================================
# [3] single row
# ==========================================================

@router.get("/{grade_id}", response_model=Grade)
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, grade_id)


@router.put("/{grade_id}", response_model=Grade)
def update_grade(grade_id: int, body: GradeUpdate, db: Session = Depends(get_db)):
    grade = _get_or_404(db, grade_id)
    # an explicit null detaches the grade from its assessment; enrolment and score stay required
    changes = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "assessment_id"
    }
    if "enrolment_id" in changes or "assessment_id" in changes:
        grade_service.check_grade_target(
            db,
            changes.get("enrolment_id", grade.enrolment_id),
            changes.get("assessment_id", grade.assessment_id),
        )
    with atomic(db):
        for key, value in changes.items():
            setattr(grade, key, value)
    return grade


@router.delete("/{grade_id}", status_code=204)
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        db.delete(_get_or_404(db, grade_id))
    return Response(status_code=204)
