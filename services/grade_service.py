"""
Weighted grade aggregation.

For one enrolment, every assessment type of the offering's course is listed
(ordered by label) with the student's score, or None when ungraded.
weighted_score = round(score * weight / 100, 2); the total is the rounded sum of the
graded components, so ungraded components count as 0.
"""

from typing import Iterable, List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from models.assessment_types import AssessmentType
from models.class_offerings import ClassOffering
from models.courses import Course
from models.enrolments import Enrolment
from models.grades import Grade
from models.people import Person
from models.students import Student
from models.terms import Term
from services.errors import Conflict, InvalidRequest, NotFound, ReferenceNotFound


def weighted_score(score: Optional[float], weight: float) -> Optional[float]:
    if score is None:
        return None
    return round(score * weight / 100, 2)


def total_weighted(components: Iterable[dict]) -> float:
    return round(sum(c["weighted_score"] for c in components if c["weighted_score"] is not None), 2)


def _components(db: Session, enrolment_id: int, course_code: str) -> List[dict]:
    rows = (
        db.query(AssessmentType, Grade)
        .outerjoin(
            Grade,
            and_(
                Grade.assessment_id == AssessmentType.assessment_id,
                Grade.enrolment_id == enrolment_id,
            ),
        )
        .filter(AssessmentType.course_code == course_code)
        .order_by(AssessmentType.assessment_type.asc(), AssessmentType.assessment_id.asc())
        .all()
    )
    components = []
    for at, g in rows:
        score = g.score if g is not None else None
        components.append({
            "assessment_id": at.assessment_id,
            "assessment_type": at.assessment_type,
            "weight": at.weight,
            "grade_id": g.grade_id if g is not None else None,
            "score": score,
            "weighted_score": weighted_score(score, at.weight),
        })
    return components


# ==========================================================
# [1] one student, one class offering
# ==========================================================

def compute_student_course_total(db: Session, student_id: int, class_offering_id: int) -> dict:
    row = (
        db.query(Enrolment, ClassOffering, Course, Term)
        .join(ClassOffering, ClassOffering.class_offering_id == Enrolment.class_offering_id)
        .join(Course, Course.course_code == ClassOffering.course_code)
        .join(Term, Term.term_id == ClassOffering.term_id)
        .filter(Enrolment.student_id == student_id, Enrolment.class_offering_id == class_offering_id)
        .first()
    )
    if row is None:
        raise NotFound("No enrolment found for this student & class offering")

    enrolment, offering, course, term = row
    components = _components(db, enrolment.enrolment_id, offering.course_code)
    return {
        "student_id": student_id,
        "class_offering_id": class_offering_id,
        "enrolment_id": enrolment.enrolment_id,
        "course_code": course.course_code,
        "course_name": course.course_name,
        "term_label": term.term_label,
        "components": components,
        "total_weighted": total_weighted(components),
    }


# ==========================================================
# [2] dashboard rollup across all offerings
# ==========================================================

def summary_for_student(db: Session, student_id: int) -> List[dict]:
    if db.get(Student, student_id) is None:
        raise NotFound("Student not found")

    rows = (
        db.query(Enrolment, ClassOffering, Course, Term)
        .join(ClassOffering, ClassOffering.class_offering_id == Enrolment.class_offering_id)
        .join(Course, Course.course_code == ClassOffering.course_code)
        .join(Term, Term.term_id == ClassOffering.term_id)
        .filter(Enrolment.student_id == student_id)
        .order_by(Term.start_date.desc(), Course.course_code.asc(), ClassOffering.class_offering_id.asc())
        .all()
    )

    summary = []
    for enrolment, offering, course, term in rows:
        components = _components(db, enrolment.enrolment_id, course.course_code)
        summary.append({
            "class_offering_id": offering.class_offering_id,
            "course_code": course.course_code,
            "course_name": course.course_name,
            "term_id": term.term_id,
            "term_label": term.term_label,
            "total_weighted": total_weighted(components),
        })
    return summary


# ==========================================================
# [3] gradebook: one assessment, whole roster
# ==========================================================

def gradebook(db: Session, class_offering_id: int, assessment_id: int) -> List[dict]:
    offering = db.get(ClassOffering, class_offering_id)
    if offering is None:
        raise ReferenceNotFound(f"class_offering_id {class_offering_id} does not exist")
    assessment = db.get(AssessmentType, assessment_id)
    if assessment is None:
        raise ReferenceNotFound(f"assessment_id {assessment_id} does not exist")
    if assessment.course_code != offering.course_code:
        raise InvalidRequest("Assessment does not belong to this class offering's course")

    rows = (
        db.query(Enrolment, Person, Grade)
        .join(Student, Student.student_id == Enrolment.student_id)
        .join(Person, Person.person_id == Student.person_id)
        .outerjoin(
            Grade,
            and_(Grade.enrolment_id == Enrolment.enrolment_id, Grade.assessment_id == assessment_id),
        )
        .filter(Enrolment.class_offering_id == class_offering_id)
        .order_by(Person.full_name.asc(), Enrolment.enrolment_id.asc())
        .all()
    )
    return [
        {
            "enrolment_id": e.enrolment_id,
            "student_id": e.student_id,
            "student_name": p.full_name,
            "student_email": p.email,
            "enrolment_status": e.enrolment_status,
            "assessment_id": assessment.assessment_id,
            "assessment_type": assessment.assessment_type,
            "weight": assessment.weight,
            "course_code": assessment.course_code,
            "grade_id": g.grade_id if g is not None else None,
            "score": g.score if g is not None else None,
        }
        for e, p, g in rows
    ]


# ==========================================================
# [4] write-side check
# ==========================================================

def check_grade_target(db: Session, enrolment_id: int, assessment_id: Optional[int]) -> None:
    """A graded assessment must belong to the course the enrolment is in."""
    enrolment = db.get(Enrolment, enrolment_id)
    if enrolment is None:
        raise ReferenceNotFound(f"enrolment_id {enrolment_id} does not exist")
    if assessment_id is None:
        return
    assessment = db.get(AssessmentType, assessment_id)
    if assessment is None:
        raise ReferenceNotFound(f"assessment_id {assessment_id} does not exist")
    if assessment.course_code != enrolment.class_offering.course_code:
        raise InvalidRequest("Assessment does not belong to this enrolment's course")


def check_course_change(db: Session, new_course_code: str, assessment: AssessmentType = None,
                        offering: ClassOffering = None) -> None:
    """Graded rows pin their assessment and offering to one course (409 on a move)."""
    if assessment is not None and new_course_code != assessment.course_code:
        graded = db.query(Grade.grade_id).filter(Grade.assessment_id == assessment.assessment_id).first()
        if graded:
            raise Conflict("Assessment already has grades; its course cannot change")
    if offering is not None and new_course_code != offering.course_code:
        graded = (
            db.query(Grade.grade_id)
            .join(Enrolment, Enrolment.enrolment_id == Grade.enrolment_id)
            .filter(Enrolment.class_offering_id == offering.class_offering_id)
            .first()
        )
        if graded:
            raise Conflict("Class offering already has grades; its course cannot change")
