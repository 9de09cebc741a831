from typing import List, Optional

from pydantic import BaseModel, Field

from models.enrolments import EnrolmentStatus


# =========================================================
# CRUD
# =========================================================

class GradeCreate(BaseModel):
    enrolment_id: int
    assessment_id: Optional[int] = None
    score: float = Field(..., ge=0, le=100)


# omitted fields are left unchanged; an explicit null assessment_id detaches the grade
class GradeUpdate(BaseModel):
    enrolment_id: Optional[int] = None
    assessment_id: Optional[int] = None
    score: Optional[float] = Field(default=None, ge=0, le=100)


class Grade(GradeCreate):
    grade_id: int

    class Config:
        from_attributes = True


# ✅ listing row with assessment and student context
class GradeDetail(Grade):
    course_code: Optional[str] = None
    assessment_type: Optional[str] = None
    weight: Optional[float] = None
    student_id: int
    class_offering_id: int
    enrolment_status: EnrolmentStatus
    student_name: str
    student_email: str


# =========================================================
# Gradebook / aggregation
# =========================================================

# ✅ one roster line for a single assessment (instructor editing)
class GradebookRow(BaseModel):
    enrolment_id: int
    student_id: int
    student_name: str
    student_email: str
    enrolment_status: EnrolmentStatus
    assessment_id: int
    assessment_type: str
    weight: float
    course_code: str
    grade_id: Optional[int] = None
    score: Optional[float] = None


class GradeComponent(BaseModel):
    assessment_id: int
    assessment_type: str
    weight: float
    grade_id: Optional[int] = None
    score: Optional[float] = None           # None = not graded yet
    weighted_score: Optional[float] = None  # round(score * weight / 100, 2)


class StudentCourseGrades(BaseModel):
    student_id: int
    class_offering_id: int
    enrolment_id: int
    course_code: str
    course_name: str
    term_label: str
    components: List[GradeComponent]
    total_weighted: float


class GradeSummaryRow(BaseModel):
    class_offering_id: int
    course_code: str
    course_name: str
    term_id: int
    term_label: str
    total_weighted: float
