from typing import Optional

from pydantic import BaseModel

from models.class_offerings import ClassType
from models.enrolments import EnrolmentStatus


class EnrolmentUpdate(BaseModel):
    enrolment_status: EnrolmentStatus


class EnrolmentCreate(BaseModel):
    class_offering_id: int
    student_id: int
    enrolment_status: EnrolmentStatus = EnrolmentStatus.ACTIVE


# ✅ output joined with student/person and offering/course/term
class Enrolment(EnrolmentCreate):
    enrolment_id: int
    cohort: Optional[str] = None
    full_name: str
    email: str
    course_code: str
    class_group: str
    class_type: ClassType
    course_name: str
    term_label: str
