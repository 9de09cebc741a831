from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from models.attendance import AttendanceStatus
from models.class_offerings import ClassType


# ✅ input (POST/PUT)
class ClassSessionCreate(BaseModel):
    class_offering_id: int
    session_no: int = Field(..., ge=1)
    session_start_date: datetime
    session_end_date: datetime
    title: Optional[str] = Field(default=None, max_length=150)
    room: Optional[str] = Field(default=None, max_length=50)

    @model_validator(mode="after")
    def _check_range(self):
        if self.session_end_date < self.session_start_date:
            raise ValueError("session_end_date must not be before session_start_date")
        return self


# ✅ output joined with offering, course and term
class ClassSession(ClassSessionCreate):
    session_id: int
    course_code: str
    class_group: str
    class_type: ClassType
    course_name: str
    term_label: str


# ✅ a session as seen by one enrolled student
class StudentSession(BaseModel):
    session_id: int
    session_no: int
    session_start_date: datetime
    session_end_date: datetime
    title: Optional[str] = None
    room: Optional[str] = None
    enrolment_id: int
    attendance_id: Optional[int] = None                    # None until a row exists
    attendance_status: AttendanceStatus
