from typing import Optional

from pydantic import BaseModel, Field

from models.attendance import AttendanceStatus


class GradesAttendanceCreate(BaseModel):
    enrolment_id: int
    session_id: int
    assessment_type: str = Field(..., min_length=1, max_length=50)
    score: float = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0, le=100)
    attendance_status: Optional[AttendanceStatus] = None


class GradesAttendanceUpdate(BaseModel):
    assessment_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    score: Optional[float] = Field(default=None, ge=0, le=100)
    weight: Optional[float] = Field(default=None, ge=0, le=100)
    attendance_status: Optional[AttendanceStatus] = None


class GradesAttendance(BaseModel):
    record_id: int
    enrolment_id: int
    session_id: int
    assessment_type: str
    score: float
    weight: float
    attendance_status: AttendanceStatus

    class Config:
        from_attributes = True


class GradesAttendanceDetail(GradesAttendance):
    student_id: int
    student_name: str
    student_email: str
    session_no: Optional[int] = None
    class_offering_id: Optional[int] = None
