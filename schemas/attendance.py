from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from models.attendance import AttendanceStatus
from models.enrolments import EnrolmentStatus


# ✅ upsert keyed on (enrolment_id, session_id); no status means "Not attended"
class AttendanceSet(BaseModel):
    enrolment_id: int
    session_id: int
    attendance_status: Optional[AttendanceStatus] = None


# ✅ instructor-scoped upsert (session comes from the path)
class SessionAttendanceSet(BaseModel):
    enrolment_id: int
    attendance_status: Optional[AttendanceStatus] = None


class AttendanceUpdate(BaseModel):
    attendance_status: Optional[AttendanceStatus] = None


class Attendance(BaseModel):
    attendance_id: int
    enrolment_id: int
    session_id: int
    attendance_status: AttendanceStatus

    class Config:
        from_attributes = True


# ✅ listing row with session and student context
class AttendanceDetail(Attendance):
    class_offering_id: int
    session_no: int
    session_start_date: datetime
    session_end_date: datetime
    session_title: Optional[str] = None
    room: Optional[str] = None
    student_id: int
    enrolment_status: EnrolmentStatus
    student_name: str
    student_email: str


# ✅ instructor roster row; attendance_id is None when no row was provisioned
class RosterRow(BaseModel):
    enrolment_id: int
    student_id: int
    student_name: str
    attendance_status: AttendanceStatus
    attendance_id: Optional[int] = None
