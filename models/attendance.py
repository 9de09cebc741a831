import enum

from sqlalchemy import Column, Integer, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class AttendanceStatus(str, enum.Enum):
    NOT_ATTENDED = "Not attended"
    PENDING = "Pending"          # student claimed attendance
    VERIFIED = "Verified"        # instructor/admin confirmed


# column type also used by the legacy grades_and_attendance table
def attendance_status_type():
    return Enum(
        AttendanceStatus,
        name="attendance_status",
        values_callable=lambda e: [m.value for m in e],
    )


class Attendance(Base):
    __tablename__ = "attendance"  # one row per (enrolment, session)
    __table_args__ = (
        UniqueConstraint("enrolment_id", "session_id", name="uq_attendance_enrolment_session"),
    )

    attendance_id = Column(Integer, primary_key=True, index=True)
    enrolment_id = Column(Integer, ForeignKey("enrolment.enrolment_id", ondelete="RESTRICT"), nullable=False)
    session_id = Column(
        Integer,
        ForeignKey("class_session.session_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attendance_status = Column(attendance_status_type(), nullable=False, default=AttendanceStatus.NOT_ATTENDED)

    enrolment = relationship("Enrolment")
    session = relationship("ClassSession")
