from sqlalchemy import Column, Integer, Float, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.attendance import AttendanceStatus, attendance_status_type


class GradesAndAttendance(Base):
    """Legacy denormalized record: one free-text assessment plus attendance per session.

    Kept for clients of /grades-attendance; `grade` + `attendance` are authoritative.
    """

    __tablename__ = "grades_and_attendance"
    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 100", name="ck_ga_score_0_100"),
        CheckConstraint("weight >= 0 AND weight <= 100", name="ck_ga_weight_0_100"),
    )

    record_id = Column(Integer, primary_key=True, index=True)
    enrolment_id = Column(Integer, ForeignKey("enrolment.enrolment_id", ondelete="RESTRICT"), nullable=False)
    session_id = Column(Integer, ForeignKey("class_session.session_id", ondelete="CASCADE"), nullable=False)
    assessment_type = Column(String(50), nullable=False)
    score = Column(Float, nullable=False, default=0)
    weight = Column(Float, nullable=False, default=0)
    attendance_status = Column(attendance_status_type(), nullable=False, default=AttendanceStatus.NOT_ATTENDED)

    enrolment = relationship("Enrolment")
    session = relationship("ClassSession")
