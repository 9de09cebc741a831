import enum

from sqlalchemy import Column, Integer, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class EnrolmentStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Enrolment(Base):
    __tablename__ = "enrolment"
    __table_args__ = (
        UniqueConstraint("class_offering_id", "student_id", name="uq_enrolment_offering_student"),
    )

    enrolment_id = Column(Integer, primary_key=True, index=True)
    class_offering_id = Column(
        Integer,
        ForeignKey("class_offering.class_offering_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    student_id = Column(Integer, ForeignKey("student.student_id", ondelete="RESTRICT"), nullable=False, index=True)
    enrolment_status = Column(
        Enum(EnrolmentStatus, name="enrolment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EnrolmentStatus.ACTIVE,
    )

    student = relationship("Student")
    class_offering = relationship("ClassOffering")
