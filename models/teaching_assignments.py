import enum

from sqlalchemy import Column, Integer, Enum, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class TeachingRole(str, enum.Enum):
    LECTURER = "Lecturer"
    TA = "TA"
    TUTOR = "Tutor"
    GRADER = "Grader"


class TeachingAssignment(Base):
    __tablename__ = "teaching_assignment"

    instructor_id = Column(
        Integer,
        ForeignKey("instructor.instructor_id", ondelete="RESTRICT", onupdate="CASCADE"),
        primary_key=True,
    )
    class_offering_id = Column(
        Integer,
        ForeignKey("class_offering.class_offering_id", ondelete="CASCADE"),
        primary_key=True,
    )
    teaching_role = Column(
        Enum(TeachingRole, name="teaching_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TeachingRole.LECTURER,
    )

    instructor = relationship("Instructor")
    class_offering = relationship("ClassOffering")
