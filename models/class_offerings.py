import enum

from sqlalchemy import Column, Integer, String, Enum, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class ClassType(str, enum.Enum):
    LEC = "LEC"
    LAB = "LAB"
    TUT = "TUT"


class ClassOffering(Base):
    __tablename__ = "class_offering"  # one course run in one term for one class group

    class_offering_id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String(20), ForeignKey("course.course_code", ondelete="RESTRICT"), nullable=False)
    term_id = Column(Integer, ForeignKey("term.term_id", ondelete="RESTRICT"), nullable=False)
    class_group = Column(String(20), nullable=False)
    class_type = Column(
        Enum(ClassType, name="class_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ClassType.LEC,
    )

    course = relationship("Course")
    term = relationship("Term")
