from sqlalchemy import Column, Integer, Float, String, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class AssessmentType(Base):
    __tablename__ = "assessment_type"  # a gradable component of a course (exam, quiz, ...)
    __table_args__ = (
        UniqueConstraint("course_code", "assessment_type", name="uq_assessment_course_label"),
        CheckConstraint("weight >= 0 AND weight <= 100", name="ck_assessment_weight_0_100"),
    )

    assessment_id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String(20), ForeignKey("course.course_code", ondelete="RESTRICT"), nullable=False)
    assessment_type = Column(String(50), nullable=False)     # label shown to students
    weight = Column(Float, nullable=False)                   # percent of the final mark, 0~100

    course = relationship("Course")
