from sqlalchemy import Column, Integer, Float, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class Grade(Base):
    __tablename__ = "grade"
    __table_args__ = (
        UniqueConstraint("enrolment_id", "assessment_id", name="uq_grade_enrolment_assessment"),
        CheckConstraint("score >= 0 AND score <= 100", name="ck_grade_score_0_100"),
    )

    grade_id = Column(Integer, primary_key=True, index=True)
    enrolment_id = Column(Integer, ForeignKey("enrolment.enrolment_id", ondelete="RESTRICT"), nullable=False)
    assessment_id = Column(Integer, ForeignKey("assessment_type.assessment_id", ondelete="RESTRICT"))
    score = Column(Float, nullable=False)                    # 0~100

    enrolment = relationship("Enrolment")
    assessment = relationship("AssessmentType")
