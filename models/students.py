from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class Student(Base):
    __tablename__ = "student"

    student_id = Column(Integer, primary_key=True, autoincrement=False)       # student number, supplied by the admin
    person_id = Column(
        Integer,
        ForeignKey("person.person_id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )
    cohort = Column(String(20))                                                # intake, e.g. "2024T1"

    person = relationship("Person")
