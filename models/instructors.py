from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class Instructor(Base):
    __tablename__ = "instructor"

    instructor_id = Column(Integer, primary_key=True, autoincrement=False)    # staff number, supplied by the admin
    person_id = Column(
        Integer,
        ForeignKey("person.person_id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )

    person = relationship("Person")
