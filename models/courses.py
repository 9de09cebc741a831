from sqlalchemy import Column, Integer, String, Text
from database.db import Base


class Course(Base):
    __tablename__ = "course"  # catalogue entry, keyed by its code (e.g. COMP1010)

    course_code = Column(String(20), primary_key=True)
    course_name = Column(String(150), nullable=False)
    credit = Column(Integer, nullable=False, default=0)
    course_description = Column(Text)
