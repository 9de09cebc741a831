from sqlalchemy import Column, Integer, String
from database.db import Base


class Person(Base):
    __tablename__ = "person"  # shared identity for students and instructors

    person_id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
