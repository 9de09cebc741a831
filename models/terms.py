from sqlalchemy import Column, Integer, String, Date
from database.db import Base


class Term(Base):
    __tablename__ = "term"

    term_id = Column(Integer, primary_key=True, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    term_label = Column(String(50), nullable=False)     # e.g. "2025 Semester 1"
