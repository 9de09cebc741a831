from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class ClassSession(Base):
    __tablename__ = "class_session"  # one scheduled meeting of a class offering
    __table_args__ = (
        UniqueConstraint("class_offering_id", "session_no", name="uq_session_offering_no"),
    )

    session_id = Column(Integer, primary_key=True, index=True)
    class_offering_id = Column(
        Integer,
        ForeignKey("class_offering.class_offering_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    session_no = Column(Integer, nullable=False)             # ordering key within the offering
    session_start_date = Column(DateTime, nullable=False)
    session_end_date = Column(DateTime, nullable=False)
    title = Column(String(150))
    room = Column(String(50))

    class_offering = relationship("ClassOffering")
