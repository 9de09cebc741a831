from pydantic import BaseModel, Field

from models.class_offerings import ClassType


class ClassOfferingCreate(BaseModel):
    course_code: str = Field(..., min_length=1, max_length=20)
    term_id: int
    class_group: str = Field(..., min_length=1, max_length=20)      # e.g. "A", "01"
    class_type: ClassType = ClassType.LEC


# ✅ output joined with course and term
class ClassOffering(ClassOfferingCreate):
    class_offering_id: int
    course_name: str
    term_label: str
