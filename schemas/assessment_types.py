from typing import Optional

from pydantic import BaseModel, Field


class AssessmentTypeCreate(BaseModel):
    course_code: str = Field(..., min_length=1, max_length=20)
    assessment_type: str = Field(..., min_length=1, max_length=50)    # label, e.g. "Final exam"
    weight: float = Field(..., ge=0, le=100)                           # percent


# omitted fields are left unchanged
class AssessmentTypeUpdate(BaseModel):
    course_code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    assessment_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    weight: Optional[float] = Field(default=None, ge=0, le=100)


class AssessmentType(AssessmentTypeCreate):
    assessment_id: int
    course_name: Optional[str] = None
