from pydantic import BaseModel, Field
from typing import Optional


class InstructorCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    instructor_id: int = Field(..., gt=0)


class InstructorFromPerson(BaseModel):
    person_id: int
    instructor_id: int = Field(..., gt=0)


# omitted fields are left unchanged; new_instructor_id renumbers the instructor
class InstructorUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    new_instructor_id: Optional[int] = Field(default=None, gt=0)


class Instructor(BaseModel):
    person_id: int
    instructor_id: int
    full_name: str
    email: str
