from pydantic import BaseModel, Field
from typing import Optional


# ✅ input: person + student in one shot
class StudentCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    student_id: int = Field(..., gt=0)              # student number
    cohort: Optional[str] = None                    # e.g. "2024T1"


# ✅ input: student role for an existing person
class StudentFromPerson(BaseModel):
    person_id: int
    student_id: int = Field(..., gt=0)
    cohort: Optional[str] = None


# ✅ input (PUT) - omitted fields are left unchanged
class StudentUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    cohort: Optional[str] = None


# ✅ output (student joined with person)
class Student(BaseModel):
    person_id: int
    student_id: int
    cohort: Optional[str] = None
    full_name: str
    email: str
