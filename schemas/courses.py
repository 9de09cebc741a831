from pydantic import BaseModel, Field
from typing import Optional


# ✅ input (PUT) - the code is the key, so it is not updatable
class CourseUpdate(BaseModel):
    course_name: str = Field(..., min_length=1, max_length=150)
    credit: int = Field(..., ge=0)
    course_description: Optional[str] = None


# ✅ input (POST)
class CourseCreate(CourseUpdate):
    course_code: str = Field(..., min_length=1, max_length=20)


# ✅ output
class Course(CourseCreate):
    class Config:
        from_attributes = True
