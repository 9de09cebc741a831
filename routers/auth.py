from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database.db import get_db
from models.instructors import Instructor as InstructorModel
from models.students import Student as StudentModel
from schemas.common import ERROR_RESPONSES
from services.people_service import instructor_row, student_row

router = APIRouter(prefix="/auth", tags=["auth"], responses=ERROR_RESPONSES)


# ✅ response shape: who the id belongs to (no passwords, no tokens)
class IdentityResponse(BaseModel):
    role: str
    person_id: int
    full_name: str
    email: str
    student_id: Optional[int] = None
    instructor_id: Optional[int] = None
    cohort: Optional[str] = None


# ✅ [LOOKUP] student homepage sign-in
@router.get("/student/{student_id}", response_model=IdentityResponse)
def lookup_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return {"role": "student", **student_row(student)}


# ✅ [LOOKUP] instructor homepage sign-in
@router.get("/instructor/{instructor_id}", response_model=IdentityResponse)
def lookup_instructor(instructor_id: int, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        raise HTTPException(status_code=404, detail="Instructor not found")
    return {"role": "instructor", **instructor_row(instructor)}
