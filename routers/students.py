from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database.db import get_db
from models.people import Person as PersonModel
from models.students import Student as StudentModel
from schemas.common import ERROR_RESPONSES
from schemas.students import Student, StudentCreate, StudentFromPerson, StudentUpdate
from services import people_service
from services.errors import NotFound
from services.people_service import student_row

router = APIRouter(prefix="/students", tags=["students"], responses=ERROR_RESPONSES)


# ==========================================================
# [1] create (person + student in one transaction)
# ==========================================================

# ✅ [CREATE] new person and student together
@router.post("/", response_model=Student, status_code=201)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    created = people_service.create_student(db, **student.model_dump())
    return student_row(created)


# ✅ [CREATE] student role for an existing person
@router.post("/from-person", response_model=Student, status_code=201)
def create_student_from_person(body: StudentFromPerson, db: Session = Depends(get_db)):
    created = people_service.create_student_from_person(db, **body.model_dump())
    return student_row(created)


# ==========================================================
# [2] read
# ==========================================================

# ✅ [READ] students, optional search on name/email
@router.get("/", response_model=list[Student])
def read_students(q: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(StudentModel).join(PersonModel, PersonModel.person_id == StudentModel.person_id)
    if q:
        query = query.filter(or_(PersonModel.full_name.contains(q), PersonModel.email.contains(q)))
    return [student_row(s) for s in query.order_by(StudentModel.student_id).all()]


# ✅ [READ] one student
@router.get("/{student_id}", response_model=Student)
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.get(StudentModel, student_id)
    if student is None:
        raise NotFound("Not found")
    return student_row(student)


# ==========================================================
# [3] update / delete
# ==========================================================

# ✅ [UPDATE] person fields and/or cohort
@router.put("/{student_id}", response_model=Student)
def update_student(student_id: int, updated: StudentUpdate, db: Session = Depends(get_db)):
    student = people_service.update_student(db, student_id, **updated.model_dump())
    return student_row(student)


# ✅ [DELETE] student and its person (409 while enrolled anywhere)
@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: int, db: Session = Depends(get_db)):
    people_service.delete_student(db, student_id)
    return Response(status_code=204)
