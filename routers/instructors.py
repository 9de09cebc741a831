from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import cast, or_, String
from sqlalchemy.orm import Session

from database.db import get_db
from models.instructors import Instructor as InstructorModel
from models.people import Person as PersonModel
from schemas.common import ERROR_RESPONSES
from schemas.instructors import Instructor, InstructorCreate, InstructorFromPerson, InstructorUpdate
from services import people_service
from services.errors import NotFound
from services.people_service import instructor_row

router = APIRouter(prefix="/instructors", tags=["instructors"], responses=ERROR_RESPONSES)


# ✅ [CREATE] new person and instructor together
@router.post("/", response_model=Instructor, status_code=201)
def create_instructor(body: InstructorCreate, db: Session = Depends(get_db)):
    return instructor_row(people_service.create_instructor(db, **body.model_dump()))


# ✅ [CREATE] instructor role for an existing person
@router.post("/from-person", response_model=Instructor, status_code=201)
def create_instructor_from_person(body: InstructorFromPerson, db: Session = Depends(get_db)):
    return instructor_row(people_service.create_instructor_from_person(db, **body.model_dump()))


# ✅ [READ] instructors, optional search on name/email/id
@router.get("/", response_model=list[Instructor])
def read_instructors(q: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(InstructorModel).join(PersonModel, PersonModel.person_id == InstructorModel.person_id)
    if q:
        query = query.filter(or_(
            PersonModel.full_name.contains(q),
            PersonModel.email.contains(q),
            cast(InstructorModel.instructor_id, String).contains(q),
        ))
    return [instructor_row(i) for i in query.order_by(InstructorModel.instructor_id).all()]


# ✅ [READ] one instructor
@router.get("/{instructor_id}", response_model=Instructor)
def read_instructor(instructor_id: int, db: Session = Depends(get_db)):
    instructor = db.get(InstructorModel, instructor_id)
    if instructor is None:
        raise NotFound("Not found")
    return instructor_row(instructor)


# ✅ [UPDATE] person fields and/or renumber the instructor
@router.put("/{instructor_id}", response_model=Instructor)
def update_instructor(instructor_id: int, updated: InstructorUpdate, db: Session = Depends(get_db)):
    return instructor_row(people_service.update_instructor(db, instructor_id, **updated.model_dump()))


# ✅ [DELETE] instructor and its person (409 while teaching anything)
@router.delete("/{instructor_id}", status_code=204)
def delete_instructor(instructor_id: int, db: Session = Depends(get_db)):
    people_service.delete_instructor(db, instructor_id)
    return Response(status_code=204)
