from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.people import Person as PersonModel
from schemas.common import ERROR_RESPONSES
from schemas.people import Person, PersonCreate
from services import people_service
from services.errors import NotFound

router = APIRouter(prefix="/people", tags=["people"], responses=ERROR_RESPONSES)


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] person
@router.post("/", response_model=Person, status_code=201)
def create_person(person: PersonCreate, db: Session = Depends(get_db)):
    db_person = PersonModel(**person.model_dump())
    with atomic(db):
        db.add(db_person)
    return db_person


# ✅ [READ] all people, newest first
@router.get("/", response_model=list[Person])
def read_people(db: Session = Depends(get_db)):
    return db.query(PersonModel).order_by(PersonModel.person_id.desc()).all()


# ✅ [READ] one person
@router.get("/{person_id}", response_model=Person)
def read_person(person_id: int, db: Session = Depends(get_db)):
    person = db.get(PersonModel, person_id)
    if person is None:
        raise NotFound("Not found")
    return person


# ✅ [UPDATE] person
@router.put("/{person_id}", response_model=Person)
def update_person(person_id: int, updated: PersonCreate, db: Session = Depends(get_db)):
    with atomic(db):
        person = db.get(PersonModel, person_id)
        if person is None:
            raise NotFound("Not found")
        for key, value in updated.model_dump().items():
            setattr(person, key, value)
    return person


# ✅ [DELETE] person (409 while a student/instructor still points at it)
@router.delete("/{person_id}", status_code=204)
def delete_person(person_id: int, db: Session = Depends(get_db)):
    people_service.delete_person(db, person_id)
    return Response(status_code=204)
