from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.terms import Term as TermModel
from schemas.common import ERROR_RESPONSES
from schemas.terms import Term, TermCreate
from services.errors import NotFound

router = APIRouter(prefix="/terms", tags=["terms"], responses=ERROR_RESPONSES)


@router.post("/", response_model=Term, status_code=201)
def create_term(term: TermCreate, db: Session = Depends(get_db)):
    db_term = TermModel(**term.model_dump())
    with atomic(db):
        db.add(db_term)
    return db_term


# ✅ [READ] terms, most recent first
@router.get("/", response_model=list[Term])
def read_terms(db: Session = Depends(get_db)):
    return db.query(TermModel).order_by(TermModel.start_date.desc(), TermModel.term_id.desc()).all()


@router.get("/{term_id}", response_model=Term)
def read_term(term_id: int, db: Session = Depends(get_db)):
    term = db.get(TermModel, term_id)
    if term is None:
        raise NotFound("Not found")
    return term


@router.put("/{term_id}", response_model=Term)
def update_term(term_id: int, updated: TermCreate, db: Session = Depends(get_db)):
    with atomic(db):
        term = db.get(TermModel, term_id)
        if term is None:
            raise NotFound("Not found")
        for key, value in updated.model_dump().items():
            setattr(term, key, value)
    return term


@router.delete("/{term_id}", status_code=204)
def delete_term(term_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        term = db.get(TermModel, term_id)
        if term is None:
            raise NotFound("Not found")
        db.delete(term)
    return Response(status_code=204)
