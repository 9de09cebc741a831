from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.assessment_types import AssessmentType as AssessmentTypeModel
from schemas.assessment_types import AssessmentType, AssessmentTypeCreate, AssessmentTypeUpdate
from schemas.common import ERROR_RESPONSES
from services import grade_service
from services.errors import NotFound

router = APIRouter(prefix="/assessment-types", tags=["assessment-types"], responses=ERROR_RESPONSES)


def assessment_row(at: AssessmentTypeModel) -> dict:
    return {
        "assessment_id": at.assessment_id,
        "course_code": at.course_code,
        "assessment_type": at.assessment_type,
        "weight": at.weight,
        "course_name": at.course.course_name if at.course else None,
    }


def _get_or_404(db: Session, assessment_id: int) -> AssessmentTypeModel:
    at = db.get(AssessmentTypeModel, assessment_id)
    if at is None:
        raise NotFound("Not found")
    return at


# ✅ [CREATE] assessment type (same label twice in a course -> 409)
@router.post("/", response_model=AssessmentType, status_code=201)
def create_assessment_type(body: AssessmentTypeCreate, db: Session = Depends(get_db)):
    at = AssessmentTypeModel(**body.model_dump())
    with atomic(db):
        db.add(at)
    return assessment_row(at)


# ✅ [READ] assessment types, optional course/label filters
@router.get("/", response_model=list[AssessmentType])
def read_assessment_types(
    course_code: Optional[str] = None,
    assessment_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(AssessmentTypeModel)
    if course_code:
        query = query.filter(AssessmentTypeModel.course_code == course_code)
    if assessment_type:
        query = query.filter(AssessmentTypeModel.assessment_type == assessment_type)
    rows = query.order_by(
        AssessmentTypeModel.course_code,
        AssessmentTypeModel.assessment_type,
        AssessmentTypeModel.assessment_id,
    ).all()
    return [assessment_row(at) for at in rows]


@router.get("/{assessment_id}", response_model=AssessmentType)
def read_assessment_type(assessment_id: int, db: Session = Depends(get_db)):
    return assessment_row(_get_or_404(db, assessment_id))


@router.put("/{assessment_id}", response_model=AssessmentType)
def update_assessment_type(assessment_id: int, body: AssessmentTypeUpdate, db: Session = Depends(get_db)):
    with atomic(db):
        at = _get_or_404(db, assessment_id)
        changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
        if "course_code" in changes:
            grade_service.check_course_change(db, changes["course_code"], assessment=at)
        for key, value in changes.items():
            setattr(at, key, value)
    return assessment_row(at)


# ✅ [DELETE] assessment type (409 while grades reference it)
@router.delete("/{assessment_id}", status_code=204)
def delete_assessment_type(assessment_id: int, db: Session = Depends(get_db)):
    with atomic(db):
        db.delete(_get_or_404(db, assessment_id))
    return Response(status_code=204)
