from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database.db import atomic, get_db
from models.courses import Course as CourseModel
from schemas.common import ERROR_RESPONSES
from schemas.courses import Course, CourseCreate, CourseUpdate
from services.errors import NotFound

router = APIRouter(prefix="/courses", tags=["courses"], responses=ERROR_RESPONSES)


# ✅ [CREATE] course (duplicate code -> 409)
@router.post("/", response_model=Course, status_code=201)
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    db_course = CourseModel(**course.model_dump())
    with atomic(db):
        db.add(db_course)
    return db_course


# ✅ [READ] courses, optional search on code/name
@router.get("/", response_model=list[Course])
def read_courses(q: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(CourseModel)
    if q:
        query = query.filter(or_(CourseModel.course_code.contains(q), CourseModel.course_name.contains(q)))
    return query.order_by(CourseModel.course_code).all()


@router.get("/{course_code}", response_model=Course)
def read_course(course_code: str, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_code)
    if course is None:
        raise NotFound("Not found")
    return course


@router.put("/{course_code}", response_model=Course)
def update_course(course_code: str, updated: CourseUpdate, db: Session = Depends(get_db)):
    with atomic(db):
        course = db.get(CourseModel, course_code)
        if course is None:
            raise NotFound("Not found")
        for key, value in updated.model_dump().items():
            setattr(course, key, value)
    return course


# ✅ [DELETE] course (409 while offerings/assessment types use it)
@router.delete("/{course_code}", status_code=204)
def delete_course(course_code: str, db: Session = Depends(get_db)):
    with atomic(db):
        course = db.get(CourseModel, course_code)
        if course is None:
            raise NotFound("Not found")
        db.delete(course)
    return Response(status_code=204)
