"""
Person + role (student / instructor) writes.

Both tables are always written in one transaction, so a person without the
role it was created for is never observable.
"""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from database.db import atomic
from models.instructors import Instructor
from models.people import Person
from models.students import Student
from models.teaching_assignments import TeachingAssignment
from services.errors import Conflict, NotFound, ReferenceNotFound

logger = logging.getLogger(__name__)


def student_row(student: Student) -> dict:
    return {
        "person_id": student.person_id,
        "student_id": student.student_id,
        "cohort": student.cohort,
        "full_name": student.person.full_name,
        "email": student.person.email,
    }


def instructor_row(instructor: Instructor) -> dict:
    return {
        "person_id": instructor.person_id,
        "instructor_id": instructor.instructor_id,
        "full_name": instructor.person.full_name,
        "email": instructor.person.email,
    }


def _new_person(db: Session, full_name: str, email: str) -> Person:
    person = Person(full_name=full_name, email=email)
    db.add(person)
    db.flush()
    return person


def _existing_person(db: Session, person_id: int) -> Person:
    person = db.get(Person, person_id)
    if person is None:
        raise ReferenceNotFound(f"person_id {person_id} does not exist")
    return person


def _update_person(person: Person, full_name, email) -> None:
    if full_name is not None:
        person.full_name = full_name
    if email is not None:
        person.email = email


# ==========================================================
# [students]
# ==========================================================

def create_student(db: Session, full_name: str, email: str, student_id: int, cohort=None) -> Student:
    with atomic(db):
        person = _new_person(db, full_name, email)
        student = Student(student_id=student_id, person_id=person.person_id, cohort=cohort)
        db.add(student)
        db.flush()
    logger.info("student %s created (person %s)", student_id, student.person_id)
    return student


def create_student_from_person(db: Session, person_id: int, student_id: int, cohort=None) -> Student:
    with atomic(db):
        _existing_person(db, person_id)
        if db.query(Student).filter(Student.person_id == person_id).first():
            raise Conflict("This person is already a student")
        student = Student(student_id=student_id, person_id=person_id, cohort=cohort)
        db.add(student)
        db.flush()
    return student


def update_student(db: Session, student_id: int, full_name=None, email=None, cohort=None) -> Student:
    with atomic(db):
        student = db.get(Student, student_id)
        if student is None:
            raise NotFound("Not found")
        _update_person(student.person, full_name, email)
        if cohort is not None:
            student.cohort = cohort
    return student


def delete_student(db: Session, student_id: int) -> None:
    """Remove the student and its person; blocked while enrolments reference it."""
    with atomic(db):
        student = db.get(Student, student_id)
        if student is None:
            raise NotFound("Not found")
        person = student.person
        db.delete(student)
        db.flush()
        db.delete(person)
        db.flush()


# ==========================================================
# [instructors]
# ==========================================================

def create_instructor(db: Session, full_name: str, email: str, instructor_id: int) -> Instructor:
    with atomic(db):
        person = _new_person(db, full_name, email)
        instructor = Instructor(instructor_id=instructor_id, person_id=person.person_id)
        db.add(instructor)
        db.flush()
    logger.info("instructor %s created (person %s)", instructor_id, instructor.person_id)
    return instructor


def create_instructor_from_person(db: Session, person_id: int, instructor_id: int) -> Instructor:
    with atomic(db):
        _existing_person(db, person_id)
        if db.query(Instructor).filter(Instructor.person_id == person_id).first():
            raise Conflict("This person is already an instructor")
        instructor = Instructor(instructor_id=instructor_id, person_id=person_id)
        db.add(instructor)
        db.flush()
    return instructor


def update_instructor(
    db: Session,
    instructor_id: int,
    full_name=None,
    email=None,
    new_instructor_id=None,
) -> Instructor:
    with atomic(db):
        instructor = db.get(Instructor, instructor_id)
        if instructor is None:
            raise NotFound("Not found")
        _update_person(instructor.person, full_name, email)
        db.flush()

        if new_instructor_id is not None and new_instructor_id != instructor_id:
            # teaching_assignment follows through ON UPDATE CASCADE
            db.execute(
                update(Instructor)
                .where(Instructor.instructor_id == instructor_id)
                .values(instructor_id=new_instructor_id)
                .execution_options(synchronize_session=False)
            )
            db.expire_all()
            instructor_id = new_instructor_id

    return db.get(Instructor, instructor_id)


def delete_instructor(db: Session, instructor_id: int) -> None:
    """Remove the instructor and its person; blocked while teaching assignments exist."""
    with atomic(db):
        instructor = db.get(Instructor, instructor_id)
        if instructor is None:
            raise NotFound("Not found")
        if db.query(TeachingAssignment).filter(TeachingAssignment.instructor_id == instructor_id).first():
            raise Conflict("Instructor still has teaching assignments")
        person = instructor.person
        db.delete(instructor)
        db.flush()
        db.delete(person)
        db.flush()


# ==========================================================
# [people]
# ==========================================================

def delete_person(db: Session, person_id: int) -> None:
    """Blocked (409) while a student or instructor row points at the person."""
    with atomic(db):
        person = db.get(Person, person_id)
        if person is None:
            raise NotFound("Not found")
        if (
            db.query(Student).filter(Student.person_id == person_id).first()
            or db.query(Instructor).filter(Instructor.person_id == person_id).first()
        ):
            raise Conflict("Person is still referenced by a student or instructor")
        db.delete(person)
