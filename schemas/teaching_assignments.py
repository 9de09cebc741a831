from pydantic import BaseModel

from models.teaching_assignments import TeachingRole


class TeachingAssignmentUpdate(BaseModel):
    teaching_role: TeachingRole


class TeachingAssignmentCreate(BaseModel):
    instructor_id: int
    class_offering_id: int
    teaching_role: TeachingRole = TeachingRole.LECTURER


class TeachingAssignment(TeachingAssignmentCreate):
    class Config:
        from_attributes = True
