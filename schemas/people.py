from pydantic import BaseModel, Field


# ✅ input (POST/PUT)
class PersonCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)


# ✅ output
class Person(PersonCreate):
    person_id: int

    class Config:
        from_attributes = True
