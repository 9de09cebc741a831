from datetime import date

from pydantic import BaseModel, Field, model_validator


class TermCreate(BaseModel):
    start_date: date
    end_date: date
    term_label: str = Field(..., min_length=1, max_length=50)

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Term(TermCreate):
    term_id: int

    class Config:
        from_attributes = True
